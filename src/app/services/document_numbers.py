"""Document number generation for waybills and progress invoices

Numbers carry a random UUID4 suffix so they are collision-free without a
database counter.
"""

import uuid
from datetime import datetime
from typing import Optional


def _suffix(length: int) -> str:
    return uuid.uuid4().hex[:length].upper()


def generate_waybill_number(now: Optional[datetime] = None) -> str:
    """WB-<year>-<10 hex chars>"""
    now = now or datetime.utcnow()
    return f"WB-{now.year}-{_suffix(10)}"


def generate_progress_invoice_number(now: Optional[datetime] = None) -> str:
    """PI-<yyyymmdd>-<8 hex chars>"""
    now = now or datetime.utcnow()
    return f"PI-{now.strftime('%Y%m%d')}-{_suffix(8)}"
