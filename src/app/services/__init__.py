from .unit_of_work import UnitOfWork
from .audit_logger import AuditLogger
from .document_numbers import generate_waybill_number, generate_progress_invoice_number

__all__ = [
    "UnitOfWork",
    "AuditLogger",
    "generate_waybill_number",
    "generate_progress_invoice_number",
]
