"""Waybill Domain Entity

Delivery authorization generated once a purchase is fully paid.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import ForeignKey, String, Text
from src.domain.base import BaseModel, generate_uuid


class Waybill(BaseModel, table=True):
    """
    Waybill - at most one per purchase

    purchase_id is unique so a racing second insert fails the unit of work
    instead of creating a duplicate.
    """

    __tablename__ = "waybills"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    waybill_number: str = Field(unique=True, index=True)

    purchase_id: str = Field(
        sa_column=Column(String(36), ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, unique=True),
    )

    recipient_name: str

    recipient_phone: str

    delivery_address: str = Field(default="N/A")

    delivery_city: Optional[str] = Field(default=None)

    delivery_region: Optional[str] = Field(default=None)

    special_instructions: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    generated_by_id: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
