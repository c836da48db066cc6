"""Customer Domain Entity

Holds the customer's stored wallet balance. The balance is only mutated by
the wallet ledger (confirmation and adjustments).
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class Customer(BaseModel, table=True):
    """
    Customer - Buyer with a wallet balance

    Domain Rules:
    - Customer belongs to exactly one shop
    - wallet_balance equals the signed sum of all CONFIRMED wallet transactions
    - wallet_balance is only changed through an atomic in-database increment
    """

    __tablename__ = "customers"
    __table_args__ = (
        Index("ix_customers_shop_id", "shop_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    shop_id: str = Field(
        sa_column=Column(String(36), ForeignKey("shops.id", ondelete="CASCADE"), nullable=False),
        description="Owning shop"
    )

    first_name: str = Field(description="Given name")

    last_name: str = Field(description="Family name")

    phone: str = Field(description="Contact phone")

    address: Optional[str] = Field(default=None)

    city: Optional[str] = Field(default=None)

    region: Optional[str] = Field(default=None)

    assigned_collector_id: Optional[str] = Field(
        default=None,
        description="StaffMember ID of the debt collector assigned to this customer"
    )

    wallet_balance: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Stored wallet balance (signed, precision: 18,2)"
    )

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
