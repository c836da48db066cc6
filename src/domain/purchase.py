"""Purchase Domain Entities

An installment agreement between a customer and a shop, plus its line
items.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Date
from src.domain.base import BaseModel, generate_uuid


class PurchaseStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    DEFAULTED = "defaulted"
    CANCELLED = "cancelled"


class PurchaseType(str, Enum):
    CASH = "cash"          # Paid in full at the counter, never auto-settled from the wallet
    LAYAWAY = "layaway"
    CREDIT = "credit"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    SCHEDULED = "scheduled"
    DELIVERED = "delivered"


class Purchase(BaseModel, table=True):
    """
    Purchase - installment agreement

    Domain Rules:
    - outstanding_balance == max(0, total_amount - amount_paid)
    - Becomes COMPLETED exactly when outstanding_balance reaches 0
    - CASH purchases are excluded from wallet auto-allocation
    """

    __tablename__ = "purchases"
    __table_args__ = (
        Index("ix_purchases_customer_status", "customer_id", "status"),
        Index("ix_purchases_due_date", "due_date"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    purchase_number: str = Field(
        unique=True,
        index=True,
        description="Human readable number (e.g., PUR-2024-00012)"
    )

    customer_id: str = Field(
        sa_column=Column(String(36), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
    )

    shop_id: str = Field(
        sa_column=Column(String(36), ForeignKey("shops.id", ondelete="CASCADE"), nullable=False),
    )

    purchase_type: PurchaseType = Field(default=PurchaseType.CREDIT)

    status: PurchaseStatus = Field(default=PurchaseStatus.PENDING)

    delivery_status: DeliveryStatus = Field(default=DeliveryStatus.PENDING)

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    amount_paid: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    outstanding_balance: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def apply_payment(self, amount: Decimal) -> bool:
        """
        Record a payment against this purchase

        Returns:
            True if the payment completed the purchase
        """
        self.amount_paid = self.amount_paid + amount
        self.outstanding_balance = max(Decimal("0"), self.total_amount - self.amount_paid)
        self.updated_at = datetime.utcnow()

        if self.outstanding_balance == 0:
            self.status = PurchaseStatus.COMPLETED
            return True

        if self.status == PurchaseStatus.PENDING:
            self.status = PurchaseStatus.ACTIVE
        return False


class PurchaseItem(BaseModel, table=True):
    __tablename__ = "purchase_items"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    purchase_id: str = Field(
        sa_column=Column(String(36), ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, index=True),
    )

    product_id: Optional[str] = Field(default=None, description="Catalog product, None for ad-hoc lines")

    product_name: str

    quantity: int = Field(default=1)

    unit_price: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    total_price: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))
