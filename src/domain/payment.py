"""Payment Domain Entity

Immutable record of money applied to a purchase.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.wallet_transaction import PaymentMethod


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Payment(BaseModel, table=True):
    """
    Payment - one per purchase touched by a wallet allocation

    Domain Rules:
    - Immutable once created
    - amount <= purchase outstanding balance at creation time
    """

    __tablename__ = "payments"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    purchase_id: str = Field(
        sa_column=Column(String(36), ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, index=True),
    )

    wallet_transaction_id: Optional[str] = Field(
        default=None,
        index=True,
        description="Wallet transaction whose funds paid this installment"
    )

    amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    payment_method: PaymentMethod = Field(default=PaymentMethod.WALLET)

    status: PaymentStatus = Field(default=PaymentStatus.COMPLETED)

    is_confirmed: bool = Field(default=True)

    confirmed_by_id: Optional[str] = Field(default=None)

    confirmed_at: Optional[datetime] = Field(default=None)

    paid_at: datetime = Field(default_factory=datetime.utcnow)

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)
