"""Progress Invoice Domain Entity

Receipt snapshot generated once per payment.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.base import BaseModel, generate_uuid
from src.domain.wallet_transaction import PaymentMethod


class ProgressInvoice(BaseModel, table=True):
    """
    Progress Invoice - immutable receipt for a single payment

    Captures the purchase state before and after the payment so the receipt
    can be re-rendered without recomputing history.
    """

    __tablename__ = "progress_invoices"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    invoice_number: str = Field(unique=True, index=True)

    payment_id: str = Field(
        sa_column=Column(String(36), ForeignKey("payments.id", ondelete="CASCADE"), nullable=False, unique=True),
    )

    purchase_id: str = Field(index=True)

    customer_id: str = Field(index=True)

    shop_id: str = Field(index=True)

    payment_amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    previous_balance: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    new_balance: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    total_purchase_amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    total_amount_paid: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    payment_method: PaymentMethod = Field(default=PaymentMethod.WALLET)

    customer_name: str

    purchase_number: str

    purchase_type: str

    confirmed_by_name: Optional[str] = Field(default=None)

    is_purchase_completed: bool = Field(default=False)

    waybill_generated: bool = Field(default=False)

    waybill_number: Optional[str] = Field(default=None)

    notes: Optional[str] = Field(default=None)

    generated_at: datetime = Field(default_factory=datetime.utcnow)
