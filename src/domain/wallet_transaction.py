"""Wallet Transaction Domain Entity

Append-only ledger entry representing a proposed or applied change to a
customer's wallet balance.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class WalletTransactionType(str, Enum):
    """Wallet transaction types"""
    DEPOSIT = "deposit"          # Cash/momo collected for the customer
    REFUND = "refund"            # Money returned to the wallet
    ADJUSTMENT = "adjustment"    # Manual admin correction (direction in is_credit)
    PURCHASE = "purchase"        # Wallet funds applied to purchases


class WalletTransactionStatus(str, Enum):
    """Lifecycle: PENDING -> CONFIRMED | REJECTED (both terminal)"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class PaymentMethod(str, Enum):
    """How money reached the shop"""
    CASH = "cash"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"
    CARD = "card"
    WALLET = "wallet"


CREDIT_TYPES = frozenset({
    WalletTransactionType.DEPOSIT,
    WalletTransactionType.REFUND,
})


class WalletTransaction(BaseModel, table=True):
    """
    Wallet Transaction - ledger entry for a customer wallet

    Domain Rules:
    - amount is always positive; direction comes from transaction_type
      (and is_credit for ADJUSTMENT)
    - balance_after == balance_before + signed_amount() once CONFIRMED
    - Only PENDING transactions can change status, exactly once
    - CONFIRMED and REJECTED transactions are immutable
    """

    __tablename__ = "wallet_transactions"
    __table_args__ = (
        Index("ix_wallet_transactions_customer_status", "customer_id", "status"),
        Index("ix_wallet_transactions_shop_status", "shop_id", "status"),
        Index("ix_wallet_transactions_created_at", "created_at"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    customer_id: str = Field(
        sa_column=Column(String(36), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        description="Customer whose wallet is affected"
    )

    shop_id: str = Field(
        sa_column=Column(String(36), ForeignKey("shops.id", ondelete="CASCADE"), nullable=False),
        description="Shop the transaction was recorded in"
    )

    transaction_type: WalletTransactionType = Field(
        description="deposit, refund, adjustment or purchase"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Positive amount (precision: 18,2)"
    )

    is_credit: bool = Field(
        default=True,
        description="Direction of ADJUSTMENT transactions (ignored for other types)"
    )

    balance_before: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Wallet balance before the change (final once confirmed)"
    )

    balance_after: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Wallet balance after the change (final once confirmed)"
    )

    status: WalletTransactionStatus = Field(
        default=WalletTransactionStatus.PENDING,
        description="pending, confirmed or rejected"
    )

    payment_method: Optional[PaymentMethod] = Field(default=None)

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="External reference (receipt number, momo id, source transaction id)"
    )

    created_by_id: Optional[str] = Field(
        default=None,
        index=True,
        description="StaffMember ID that recorded the transaction"
    )

    confirmed_by_id: Optional[str] = Field(
        default=None,
        description="Actor that confirmed or rejected the transaction"
    )

    confirmed_at: Optional[datetime] = Field(default=None)

    rejected_reason: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    def signed_amount(self) -> Decimal:
        """Balance delta this transaction applies when confirmed"""
        if self.transaction_type in CREDIT_TYPES:
            return self.amount
        if self.transaction_type == WalletTransactionType.ADJUSTMENT:
            return self.amount if self.is_credit else -self.amount
        return -self.amount

    def is_pending(self) -> bool:
        return self.status == WalletTransactionStatus.PENDING
