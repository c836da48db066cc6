"""Data Transfer Objects for Wallet Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.wallet_transaction import (
    PaymentMethod,
    WalletTransaction,
    WalletTransactionStatus,
)


class ActorDTO(BaseModel):
    """
    Already-resolved acting identity

    Built at the API boundary after the caller's role and scope were
    checked. The ledger never provisions or looks up memberships for it.
    """

    user_id: str = Field(
        ...,
        description="Platform user performing the action"
    )

    name: str = Field(
        default="",
        description="Display name used on receipts"
    )

    staff_member_id: Optional[str] = Field(
        default=None,
        description="Shop membership the user is acting through, if any"
    )

    shop_id: Optional[str] = Field(
        default=None,
        description="Shop scope the actor is authorized for"
    )

    business_id: Optional[str] = Field(
        default=None,
        description="Business scope the actor is authorized for"
    )

    is_super_admin: bool = Field(
        default=False,
        description="Platform super-admin (bypasses wallet-loading permission)"
    )


class CreateDepositCommandDTO(BaseModel):
    """
    Command DTO for recording a pending wallet deposit

    Used as input to CreateWalletDeposit use case.
    """

    customer_id: str
    amount: Decimal
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference: Optional[str] = None
    description: Optional[str] = None
    actor: ActorDTO

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": "2b0a6f0e-6c1d-4c52-9d7e-1f0f3f9a2c11",
                "amount": "150.00",
                "payment_method": "mobile_money",
                "reference": "MM-883201",
                "description": "Weekly collection",
            }
        }


class ConfirmTransactionCommandDTO(BaseModel):
    transaction_id: str
    actor: ActorDTO


class RejectTransactionCommandDTO(BaseModel):
    transaction_id: str
    reason: str
    actor: ActorDTO


class AdjustBalanceCommandDTO(BaseModel):
    """
    Command DTO for a direct admin balance adjustment

    amount and description are validated by the use case so that invalid
    input comes back as a typed VALIDATION_FAILED result.
    """

    customer_id: str
    amount: Decimal
    description: str
    is_addition: bool = True
    actor: ActorDTO


class ConfirmAllCommandDTO(BaseModel):
    actor_name: str = Field(
        ...,
        description="Name of the staff member whose pending deposits are confirmed (case-insensitive)"
    )
    actor: ActorDTO


class ListTransactionsQueryDTO(BaseModel):
    actor: ActorDTO
    status: Optional[WalletTransactionStatus] = None
    customer_id: Optional[str] = None
    created_by_id: Optional[str] = None
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class WalletTransactionDTO(BaseModel):
    """
    Response DTO for a single wallet ledger entry
    """

    id: str
    customer_id: str
    shop_id: str
    transaction_type: str
    amount: Decimal
    is_credit: bool
    balance_before: Decimal
    balance_after: Decimal
    status: str
    payment_method: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    created_by_id: Optional[str] = None
    confirmed_by_id: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    rejected_reason: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, transaction: WalletTransaction) -> "WalletTransactionDTO":
        return cls(
            id=transaction.id,
            customer_id=transaction.customer_id,
            shop_id=transaction.shop_id,
            transaction_type=transaction.transaction_type.value,
            amount=transaction.amount,
            is_credit=transaction.is_credit,
            balance_before=transaction.balance_before,
            balance_after=transaction.balance_after,
            status=transaction.status.value,
            payment_method=transaction.payment_method.value if transaction.payment_method else None,
            description=transaction.description,
            reference=transaction.reference,
            created_by_id=transaction.created_by_id,
            confirmed_by_id=transaction.confirmed_by_id,
            confirmed_at=transaction.confirmed_at,
            rejected_reason=transaction.rejected_reason,
            created_at=transaction.created_at,
        )


class AllocationDTO(BaseModel):
    """
    One purchase paid down by an allocation
    """

    purchase_id: str
    purchase_number: str
    amount_applied: Decimal = Field(..., description="Amount taken from the funds for this purchase")
    previous_outstanding: Decimal
    new_outstanding: Decimal
    purchase_completed: bool
    payment_id: str
    progress_invoice_number: str
    waybill_number: Optional[str] = None


class AllocationResultDTO(BaseModel):
    allocations: List[AllocationDTO] = Field(default_factory=list)
    total_applied: Decimal = Decimal("0")
    remaining_funds: Decimal = Decimal("0")


class ConfirmTransactionResponseDTO(BaseModel):
    """
    Response DTO for ConfirmWalletTransaction

    ``transaction`` carries the confirmed entry with its final balance
    snapshots. When funds were applied to purchases, ``purchase_transaction``
    is the PURCHASE entry that moved them out of the wallet.
    """

    transaction: WalletTransactionDTO
    allocation: AllocationResultDTO
    purchase_transaction: Optional[WalletTransactionDTO] = None
    wallet_balance: Decimal = Field(..., description="Customer wallet balance after the whole operation")


class AdjustBalanceResponseDTO(BaseModel):
    transaction: WalletTransactionDTO
    previous_balance: Decimal
    new_balance: Decimal
    allocation: AllocationResultDTO
    purchase_transaction: Optional[WalletTransactionDTO] = None


class BulkFailureDTO(BaseModel):
    transaction_id: str
    code: str
    message: str


class ConfirmAllResponseDTO(BaseModel):
    confirmed_count: int
    failed_count: int
    confirmed_transaction_ids: List[str] = Field(default_factory=list)
    failures: List[BulkFailureDTO] = Field(default_factory=list)


class ListWalletTransactionsResponseDTO(BaseModel):
    transactions: List[WalletTransactionDTO]
    total: int
    limit: int
    offset: int


class WalletDiscrepancyDTO(BaseModel):
    """
    DTO for a single wallet balance discrepancy
    """

    customer_id: str
    shop_id: str
    wallet_balance: Decimal = Field(..., description="Stored wallet balance")
    calculated_balance: Decimal = Field(..., description="Signed sum of confirmed transactions")
    discrepancy: Decimal = Field(..., description="wallet_balance - calculated_balance")


class ReconciliationResultDTO(BaseModel):
    total_customers_checked: int
    discrepancies_found: int
    discrepancies: List[WalletDiscrepancyDTO] = Field(default_factory=list)
    reconciliation_time: datetime
    execution_time_ms: int
