"""Audit Log Domain Entity and typed audit metadata

Each audited action carries a metadata shape tagged by ``action`` so
consumers can parse it back without guessing keys.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel as PydanticBaseModel, Field as PydanticField
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, String
from src.domain.base import BaseModel, generate_uuid


class AllocationAuditEntry(PydanticBaseModel):
    purchase_id: str
    purchase_number: str
    amount_applied: Decimal
    purchase_completed: bool = False
    waybill_number: Optional[str] = None


class DepositCreatedMetadata(PydanticBaseModel):
    action: Literal["CREATE_WALLET_DEPOSIT"] = "CREATE_WALLET_DEPOSIT"
    customer: str
    amount: Decimal
    payment_method: Optional[str] = None


class TransactionConfirmedMetadata(PydanticBaseModel):
    action: Literal["CONFIRM_WALLET_TRANSACTION"] = "CONFIRM_WALLET_TRANSACTION"
    customer: str
    amount: Decimal
    transaction_type: str
    balance_before: Decimal
    balance_after: Decimal
    payments_applied: List[AllocationAuditEntry] = PydanticField(default_factory=list)


class TransactionRejectedMetadata(PydanticBaseModel):
    action: Literal["REJECT_WALLET_TRANSACTION"] = "REJECT_WALLET_TRANSACTION"
    customer: str
    amount: Decimal
    reason: str


class BalanceAdjustedMetadata(PydanticBaseModel):
    action: Literal["ADJUST_WALLET_BALANCE"] = "ADJUST_WALLET_BALANCE"
    customer: str
    previous_balance: Decimal
    adjustment: Decimal
    new_balance: Decimal
    description: str
    payments_applied: List[AllocationAuditEntry] = PydanticField(default_factory=list)


class BulkConfirmedMetadata(PydanticBaseModel):
    action: Literal["CONFIRM_ALL_FOR_ACTOR"] = "CONFIRM_ALL_FOR_ACTOR"
    actor_name: str
    confirmed_count: int
    failed_count: int


AuditMetadata = Annotated[
    Union[
        DepositCreatedMetadata,
        TransactionConfirmedMetadata,
        TransactionRejectedMetadata,
        BalanceAdjustedMetadata,
        BulkConfirmedMetadata,
    ],
    PydanticField(discriminator="action"),
]


class AuditLog(BaseModel, table=True):
    """
    Audit Log - append-only record of who did what

    ``details`` stores the JSON dump of one of the AuditMetadata shapes.
    """

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    actor_id: Optional[str] = Field(default=None, index=True)

    action: str = Field(sa_column=Column(String(64), nullable=False))

    entity_type: Optional[str] = Field(default=None)

    entity_id: Optional[str] = Field(default=None)

    details: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)
