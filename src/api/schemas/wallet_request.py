"""Request schemas for Wallet API

Pydantic models for validating incoming HTTP requests.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.wallet_transaction import PaymentMethod


class CreateDepositRequestSchema(BaseModel):
    """
    Request schema for recording a wallet deposit

    Used for POST /wallet/deposits endpoint.
    """

    customer_id: str = Field(
        ...,
        min_length=1,
        description="Customer whose wallet is loaded"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount received (must be > 0)"
    )

    payment_method: PaymentMethod = Field(
        default=PaymentMethod.CASH,
        description="How the money was received"
    )

    reference: Optional[str] = Field(
        default=None,
        max_length=255,
        description="External reference (mobile money ID, bank slip, ...)"
    )

    description: Optional[str] = Field(default=None, max_length=500)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": "2b0a6f0e-6c1d-4c52-9d7e-1f0f3f9a2c11",
                "amount": "150.00",
                "payment_method": "mobile_money",
                "reference": "MM-883201",
                "description": "Weekly collection"
            }
        }


class RejectTransactionRequestSchema(BaseModel):
    """
    Request schema for rejecting a pending transaction

    Used for POST /wallet/transactions/{transaction_id}/reject endpoint.
    """

    reason: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Why the deposit was rejected (required, non-empty)"
    )

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v):
        if not v.strip():
            raise ValueError("Reason must not be blank")
        return v.strip()


class AdjustBalanceRequestSchema(BaseModel):
    """
    Request schema for an admin balance adjustment

    Used for POST /wallet/customers/{customer_id}/adjust endpoint.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Adjustment magnitude (must be > 0)"
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Reason for the correction (required)"
    )

    is_addition: bool = Field(
        default=True,
        description="True adds to the wallet, False subtracts"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "20.00",
                "description": "Duplicate receipt reversed",
                "is_addition": False
            }
        }


class ConfirmAllRequestSchema(BaseModel):
    """
    Request schema for bulk confirmation

    Used for POST /wallet/transactions/confirm-all endpoint.
    """

    actor_name: str = Field(
        ...,
        min_length=1,
        description="Staff member name whose pending deposits are confirmed (case-insensitive)"
    )
