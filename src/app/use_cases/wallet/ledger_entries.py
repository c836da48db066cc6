"""Ledger entry helpers shared by the wallet use cases"""

from datetime import datetime
from decimal import Decimal
from typing import Tuple
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.customer import Customer
from src.domain.wallet_transaction import (
    PaymentMethod,
    WalletTransaction,
    WalletTransactionStatus,
    WalletTransactionType,
)
from .dtos import ActorDTO, AllocationResultDTO


async def debit_allocated_funds(
    transaction_repo: WalletTransactionRepository,
    customer_repo: CustomerRepository,
    customer: Customer,
    balance_before: Decimal,
    allocation: AllocationResultDTO,
    source_transaction_id: str,
    actor: ActorDTO,
    now: datetime,
) -> Tuple[WalletTransaction, Decimal]:
    """
    Move funds applied to purchases out of the wallet

    Writes a CONFIRMED PURCHASE entry for allocation.total_applied and
    decrements the stored balance by the same amount, so the balance stays
    equal to the signed sum of confirmed entries.

    Returns:
        (PURCHASE transaction, wallet balance after the debit)
    """
    amount = allocation.total_applied
    purchase_numbers = ", ".join(a.purchase_number for a in allocation.allocations)

    debit = await transaction_repo.create(
        WalletTransaction(
            customer_id=customer.id,
            shop_id=customer.shop_id,
            transaction_type=WalletTransactionType.PURCHASE,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_before - amount,
            status=WalletTransactionStatus.CONFIRMED,
            payment_method=PaymentMethod.WALLET,
            description=f"Applied to purchases: {purchase_numbers}",
            reference=source_transaction_id,
            created_by_id=actor.staff_member_id,
            confirmed_by_id=actor.user_id,
            confirmed_at=now,
        )
    )
    wallet_balance = await customer_repo.increment_balance(customer.id, -amount)
    return debit, wallet_balance
