"""ConfirmWalletTransaction Use Case

Confirms a PENDING wallet transaction exactly once, applies its balance
change and pays down outstanding purchases with deposited funds.
"""

import logging
from datetime import datetime
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.audit_logger import AuditLogger
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.audit_log import AllocationAuditEntry, TransactionConfirmedMetadata
from src.domain.wallet_transaction import WalletTransactionStatus
from .allocate_funds import PurchaseAllocationResolver
from .audit import record_audit
from .dtos import (
    AllocationResultDTO,
    ConfirmTransactionCommandDTO,
    ConfirmTransactionResponseDTO,
    WalletTransactionDTO,
)
from .errors import WalletErrorCode
from .ledger_entries import debit_allocated_funds

logger = logging.getLogger(__name__)


class ConfirmWalletTransaction:
    """
    Use Case: Confirm a pending wallet transaction

    Business Rules:
    1. Only PENDING transactions inside the actor's scope can be confirmed
    2. Exactly once: the status change is a compare-and-swap on PENDING
    3. Balance change: +amount for deposit/refund/credit adjustment,
       -amount otherwise, applied as an atomic increment
    4. Credits are run through the allocation resolver; funds applied to
       purchases leave the wallet through a PURCHASE entry
    5. Everything commits as one unit or not at all

    Flow:
    1. Load transaction in scope (NOT_FOUND / ALREADY_PROCESSED)
    2. Lock customer row (SELECT FOR UPDATE)
    3. Compare-and-swap PENDING -> CONFIRMED with balance snapshots
    4. Increment wallet balance
    5. Allocate credited funds and debit the applied amount
    6. Commit
    7. Audit (never fails the operation)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        transaction_repo: WalletTransactionRepository,
        customer_repo: CustomerRepository,
        allocation_resolver: PurchaseAllocationResolver,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.uow = uow
        self.transaction_repo = transaction_repo
        self.customer_repo = customer_repo
        self.allocation_resolver = allocation_resolver
        self.audit_logger = audit_logger

    async def execute(
        self, command: ConfirmTransactionCommandDTO
    ) -> Result[ConfirmTransactionResponseDTO]:
        """
        Execute wallet transaction confirmation

        Args:
            command: ConfirmTransactionCommandDTO with transaction_id and actor

        Returns:
            Result[ConfirmTransactionResponseDTO]: Success with final balances
            and allocations, or a typed error
        """
        actor = command.actor

        try:
            # Step 1: Load the transaction inside the actor's scope
            transaction = await self.transaction_repo.get_by_id(
                command.transaction_id,
                shop_id=actor.shop_id,
                business_id=actor.business_id,
            )
            if not transaction:
                return Return.err(
                    Error(
                        code=WalletErrorCode.NOT_FOUND,
                        message="Transaction not found or already processed",
                        reason=f"transaction_id={command.transaction_id} not in scope",
                    )
                )

            if not transaction.is_pending():
                return Return.err(
                    Error(
                        code=WalletErrorCode.ALREADY_PROCESSED,
                        message="Transaction not found or already processed",
                        reason=f"status={transaction.status.value}",
                    )
                )

            # Step 2: Lock the customer row; serializes confirmations per customer
            customer = await self.customer_repo.get_by_id(
                transaction.customer_id, for_update=True
            )
            if not customer:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=WalletErrorCode.NOT_FOUND,
                        message="Customer not found",
                        reason=f"customer_id={transaction.customer_id}",
                    )
                )

            now = datetime.utcnow()
            balance_change = transaction.signed_amount()
            balance_before = customer.wallet_balance
            balance_after = balance_before + balance_change

            # Step 3: Compare-and-swap the status
            won = await self.transaction_repo.transition_status(
                transaction.id,
                WalletTransactionStatus.CONFIRMED,
                actor_id=actor.user_id,
                at=now,
                balance_before=balance_before,
                balance_after=balance_after,
            )
            if not won:
                await self.uow.rollback()
                logger.info(f"Transaction {command.transaction_id} confirmed concurrently, skipping")
                return Return.err(
                    Error(
                        code=WalletErrorCode.ALREADY_PROCESSED,
                        message="Transaction not found or already processed",
                        reason="status changed concurrently",
                    )
                )

            # Step 4: Apply the balance change
            wallet_balance = await self.customer_repo.increment_balance(
                customer.id, balance_change
            )

            # Step 5: Pay down outstanding purchases with credited funds
            allocation = AllocationResultDTO()
            purchase_transaction = None
            if balance_change > 0:
                allocation = await self.allocation_resolver.allocate(
                    customer,
                    transaction.amount,
                    actor,
                    wallet_transaction_id=transaction.id,
                    now=now,
                )
                if allocation.total_applied > 0:
                    purchase_transaction, wallet_balance = await debit_allocated_funds(
                        self.transaction_repo,
                        self.customer_repo,
                        customer,
                        wallet_balance,
                        allocation,
                        transaction.id,
                        actor,
                        now,
                    )

            response = ConfirmTransactionResponseDTO(
                transaction=WalletTransactionDTO.from_entity(transaction).model_copy(
                    update={
                        "status": WalletTransactionStatus.CONFIRMED.value,
                        "confirmed_by_id": actor.user_id,
                        "confirmed_at": now,
                        "balance_before": balance_before,
                        "balance_after": balance_after,
                    }
                ),
                allocation=allocation,
                purchase_transaction=(
                    WalletTransactionDTO.from_entity(purchase_transaction)
                    if purchase_transaction else None
                ),
                wallet_balance=wallet_balance,
            )

            # Step 6: Commit the whole unit
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to confirm wallet transaction {command.transaction_id}: {e}")
            return Return.err(
                Error(
                    code=WalletErrorCode.PERSISTENCE_FAILED,
                    message="Failed to confirm transaction",
                    reason=str(e),
                )
            )

        # Step 7: Audit
        await record_audit(
            self.audit_logger,
            actor.user_id,
            "WALLET_TRANSACTION",
            response.transaction.id,
            TransactionConfirmedMetadata(
                customer=customer.full_name,
                amount=response.transaction.amount,
                transaction_type=response.transaction.transaction_type,
                balance_before=balance_before,
                balance_after=balance_after,
                payments_applied=[
                    AllocationAuditEntry(
                        purchase_id=a.purchase_id,
                        purchase_number=a.purchase_number,
                        amount_applied=a.amount_applied,
                        purchase_completed=a.purchase_completed,
                        waybill_number=a.waybill_number,
                    )
                    for a in allocation.allocations
                ],
            ),
        )

        return Return.ok(response)
