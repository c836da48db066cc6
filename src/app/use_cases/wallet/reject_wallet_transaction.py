"""RejectWalletTransaction Use Case

Rejects a PENDING wallet transaction. The customer's balance is never
touched.
"""

import logging
from datetime import datetime
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.audit_logger import AuditLogger
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.audit_log import TransactionRejectedMetadata
from src.domain.wallet_transaction import WalletTransactionStatus
from .audit import record_audit
from .dtos import RejectTransactionCommandDTO, WalletTransactionDTO
from .errors import WalletErrorCode

logger = logging.getLogger(__name__)


class RejectWalletTransaction:
    """
    Use Case: Reject a pending wallet transaction

    Business Rules:
    1. A non-empty reason is required
    2. Only PENDING transactions inside the actor's scope can be rejected
    3. The status change is a compare-and-swap on PENDING
    4. No balance mutation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        transaction_repo: WalletTransactionRepository,
        customer_repo: CustomerRepository,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.uow = uow
        self.transaction_repo = transaction_repo
        self.customer_repo = customer_repo
        self.audit_logger = audit_logger

    async def execute(self, command: RejectTransactionCommandDTO) -> Result[WalletTransactionDTO]:
        actor = command.actor
        reason = (command.reason or "").strip()

        if not reason:
            return Return.err(
                Error(
                    code=WalletErrorCode.VALIDATION_FAILED,
                    message="A rejection reason is required",
                    reason="reason is empty",
                )
            )

        try:
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

            now = datetime.utcnow()
            won = await self.transaction_repo.transition_status(
                transaction.id,
                WalletTransactionStatus.REJECTED,
                actor_id=actor.user_id,
                at=now,
                rejected_reason=reason,
            )
            if not won:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=WalletErrorCode.ALREADY_PROCESSED,
                        message="Transaction not found or already processed",
                        reason="status changed concurrently",
                    )
                )

            customer = await self.customer_repo.get_by_id(transaction.customer_id)
            customer_name = customer.full_name if customer else transaction.customer_id

            response = WalletTransactionDTO.from_entity(transaction).model_copy(
                update={
                    "status": WalletTransactionStatus.REJECTED.value,
                    "confirmed_by_id": actor.user_id,
                    "confirmed_at": now,
                    "rejected_reason": reason,
                }
            )

            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to reject wallet transaction {command.transaction_id}: {e}")
            return Return.err(
                Error(
                    code=WalletErrorCode.PERSISTENCE_FAILED,
                    message="Failed to reject transaction",
                    reason=str(e),
                )
            )

        await record_audit(
            self.audit_logger,
            actor.user_id,
            "WALLET_TRANSACTION",
            response.id,
            TransactionRejectedMetadata(
                customer=customer_name,
                amount=response.amount,
                reason=reason,
            ),
        )

        return Return.ok(response)
