"""ConfirmAllForActor Use Case

Bulk-confirms every PENDING transaction recorded by a named staff member.
"""

import logging
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.audit_logger import AuditLogger
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.audit_log import BulkConfirmedMetadata
from .audit import record_audit
from .confirm_wallet_transaction import ConfirmWalletTransaction
from .dtos import (
    BulkFailureDTO,
    ConfirmAllCommandDTO,
    ConfirmAllResponseDTO,
    ConfirmTransactionCommandDTO,
)
from .errors import WalletErrorCode

logger = logging.getLogger(__name__)


class ConfirmAllForActor:
    """
    Use Case: Confirm all pending deposits recorded by one staff member

    Business Rules:
    1. Staff name matches case-insensitively, inside the admin's scope
    2. Each transaction is confirmed in its own unit (commit or rollback)
    3. A failed item is reported and never aborts the batch
    4. Items confirmed concurrently by someone else count as failures
       with ALREADY_PROCESSED
    """

    def __init__(
        self,
        uow: UnitOfWork,
        transaction_repo: WalletTransactionRepository,
        confirm_use_case: ConfirmWalletTransaction,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.uow = uow
        self.transaction_repo = transaction_repo
        self.confirm_use_case = confirm_use_case
        self.audit_logger = audit_logger

    async def execute(self, command: ConfirmAllCommandDTO) -> Result[ConfirmAllResponseDTO]:
        actor = command.actor
        actor_name = (command.actor_name or "").strip()

        if not actor_name:
            return Return.err(
                Error(
                    code=WalletErrorCode.VALIDATION_FAILED,
                    message="A staff name is required",
                    reason="actor_name is empty",
                )
            )

        try:
            pending = await self.transaction_repo.list_pending_by_creator_name(
                actor_name,
                shop_id=actor.shop_id,
                business_id=actor.business_id,
            )
            # IDs are read up front; a rolled back item expires loaded rows
            transaction_ids = [t.id for t in pending]
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to load pending transactions for '{actor_name}': {e}")
            return Return.err(
                Error(
                    code=WalletErrorCode.PERSISTENCE_FAILED,
                    message="Failed to load pending transactions",
                    reason=str(e),
                )
            )

        logger.info(f"Confirming {len(transaction_ids)} pending transactions recorded by '{actor_name}'")

        confirmed_ids = []
        failures = []
        for transaction_id in transaction_ids:
            result = await self.confirm_use_case.execute(
                ConfirmTransactionCommandDTO(transaction_id=transaction_id, actor=actor)
            )
            if result.is_ok():
                confirmed_ids.append(transaction_id)
            else:
                logger.warning(
                    f"Bulk confirmation skipped {transaction_id}: "
                    f"{result.error.code} {result.error.reason}"
                )
                failures.append(
                    BulkFailureDTO(
                        transaction_id=transaction_id,
                        code=result.error.code,
                        message=result.error.message,
                    )
                )

        response = ConfirmAllResponseDTO(
            confirmed_count=len(confirmed_ids),
            failed_count=len(failures),
            confirmed_transaction_ids=confirmed_ids,
            failures=failures,
        )

        await record_audit(
            self.audit_logger,
            actor.user_id,
            "STAFF_MEMBER",
            actor_name,
            BulkConfirmedMetadata(
                actor_name=actor_name,
                confirmed_count=response.confirmed_count,
                failed_count=response.failed_count,
            ),
        )

        return Return.ok(response)
