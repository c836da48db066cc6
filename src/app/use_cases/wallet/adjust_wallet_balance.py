"""AdjustWalletBalance Use Case

Direct admin correction of a customer's wallet balance. Creates an
ADJUSTMENT entry that is CONFIRMED immediately.
"""

import logging
from datetime import datetime
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.audit_logger import AuditLogger
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.audit_log import AllocationAuditEntry, BalanceAdjustedMetadata
from src.domain.wallet_transaction import (
    WalletTransaction,
    WalletTransactionStatus,
    WalletTransactionType,
)
from .allocate_funds import PurchaseAllocationResolver
from .audit import record_audit
from .dtos import (
    AdjustBalanceCommandDTO,
    AdjustBalanceResponseDTO,
    AllocationResultDTO,
    WalletTransactionDTO,
)
from .errors import WalletErrorCode
from .ledger_entries import debit_allocated_funds

logger = logging.getLogger(__name__)


class AdjustWalletBalance:
    """
    Use Case: Adjust a customer's wallet balance (admin only)

    Business Rules:
    1. amount > 0 and a non-empty description are required
    2. Additions are run through the allocation resolver, like confirmed deposits
    3. Subtractions never reverse earlier allocations
    4. A subtraction that would make the balance negative is refused unless
       allow_negative_balance is set
    5. Adjustment entry, balance change and allocations commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        transaction_repo: WalletTransactionRepository,
        customer_repo: CustomerRepository,
        allocation_resolver: PurchaseAllocationResolver,
        audit_logger: Optional[AuditLogger] = None,
        allow_negative_balance: bool = False,
    ):
        self.uow = uow
        self.transaction_repo = transaction_repo
        self.customer_repo = customer_repo
        self.allocation_resolver = allocation_resolver
        self.audit_logger = audit_logger
        self.allow_negative_balance = allow_negative_balance

    async def execute(self, command: AdjustBalanceCommandDTO) -> Result[AdjustBalanceResponseDTO]:
        """
        Execute wallet balance adjustment

        Args:
            command: AdjustBalanceCommandDTO with customer_id, amount, description, is_addition

        Returns:
            Result[AdjustBalanceResponseDTO]: Success with previous/new balance or error
        """
        actor = command.actor
        description = (command.description or "").strip()

        if command.amount is None or command.amount <= 0:
            return Return.err(
                Error(
                    code=WalletErrorCode.VALIDATION_FAILED,
                    message="Amount must be greater than zero",
                    reason=f"amount={command.amount}",
                )
            )
        if not description:
            return Return.err(
                Error(
                    code=WalletErrorCode.VALIDATION_FAILED,
                    message="A description is required for adjustments",
                    reason="description is empty",
                )
            )

        try:
            customer = await self.customer_repo.get_by_id(
                command.customer_id,
                shop_id=actor.shop_id,
                business_id=actor.business_id,
                for_update=True,
            )
            if not customer:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=WalletErrorCode.NOT_FOUND,
                        message="Customer not found",
                        reason=f"customer_id={command.customer_id} not in scope",
                    )
                )

            previous_balance = customer.wallet_balance
            adjustment = command.amount if command.is_addition else -command.amount
            new_balance = previous_balance + adjustment

            if new_balance < 0 and not self.allow_negative_balance:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=WalletErrorCode.VALIDATION_FAILED,
                        message="Adjustment would result in negative balance",
                        reason=f"balance={previous_balance}, adjustment={adjustment}",
                    )
                )

            now = datetime.utcnow()
            sign = "+" if command.is_addition else "-"

            transaction = await self.transaction_repo.create(
                WalletTransaction(
                    customer_id=customer.id,
                    shop_id=customer.shop_id,
                    transaction_type=WalletTransactionType.ADJUSTMENT,
                    amount=command.amount,
                    is_credit=command.is_addition,
                    balance_before=previous_balance,
                    balance_after=new_balance,
                    status=WalletTransactionStatus.CONFIRMED,
                    description=f"{sign} {description}",
                    created_by_id=actor.staff_member_id,
                    confirmed_by_id=actor.user_id,
                    confirmed_at=now,
                )
            )

            allocation = AllocationResultDTO()
            if command.is_addition:
                allocation = await self.allocation_resolver.allocate(
                    customer,
                    command.amount,
                    actor,
                    wallet_transaction_id=transaction.id,
                    now=now,
                )

            wallet_balance = await self.customer_repo.increment_balance(customer.id, adjustment)

            purchase_transaction = None
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

            response = AdjustBalanceResponseDTO(
                transaction=WalletTransactionDTO.from_entity(transaction),
                previous_balance=previous_balance,
                new_balance=wallet_balance,
                allocation=allocation,
                purchase_transaction=(
                    WalletTransactionDTO.from_entity(purchase_transaction)
                    if purchase_transaction else None
                ),
            )

            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to adjust wallet balance for customer {command.customer_id}: {e}")
            return Return.err(
                Error(
                    code=WalletErrorCode.PERSISTENCE_FAILED,
                    message="Failed to adjust wallet balance",
                    reason=str(e),
                )
            )

        await record_audit(
            self.audit_logger,
            actor.user_id,
            "CUSTOMER",
            command.customer_id,
            BalanceAdjustedMetadata(
                customer=customer.full_name,
                previous_balance=previous_balance,
                adjustment=adjustment,
                new_balance=response.new_balance,
                description=description,
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
