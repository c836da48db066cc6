"""CreateWalletDeposit Use Case

Records money handed to a staff member as a PENDING deposit. The balance
only moves when an admin confirms it.
"""

import logging
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.audit_logger import AuditLogger
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.staff_member_repository import StaffMemberRepository
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.audit_log import DepositCreatedMetadata
from src.domain.staff_member import StaffRole
from src.domain.wallet_transaction import (
    WalletTransaction,
    WalletTransactionStatus,
    WalletTransactionType,
)
from .audit import record_audit
from .dtos import CreateDepositCommandDTO, WalletTransactionDTO
from .errors import WalletErrorCode

logger = logging.getLogger(__name__)


class CreateWalletDeposit:
    """
    Use Case: Record a pending wallet deposit

    Business Rules:
    1. amount > 0
    2. The acting staff member must be active and hold can_load_wallet
       (platform super-admins bypass this check)
    3. The customer must be active and inside the actor's scope
    4. A debt collector may only load wallets of customers assigned to them
       (customers without an assignment are open to any collector)
    5. balance_before/balance_after are provisional until confirmation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        transaction_repo: WalletTransactionRepository,
        customer_repo: CustomerRepository,
        staff_repo: StaffMemberRepository,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.uow = uow
        self.transaction_repo = transaction_repo
        self.customer_repo = customer_repo
        self.staff_repo = staff_repo
        self.audit_logger = audit_logger

    def _denied(self, reason: str):
        return Return.err(
            Error(
                code=WalletErrorCode.VALIDATION_FAILED,
                message="You are not allowed to load this wallet",
                reason=reason,
            )
        )

    async def execute(self, command: CreateDepositCommandDTO) -> Result[WalletTransactionDTO]:
        actor = command.actor

        if command.amount is None or command.amount <= 0:
            return Return.err(
                Error(
                    code=WalletErrorCode.VALIDATION_FAILED,
                    message="Amount must be greater than zero",
                    reason=f"amount={command.amount}",
                )
            )

        try:
            # Step 1: Permission check
            staff = None
            if actor.staff_member_id:
                staff = await self.staff_repo.get_by_id(actor.staff_member_id)

            if not actor.is_super_admin:
                if not staff or not staff.is_active:
                    return self._denied(f"staff_member_id={actor.staff_member_id} not active")
                if not staff.can_load_wallet:
                    return self._denied(f"staff_member_id={staff.id} cannot load wallets")

            # Step 2: Customer in scope
            customer = await self.customer_repo.get_by_id(
                command.customer_id,
                shop_id=actor.shop_id,
                business_id=actor.business_id,
            )
            if not customer or not customer.is_active:
                return Return.err(
                    Error(
                        code=WalletErrorCode.NOT_FOUND,
                        message="Customer not found",
                        reason=f"customer_id={command.customer_id} not in scope",
                    )
                )

            if (
                staff
                and staff.role == StaffRole.DEBT_COLLECTOR
                and customer.assigned_collector_id
                and customer.assigned_collector_id != staff.id
            ):
                return self._denied(f"customer {customer.id} is assigned to another collector")

            # Step 3: Record the pending deposit
            balance = customer.wallet_balance
            transaction = await self.transaction_repo.create(
                WalletTransaction(
                    customer_id=customer.id,
                    shop_id=customer.shop_id,
                    transaction_type=WalletTransactionType.DEPOSIT,
                    amount=command.amount,
                    is_credit=True,
                    balance_before=balance,
                    balance_after=balance + command.amount,
                    status=WalletTransactionStatus.PENDING,
                    payment_method=command.payment_method,
                    description=command.description,
                    reference=command.reference,
                    created_by_id=actor.staff_member_id,
                )
            )

            response = WalletTransactionDTO.from_entity(transaction)
            customer_name = customer.full_name

            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create wallet deposit for customer {command.customer_id}: {e}")
            return Return.err(
                Error(
                    code=WalletErrorCode.PERSISTENCE_FAILED,
                    message="Failed to create deposit",
                    reason=str(e),
                )
            )

        await record_audit(
            self.audit_logger,
            actor.user_id,
            "WALLET_TRANSACTION",
            response.id,
            DepositCreatedMetadata(
                customer=customer_name,
                amount=response.amount,
                payment_method=response.payment_method,
            ),
        )

        return Return.ok(response)
