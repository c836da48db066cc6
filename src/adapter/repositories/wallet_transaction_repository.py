"""SQLAlchemy implementation of WalletTransactionRepository

Status transitions are conditional UPDATEs on ``status = 'pending'``; the
affected row count tells the caller whether it won the race.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from sqlalchemy import and_, case, func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.wallet_transaction_repository import WalletTransactionRepository
from src.domain.staff_member import StaffMember
from src.domain.wallet_transaction import (
    WalletTransaction,
    WalletTransactionStatus,
    WalletTransactionType,
)
from .scope import apply_shop_scope


class SqlAlchemyWalletTransactionRepository(WalletTransactionRepository):
    """
    SQLAlchemy implementation of WalletTransactionRepository

    Features:
    - Compare-and-swap status transitions (exactly-once confirmation)
    - Shop/business scoped lookups
    - Ledger sums for reconciliation
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: WalletTransaction) -> WalletTransaction:
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def get_by_id(
        self,
        transaction_id: str,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
    ) -> Optional[WalletTransaction]:
        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        stmt = apply_shop_scope(stmt, WalletTransaction.shop_id, shop_id, business_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def transition_status(
        self,
        transaction_id: str,
        new_status: WalletTransactionStatus,
        actor_id: Optional[str],
        at: datetime,
        balance_before: Optional[Decimal] = None,
        balance_after: Optional[Decimal] = None,
        rejected_reason: Optional[str] = None,
    ) -> bool:
        """
        Conditionally move a PENDING transaction to new_status

        Returns:
            True if exactly one row changed, False if the transaction had
            already left PENDING
        """
        values = {
            "status": new_status,
            "confirmed_by_id": actor_id,
            "confirmed_at": at,
        }
        if balance_before is not None:
            values["balance_before"] = balance_before
        if balance_after is not None:
            values["balance_after"] = balance_after
        if rejected_reason is not None:
            values["rejected_reason"] = rejected_reason

        stmt = (
            update(WalletTransaction)
            .where(
                WalletTransaction.id == transaction_id,
                WalletTransaction.status == WalletTransactionStatus.PENDING,
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def list_pending_by_creator_name(
        self,
        creator_name: str,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
    ) -> List[WalletTransaction]:
        stmt = (
            select(WalletTransaction)
            .join(StaffMember, StaffMember.id == WalletTransaction.created_by_id)
            .where(
                WalletTransaction.status == WalletTransactionStatus.PENDING,
                func.lower(StaffMember.name) == creator_name.strip().lower(),
            )
            .order_by(WalletTransaction.created_at.asc())
        )
        stmt = apply_shop_scope(stmt, WalletTransaction.shop_id, shop_id, business_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def _filtered(
        self,
        stmt,
        shop_id: Optional[str],
        business_id: Optional[str],
        customer_id: Optional[str],
        status: Optional[WalletTransactionStatus],
        created_by_id: Optional[str],
    ):
        stmt = apply_shop_scope(stmt, WalletTransaction.shop_id, shop_id, business_id)
        if customer_id:
            stmt = stmt.where(WalletTransaction.customer_id == customer_id)
        if status:
            stmt = stmt.where(WalletTransaction.status == status)
        if created_by_id:
            stmt = stmt.where(WalletTransaction.created_by_id == created_by_id)
        return stmt

    async def list_transactions(
        self,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        status: Optional[WalletTransactionStatus] = None,
        created_by_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[WalletTransaction]:
        stmt = self._filtered(
            select(WalletTransaction), shop_id, business_id, customer_id, status, created_by_id
        )
        stmt = stmt.order_by(WalletTransaction.created_at.desc()).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_transactions(
        self,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        status: Optional[WalletTransactionStatus] = None,
        created_by_id: Optional[str] = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(WalletTransaction.id)),
            shop_id, business_id, customer_id, status, created_by_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def get_confirmed_sums_by_customer(
        self, shop_id: Optional[str] = None, business_id: Optional[str] = None
    ) -> Dict[str, Decimal]:
        signed_amount = case(
            (
                WalletTransaction.transaction_type.in_(
                    [WalletTransactionType.DEPOSIT, WalletTransactionType.REFUND]
                ),
                WalletTransaction.amount,
            ),
            (
                and_(
                    WalletTransaction.transaction_type == WalletTransactionType.ADJUSTMENT,
                    WalletTransaction.is_credit.is_(True),
                ),
                WalletTransaction.amount,
            ),
            else_=-WalletTransaction.amount,
        )
        stmt = (
            select(WalletTransaction.customer_id, func.sum(signed_amount))
            .where(WalletTransaction.status == WalletTransactionStatus.CONFIRMED)
            .group_by(WalletTransaction.customer_id)
        )
        stmt = apply_shop_scope(stmt, WalletTransaction.shop_id, shop_id, business_id)
        result = await self.session.execute(stmt)
        return {customer_id: Decimal(str(total or 0)) for customer_id, total in result.all()}
