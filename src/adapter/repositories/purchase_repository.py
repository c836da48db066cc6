"""SQLAlchemy implementation of PurchaseRepository"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.purchase_repository import PurchaseRepository
from src.domain.purchase import Purchase, PurchaseItem, PurchaseStatus, PurchaseType


class SqlAlchemyPurchaseRepository(PurchaseRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_outstanding_for_customer(
        self, customer_id: str, for_update: bool = False
    ) -> List[Purchase]:
        """
        Retrieve purchases eligible for wallet allocation, in creation order

        Args:
            customer_id: Customer ID
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Non-cash ACTIVE/PENDING purchases with an outstanding balance
        """
        stmt = (
            select(Purchase)
            .where(
                Purchase.customer_id == customer_id,
                Purchase.status.in_([PurchaseStatus.ACTIVE, PurchaseStatus.PENDING]),
                Purchase.outstanding_balance > 0,
                Purchase.purchase_type != PurchaseType.CASH,
            )
            .order_by(Purchase.created_at.asc(), Purchase.id.asc())
        )

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, purchase: Purchase) -> Purchase:
        self.session.add(purchase)
        await self.session.flush()
        return purchase

    async def get_items(self, purchase_id: str) -> List[PurchaseItem]:
        stmt = select(PurchaseItem).where(PurchaseItem.purchase_id == purchase_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
