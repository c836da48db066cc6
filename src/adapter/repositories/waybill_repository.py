"""SQLAlchemy implementation of WaybillRepository

The unique constraint on purchase_id backs up the check-then-create done by
callers: a concurrent duplicate fails the flush and aborts its unit of work.
"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.waybill_repository import WaybillRepository
from src.domain.waybill import Waybill


class SqlAlchemyWaybillRepository(WaybillRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_purchase_id(self, purchase_id: str) -> Optional[Waybill]:
        stmt = select(Waybill).where(Waybill.purchase_id == purchase_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, waybill: Waybill) -> Waybill:
        self.session.add(waybill)
        await self.session.flush()
        await self.session.refresh(waybill)
        return waybill
