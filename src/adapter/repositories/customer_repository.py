"""SQLAlchemy implementation of CustomerRepository

Balance changes are issued as ``UPDATE ... SET wallet_balance =
wallet_balance + :delta`` so concurrent deposits never lose an update.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer
from .scope import apply_shop_scope


class SqlAlchemyCustomerRepository(CustomerRepository):
    """
    SQLAlchemy implementation of CustomerRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Atomic in-database balance increments
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self,
        customer_id: str,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
        for_update: bool = False,
    ) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.id == customer_id)
        stmt = apply_shop_scope(stmt, Customer.shop_id, shop_id, business_id)

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_balance(self, customer_id: str, delta: Decimal) -> Decimal:
        """
        Add delta to the stored wallet balance

        Note:
            Should be called within a transaction with the customer row
            already locked so the returned balance is the one this call produced
        """
        stmt = (
            update(Customer)
            .where(Customer.id == customer_id)
            .values(
                wallet_balance=Customer.wallet_balance + delta,
                updated_at=datetime.utcnow(),
            )
        )
        await self.session.execute(stmt)

        result = await self.session.execute(
            select(Customer.wallet_balance).where(Customer.id == customer_id)
        )
        return result.scalar_one()

    async def get_all(
        self, shop_id: Optional[str] = None, business_id: Optional[str] = None
    ) -> List[Customer]:
        stmt = apply_shop_scope(select(Customer), Customer.shop_id, shop_id, business_id)
        result = await self.session.execute(stmt.order_by(Customer.created_at))
        return list(result.scalars().all())
