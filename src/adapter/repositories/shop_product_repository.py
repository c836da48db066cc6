"""SQLAlchemy implementation of ShopProductRepository"""

from datetime import datetime
from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.shop_product_repository import ShopProductRepository
from src.domain.shop_product import ShopProduct


class SqlAlchemyShopProductRepository(ShopProductRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def decrement_stock(self, shop_id: str, product_id: str, quantity: int) -> None:
        stmt = (
            update(ShopProduct)
            .where(ShopProduct.shop_id == shop_id, ShopProduct.product_id == product_id)
            .values(
                stock_quantity=ShopProduct.stock_quantity - quantity,
                updated_at=datetime.utcnow(),
            )
        )
        await self.session.execute(stmt)
