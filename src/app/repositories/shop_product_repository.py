"""Shop Product Repository Interface"""

from abc import ABC, abstractmethod


class ShopProductRepository(ABC):

    @abstractmethod
    async def decrement_stock(self, shop_id: str, product_id: str, quantity: int) -> None:
        """
        Atomically decrease the stock of a product in a shop

        Args:
            shop_id: Shop holding the stock
            product_id: Catalog product ID
            quantity: Units to remove
        """
        pass
