"""Purchase Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.purchase import Purchase, PurchaseItem


class PurchaseRepository(ABC):
    """
    Repository interface for Purchase persistence

    Used by the allocation resolver to find and pay down installments.
    """

    @abstractmethod
    async def get_outstanding_for_customer(
        self, customer_id: str, for_update: bool = False
    ) -> List[Purchase]:
        """
        Retrieve purchases eligible for wallet allocation

        Eligible means status ACTIVE or PENDING, outstanding_balance > 0 and
        purchase_type other than CASH. Results are in creation order.

        Args:
            customer_id: Customer ID
            for_update: If True, lock the rows with SELECT FOR UPDATE

        Returns:
            List of eligible purchases (possibly empty)
        """
        pass

    @abstractmethod
    async def update(self, purchase: Purchase) -> Purchase:
        pass

    @abstractmethod
    async def get_items(self, purchase_id: str) -> List[PurchaseItem]:
        pass
