"""Customer Repository Interface

Defines the contract for customer lookups and wallet balance mutation.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):
    """
    Repository interface for Customer persistence

    The wallet balance is only ever changed through increment_balance, which
    must be an in-database atomic increment (never read-modify-write).
    """

    @abstractmethod
    async def get_by_id(
        self,
        customer_id: str,
        shop_id: Optional[str] = None,
        business_id: Optional[str] = None,
        for_update: bool = False,
    ) -> Optional[Customer]:
        """
        Retrieve customer by ID, optionally restricted to a shop or business

        Args:
            customer_id: Customer ID
            shop_id: Only match customers of this shop
            business_id: Only match customers of shops owned by this business
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Customer if found inside the scope, None otherwise
        """
        pass

    @abstractmethod
    async def increment_balance(self, customer_id: str, delta: Decimal) -> Decimal:
        """
        Atomically add delta (may be negative) to the wallet balance

        Returns:
            The wallet balance after the increment
        """
        pass

    @abstractmethod
    async def get_all(
        self, shop_id: Optional[str] = None, business_id: Optional[str] = None
    ) -> List[Customer]:
        """Retrieve customers, optionally restricted to a shop or business"""
        pass
