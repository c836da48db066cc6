"""Waybill Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.waybill import Waybill


class WaybillRepository(ABC):
    """
    Repository interface for Waybill persistence

    A purchase has at most one waybill; callers check with
    get_by_purchase_id before calling create.
    """

    @abstractmethod
    async def get_by_purchase_id(self, purchase_id: str) -> Optional[Waybill]:
        pass

    @abstractmethod
    async def create(self, waybill: Waybill) -> Waybill:
        pass
