"""Progress Invoice Repository Interface"""

from abc import ABC, abstractmethod
from src.domain.progress_invoice import ProgressInvoice


class ProgressInvoiceRepository(ABC):

    @abstractmethod
    async def create(self, invoice: ProgressInvoice) -> ProgressInvoice:
        pass
