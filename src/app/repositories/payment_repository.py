"""Payment Repository Interface"""

from abc import ABC, abstractmethod
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """Payments are immutable; only creation is supported"""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        pass
