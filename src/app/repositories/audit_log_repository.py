"""Audit Log Repository Interface"""

from abc import ABC, abstractmethod
from src.domain.audit_log import AuditLog


class AuditLogRepository(ABC):

    @abstractmethod
    async def create(self, entry: AuditLog) -> AuditLog:
        pass
