"""Audit Logger Interface

Defines the contract for recording audit entries about wallet operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.audit_log import AuditMetadata


class AuditLogger(ABC):
    """
    Abstract fire-and-forget audit sink

    Implementations can record audit entries via:
    - Application log
    - Database table
    - Webhook (HTTP POST)

    Implementations must never raise: a failure to audit is logged and
    reported through the return value only.
    """

    @abstractmethod
    async def record(
        self,
        actor_id: Optional[str],
        action: str,
        entity_type: str,
        entity_id: str,
        metadata: AuditMetadata,
    ) -> bool:
        """
        Record an audit entry

        Args:
            actor_id: User performing the action
            action: Action name (matches metadata.action)
            entity_type: Audited entity kind (e.g., WALLET_TRANSACTION, CUSTOMER)
            entity_id: Audited entity ID
            metadata: Typed metadata for this action

        Returns:
            True if the entry was recorded, False otherwise
        """
        pass
