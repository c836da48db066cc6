"""Audit Logger Implementations

Provides concrete sinks for wallet audit entries.
"""

import logging
from typing import Callable, Optional
import httpx
from pydantic import TypeAdapter
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories.audit_log_repository import SqlAlchemyAuditLogRepository
from src.app.services.audit_logger import AuditLogger
from src.domain.audit_log import AuditLog, AuditMetadata

logger = logging.getLogger(__name__)

_metadata_adapter = TypeAdapter(AuditMetadata)


def _dump(metadata: AuditMetadata) -> dict:
    return _metadata_adapter.dump_python(metadata, mode="json")


class LoggingAuditLogger(AuditLogger):
    """
    Audit logger that writes entries to the application log

    Useful for development and testing, or as a fallback.
    """

    async def record(self, actor_id, action, entity_type, entity_id, metadata) -> bool:
        logger.info(
            f"[AUDIT] actor={actor_id} action={action} "
            f"entity={entity_type}:{entity_id} metadata={_dump(metadata)}"
        )
        return True


class DatabaseAuditLogger(AuditLogger):
    """
    Audit logger that persists entries to the audit_logs table

    Uses its own session so an audit write can never roll back or be rolled
    back by the wallet operation that produced it.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def record(self, actor_id, action, entity_type, entity_id, metadata) -> bool:
        try:
            async with self.session_factory() as session:
                repo = SqlAlchemyAuditLogRepository(session)
                await repo.create(
                    AuditLog(
                        actor_id=actor_id,
                        action=action,
                        entity_type=entity_type,
                        entity_id=entity_id,
                        details=_dump(metadata),
                    )
                )
                await session.commit()
            return True
        except Exception as e:
            logger.error(f"Failed to persist audit entry {action} for {entity_type}:{entity_id}: {e}")
            return False


class WebhookAuditLogger(AuditLogger):
    """
    Audit logger that forwards entries via HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook audit logger

        Args:
            webhook_url: URL to POST entries to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def record(self, actor_id, action, entity_type, entity_id, metadata) -> bool:
        payload = {
            "type": "audit_entry",
            "actor_id": actor_id,
            "action": action,
            "entity_type": entity_type,
            "entity_id": entity_id,
            "metadata": _dump(metadata),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send audit webhook for {action} {entity_type}:{entity_id}: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error sending audit webhook for {action}: {e}")
            return False


class CompositeAuditLogger(AuditLogger):
    """
    Audit logger that delegates to multiple sinks

    A failing sink is logged and skipped.
    """

    def __init__(self, loggers: list[AuditLogger]):
        self.loggers = loggers

    async def record(self, actor_id, action, entity_type, entity_id, metadata) -> bool:
        """
        Returns:
            True if at least one sink recorded the entry
        """
        success = False
        for sink in self.loggers:
            try:
                if await sink.record(actor_id, action, entity_type, entity_id, metadata):
                    success = True
            except Exception as e:
                logger.error(f"Audit sink {type(sink).__name__} failed: {e}")
        return success


def create_audit_logger(
    session_factory: Optional[Callable[[], AsyncSession]] = None,
    webhook_url: Optional[str] = None,
) -> AuditLogger:
    """
    Factory function to create the configured audit logger

    Args:
        session_factory: If provided, entries are also persisted to the database
        webhook_url: If provided, entries are also POSTed to this URL

    Returns:
        Configured AuditLogger
    """
    loggers: list[AuditLogger] = [LoggingAuditLogger()]

    if session_factory is not None:
        loggers.append(DatabaseAuditLogger(session_factory))

    if webhook_url:
        loggers.append(WebhookAuditLogger(webhook_url))

    if len(loggers) == 1:
        return loggers[0]

    return CompositeAuditLogger(loggers)
