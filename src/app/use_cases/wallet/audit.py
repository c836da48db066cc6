import logging
from typing import Optional
from src.app.services.audit_logger import AuditLogger
from src.domain.audit_log import AuditMetadata

logger = logging.getLogger(__name__)


async def record_audit(
    audit_logger: Optional[AuditLogger],
    actor_id: Optional[str],
    entity_type: str,
    entity_id: str,
    metadata: AuditMetadata,
) -> None:
    """Record an audit entry after commit; failures are logged, never raised"""
    if audit_logger is None:
        return
    try:
        await audit_logger.record(actor_id, metadata.action, entity_type, entity_id, metadata)
    except Exception as e:
        logger.error(f"Audit logging failed for {metadata.action} {entity_type}:{entity_id}: {e}")
