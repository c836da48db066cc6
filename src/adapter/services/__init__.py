from .unit_of_work import SqlAlchemyUnitOfWork
from .audit_logger import (
    LoggingAuditLogger,
    DatabaseAuditLogger,
    WebhookAuditLogger,
    CompositeAuditLogger,
    create_audit_logger,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "LoggingAuditLogger",
    "DatabaseAuditLogger",
    "WebhookAuditLogger",
    "CompositeAuditLogger",
    "create_audit_logger",
]
