"""Unit tests for audit logger implementations and record_audit"""

import httpx
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from src.adapter.services.audit_logger import (
    CompositeAuditLogger,
    DatabaseAuditLogger,
    LoggingAuditLogger,
    WebhookAuditLogger,
    create_audit_logger,
)
from src.app.use_cases.wallet.audit import record_audit
from src.domain.audit_log import TransactionRejectedMetadata


@pytest.fixture
def metadata():
    return TransactionRejectedMetadata(customer="Kofi Mensah", amount=Decimal("25.00"), reason="Bad slip")


class TestCreateAuditLogger:

    def test_defaults_to_logging_only(self):
        assert isinstance(create_audit_logger(), LoggingAuditLogger)

    def test_composes_configured_sinks(self):
        audit_logger = create_audit_logger(
            session_factory=MagicMock(), webhook_url="https://audit.example.com/hook"
        )

        assert isinstance(audit_logger, CompositeAuditLogger)
        assert [type(s) for s in audit_logger.loggers] == [
            LoggingAuditLogger, DatabaseAuditLogger, WebhookAuditLogger,
        ]


@pytest.mark.asyncio
class TestAuditSinks:

    async def test_logging_sink(self, metadata):
        assert await LoggingAuditLogger().record("user_1", metadata.action, "WALLET_TRANSACTION", "txn_1", metadata)

    async def test_database_sink_persists_json_details(self, metadata):
        session = MagicMock()
        session.__aenter__ = AsyncMock(return_value=session)
        session.__aexit__ = AsyncMock(return_value=False)
        session.commit = AsyncMock()

        with patch("src.adapter.services.audit_logger.SqlAlchemyAuditLogRepository") as repo_class:
            repo_class.return_value.create = AsyncMock()
            sink = DatabaseAuditLogger(MagicMock(return_value=session))

            ok = await sink.record("user_1", metadata.action, "WALLET_TRANSACTION", "txn_1", metadata)

        assert ok is True
        entry = repo_class.return_value.create.call_args[0][0]
        assert entry.action == "REJECT_WALLET_TRANSACTION"
        assert entry.details == {
            "action": "REJECT_WALLET_TRANSACTION",
            "customer": "Kofi Mensah",
            "amount": "25.00",
            "reason": "Bad slip",
        }
        session.commit.assert_called_once()

    async def test_database_sink_failure_returns_false(self, metadata):
        sink = DatabaseAuditLogger(MagicMock(side_effect=Exception("no connection")))

        assert await sink.record("user_1", metadata.action, "WALLET_TRANSACTION", "txn_1", metadata) is False

    async def test_webhook_sink_http_error_returns_false(self, metadata):
        client = MagicMock()
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with patch("src.adapter.services.audit_logger.httpx.AsyncClient", return_value=client):
            ok = await WebhookAuditLogger("https://audit.example.com/hook").record(
                "user_1", metadata.action, "WALLET_TRANSACTION", "txn_1", metadata
            )

        assert ok is False
        payload = client.post.call_args[1]["json"]
        assert payload["action"] == "REJECT_WALLET_TRANSACTION"
        assert payload["metadata"]["reason"] == "Bad slip"

    async def test_composite_skips_failing_sink(self, metadata):
        failing = MagicMock()
        failing.record = AsyncMock(side_effect=Exception("boom"))
        working = MagicMock()
        working.record = AsyncMock(return_value=True)

        ok = await CompositeAuditLogger([failing, working]).record(
            "user_1", metadata.action, "WALLET_TRANSACTION", "txn_1", metadata
        )

        assert ok is True
        working.record.assert_called_once()


@pytest.mark.asyncio
class TestRecordAudit:

    async def test_uses_metadata_action(self, metadata):
        audit_logger = MagicMock()
        audit_logger.record = AsyncMock(return_value=True)

        await record_audit(audit_logger, "user_1", "WALLET_TRANSACTION", "txn_1", metadata)

        audit_logger.record.assert_called_once_with(
            "user_1", "REJECT_WALLET_TRANSACTION", "WALLET_TRANSACTION", "txn_1", metadata
        )

    async def test_swallows_failures(self, metadata):
        audit_logger = MagicMock()
        audit_logger.record = AsyncMock(side_effect=Exception("sink down"))

        await record_audit(audit_logger, "user_1", "WALLET_TRANSACTION", "txn_1", metadata)

    async def test_no_logger_configured(self, metadata):
        await record_audit(None, "user_1", "WALLET_TRANSACTION", "txn_1", metadata)
