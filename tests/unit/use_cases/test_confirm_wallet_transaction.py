"""Unit tests for ConfirmWalletTransaction use case

Tests cover:
- Successful confirmation with and without allocation
- Exactly-once confirmation (already processed, lost race)
- Scope and existence checks
- Rollback on persistence failure
- Audit failures never fail the operation
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.wallet.confirm_wallet_transaction import ConfirmWalletTransaction
from src.app.use_cases.wallet.dtos import (
    AllocationDTO,
    AllocationResultDTO,
    ConfirmTransactionCommandDTO,
)
from src.app.use_cases.wallet.errors import WalletErrorCode
from src.domain.wallet_transaction import WalletTransactionStatus, WalletTransactionType


@pytest.fixture
def mock_transaction_repo():
    repo = MagicMock()
    repo.transition_status = AsyncMock(return_value=True)
    repo.create = AsyncMock(side_effect=lambda t: t)
    return repo


@pytest.fixture
def mock_customer_repo():
    return MagicMock()


@pytest.fixture
def mock_resolver():
    resolver = MagicMock()
    resolver.allocate = AsyncMock(return_value=AllocationResultDTO(
        total_applied=Decimal("0"), remaining_funds=Decimal("25.00")
    ))
    return resolver


@pytest.fixture
def mock_audit_logger():
    audit_logger = MagicMock()
    audit_logger.record = AsyncMock(return_value=True)
    return audit_logger


@pytest.fixture
def confirm_use_case(mock_uow, mock_transaction_repo, mock_customer_repo, mock_resolver, mock_audit_logger):
    return ConfirmWalletTransaction(
        uow=mock_uow,
        transaction_repo=mock_transaction_repo,
        customer_repo=mock_customer_repo,
        allocation_resolver=mock_resolver,
        audit_logger=mock_audit_logger,
    )


def _allocation(amount: Decimal, completed: bool = False) -> AllocationDTO:
    return AllocationDTO(
        purchase_id="id_PUR-1",
        purchase_number="PUR-1",
        amount_applied=amount,
        previous_outstanding=Decimal("40.00"),
        new_outstanding=Decimal("40.00") - amount,
        purchase_completed=completed,
        payment_id="pay_1",
        progress_invoice_number="PI-20240101-ABCDEF12",
    )


@pytest.mark.asyncio
class TestConfirmWalletTransactionSuccess:

    async def test_deposit_without_outstanding_purchases(
        self, confirm_use_case, mock_uow, mock_transaction_repo, mock_customer_repo,
        mock_resolver, make_customer, make_transaction, admin_actor
    ):
        """
        Given: Pending deposit of 25, customer balance 0, no outstanding purchases
        When: Admin confirms it
        Then: Balance becomes 25, no PURCHASE entry, committed once
        """
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(Decimal("25.00")))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer(Decimal("0.00")))
        mock_customer_repo.increment_balance = AsyncMock(return_value=Decimal("25.00"))

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_ok()
        response = result.value
        assert response.wallet_balance == Decimal("25.00")
        assert response.transaction.status == "confirmed"
        assert response.transaction.balance_before == Decimal("0.00")
        assert response.transaction.balance_after == Decimal("25.00")
        assert response.transaction.confirmed_by_id == "user_admin"
        assert response.allocation.allocations == []
        assert response.purchase_transaction is None

        mock_customer_repo.get_by_id.assert_called_once_with("cust_1", for_update=True)
        mock_customer_repo.increment_balance.assert_called_once_with("cust_1", Decimal("25.00"))
        mock_transaction_repo.create.assert_not_called()
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_not_called()

    async def test_deposit_pays_down_purchase_and_keeps_remainder(
        self, confirm_use_case, mock_uow, mock_transaction_repo, mock_customer_repo,
        mock_resolver, mock_audit_logger, make_customer, make_transaction, admin_actor
    ):
        """
        Given: Pending deposit of 100 and one purchase with 40 outstanding
        When: Admin confirms it
        Then: 40 leaves the wallet through a PURCHASE entry and 60 remains
        """
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(Decimal("100.00")))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer(Decimal("0.00")))
        mock_customer_repo.increment_balance = AsyncMock(
            side_effect=[Decimal("100.00"), Decimal("60.00")]
        )
        mock_resolver.allocate = AsyncMock(return_value=AllocationResultDTO(
            allocations=[_allocation(Decimal("40.00"), completed=True)],
            total_applied=Decimal("40.00"),
            remaining_funds=Decimal("60.00"),
        ))

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_ok()
        response = result.value
        assert response.wallet_balance == Decimal("60.00")
        assert response.allocation.total_applied == Decimal("40.00")

        debit = response.purchase_transaction
        assert debit.transaction_type == WalletTransactionType.PURCHASE.value
        assert debit.status == WalletTransactionStatus.CONFIRMED.value
        assert debit.amount == Decimal("40.00")
        assert debit.balance_before == Decimal("100.00")
        assert debit.balance_after == Decimal("60.00")
        assert debit.reference == "txn_1"

        assert mock_customer_repo.increment_balance.call_args_list[1][0] == ("cust_1", Decimal("-40.00"))
        mock_resolver.allocate.assert_called_once()
        assert mock_resolver.allocate.call_args[0][1] == Decimal("100.00")
        mock_uow.commit.assert_called_once()

        mock_audit_logger.record.assert_called_once()
        args = mock_audit_logger.record.call_args[0]
        assert args[1] == "CONFIRM_WALLET_TRANSACTION"
        assert args[4].payments_applied[0].purchase_number == "PUR-1"

    async def test_debit_transaction_skips_allocation(
        self, confirm_use_case, mock_transaction_repo, mock_customer_repo,
        mock_resolver, make_customer, make_transaction, admin_actor
    ):
        """Only credits are run through the allocation resolver"""
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(
            Decimal("15.00"), transaction_type=WalletTransactionType.ADJUSTMENT, is_credit=False
        ))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer(Decimal("50.00")))
        mock_customer_repo.increment_balance = AsyncMock(return_value=Decimal("35.00"))

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_ok()
        assert result.value.wallet_balance == Decimal("35.00")
        assert result.value.transaction.balance_after == Decimal("35.00")
        mock_customer_repo.increment_balance.assert_called_once_with("cust_1", Decimal("-15.00"))
        mock_resolver.allocate.assert_not_called()


@pytest.mark.asyncio
class TestConfirmWalletTransactionFailures:

    async def test_transaction_not_found(
        self, confirm_use_case, mock_uow, mock_transaction_repo, admin_actor
    ):
        mock_transaction_repo.get_by_id = AsyncMock(return_value=None)

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="missing", actor=admin_actor)
        )

        assert result.is_err()
        assert result.error.code == WalletErrorCode.NOT_FOUND
        mock_transaction_repo.get_by_id.assert_called_once_with(
            "missing", shop_id="shop_1", business_id=None
        )
        mock_uow.commit.assert_not_called()

    async def test_already_confirmed_is_benign(
        self, confirm_use_case, mock_uow, mock_transaction_repo, mock_customer_repo,
        make_transaction, admin_actor
    ):
        """
        Given: Transaction already CONFIRMED
        When: Confirm is called again
        Then: ALREADY_PROCESSED, balance untouched
        """
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(
            Decimal("25.00"), status=WalletTransactionStatus.CONFIRMED
        ))
        mock_customer_repo.increment_balance = AsyncMock()

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_err()
        assert result.error.code == WalletErrorCode.ALREADY_PROCESSED
        mock_customer_repo.increment_balance.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_missing_customer_releases_lock(
        self, confirm_use_case, mock_uow, mock_transaction_repo, mock_customer_repo,
        make_transaction, admin_actor
    ):
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(Decimal("25.00")))
        mock_transaction_repo.transition_status = AsyncMock()
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_err()
        assert result.error.code == WalletErrorCode.NOT_FOUND
        mock_transaction_repo.transition_status.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_lost_race_rolls_back_without_balance_change(
        self, confirm_use_case, mock_uow, mock_transaction_repo, mock_customer_repo,
        make_customer, make_transaction, admin_actor
    ):
        """
        Given: Another admin confirms the same transaction first
        When: The status compare-and-swap matches no row
        Then: ALREADY_PROCESSED and nothing is applied
        """
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(Decimal("25.00")))
        mock_transaction_repo.transition_status = AsyncMock(return_value=False)
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())
        mock_customer_repo.increment_balance = AsyncMock()

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_err()
        assert result.error.code == WalletErrorCode.ALREADY_PROCESSED
        mock_customer_repo.increment_balance.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_allocation_failure_rolls_back_everything(
        self, confirm_use_case, mock_uow, mock_transaction_repo, mock_customer_repo,
        mock_resolver, mock_audit_logger, make_customer, make_transaction, admin_actor
    ):
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(Decimal("25.00")))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())
        mock_customer_repo.increment_balance = AsyncMock(return_value=Decimal("25.00"))
        mock_resolver.allocate = AsyncMock(side_effect=Exception("deadlock detected"))

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_err()
        assert result.error.code == WalletErrorCode.PERSISTENCE_FAILED
        assert "deadlock" in result.error.reason
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
        mock_audit_logger.record.assert_not_called()

    async def test_commit_failure_is_persistence_failed(
        self, confirm_use_case, mock_uow, mock_transaction_repo, mock_customer_repo,
        make_customer, make_transaction, admin_actor
    ):
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(Decimal("25.00")))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())
        mock_customer_repo.increment_balance = AsyncMock(return_value=Decimal("25.00"))
        mock_uow.commit = AsyncMock(side_effect=Exception("connection lost"))

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_err()
        assert result.error.code == WalletErrorCode.PERSISTENCE_FAILED
        mock_uow.rollback.assert_called_once()

    async def test_audit_failure_does_not_fail_confirmation(
        self, confirm_use_case, mock_transaction_repo, mock_customer_repo,
        mock_audit_logger, make_customer, make_transaction, admin_actor
    ):
        mock_transaction_repo.get_by_id = AsyncMock(return_value=make_transaction(Decimal("25.00")))
        mock_customer_repo.get_by_id = AsyncMock(return_value=make_customer())
        mock_customer_repo.increment_balance = AsyncMock(return_value=Decimal("25.00"))
        mock_audit_logger.record = AsyncMock(side_effect=Exception("audit sink down"))

        result = await confirm_use_case.execute(
            ConfirmTransactionCommandDTO(transaction_id="txn_1", actor=admin_actor)
        )

        assert result.is_ok()
        assert result.value.wallet_balance == Decimal("25.00")
