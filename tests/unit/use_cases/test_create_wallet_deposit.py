"""Unit tests for CreateWalletDeposit use case

Tests cover:
- Pending deposit creation with provisional snapshots
- Wallet loading permission and collector assignment
- Amount validation
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.wallet.create_wallet_deposit import CreateWalletDeposit
from src.app.use_cases.wallet.dtos import ActorDTO, CreateDepositCommandDTO
from src.app.use_cases.wallet.errors import WalletErrorCode
from src.domain.staff_member import StaffMember, StaffRole
from src.domain.wallet_transaction import PaymentMethod


def _staff(staff_id="staff_col", role=StaffRole.DEBT_COLLECTOR, can_load_wallet=True, is_active=True):
    return StaffMember(
        id=staff_id,
        shop_id="shop_1",
        user_id=f"user_{staff_id}",
        name="Yaw Collector",
        role=role,
        can_load_wallet=can_load_wallet,
        is_active=is_active,
    )


@pytest.fixture
def collector():
    return ActorDTO(user_id="user_staff_col", name="Yaw Collector", staff_member_id="staff_col", shop_id="shop_1")


@pytest.fixture
def mock_transaction_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda t: t)
    return repo


@pytest.fixture
def mock_customer_repo(make_customer):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_customer(Decimal("10.00")))
    return repo


@pytest.fixture
def mock_staff_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=_staff())
    return repo


@pytest.fixture
def deposit_use_case(mock_uow, mock_transaction_repo, mock_customer_repo, mock_staff_repo):
    return CreateWalletDeposit(mock_uow, mock_transaction_repo, mock_customer_repo, mock_staff_repo)


@pytest.mark.asyncio
class TestCreateWalletDeposit:

    async def test_records_pending_deposit(
        self, deposit_use_case, mock_uow, mock_transaction_repo, collector
    ):
        """
        Given: Collector allowed to load wallets, customer balance 10
        When: Collector records 150 by mobile money
        Then: PENDING deposit with provisional snapshots 10 -> 160
        """
        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_1",
            amount=Decimal("150.00"),
            payment_method=PaymentMethod.MOBILE_MONEY,
            reference="MM-883201",
            actor=collector,
        ))

        assert result.is_ok()
        deposit = result.value
        assert deposit.status == "pending"
        assert deposit.transaction_type == "deposit"
        assert deposit.balance_before == Decimal("10.00")
        assert deposit.balance_after == Decimal("160.00")
        assert deposit.payment_method == "mobile_money"
        assert deposit.created_by_id == "staff_col"
        mock_uow.commit.assert_called_once()

    async def test_staff_without_permission(self, deposit_use_case, mock_staff_repo, mock_transaction_repo, collector):
        mock_staff_repo.get_by_id = AsyncMock(return_value=_staff(can_load_wallet=False))

        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_1", amount=Decimal("10.00"), actor=collector
        ))

        assert result.is_err()
        assert result.error.code == WalletErrorCode.VALIDATION_FAILED
        mock_transaction_repo.create.assert_not_called()

    async def test_inactive_staff(self, deposit_use_case, mock_staff_repo, collector):
        mock_staff_repo.get_by_id = AsyncMock(return_value=_staff(is_active=False))

        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_1", amount=Decimal("10.00"), actor=collector
        ))

        assert result.is_err()
        assert result.error.code == WalletErrorCode.VALIDATION_FAILED

    async def test_super_admin_bypasses_permission(
        self, deposit_use_case, mock_staff_repo, mock_transaction_repo
    ):
        mock_staff_repo.get_by_id = AsyncMock()
        actor = ActorDTO(user_id="root", is_super_admin=True)

        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_1", amount=Decimal("10.00"), actor=actor
        ))

        assert result.is_ok()
        mock_staff_repo.get_by_id.assert_not_called()
        assert mock_transaction_repo.create.call_args[0][0].created_by_id is None

    async def test_collector_cannot_load_unassigned_customer(
        self, deposit_use_case, mock_customer_repo, make_customer, collector
    ):
        mock_customer_repo.get_by_id = AsyncMock(
            return_value=make_customer(assigned_collector_id="staff_other")
        )

        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_1", amount=Decimal("10.00"), actor=collector
        ))

        assert result.is_err()
        assert result.error.code == WalletErrorCode.VALIDATION_FAILED

    async def test_collector_may_load_assigned_customer(
        self, deposit_use_case, mock_customer_repo, make_customer, collector
    ):
        mock_customer_repo.get_by_id = AsyncMock(
            return_value=make_customer(assigned_collector_id="staff_col")
        )

        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_1", amount=Decimal("10.00"), actor=collector
        ))

        assert result.is_ok()

    async def test_customer_not_in_scope(self, deposit_use_case, mock_customer_repo, collector):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_x", amount=Decimal("10.00"), actor=collector
        ))

        assert result.is_err()
        assert result.error.code == WalletErrorCode.NOT_FOUND

    async def test_non_positive_amount(self, deposit_use_case, mock_staff_repo, collector):
        result = await deposit_use_case.execute(CreateDepositCommandDTO(
            customer_id="cust_1", amount=Decimal("0"), actor=collector
        ))

        assert result.is_err()
        assert result.error.code == WalletErrorCode.VALIDATION_FAILED
        mock_staff_repo.get_by_id.assert_not_called()
