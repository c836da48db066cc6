import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.wallet.dtos import ActorDTO
from src.domain.customer import Customer
from src.domain.purchase import Purchase, PurchaseStatus, PurchaseType
from src.domain.wallet_transaction import (
    WalletTransaction,
    WalletTransactionStatus,
    WalletTransactionType,
)


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def admin_actor():
    """Shop admin confirming deposits"""
    return ActorDTO(
        user_id="user_admin",
        name="Ama Admin",
        staff_member_id="staff_admin",
        shop_id="shop_1",
    )


@pytest.fixture
def make_customer():
    def _create(balance: Decimal = Decimal("0.00"), **kwargs):
        return Customer(
            id=kwargs.pop("id", "cust_1"),
            shop_id=kwargs.pop("shop_id", "shop_1"),
            first_name=kwargs.pop("first_name", "Kofi"),
            last_name=kwargs.pop("last_name", "Mensah"),
            phone=kwargs.pop("phone", "+233200000000"),
            wallet_balance=balance,
            **kwargs,
        )
    return _create


@pytest.fixture
def make_transaction():
    def _create(
        amount: Decimal,
        transaction_type: WalletTransactionType = WalletTransactionType.DEPOSIT,
        status: WalletTransactionStatus = WalletTransactionStatus.PENDING,
        **kwargs,
    ):
        return WalletTransaction(
            id=kwargs.pop("id", "txn_1"),
            customer_id=kwargs.pop("customer_id", "cust_1"),
            shop_id=kwargs.pop("shop_id", "shop_1"),
            transaction_type=transaction_type,
            amount=amount,
            balance_before=kwargs.pop("balance_before", Decimal("0.00")),
            balance_after=kwargs.pop("balance_after", amount),
            status=status,
            created_at=datetime.utcnow(),
            **kwargs,
        )
    return _create


@pytest.fixture
def make_purchase():
    def _create(
        number: str,
        total: Decimal,
        paid: Decimal = Decimal("0.00"),
        due_date=None,
        status: PurchaseStatus = PurchaseStatus.ACTIVE,
        purchase_type: PurchaseType = PurchaseType.CREDIT,
        **kwargs,
    ):
        return Purchase(
            id=kwargs.pop("id", f"id_{number}"),
            purchase_number=number,
            customer_id=kwargs.pop("customer_id", "cust_1"),
            shop_id=kwargs.pop("shop_id", "shop_1"),
            purchase_type=purchase_type,
            status=status,
            total_amount=total,
            amount_paid=paid,
            outstanding_balance=total - paid,
            due_date=due_date,
            **kwargs,
        )
    return _create


@pytest.fixture
def due():
    """Shortcut for building due dates"""
    return lambda day: date(2024, 1, day)
