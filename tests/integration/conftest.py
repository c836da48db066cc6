import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.adapter.services.audit_logger import LoggingAuditLogger
from src.depends import get_audit_logger, get_session
from src.domain.customer import Customer
from src.domain.purchase import Purchase, PurchaseStatus, PurchaseType
from src.domain.shop import Shop
from src.domain.staff_member import StaffMember, StaffRole


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite engine shared by every connection of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def shop(db_session):
    shop = Shop(id="shop_1", business_id="biz_1", name="Accra Central", slug="accra-central")
    other = Shop(id="shop_2", business_id="biz_2", name="Kumasi", slug="kumasi")
    db_session.add(shop)
    db_session.add(other)
    await db_session.commit()
    return shop


@pytest_asyncio.fixture
async def collector(db_session, shop):
    staff = StaffMember(
        id="staff_col",
        shop_id=shop.id,
        user_id="user_col",
        name="Yaw Collector",
        role=StaffRole.DEBT_COLLECTOR,
        can_load_wallet=True,
    )
    db_session.add(staff)
    await db_session.commit()
    return staff


@pytest_asyncio.fixture
async def customer(db_session, shop):
    customer = Customer(
        id="cust_1",
        shop_id=shop.id,
        first_name="Kofi",
        last_name="Mensah",
        phone="+233200000000",
        address="12 Ring Rd",
        city="Accra",
        wallet_balance=Decimal("0.00"),
    )
    db_session.add(customer)
    await db_session.commit()
    return customer


@pytest.fixture
def add_purchase(db_session, customer):
    """Insert an outstanding purchase; creation order follows call order"""
    counter = {"n": 0}

    async def _add(
        total: Decimal,
        due_date=None,
        purchase_type: PurchaseType = PurchaseType.CREDIT,
        status: PurchaseStatus = PurchaseStatus.ACTIVE,
    ) -> Purchase:
        counter["n"] += 1
        purchase = Purchase(
            purchase_number=f"PUR-2024-{counter['n']:05d}",
            customer_id=customer.id,
            shop_id=customer.shop_id,
            purchase_type=purchase_type,
            status=status,
            total_amount=total,
            amount_paid=Decimal("0.00"),
            outstanding_balance=total,
            due_date=due_date,
            created_at=datetime(2024, 1, 1) + timedelta(minutes=counter["n"]),
        )
        db_session.add(purchase)
        await db_session.commit()
        return purchase

    return _add


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_audit_logger] = lambda: LoggingAuditLogger()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
