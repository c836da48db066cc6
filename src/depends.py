from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.audit_logger import create_audit_logger
from src.app.services.audit_logger import AuditLogger

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

_audit_logger = create_audit_logger(
    session_factory=AsyncSessionLocal if ApplicationConfig.AUDIT_PERSIST_ENABLED else None,
    webhook_url=ApplicationConfig.AUDIT_WEBHOOK_URL,
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_audit_logger() -> AuditLogger:
    return _audit_logger
