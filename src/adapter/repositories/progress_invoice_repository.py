"""SQLAlchemy implementation of ProgressInvoiceRepository"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.progress_invoice_repository import ProgressInvoiceRepository
from src.domain.progress_invoice import ProgressInvoice


class SqlAlchemyProgressInvoiceRepository(ProgressInvoiceRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: ProgressInvoice) -> ProgressInvoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice
