"""SQLAlchemy implementation of StaffMemberRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.staff_member_repository import StaffMemberRepository
from src.domain.staff_member import StaffMember


class SqlAlchemyStaffMemberRepository(StaffMemberRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, staff_member_id: str) -> Optional[StaffMember]:
        stmt = select(StaffMember).where(StaffMember.id == staff_member_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
