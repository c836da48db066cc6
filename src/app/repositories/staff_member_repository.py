"""Staff Member Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.staff_member import StaffMember


class StaffMemberRepository(ABC):

    @abstractmethod
    async def get_by_id(self, staff_member_id: str) -> Optional[StaffMember]:
        pass
