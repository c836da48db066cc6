"""Staff Member Domain Entity

Shop-level membership of a platform user. Staff members create pending
wallet deposits; admins confirm them.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String
from src.domain.base import BaseModel, generate_uuid


class StaffRole(str, Enum):
    """Roles a staff member can hold inside a shop"""
    BUSINESS_ADMIN = "business_admin"
    SHOP_ADMIN = "shop_admin"
    SALES_STAFF = "sales_staff"
    DEBT_COLLECTOR = "debt_collector"


class StaffMember(BaseModel, table=True):
    """
    Staff Member - user membership in a shop

    Domain Rules:
    - One membership per (user, shop)
    - can_load_wallet gates creation of wallet deposits
    - Memberships are provisioned by the admin surface, never by the ledger
    """

    __tablename__ = "staff_members"
    __table_args__ = (
        Index("ix_staff_members_user_shop", "user_id", "shop_id", unique=True),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    shop_id: str = Field(
        sa_column=Column(String(36), ForeignKey("shops.id", ondelete="CASCADE"), nullable=False),
        description="Shop this membership belongs to"
    )

    user_id: str = Field(description="Platform user ID")

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name (matched case-insensitively for bulk confirmation)"
    )

    role: StaffRole = Field(description="Role inside the shop")

    can_load_wallet: bool = Field(
        default=False,
        description="Whether this member may record wallet deposits"
    )

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: Optional[datetime] = Field(default=None)
