"""Shop Domain Entity

A shop belongs to a business and scopes customers, staff, wallet
transactions and stock.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class Shop(BaseModel, table=True):
    __tablename__ = "shops"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    business_id: str = Field(
        index=True,
        description="Owning business"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name"
    )

    slug: str = Field(
        unique=True,
        index=True,
        description="URL slug (unique)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
