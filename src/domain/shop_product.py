"""Shop Product Domain Entity

Per-shop stock level of a catalog product.
"""

from datetime import datetime
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String
from src.domain.base import BaseModel, generate_uuid


class ShopProduct(BaseModel, table=True):
    __tablename__ = "shop_products"
    __table_args__ = (
        Index("ix_shop_products_shop_product", "shop_id", "product_id", unique=True),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    shop_id: str = Field(
        sa_column=Column(String(36), ForeignKey("shops.id", ondelete="CASCADE"), nullable=False),
    )

    product_id: str = Field(description="Catalog product ID")

    stock_quantity: int = Field(default=0, description="Units on hand")

    updated_at: datetime = Field(default_factory=datetime.utcnow)
