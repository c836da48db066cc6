"""Shop/business scoping shared by the SQLAlchemy repositories"""

from typing import Optional
from sqlmodel import select
from src.domain.shop import Shop


def apply_shop_scope(stmt, shop_column, shop_id: Optional[str], business_id: Optional[str]):
    """
    Restrict a statement to rows whose shop is inside the caller's scope

    Args:
        stmt: Select/Update statement to restrict
        shop_column: Column holding the row's shop ID
        shop_id: Only match rows of this shop
        business_id: Only match rows of shops owned by this business
    """
    if shop_id:
        stmt = stmt.where(shop_column == shop_id)
    if business_id:
        stmt = stmt.where(
            shop_column.in_(select(Shop.id).where(Shop.business_id == business_id))
        )
    return stmt
