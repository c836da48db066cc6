"""Acting identity resolved from request headers

Authentication happens upstream; by the time a request reaches this service
the gateway has already resolved who is acting and in which scope. The
headers are turned into an ActorDTO and handed to the use cases as is.
"""

from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from src.app.use_cases.wallet.dtos import ActorDTO

SUPER_ADMIN_ROLE = "super_admin"
ADMIN_ROLES = {SUPER_ADMIN_ROLE, "business_admin", "shop_admin"}


async def get_actor(
    x_actor_id: str = Header(..., min_length=1),
    x_actor_name: str = Header(default=""),
    x_actor_role: str = Header(default=""),
    x_shop_id: Optional[str] = Header(default=None),
    x_business_id: Optional[str] = Header(default=None),
    x_staff_member_id: Optional[str] = Header(default=None),
) -> ActorDTO:
    role = x_actor_role.strip().lower()
    is_super_admin = role == SUPER_ADMIN_ROLE

    if not is_super_admin and not (x_shop_id or x_business_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="X-Shop-Id or X-Business-Id is required",
        )

    return ActorDTO(
        user_id=x_actor_id,
        name=x_actor_name,
        staff_member_id=x_staff_member_id,
        shop_id=x_shop_id,
        business_id=x_business_id,
        is_super_admin=is_super_admin,
    )


async def get_admin_actor(
    actor: ActorDTO = Depends(get_actor),
    x_actor_role: str = Header(default=""),
) -> ActorDTO:
    """Actor allowed to confirm, reject and adjust"""
    if x_actor_role.strip().lower() not in ADMIN_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return actor
