# modules/users/router.py
"""
Gestion des utilisateurs (admin) : liste filtrable, tier Free/Premium,
rôle user/admin.
"""
from fastapi import APIRouter, HTTPException, Query, status
from typing import List, Optional

from app.shared.deps import DbDep, AdminDep
from app.modules.users.service import UserAdminService
from app.modules.users.schemas import UserAdminOut, TierUpdateIn, RoleUpdateIn

router = APIRouter(prefix="/admin/users", tags=["Users"])
service = UserAdminService()


@router.get("", response_model=List[UserAdminOut])
async def list_users(
    db: DbDep,
    admin: AdminDep,
    search: Optional[str] = None,
    tier: str = Query("all", pattern="^(all|Free|Premium)$"),
):
    """Recherche nom / email (insensible à la casse) + filtre tier."""
    return await service.list_users(db, search=search, tier=tier)


@router.patch("/{user_id}/tier", response_model=UserAdminOut)
async def update_tier(user_id: int, payload: TierUpdateIn, db: DbDep, admin: AdminDep):
    try:
        return await service.set_tier(db, user_id, payload.tier)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{user_id}/role", response_model=UserAdminOut)
async def update_role(user_id: int, payload: RoleUpdateIn, db: DbDep, admin: AdminDep):
    """Accorde ou retire le rôle admin."""
    try:
        return await service.set_role(db, user_id, payload.role)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
