# app/modules/auth/router.py
from fastapi import APIRouter
from app.modules.auth.schemas import (
    RegisterIn, LoginIn, TokenOut, RefreshIn, AccessTokenOut, ChangePasswordIn, MeOut,
)
from app.modules.auth.service import AuthService
from app.shared.deps import DbDep, UserDep

router = APIRouter(prefix="/auth", tags=["Auth"])
service = AuthService()


@router.post("/register", response_model=TokenOut, status_code=201)
async def register(payload: RegisterIn, db: DbDep):
    """Inscription → compte Free, rôle user."""
    return await service.register(db, payload)


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, db: DbDep):
    return await service.login(db, payload)


@router.post("/refresh", response_model=AccessTokenOut)
async def refresh(payload: RefreshIn, db: DbDep):
    return await service.refresh(db, payload.refresh_token)


@router.post("/change-password", status_code=204)
async def change_password(payload: ChangePasswordIn, current_user: UserDep, db: DbDep):
    await service.change_password(db, current_user, payload.current_password, payload.new_password)


@router.get("/me", response_model=MeOut)
async def me(current_user: UserDep):
    """Retourne les infos minimales du token."""
    return {
        "id": current_user.id,
        "email": current_user.email,
        "full_name": current_user.full_name,
        "role": current_user.role,
        "tier": current_user.tier,
    }
