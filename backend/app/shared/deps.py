# app/shared/deps.py
"""
Dépendances FastAPI réutilisables dans tous les routers.
Toujours injectées par Depends(), jamais appelées à la main.

Chaîne : bearer → _get_user_from_token → get_current_user
                                          ├─ get_current_admin   (role admin)
                                          └─ get_premium_user    (tier Premium)
Overrider get_current_user dans les tests suffit pour toute la chaîne.
"""
from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import decode_token
from app.shared.models import User
from app.shared.enums import UserRole, UserTier

bearer = HTTPBearer()


async def _get_user_from_token(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token invalide ou expiré",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(credentials.credentials)
        user_id = payload.get("sub")
        if user_id is None or payload.get("type") != "access":
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == int(user_id)))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise credentials_exception
    return user


# ── Deps publiques ─────────────────────────────────────────

async def get_current_user(
    user: Annotated[User, Depends(_get_user_from_token)],
) -> User:
    """Utilisateur authentifié (tout rôle, tout tier)."""
    return user


async def get_current_admin(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Exige le rôle ADMIN."""
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Accès administrateur requis")
    return user


async def get_premium_user(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Exige le tier Premium pour passer une évaluation.
    Les comptes Free peuvent parcourir le catalogue mais pas soumettre.
    Les admins passent toujours.
    """
    if user.role != UserRole.ADMIN and user.tier != UserTier.PREMIUM:
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail="Compte Premium requis : passez par /billing/upgrade",
        )
    return user


# ── Type aliases pour les routers ─────────────────────────
DbDep      = Annotated[AsyncSession, Depends(get_db)]
UserDep    = Annotated[User, Depends(get_current_user)]
AdminDep   = Annotated[User, Depends(get_current_admin)]
PremiumDep = Annotated[User, Depends(get_premium_user)]
