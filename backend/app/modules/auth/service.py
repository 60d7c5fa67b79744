# app/modules/auth/service.py
import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.shared.models import User
from app.shared.enums import UserRole, UserTier
from app.core.security import (
    hash_password, verify_password,
    create_access_token, create_refresh_token, decode_token,
)
from app.modules.auth.schemas import RegisterIn, LoginIn, TokenOut
from jose import JWTError

logger = logging.getLogger(__name__)


class AuthService:

    # ── Register ─────────────────────────────────────────────

    async def register(self, db: AsyncSession, payload: RegisterIn) -> TokenOut:
        await self._assert_email_free(db, payload.email)

        user = User(
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            hashed_password=hash_password(payload.password),
            role=UserRole.USER,
            tier=UserTier.FREE,
            is_active=True,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)

        logger.info("Nouvel utilisateur inscrit id=%s", user.id)
        return self._build_tokens(user)

    # ── Login ─────────────────────────────────────────────────

    async def login(self, db: AsyncSession, payload: LoginIn) -> TokenOut:
        result = await db.execute(select(User).where(User.email == payload.email))
        user = result.scalar_one_or_none()

        if not user or not verify_password(payload.password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Email ou mot de passe incorrect",
            )
        if not user.is_active:
            raise HTTPException(status_code=403, detail="Compte désactivé")

        return self._build_tokens(user)

    # ── Refresh ───────────────────────────────────────────────

    async def refresh(self, db: AsyncSession, refresh_token: str) -> dict:
        try:
            payload = decode_token(refresh_token)
            if payload.get("type") != "refresh":
                raise ValueError
            user_id = int(payload["sub"])
        except (JWTError, ValueError, KeyError):
            raise HTTPException(status_code=401, detail="Refresh token invalide")

        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user or not user.is_active:
            raise HTTPException(status_code=401, detail="Utilisateur introuvable")

        access_token = create_access_token(self._claims(user))
        return {"access_token": access_token, "token_type": "bearer"}

    # ── Mot de passe ──────────────────────────────────────────

    async def change_password(
        self, db: AsyncSession, user: User, current_pw: str, new_pw: str
    ) -> None:
        if not verify_password(current_pw, user.hashed_password):
            raise HTTPException(status_code=400, detail="Mot de passe actuel incorrect")
        user.hashed_password = hash_password(new_pw)
        await db.commit()

    # ── Privé ─────────────────────────────────────────────────

    async def _assert_email_free(self, db: AsyncSession, email: str) -> None:
        result = await db.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            raise HTTPException(status_code=409, detail="Email déjà utilisé")

    def _claims(self, user: User) -> dict:
        role = getattr(user.role, "value", user.role)
        return {"sub": str(user.id), "role": role}

    def _build_tokens(self, user: User) -> TokenOut:
        data = self._claims(user)
        return TokenOut(
            access_token=create_access_token(data),
            refresh_token=create_refresh_token(data),
            role=user.role,
            tier=user.tier,
            user_id=user.id,
        )
