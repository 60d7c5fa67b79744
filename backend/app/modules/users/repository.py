# modules/users/repository.py
"""Accès DB pour la gestion des comptes (back-office)."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from typing import List, Optional, Tuple

from app.shared.enums import UserTier
from app.shared.models import User, UserAssessment


class UserRepository:

    async def list_users_with_attempt_counts(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        tier: Optional[UserTier] = None,
    ) -> List[Tuple[User, int]]:
        attempts = (
            select(UserAssessment.user_id, func.count(UserAssessment.id).label("n"))
            .group_by(UserAssessment.user_id)
            .subquery()
        )
        stmt = (
            select(User, func.coalesce(attempts.c.n, 0))
            .outerjoin(attempts, attempts.c.user_id == User.id)
            .order_by(User.created_at.desc())
        )
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(or_(
                func.lower(User.email).like(pattern),
                func.lower(User.first_name).like(pattern),
                func.lower(User.last_name).like(pattern),
            ))
        if tier is not None:
            stmt = stmt.where(User.tier == tier)

        r = await db.execute(stmt)
        return [(user, count) for user, count in r.all()]

    async def get_user(self, db: AsyncSession, user_id: int) -> Optional[User]:
        r = await db.execute(select(User).where(User.id == user_id))
        return r.scalar_one_or_none()

    async def count_attempts(self, db: AsyncSession, user_id: int) -> int:
        r = await db.execute(
            select(func.count(UserAssessment.id)).where(UserAssessment.user_id == user_id)
        )
        return r.scalar_one()

    async def save(self, db: AsyncSession, user: User) -> User:
        await db.commit()
        await db.refresh(user)
        return user
