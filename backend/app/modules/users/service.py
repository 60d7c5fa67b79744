# modules/users/service.py
"""
Gestion des comptes par l'admin : recherche, tier, rôle.
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Dict, Optional

from app.modules.users.repository import UserRepository
from app.shared.enums import UserRole, UserTier

logger = logging.getLogger(__name__)

repo = UserRepository()


class UserAdminService:

    async def list_users(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        tier: Optional[str] = None,
    ) -> List[Dict]:
        """tier="all" ou None → pas de filtre."""
        tier_filter = None if tier in (None, "", "all") else UserTier(tier)
        rows = await repo.list_users_with_attempt_counts(db, search=search, tier=tier_filter)
        return [self._row(user, count) for user, count in rows]

    async def set_tier(self, db: AsyncSession, user_id: int, tier: UserTier) -> Dict:
        user = await repo.get_user(db, user_id)
        if not user:
            raise LookupError("Utilisateur introuvable.")
        user.tier = tier
        user = await repo.save(db, user)
        logger.info("Tier de l'utilisateur %s → %s", user_id, tier.value)
        return self._row(user, await repo.count_attempts(db, user_id))

    async def set_role(self, db: AsyncSession, user_id: int, role: UserRole) -> Dict:
        user = await repo.get_user(db, user_id)
        if not user:
            raise LookupError("Utilisateur introuvable.")
        user.role = role
        user = await repo.save(db, user)
        logger.info("Rôle de l'utilisateur %s → %s", user_id, role.value)
        return self._row(user, await repo.count_attempts(db, user_id))

    def _row(self, user, attempt_count: int) -> Dict:
        return {
            "id":         user.id,
            "email":      user.email,
            "full_name":  user.full_name,
            "role":       user.role,
            "tier":       user.tier,
            "is_active":  user.is_active,
            "created_at": user.created_at,
            "attempt_count": attempt_count,
        }
