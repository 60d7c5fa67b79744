# modules/profile/service.py
"""Page profil : identité, tier, historique et moyenne des tentatives."""
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict

from app.modules.assessment.repository import AssessmentRepository
from app.shared.models import User

assessment_repo = AssessmentRepository()


class ProfileService:

    async def get_profile(self, db: AsyncSession, user: User) -> Dict:
        attempts = await assessment_repo.get_attempts_by_user(db, user.id)

        average = None
        if attempts:
            average = round(sum(a.percentage_score for a in attempts) / len(attempts))

        return {
            "id":                 user.id,
            "email":              user.email,
            "first_name":         user.first_name,
            "last_name":          user.last_name,
            "full_name":          user.full_name,
            "role":               user.role,
            "tier":               user.tier,
            "attempt_count":      len(attempts),
            "average_percentage": average,
            "attempts":           attempts,
        }

    async def update_profile(self, db: AsyncSession, user: User, data: Dict) -> Dict:
        for field, value in data.items():
            setattr(user, field, value)
        await db.commit()
        await db.refresh(user)
        return await self.get_profile(db, user)
