# modules/assessment/repository.py
"""
Accès DB pour le module assessment (côté utilisateur).
Les requêtes SQL du parcours utilisateur vivent ici, pas dans le service.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List, Optional, Dict, Any

from app.shared.models import Assessment, AssessmentQuestion, ScoreRange, UserAssessment


class AssessmentRepository:

    # ─────────────────────────────────────────────
    # CATALOGUE
    # ─────────────────────────────────────────────

    async def get_active_assessments(self, db: AsyncSession) -> List[Assessment]:
        r = await db.execute(
            select(Assessment)
            .where(Assessment.is_active == True)
            .order_by(Assessment.created_at.desc())
        )
        return r.scalars().all()

    async def get_assessment(self, db: AsyncSession, assessment_id: int) -> Optional[Assessment]:
        r = await db.execute(select(Assessment).where(Assessment.id == assessment_id))
        return r.scalar_one_or_none()

    async def get_questions(self, db: AsyncSession, assessment_id: int) -> List[AssessmentQuestion]:
        r = await db.execute(
            select(AssessmentQuestion)
            .where(AssessmentQuestion.assessment_id == assessment_id)
            .order_by(AssessmentQuestion.order.asc())
        )
        return r.scalars().all()

    async def get_score_ranges(self, db: AsyncSession, assessment_id: int) -> List[ScoreRange]:
        r = await db.execute(
            select(ScoreRange)
            .where(ScoreRange.assessment_id == assessment_id)
            .order_by(ScoreRange.min_score.asc())
        )
        return r.scalars().all()

    # ─────────────────────────────────────────────
    # TENTATIVES
    # ─────────────────────────────────────────────

    async def save_attempt(self, db: AsyncSession, data: Dict[str, Any]) -> UserAssessment:
        db_obj = UserAssessment(**data)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def get_attempts_by_user(self, db: AsyncSession, user_id: int) -> List[UserAssessment]:
        r = await db.execute(
            select(UserAssessment)
            .options(selectinload(UserAssessment.assessment))
            .where(UserAssessment.user_id == user_id)
            .order_by(UserAssessment.completed_at.desc())
        )
        return r.scalars().all()

    async def get_attempt(self, db: AsyncSession, attempt_id: int) -> Optional[UserAssessment]:
        r = await db.execute(
            select(UserAssessment)
            .options(selectinload(UserAssessment.assessment))
            .where(UserAssessment.id == attempt_id)
        )
        return r.scalar_one_or_none()
