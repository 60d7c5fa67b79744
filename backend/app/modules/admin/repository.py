# modules/admin/repository.py
"""
Accès DB pour le back-office : évaluations, questions, plages, tentatives, stats.
"""
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete
from sqlalchemy.orm import selectinload
from typing import List, Optional, Dict, Any

from app.shared.enums import UserTier
from app.shared.models import User, Assessment, AssessmentQuestion, ScoreRange, UserAssessment


class AdminRepository:

    # ─────────────────────────────────────────────
    # ÉVALUATIONS
    # ─────────────────────────────────────────────

    async def list_assessments(self, db: AsyncSession) -> List[Assessment]:
        r = await db.execute(select(Assessment).order_by(Assessment.created_at.desc()))
        return r.scalars().all()

    async def get_assessment(self, db: AsyncSession, assessment_id: int) -> Optional[Assessment]:
        r = await db.execute(select(Assessment).where(Assessment.id == assessment_id))
        return r.scalar_one_or_none()

    async def create_assessment(
        self, db: AsyncSession, data: Dict[str, Any], question_texts: List[str]
    ) -> Assessment:
        db_obj = Assessment(**data)
        db.add(db_obj)
        await db.flush()   # db_obj.id disponible

        for order, text in enumerate(question_texts, start=1):
            db.add(AssessmentQuestion(assessment_id=db_obj.id, text=text, order=order))

        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update_assessment(
        self, db: AsyncSession, assessment: Assessment, data: Dict[str, Any]
    ) -> Assessment:
        for field, value in data.items():
            setattr(assessment, field, value)
        await db.commit()
        await db.refresh(assessment)
        return assessment

    async def delete_assessment(self, db: AsyncSession, assessment: Assessment) -> None:
        await db.delete(assessment)
        await db.commit()

    # ─────────────────────────────────────────────
    # QUESTIONS
    # ─────────────────────────────────────────────

    async def get_questions(self, db: AsyncSession, assessment_id: int) -> List[AssessmentQuestion]:
        r = await db.execute(
            select(AssessmentQuestion)
            .where(AssessmentQuestion.assessment_id == assessment_id)
            .order_by(AssessmentQuestion.order.asc())
        )
        return r.scalars().all()

    async def replace_questions(
        self, db: AsyncSession, assessment: Assessment, question_texts: List[str]
    ) -> List[AssessmentQuestion]:
        """Remplace tout le jeu de questions (ordres 1..N) et met à jour total_questions."""
        await db.execute(
            delete(AssessmentQuestion).where(AssessmentQuestion.assessment_id == assessment.id)
        )
        questions = [
            AssessmentQuestion(assessment_id=assessment.id, text=text, order=order)
            for order, text in enumerate(question_texts, start=1)
        ]
        for q in questions:
            db.add(q)
        assessment.total_questions = len(questions)
        await db.commit()
        return questions

    # ─────────────────────────────────────────────
    # PLAGES DE SCORE
    # ─────────────────────────────────────────────

    async def get_score_ranges(self, db: AsyncSession, assessment_id: int) -> List[ScoreRange]:
        r = await db.execute(
            select(ScoreRange)
            .where(ScoreRange.assessment_id == assessment_id)
            .order_by(ScoreRange.min_score.asc())
        )
        return r.scalars().all()

    async def get_score_range(self, db: AsyncSession, range_id: int) -> Optional[ScoreRange]:
        r = await db.execute(select(ScoreRange).where(ScoreRange.id == range_id))
        return r.scalar_one_or_none()

    async def create_score_range(self, db: AsyncSession, data: Dict[str, Any]) -> ScoreRange:
        db_obj = ScoreRange(**data)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update_score_range(
        self, db: AsyncSession, score_range: ScoreRange, data: Dict[str, Any]
    ) -> ScoreRange:
        for field, value in data.items():
            setattr(score_range, field, value)
        await db.commit()
        await db.refresh(score_range)
        return score_range

    async def delete_score_range(self, db: AsyncSession, score_range: ScoreRange) -> None:
        await db.delete(score_range)
        await db.commit()

    # ─────────────────────────────────────────────
    # TENTATIVES
    # ─────────────────────────────────────────────

    async def count_attempts(self, db: AsyncSession) -> int:
        r = await db.execute(select(func.count(UserAssessment.id)))
        return r.scalar_one()

    async def get_attempts_page(
        self, db: AsyncSession, offset: int, limit: int
    ) -> List[UserAssessment]:
        r = await db.execute(
            select(UserAssessment)
            .options(selectinload(UserAssessment.user), selectinload(UserAssessment.assessment))
            .order_by(UserAssessment.completed_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return r.scalars().all()

    # ─────────────────────────────────────────────
    # DASHBOARD
    # ─────────────────────────────────────────────

    async def count_users(self, db: AsyncSession) -> int:
        r = await db.execute(select(func.count(User.id)))
        return r.scalar_one()

    async def count_paid_users(self, db: AsyncSession) -> int:
        r = await db.execute(select(func.count(User.id)).where(User.tier != UserTier.FREE))
        return r.scalar_one()

    async def get_percentage_scores(self, db: AsyncSession) -> List[float]:
        r = await db.execute(select(UserAssessment.percentage_score))
        return list(r.scalars().all())

    async def get_completion_dates_since(self, db: AsyncSession, since: datetime) -> List[datetime]:
        r = await db.execute(
            select(UserAssessment.completed_at).where(UserAssessment.completed_at >= since)
        )
        return list(r.scalars().all())
