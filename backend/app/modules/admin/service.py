# modules/admin/service.py
"""
Back-office : CRUD évaluations / questions / plages de score,
consultation paginée des tentatives, statistiques du dashboard.

Conventions d'erreur (traduites en HTTP par le router) :
    LookupError → 404 | ValueError → 400
"""
import logging
import math
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Dict, Tuple

import numpy as np

from app.core.config import settings
from app.engine.scoring.scoring import max_possible_score, score_bounds
from app.engine.scoring.interpretation import audit_ranges
from app.modules.admin.repository import AdminRepository
from app.modules.admin.schemas import (
    AssessmentCreateIn, AssessmentUpdateIn, ScoreRangeIn, ScoreRangeUpdateIn,
)

logger = logging.getLogger(__name__)

repo = AdminRepository()

MONTHS_IN_DASHBOARD = 12


class AdminService:

    # ── Évaluations ───────────────────────────────────────────

    async def list_assessments(self, db: AsyncSession) -> List:
        return await repo.list_assessments(db)

    async def create_assessment(self, db: AsyncSession, payload: AssessmentCreateIn):
        questions = payload.questions or []
        total = len(questions)

        assessment = await repo.create_assessment(db, {
            "title":           payload.title,
            "description":     payload.description,
            "total_questions": total,
            "is_active":       True,
        }, question_texts=questions)

        logger.info("Évaluation créée id=%s (%s questions)", assessment.id, total)
        return assessment

    async def update_assessment(
        self, db: AsyncSession, assessment_id: int, payload: AssessmentUpdateIn
    ):
        assessment = await self._get_assessment_or_raise(db, assessment_id)
        data = payload.model_dump(exclude_unset=True)
        data["updated_at"] = datetime.now(timezone.utc)
        return await repo.update_assessment(db, assessment, data)

    async def toggle_assessment(self, db: AsyncSession, assessment_id: int):
        assessment = await self._get_assessment_or_raise(db, assessment_id)
        updated = await repo.update_assessment(db, assessment, {
            "is_active":  not assessment.is_active,
            "updated_at": datetime.now(timezone.utc),
        })
        logger.info(
            "Évaluation %s %s", assessment_id, "activée" if updated.is_active else "désactivée"
        )
        return updated

    async def delete_assessment(self, db: AsyncSession, assessment_id: int) -> None:
        assessment = await self._get_assessment_or_raise(db, assessment_id)
        await repo.delete_assessment(db, assessment)
        logger.info("Évaluation %s supprimée", assessment_id)

    # ── Questions ─────────────────────────────────────────────

    async def get_questions(self, db: AsyncSession, assessment_id: int) -> List:
        await self._get_assessment_or_raise(db, assessment_id)
        return await repo.get_questions(db, assessment_id)

    async def replace_questions(
        self, db: AsyncSession, assessment_id: int, question_texts: List[str]
    ) -> List:
        assessment = await self._get_assessment_or_raise(db, assessment_id)
        questions = await repo.replace_questions(db, assessment, question_texts)
        logger.info("Évaluation %s : %s questions remplacées", assessment_id, len(questions))
        return questions

    # ── Plages de score ───────────────────────────────────────

    async def get_score_ranges(self, db: AsyncSession, assessment_id: int) -> Dict:
        """
        Plages triées par min_score + audit trous/chevauchements
        sur l'intervalle atteignable [-N, 2N], N = questions réellement
        en base (celles contre lesquelles les tentatives sont notées).
        """
        await self._get_assessment_or_raise(db, assessment_id)
        ranges = await repo.get_score_ranges(db, assessment_id)
        question_count = len(await repo.get_questions(db, assessment_id))

        lowest, highest = score_bounds(question_count)
        audit = audit_ranges(ranges, lowest, highest)

        return {
            "assessment_id":      assessment_id,
            "max_possible_score": max_possible_score(question_count),
            "min_possible_score": lowest,
            "ranges":             ranges,
            "audit": {
                "gaps":        audit["gaps"],
                "overlaps":    [[ranges[i].id, ranges[j].id] for i, j in audit["overlaps"]],
                "invalid":     [ranges[i].id for i in audit["invalid"]],
                "is_coherent": audit["is_coherent"],
            },
        }

    async def create_score_range(
        self, db: AsyncSession, assessment_id: int, payload: ScoreRangeIn
    ):
        await self._get_assessment_or_raise(db, assessment_id)
        created = await repo.create_score_range(db, {
            "assessment_id": assessment_id,
            **payload.model_dump(),
        })
        logger.info(
            "Plage [%s, %s] créée pour l'évaluation %s",
            payload.min_score, payload.max_score, assessment_id,
        )
        return created

    async def update_score_range(
        self, db: AsyncSession, range_id: int, payload: ScoreRangeUpdateIn
    ):
        score_range = await repo.get_score_range(db, range_id)
        if not score_range:
            raise LookupError("Plage de score introuvable.")

        data = payload.model_dump(exclude_unset=True)
        new_min = data.get("min_score", score_range.min_score)
        new_max = data.get("max_score", score_range.max_score)
        if new_min > new_max:
            raise ValueError("Le score minimum ne peut pas dépasser le score maximum.")

        return await repo.update_score_range(db, score_range, data)

    async def delete_score_range(self, db: AsyncSession, range_id: int) -> None:
        score_range = await repo.get_score_range(db, range_id)
        if not score_range:
            raise LookupError("Plage de score introuvable.")
        await repo.delete_score_range(db, score_range)

    # ── Tentatives ────────────────────────────────────────────

    async def get_attempts_page(self, db: AsyncSession, page: int) -> Dict:
        """Tentatives les plus récentes d'abord, settings.ATTEMPTS_PAGE_SIZE par page."""
        if page < 1:
            raise ValueError("La page doit être >= 1.")

        page_size = settings.ATTEMPTS_PAGE_SIZE
        total = await repo.count_attempts(db)
        attempts = await repo.get_attempts_page(db, offset=(page - 1) * page_size, limit=page_size)

        return {
            "items":       [self._attempt_row(a) for a in attempts],
            "page":        page,
            "page_size":   page_size,
            "total":       total,
            "total_pages": math.ceil(total / page_size) if total else 0,
        }

    # ── Dashboard ─────────────────────────────────────────────

    async def get_dashboard(self, db: AsyncSession, now: datetime = None) -> Dict:
        now = now or datetime.now(timezone.utc)

        total_users = await repo.count_users(db)
        paid_users = await repo.count_paid_users(db)
        total_attempts = await repo.count_attempts(db)
        percentages = await repo.get_percentage_scores(db)
        recent = await repo.get_attempts_page(db, offset=0, limit=settings.RECENT_ATTEMPTS_LIMIT)

        months = _last_months(now, MONTHS_IN_DASHBOARD)
        since = datetime(months[0][0], months[0][1], 1, tzinfo=timezone.utc)
        dates = await repo.get_completion_dates_since(db, since)

        return {
            "total_users":               total_users,
            "total_paid_users":          paid_users,
            "total_free_users":          total_users - paid_users,
            "total_attempts":            total_attempts,
            "average_attempts_per_user": round(total_attempts / total_users, 2) if total_users else 0.0,
            "percentage_stats":          _aggregate(percentages),
            "recent_attempts":           [self._attempt_row(a) for a in recent],
            "monthly_attempts":          _monthly_counts(dates, months),
        }

    # ── Internals ─────────────────────────────────────────────

    async def _get_assessment_or_raise(self, db: AsyncSession, assessment_id: int):
        assessment = await repo.get_assessment(db, assessment_id)
        if not assessment:
            raise LookupError("Évaluation introuvable.")
        return assessment

    def _attempt_row(self, attempt) -> Dict:
        user = attempt.user
        return {
            "id":                 attempt.id,
            "user_id":            attempt.user_id,
            "user_email":         user.email if user else None,
            "user_name":          user.full_name if user else None,
            "assessment_id":      attempt.assessment_id,
            "assessment_title":   attempt.assessment_title,
            "total_score":        attempt.total_score,
            "max_possible_score": attempt.max_possible_score,
            "percentage_score":   attempt.percentage_score,
            "responses":          attempt.responses or {},
            "completed_at":       attempt.completed_at,
        }


def _aggregate(values: List[float]) -> Dict:
    arr = [v for v in values if v is not None]
    return {
        "mean": round(float(np.mean(arr)), 2) if arr else None,
        "std":  round(float(np.std(arr)), 2) if len(arr) > 1 else None,
        "n":    len(arr),
    }


def _last_months(now: datetime, count: int) -> List[Tuple[int, int]]:
    """(année, mois) des `count` derniers mois, le plus ancien d'abord, mois courant inclus."""
    months = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def _monthly_counts(dates: List[datetime], months: List[Tuple[int, int]]) -> List[Dict]:
    counts = {m: 0 for m in months}
    for d in dates:
        if d is None:
            continue
        key = (d.year, d.month)
        if key in counts:
            counts[key] += 1
    return [
        {"month": f"{year:04d}-{month:02d}", "assessments": counts[(year, month)]}
        for year, month in months
    ]
