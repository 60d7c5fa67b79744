# modules/assessment/service.py
"""
Orchestration du cycle de vie d'une auto-évaluation.

Responsabilités :
1. Interroger la DB via repository (évaluation, questions, plages)
2. Déléguer le calcul à engine/scoring
3. Sauvegarder la tentative (une ligne par soumission, jamais dédupliquée)
4. Joindre l'interprétation correspondant au score
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Dict

from app.engine.scoring.scoring import (
    calculate_scores, response_breakdown, answer_options, iter_answers,
)
from app.engine.scoring.interpretation import interpret
from app.modules.assessment.repository import AssessmentRepository
from app.shared.enums import UserRole
from app.shared.models import User

logger = logging.getLogger(__name__)

repo = AssessmentRepository()


class AssessmentService:

    async def get_catalogue(self, db: AsyncSession) -> List:
        return await repo.get_active_assessments(db)

    async def get_assessment_detail(self, db: AsyncSession, assessment_id: int) -> Optional[Dict]:
        """Évaluation active + questions ordonnées + échelle de réponse."""
        assessment = await repo.get_assessment(db, assessment_id)
        if not assessment or not assessment.is_active:
            return None

        questions = await repo.get_questions(db, assessment_id)
        return {
            "id":              assessment.id,
            "title":           assessment.title,
            "description":     assessment.description,
            "total_questions": len(questions),
            "questions":       questions,
            "options":         answer_options(),
        }

    async def submit_and_score(
        self,
        db: AsyncSession,
        user: User,
        assessment_id: int,
        responses: List,
    ) -> Dict:
        """
        Pipeline complet de soumission :
        1. Validation des données
        2. Calcul pur (engine)
        3. Sauvegarde tentative
        4. Interprétation via les plages admin
        """
        if not responses:
            raise ValueError("Aucune réponse fournie.")

        # 1. Hydratation (seuls accès DB en lecture de ce flux)
        assessment = await repo.get_assessment(db, assessment_id)
        if not assessment or not assessment.is_active:
            raise LookupError("Évaluation introuvable.")

        questions = await repo.get_questions(db, assessment_id)
        questions_map = {q.id: q for q in questions}

        # 2. Calcul pur (engine sans DB)
        result = calculate_scores(responses=responses, questions_map=questions_map)

        # 3. Sauvegarde
        saved = await repo.save_attempt(db, {
            "user_id":            user.id,
            "assessment_id":      assessment_id,
            "total_score":        result["total_score"],
            "max_possible_score": result["max_possible_score"],
            "percentage_score":   result["percentage_score"],
            "responses":          result["responses"],
            "question_texts":     result["question_texts"],
        })
        logger.info(
            "Tentative %s enregistrée : user=%s assessment=%s score=%s/%s",
            saved.id, user.id, assessment_id,
            result["total_score"], result["max_possible_score"],
        )

        # 4. Interprétation
        ranges = await repo.get_score_ranges(db, assessment_id)
        return self._attempt_payload(saved, assessment.title, ranges)

    async def get_attempts_for_user(self, db: AsyncSession, user_id: int) -> List:
        return await repo.get_attempts_by_user(db, user_id)

    async def get_attempt_detail(
        self, db: AsyncSession, attempt_id: int, requester: User
    ) -> Dict:
        """
        Détail d'une tentative figée : réponses et textes tels que soumis,
        répartition par type de réponse, interprétation.
        Propriétaire ou admin uniquement.
        """
        attempt = await repo.get_attempt(db, attempt_id)
        if not attempt:
            raise LookupError("Tentative introuvable.")

        if attempt.user_id != requester.id and requester.role != UserRole.ADMIN:
            raise PermissionError("Accès refusé.")

        ranges = await repo.get_score_ranges(db, attempt.assessment_id)
        question_texts = attempt.question_texts
        if not question_texts:
            # Tentative sans texte figé : repli sur les questions actuelles
            questions = await repo.get_questions(db, attempt.assessment_id)
            question_texts = {str(q.order): q.text for q in questions}

        payload = self._attempt_payload(attempt, attempt.assessment_title, ranges)
        payload["answers"] = iter_answers(question_texts, attempt.responses or {})
        payload["breakdown"] = response_breakdown(attempt.responses or {})
        return payload

    # ─────────────────────────────────────────────
    # INTERNALS
    # ─────────────────────────────────────────────

    def _attempt_payload(self, attempt, assessment_title: str, ranges: List) -> Dict:
        matched = interpret(attempt.total_score, ranges)
        return {
            "id":                 attempt.id,
            "assessment_id":      attempt.assessment_id,
            "assessment_title":   assessment_title,
            "total_score":        attempt.total_score,
            "max_possible_score": attempt.max_possible_score,
            "percentage_score":   attempt.percentage_score,
            "responses":          attempt.responses,
            "completed_at":       attempt.completed_at,
            "status":             matched.status if matched else None,
            "interpretation":     matched.interpretation if matched else None,
        }
