# modules/assessment/router.py
"""
Endpoints du cycle de vie d'une auto-évaluation.
Catalogue → Questions → Soumission (Premium) → Résultats

Règle : ce fichier ne touche jamais la DB ni l'engine.
Tout passe par AssessmentService.
"""
from fastapi import APIRouter, HTTPException, status
from typing import List

from app.shared.deps import DbDep, UserDep, PremiumDep
from app.modules.assessment.service import AssessmentService
from app.modules.assessment.schemas import (
    AssessmentInfoOut,
    AssessmentDetailOut,
    SubmitAssessmentIn,
    AttemptOut,
    AttemptSummaryOut,
    AttemptDetailOut,
)

router = APIRouter(prefix="/assessments", tags=["Assessment"])
service = AssessmentService()


# ─────────────────────────────────────────────
# CATALOGUE (public, sans compte)
# ─────────────────────────────────────────────

@router.get(
    "/catalogue",
    response_model=List[AssessmentInfoOut],
    summary="Liste des évaluations disponibles",
)
async def list_catalogue(db: DbDep):
    """Retourne toutes les évaluations actives."""
    assessments = await service.get_catalogue(db)
    if not assessments:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Aucune évaluation disponible pour le moment."
        )
    return assessments


# ─────────────────────────────────────────────
# RÉSULTATS : déclarés avant /{assessment_id}
# ─────────────────────────────────────────────

@router.get(
    "/attempts/me",
    response_model=List[AttemptSummaryOut],
    summary="Mes tentatives",
)
async def get_my_attempts(db: DbDep, current_user: UserDep):
    """Historique des tentatives de l'utilisateur connecté, la plus récente d'abord."""
    return await service.get_attempts_for_user(db, current_user.id)


@router.get(
    "/attempts/{attempt_id}",
    response_model=AttemptDetailOut,
    summary="Détail d'une tentative",
)
async def get_attempt(attempt_id: int, db: DbDep, current_user: UserDep):
    """Propriétaire ou admin. Inclut la répartition et l'interprétation."""
    try:
        return await service.get_attempt_detail(db, attempt_id, requester=current_user)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


# ─────────────────────────────────────────────
# SESSION D'ÉVALUATION
# ─────────────────────────────────────────────

@router.get(
    "/{assessment_id}",
    response_model=AssessmentDetailOut,
    summary="Évaluation + questions",
)
async def get_assessment(assessment_id: int, db: DbDep):
    detail = await service.get_assessment_detail(db, assessment_id)
    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Évaluation introuvable ou inactive."
        )
    return detail


@router.post(
    "/submit",
    response_model=AttemptOut,
    status_code=status.HTTP_201_CREATED,
    summary="Soumettre ses réponses (Premium)",
)
async def submit_assessment(payload: SubmitAssessmentIn, db: DbDep, current_user: PremiumDep):
    """
    Calcule le score, enregistre une nouvelle tentative et renvoie
    l'interprétation. Deux soumissions identiques → deux tentatives.
    """
    try:
        return await service.submit_and_score(
            db,
            current_user,
            assessment_id=payload.assessment_id,
            responses=payload.responses,
        )
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
