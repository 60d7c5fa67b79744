# modules/admin/router.py
"""
Back-office administrateur.

Toutes les routes exigent AdminDep. Le router ne fait que traduire
les exceptions du service :
    LookupError → 404 | ValueError → 400
"""
from fastapi import APIRouter, HTTPException, Query, status
from typing import List

from app.shared.deps import DbDep, AdminDep
from app.modules.admin.service import AdminService
from app.modules.admin.schemas import (
    AssessmentCreateIn,
    AssessmentUpdateIn,
    AssessmentAdminOut,
    QuestionsReplaceIn,
    QuestionAdminOut,
    ScoreRangeIn,
    ScoreRangeUpdateIn,
    ScoreRangeOut,
    ScoreRangesOut,
    AttemptsPageOut,
    DashboardOut,
)

router = APIRouter(prefix="/admin", tags=["Admin"])
service = AdminService()


def _not_found(e: LookupError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ─────────────────────────────────────────────
# ÉVALUATIONS
# ─────────────────────────────────────────────

@router.get("/assessments", response_model=List[AssessmentAdminOut])
async def list_assessments(db: DbDep, admin: AdminDep):
    """Toutes les évaluations, actives ou non, les plus récentes d'abord."""
    return await service.list_assessments(db)


@router.post("/assessments", response_model=AssessmentAdminOut, status_code=201)
async def create_assessment(payload: AssessmentCreateIn, db: DbDep, admin: AdminDep):
    return await service.create_assessment(db, payload)


@router.patch("/assessments/{assessment_id}", response_model=AssessmentAdminOut)
async def update_assessment(
    assessment_id: int, payload: AssessmentUpdateIn, db: DbDep, admin: AdminDep
):
    try:
        return await service.update_assessment(db, assessment_id, payload)
    except LookupError as e:
        raise _not_found(e)


@router.post("/assessments/{assessment_id}/toggle", response_model=AssessmentAdminOut)
async def toggle_assessment(assessment_id: int, db: DbDep, admin: AdminDep):
    """Active ↔ désactive. Une évaluation inactive disparaît du catalogue."""
    try:
        return await service.toggle_assessment(db, assessment_id)
    except LookupError as e:
        raise _not_found(e)


@router.delete("/assessments/{assessment_id}", status_code=204)
async def delete_assessment(assessment_id: int, db: DbDep, admin: AdminDep):
    """Supprime l'évaluation ; questions, plages et tentatives suivent (cascade)."""
    try:
        await service.delete_assessment(db, assessment_id)
    except LookupError as e:
        raise _not_found(e)


# ─────────────────────────────────────────────
# QUESTIONS
# ─────────────────────────────────────────────

@router.get("/assessments/{assessment_id}/questions", response_model=List[QuestionAdminOut])
async def get_questions(assessment_id: int, db: DbDep, admin: AdminDep):
    try:
        return await service.get_questions(db, assessment_id)
    except LookupError as e:
        raise _not_found(e)


@router.put("/assessments/{assessment_id}/questions", response_model=List[QuestionAdminOut])
async def replace_questions(
    assessment_id: int, payload: QuestionsReplaceIn, db: DbDep, admin: AdminDep
):
    try:
        return await service.replace_questions(db, assessment_id, payload.questions)
    except LookupError as e:
        raise _not_found(e)


# ─────────────────────────────────────────────
# PLAGES DE SCORE
# ─────────────────────────────────────────────

@router.get("/assessments/{assessment_id}/score-ranges", response_model=ScoreRangesOut)
async def get_score_ranges(assessment_id: int, db: DbDep, admin: AdminDep):
    """Plages + audit (trous / chevauchements). L'audit informe, il ne bloque pas."""
    try:
        return await service.get_score_ranges(db, assessment_id)
    except LookupError as e:
        raise _not_found(e)


@router.post(
    "/assessments/{assessment_id}/score-ranges",
    response_model=ScoreRangeOut,
    status_code=201,
)
async def create_score_range(
    assessment_id: int, payload: ScoreRangeIn, db: DbDep, admin: AdminDep
):
    try:
        return await service.create_score_range(db, assessment_id, payload)
    except LookupError as e:
        raise _not_found(e)


@router.patch("/score-ranges/{range_id}", response_model=ScoreRangeOut)
async def update_score_range(
    range_id: int, payload: ScoreRangeUpdateIn, db: DbDep, admin: AdminDep
):
    try:
        return await service.update_score_range(db, range_id, payload)
    except LookupError as e:
        raise _not_found(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/score-ranges/{range_id}", status_code=204)
async def delete_score_range(range_id: int, db: DbDep, admin: AdminDep):
    try:
        await service.delete_score_range(db, range_id)
    except LookupError as e:
        raise _not_found(e)


# ─────────────────────────────────────────────
# TENTATIVES & DASHBOARD
# ─────────────────────────────────────────────

@router.get("/attempts", response_model=AttemptsPageOut)
async def list_attempts(db: DbDep, admin: AdminDep, page: int = Query(1, ge=1)):
    return await service.get_attempts_page(db, page)


@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(db: DbDep, admin: AdminDep):
    return await service.get_dashboard(db)
