# app/modules/admin/schemas.py
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional, Dict
from datetime import datetime


# ── Évaluations ───────────────────────────────────────────

class AssessmentCreateIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    questions: Optional[List[str]] = None    # textes, dans l'ordre d'affichage ; total_questions en découle

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre est obligatoire.")
        return v.strip()


class AssessmentUpdateIn(BaseModel):
    """
    Mise à jour partielle. total_questions n'est pas modifiable ici :
    il suit le jeu de questions (PUT /assessments/{id}/questions).
    """
    title: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> str:
        # Un null explicite viserait une colonne NOT NULL
        if v is None or not v.strip():
            raise ValueError("Le titre est obligatoire.")
        return v.strip()


class AssessmentAdminOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    total_questions: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ── Questions ─────────────────────────────────────────────

class QuestionsReplaceIn(BaseModel):
    questions: List[str] = Field(..., min_length=1)

    @field_validator("questions")
    @classmethod
    def no_blank_question(cls, v: List[str]) -> List[str]:
        cleaned = [q.strip() for q in v]
        if any(not q for q in cleaned):
            raise ValueError("Une question ne peut pas être vide.")
        return cleaned


class QuestionAdminOut(BaseModel):
    id: Optional[int] = None
    text: str
    order: int
    model_config = ConfigDict(from_attributes=True)


# ── Plages de score ───────────────────────────────────────

class ScoreRangeIn(BaseModel):
    min_score: int
    max_score: int
    status: str = Field(..., min_length=1)
    interpretation: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def min_le_max(self):
        if self.min_score > self.max_score:
            raise ValueError("Le score minimum ne peut pas dépasser le score maximum.")
        return self


class ScoreRangeUpdateIn(BaseModel):
    min_score: Optional[int] = None
    max_score: Optional[int] = None
    status: Optional[str] = Field(None, min_length=1)
    interpretation: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def min_le_max(self):
        if (self.min_score is not None and self.max_score is not None
                and self.min_score > self.max_score):
            raise ValueError("Le score minimum ne peut pas dépasser le score maximum.")
        return self


class ScoreRangeOut(BaseModel):
    id: int
    assessment_id: int
    min_score: int
    max_score: int
    status: str
    interpretation: str
    model_config = ConfigDict(from_attributes=True)


class RangeAuditOut(BaseModel):
    gaps: List[List[int]] = []
    overlaps: List[List[int]] = []       # paires d'id de plages
    invalid: List[int] = []
    is_coherent: bool = True


class ScoreRangesOut(BaseModel):
    assessment_id: int
    max_possible_score: int
    min_possible_score: int
    ranges: List[ScoreRangeOut]
    audit: RangeAuditOut


# ── Tentatives ────────────────────────────────────────────

class AdminAttemptOut(BaseModel):
    id: int
    user_id: int
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    assessment_id: int
    assessment_title: str
    total_score: int
    max_possible_score: int
    percentage_score: float
    responses: Dict[str, int]
    completed_at: Optional[datetime] = None


class AttemptsPageOut(BaseModel):
    items: List[AdminAttemptOut]
    page: int
    page_size: int
    total: int
    total_pages: int


# ── Dashboard ─────────────────────────────────────────────

class ScoreStatsOut(BaseModel):
    mean: Optional[float] = None
    std: Optional[float] = None
    n: int = 0


class MonthlyCountOut(BaseModel):
    month: str          # "2026-03"
    assessments: int


class DashboardOut(BaseModel):
    total_users: int
    total_paid_users: int
    total_free_users: int
    total_attempts: int
    average_attempts_per_user: float
    percentage_stats: ScoreStatsOut
    recent_attempts: List[AdminAttemptOut]
    monthly_attempts: List[MonthlyCountOut]
