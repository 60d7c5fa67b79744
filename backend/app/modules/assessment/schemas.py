# app/modules/assessment/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict
from datetime import datetime

from app.shared.enums import ResponseChoice


# ── Catalogue ──────────────────────────────────────────────

class AssessmentInfoOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    total_questions: int
    model_config = ConfigDict(from_attributes=True)


class QuestionOut(BaseModel):
    id: int
    text: str
    order: int
    model_config = ConfigDict(from_attributes=True)


class AnswerOptionOut(BaseModel):
    value: ResponseChoice
    label: str
    points: int


class AssessmentDetailOut(AssessmentInfoOut):
    questions: List[QuestionOut]
    options: List[AnswerOptionOut]


# ── Soumission ─────────────────────────────────────────────

class ResponseIn(BaseModel):
    question_id: int
    answer: ResponseChoice


class SubmitAssessmentIn(BaseModel):
    assessment_id: int
    responses: List[ResponseIn] = Field(..., min_length=1)


# ── Tentative ──────────────────────────────────────────────

class AttemptSummaryOut(BaseModel):
    id: int
    assessment_id: int
    assessment_title: str
    total_score: int
    max_possible_score: int
    percentage_score: float
    completed_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class AttemptOut(AttemptSummaryOut):
    responses: Dict[str, int]       # {order: points}
    status: Optional[str] = None            # None si aucune plage ne couvre le score
    interpretation: Optional[str] = None


class AnswerDetailOut(BaseModel):
    order: int
    text: Optional[str] = None
    answer: Optional[ResponseChoice] = None
    points: Optional[int] = None


class BreakdownItemOut(BaseModel):
    count: int
    points: int


class AttemptDetailOut(AttemptOut):
    answers: List[AnswerDetailOut]
    breakdown: Dict[str, BreakdownItemOut]
