# app/modules/profile/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional

from app.shared.enums import UserRole, UserTier
from app.modules.assessment.schemas import AttemptSummaryOut


class ProfileOut(BaseModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    role: UserRole
    tier: UserTier
    attempt_count: int
    average_percentage: Optional[int] = None   # arrondi, None sans tentative
    attempts: List[AttemptSummaryOut]


class ProfileUpdateIn(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = None
