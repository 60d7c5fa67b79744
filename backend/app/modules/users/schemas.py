# app/modules/users/schemas.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from app.shared.enums import UserRole, UserTier


class UserAdminOut(BaseModel):
    id: int
    email: str
    full_name: str
    role: UserRole
    tier: UserTier
    is_active: bool
    attempt_count: int = 0
    created_at: Optional[datetime] = None


class TierUpdateIn(BaseModel):
    tier: UserTier


class RoleUpdateIn(BaseModel):
    role: UserRole
