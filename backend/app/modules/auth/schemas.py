# app/modules/auth/schemas.py
from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional
from app.shared.enums import UserRole, UserTier


# ── Register ──────────────────────────────────────────────

class RegisterIn(BaseModel):
    """Inscription : compte role=user, tier=Free."""
    email:      EmailStr
    password:   str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1)
    last_name:  Optional[str] = None


# ── Login ─────────────────────────────────────────────────

class LoginIn(BaseModel):
    email:    EmailStr
    password: str


# ── Tokens ───────────────────────────────────────────────

class TokenOut(BaseModel):
    access_token:  str
    refresh_token: str
    token_type:    str = "bearer"
    role:          UserRole
    tier:          UserTier
    user_id:       int


class RefreshIn(BaseModel):
    refresh_token: str


class AccessTokenOut(BaseModel):
    access_token: str
    token_type:   str = "bearer"


# ── Session ──────────────────────────────────────────────

class MeOut(BaseModel):
    id:        int
    email:     str
    full_name: str
    role:      UserRole
    tier:      UserTier


# ── Mot de passe ──────────────────────────────────────────

class ChangePasswordIn(BaseModel):
    current_password: str
    new_password:     str = Field(..., min_length=6)

    @model_validator(mode="after")
    def passwords_differ(self):
        if self.current_password == self.new_password:
            raise ValueError("Le nouveau mot de passe doit être différent.")
        return self
