# app/shared/models/User.py
"""
Modèle utilisateur.

Un seul modèle porte l'auth ET les deux drapeaux d'accès :
- role : "user" | "admin"  → back-office
- tier : "Free" | "Premium" → soumission d'une évaluation
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import UserRole, UserTier


class User(Base):
    __tablename__ = "users"

    id    = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)

    first_name = Column(String, nullable=True)
    last_name  = Column(String, nullable=True)

    hashed_password = Column(String, nullable=False)

    role = Column(
        SAEnum(UserRole, values_callable=lambda e: [m.value for m in e]),
        default=UserRole.USER, nullable=False, index=True,
    )
    tier = Column(
        SAEnum(UserTier, values_callable=lambda e: [m.value for m in e]),
        default=UserTier.FREE, nullable=False, index=True,
    )
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    attempts = relationship(
        "UserAssessment", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    # ── Helpers ──────────────────────────────────────────────
    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else self.email

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_premium(self) -> bool:
        return self.tier == UserTier.PREMIUM

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role} tier={self.tier}>"
