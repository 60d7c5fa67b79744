# app/shared/models/Assessment.py
"""
Modèles du système d'auto-évaluation.

Assessment → AssessmentQuestion (ordonnées)
           → ScoreRange (interprétations saisies par l'admin)
           → UserAssessment (tentatives figées)
                 ↓
        UserAssessment.responses (JSON)
        {"1": 2, "2": 1, "3": -1, ...}   # ordre de question → points
        UserAssessment.question_texts (JSON)
        {"1": "Do you have ...", ...}     # texte figé à la soumission
"""
from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, JSON, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class Assessment(Base):
    __tablename__ = "assessments"
    id              = Column(Integer, primary_key=True, index=True)
    title           = Column(String,  nullable=False)
    description     = Column(Text,    nullable=True)
    total_questions = Column(Integer, default=0, nullable=False)
    is_active       = Column(Boolean, default=True, index=True)
    created_at      = Column(DateTime(timezone=True), server_default=func.now())
    updated_at      = Column(DateTime(timezone=True), onupdate=func.now())

    questions = relationship(
        "AssessmentQuestion", back_populates="assessment",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="AssessmentQuestion.order",
    )
    score_ranges = relationship(
        "ScoreRange", back_populates="assessment",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="ScoreRange.min_score",
    )
    attempts = relationship(
        "UserAssessment", back_populates="assessment",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self):
        return f"<Assessment id={self.id} title={self.title}>"


class AssessmentQuestion(Base):
    __tablename__ = "assessment_questions"
    id            = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    text          = Column(Text,    nullable=False)
    order         = Column(Integer, nullable=False)

    assessment = relationship("Assessment", back_populates="questions")

    def __repr__(self):
        return f"<AssessmentQuestion id={self.id} order={self.order}>"


class ScoreRange(Base):
    """
    Intervalle [min_score, max_score] → (status, interpretation).
    Ni l'exhaustivité ni la non-superposition ne sont garanties :
    voir engine/scoring/interpretation.audit_ranges().
    """
    __tablename__ = "score_ranges"
    id             = Column(Integer, primary_key=True, index=True)
    assessment_id  = Column(Integer, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    min_score      = Column(Integer, nullable=False)
    max_score      = Column(Integer, nullable=False)
    status         = Column(String,  nullable=False)
    interpretation = Column(Text,    nullable=False)
    created_at     = Column(DateTime(timezone=True), server_default=func.now())

    assessment = relationship("Assessment", back_populates="score_ranges")

    def __repr__(self):
        return f"<ScoreRange id={self.id} [{self.min_score}, {self.max_score}] {self.status}>"


class UserAssessment(Base):
    """Une tentative = une soumission. Jamais modifiée après création."""
    __tablename__ = "user_assessments"
    id                 = Column(Integer, primary_key=True, index=True)
    user_id            = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assessment_id      = Column(Integer, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    total_score        = Column(Integer, nullable=False)
    max_possible_score = Column(Integer, nullable=False)
    percentage_score   = Column(Float,   nullable=False)
    responses          = Column(JSON,    nullable=False)   # {order: points}
    question_texts     = Column(JSON,    nullable=True)    # {order: texte au moment de la soumission}
    completed_at       = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user       = relationship("User", back_populates="attempts")
    assessment = relationship("Assessment", back_populates="attempts")

    @property
    def assessment_title(self) -> str:
        return self.assessment.title if self.assessment else f"assessment_{self.assessment_id}"

    def __repr__(self):
        return f"<UserAssessment id={self.id} user={self.user_id} score={self.total_score}>"
