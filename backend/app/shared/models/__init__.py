# app/shared/models/__init__.py
"""
Point d'entrée unique pour tous les modèles SQLAlchemy.

TOUJOURS importer les modèles depuis ce fichier :
  from app.shared.models import User, Assessment, ...

→ Garantit que tous les modèles sont enregistrés dans Base.metadata
  avant la création des tables (Alembic, create_all).
"""

from app.shared.models.User       import User
from app.shared.models.Assessment import Assessment, AssessmentQuestion, ScoreRange, UserAssessment

__all__ = [
    # User
    "User",
    # Assessment
    "Assessment",
    "AssessmentQuestion",
    "ScoreRange",
    "UserAssessment",
]
