# tests/conftest.py
"""
Fixtures et factories partagées sur l'ensemble de la suite de tests.

Trois couches :
    1. Engine  : fonctions pures, aucun mock nécessaire
    2. Service : mocks AsyncSession + repos via pytest-mock
    3. Router  : httpx.AsyncClient + dependency_overrides FastAPI
"""
import pytest
from types import SimpleNamespace
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from app.main import app
from app.core.database import get_db
from app.content.icp import ICP_TITLE, ICP_QUESTIONS
from app.shared.deps import get_current_user
from app.shared.enums import UserRole, UserTier


# ── Réponses (input principal de l'engine) ────────────────────────────────────

def make_response(question_id: int, answer) -> SimpleNamespace:
    return SimpleNamespace(question_id=question_id, answer=answer)


def responses_all(answer, n: int = 10) -> list:
    """n réponses identiques, question_id = 1..n."""
    return [make_response(i + 1, answer) for i in range(n)]


# ── Factories de modèles ORM (SimpleNamespace, sans session) ──────────────

def make_user(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "email": "user@test.com",
        "first_name": "Test",
        "last_name": "User",
        "full_name": "Test User",
        "hashed_password": "hashed_password",
        "role": UserRole.USER,
        "tier": UserTier.FREE,
        "is_active": True,
        "created_at": datetime(2025, 1, 1),
        "updated_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_assessment(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "title": ICP_TITLE,
        "description": "Évaluez la maturité de votre ICP.",
        "total_questions": len(ICP_QUESTIONS),
        "is_active": True,
        "created_at": datetime(2025, 1, 1),
        "updated_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_question(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "assessment_id": 1,
        "text": ICP_QUESTIONS[0],
        "order": 1,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_questions(n: int = 10, assessment_id: int = 1) -> list:
    """Questions id = ordre = 1..n."""
    return [
        make_question(id=i + 1, assessment_id=assessment_id, order=i + 1, text=f"Question {i + 1}")
        for i in range(n)
    ]


def make_score_range(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "assessment_id": 1,
        "min_score": 12,
        "max_score": 16,
        "status": "Needs Fine-Tuning",
        "interpretation": "The Ideal Customer Profile exists but needs better clarity.",
        "created_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_attempt(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "user_id": 1,
        "assessment_id": 1,
        "assessment_title": ICP_TITLE,
        "total_score": 15,
        "max_possible_score": 20,
        "percentage_score": 75.0,
        "responses": {"1": 2, "2": 2, "3": 2, "4": 2, "5": 2, "6": 1, "7": 1, "8": 1, "9": 1, "10": 1},
        "question_texts": {str(i): f"Question {i}" for i in range(1, 11)},
        "completed_at": datetime(2025, 1, 15, 10, 0, 0),
        "user": None,
        "assessment": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# ── DB mock factory ───────────────────────────────────────────────────────────

def make_async_db() -> AsyncMock:
    """
    AsyncMock simulant une AsyncSession SQLAlchemy.
    flush() / refresh() attribuent un id aux objets ajoutés, comme la DB.
    """
    db = AsyncMock(spec=AsyncSession)
    added_objects: list = []

    def capture_add(obj):
        added_objects.append(obj)

    db.add = MagicMock(side_effect=capture_add)
    db.added = added_objects

    async def flush_side_effect():
        for i, obj in enumerate(added_objects):
            if not getattr(obj, "id", None):
                try:
                    obj.id = i + 1
                except (AttributeError, TypeError):
                    pass

    db.flush = AsyncMock(side_effect=flush_side_effect)

    async def refresh_side_effect(obj):
        if not getattr(obj, "id", None):
            try:
                obj.id = 1
            except (AttributeError, TypeError):
                pass

    db.refresh = AsyncMock(side_effect=refresh_side_effect)
    db.commit = AsyncMock()
    db.close = AsyncMock()

    return db


def scalar_result(value) -> MagicMock:
    """Résultat de db.execute() dont scalar_one_or_none() renvoie `value`."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


# ── Fixtures HTTP (httpx.AsyncClient + dependency_overrides) ─────────────────

async def _client_as(user=None):
    mock_db = make_async_db()
    app.dependency_overrides[get_db] = lambda: mock_db
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    """Client anonyme : endpoints publics, ou refus 401 attendu."""
    async for c in _client_as():
        yield c


@pytest.fixture
async def user_client():
    """Client authentifié, compte Free (rôle user)."""
    async for c in _client_as(make_user()):
        yield c


@pytest.fixture
async def premium_client():
    """Client authentifié, compte Premium (rôle user)."""
    async for c in _client_as(make_user(id=2, email="premium@test.com", tier=UserTier.PREMIUM)):
        yield c


@pytest.fixture
async def admin_client():
    """Client authentifié comme admin (AdminDep et PremiumDep passent)."""
    async for c in _client_as(make_user(
        id=99, email="admin@test.com", role=UserRole.ADMIN, tier=UserTier.PREMIUM,
    )):
        yield c
