# tests/modules/auth/test_service.py
"""
Tests unitaires pour modules.auth.service.AuthService

Pattern : mock db.execute() et scalar_one_or_none() pour contrôler
les résultats SQL sans base de données réelle.

Couverture :
    register() :
        - Email libre → crée User (user / Free), retourne TokenOut
        - Email déjà pris → HTTPException 409

    login() :
        - Credentials corrects → retourne TokenOut
        - Mauvais mot de passe / email inconnu → HTTPException 401
        - Compte inactif → HTTPException 403

    refresh() :
        - Refresh token valide → access_token
        - Token invalide ou de type access → HTTPException 401

    change_password() :
        - Bon mot de passe actuel → met à jour hashed_password
        - Mauvais mot de passe → HTTPException 400
"""
import pytest
from unittest.mock import AsyncMock, patch
from fastapi import HTTPException
from jose import JWTError

from app.modules.auth.service import AuthService
from app.modules.auth.schemas import RegisterIn, LoginIn
from app.shared.enums import UserRole, UserTier
from tests.conftest import make_user, make_async_db, scalar_result

pytestmark = pytest.mark.service

service = AuthService()


# ── Helpers ───────────────────────────────────────────────────────────────────

def _register_payload(**kwargs) -> RegisterIn:
    defaults = dict(
        email="new@test.com",
        password="password123",
        first_name="Jeanne",
        last_name="Martin",
    )
    defaults.update(kwargs)
    return RegisterIn(**defaults)


def _login_payload(email="user@test.com", password="secret") -> LoginIn:
    return LoginIn(email=email, password=password)


# ── register() ────────────────────────────────────────────────────────────────

class TestRegister:
    @pytest.mark.asyncio
    async def test_succes_compte_free_role_user(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(None))

        with patch("app.modules.auth.service.hash_password", return_value="hashed"):
            with patch("app.modules.auth.service.create_access_token", return_value="access_123"):
                with patch("app.modules.auth.service.create_refresh_token", return_value="refresh_456"):
                    result = await service.register(db, _register_payload())

        assert result.access_token == "access_123"
        assert result.refresh_token == "refresh_456"
        assert result.role == UserRole.USER
        assert result.tier == UserTier.FREE
        assert result.user_id == 1
        db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_mot_de_passe_hashe(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(None))

        with patch("app.modules.auth.service.hash_password", return_value="hashed") as hp:
            await service.register(db, _register_payload(password="password123"))

        hp.assert_called_once_with("password123")
        created = db.added[0]
        assert created.hashed_password == "hashed"
        assert created.first_name == "Jeanne"

    @pytest.mark.asyncio
    async def test_email_duplique_leve_409(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(make_user(email="new@test.com")))

        with pytest.raises(HTTPException) as exc_info:
            await service.register(db, _register_payload(email="new@test.com"))

        assert exc_info.value.status_code == 409
        db.commit.assert_not_called()


# ── login() ───────────────────────────────────────────────────────────────────

class TestLogin:
    @pytest.mark.asyncio
    async def test_succes_retourne_token_out(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(make_user(tier=UserTier.PREMIUM)))

        with patch("app.modules.auth.service.verify_password", return_value=True):
            with patch("app.modules.auth.service.create_access_token", return_value="acc"):
                with patch("app.modules.auth.service.create_refresh_token", return_value="ref"):
                    result = await service.login(db, _login_payload())

        assert result.access_token == "acc"
        assert result.tier == UserTier.PREMIUM

    @pytest.mark.asyncio
    async def test_mauvais_mot_de_passe_leve_401(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(make_user()))

        with patch("app.modules.auth.service.verify_password", return_value=False):
            with pytest.raises(HTTPException) as exc_info:
                await service.login(db, _login_payload(password="wrong"))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_email_inconnu_leve_401(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(None))

        with pytest.raises(HTTPException) as exc_info:
            await service.login(db, _login_payload(email="ghost@test.com"))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_compte_inactif_leve_403(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(make_user(is_active=False)))

        with patch("app.modules.auth.service.verify_password", return_value=True):
            with pytest.raises(HTTPException) as exc_info:
                await service.login(db, _login_payload())

        assert exc_info.value.status_code == 403


# ── refresh() ─────────────────────────────────────────────────────────────────

class TestRefresh:
    @pytest.mark.asyncio
    async def test_token_valide_retourne_access(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(make_user(id=5)))

        with patch("app.modules.auth.service.decode_token", return_value={"sub": "5", "type": "refresh"}):
            with patch("app.modules.auth.service.create_access_token", return_value="new_acc") as cat:
                result = await service.refresh(db, "refresh_token")

        assert result == {"access_token": "new_acc", "token_type": "bearer"}
        cat.assert_called_once_with({"sub": "5", "role": "user"})

    @pytest.mark.asyncio
    async def test_token_invalide_leve_401(self):
        db = make_async_db()

        with patch("app.modules.auth.service.decode_token", side_effect=JWTError("bad")):
            with pytest.raises(HTTPException) as exc_info:
                await service.refresh(db, "garbage")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_access_token_refuse(self):
        db = make_async_db()

        with patch("app.modules.auth.service.decode_token", return_value={"sub": "1", "type": "access"}):
            with pytest.raises(HTTPException) as exc_info:
                await service.refresh(db, "access_token")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_utilisateur_disparu_leve_401(self):
        db = make_async_db()
        db.execute = AsyncMock(return_value=scalar_result(None))

        with patch("app.modules.auth.service.decode_token", return_value={"sub": "9", "type": "refresh"}):
            with pytest.raises(HTTPException) as exc_info:
                await service.refresh(db, "refresh_token")

        assert exc_info.value.status_code == 401


# ── change_password() ─────────────────────────────────────────────────────────

class TestChangePassword:
    @pytest.mark.asyncio
    async def test_succes_met_a_jour_hash(self):
        db = make_async_db()
        user = make_user(hashed_password="old_hash")

        with patch("app.modules.auth.service.verify_password", return_value=True):
            with patch("app.modules.auth.service.hash_password", return_value="new_hash"):
                await service.change_password(db, user, "old", "new_password")

        assert user.hashed_password == "new_hash"
        db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_mauvais_mot_de_passe_leve_400(self):
        db = make_async_db()
        user = make_user(hashed_password="old_hash")

        with patch("app.modules.auth.service.verify_password", return_value=False):
            with pytest.raises(HTTPException) as exc_info:
                await service.change_password(db, user, "wrong", "new_password")

        assert exc_info.value.status_code == 400
        assert user.hashed_password == "old_hash"
