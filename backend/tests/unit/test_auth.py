"""
Unit tests for authentication providers and the current-user dependency.
"""

import pytest
from fastapi import HTTPException
from jose import JWTError

from app.api.deps import get_current_user
from app.core.config import Settings
from app.core.security import create_access_token
from app.infrastructure.auth.local_auth import LocalAuthProvider
from app.infrastructure.local.mock_auth import MockAuthProvider
from app.models.user import UserCreate


def _settings(**overrides) -> Settings:
    values = dict(AUTH_PROVIDER="local", LOCAL_JWT_SECRET="test-secret", LOCAL_JWT_ISSUER="staffing-planner")
    values.update(overrides)
    return Settings(**values)


class TestLocalAuthProvider:
    """Tests for HS256 token verification."""

    def test_requires_secret(self, repos):
        with pytest.raises(ValueError):
            LocalAuthProvider(_settings(LOCAL_JWT_SECRET=""), repos.users)

    @pytest.mark.asyncio
    async def test_valid_token_resolves_user(self, repos):
        account = await repos.users.create(UserCreate(email="lead@example.com", display_name="Lead"))
        settings = _settings()
        provider = LocalAuthProvider(settings, repos.users)

        user = await provider.verify_token(create_access_token(str(account.id), settings))

        assert user.id == str(account.id)
        assert user.email == "lead@example.com"

    @pytest.mark.asyncio
    async def test_token_with_wrong_secret_is_rejected(self, repos):
        account = await repos.users.create(UserCreate(email="lead@example.com"))
        provider = LocalAuthProvider(_settings(), repos.users)
        token = create_access_token(str(account.id), _settings(LOCAL_JWT_SECRET="other-secret"))

        with pytest.raises(JWTError):
            await provider.verify_token(token)

    @pytest.mark.asyncio
    async def test_unknown_subject_is_rejected(self, repos):
        settings = _settings()
        provider = LocalAuthProvider(settings, repos.users)

        with pytest.raises(JWTError):
            await provider.verify_token(create_access_token("not-a-uuid", settings))

    @pytest.mark.asyncio
    async def test_inactive_user_is_not_returned(self, repos):
        account = await repos.users.create(UserCreate(email="gone@example.com", is_active=False))
        provider = LocalAuthProvider(_settings(), repos.users)

        assert await provider.get_user(str(account.id)) is None


class TestCurrentUser:
    """Tests for the get_current_user dependency."""

    @pytest.mark.asyncio
    async def test_disabled_auth_returns_dev_user(self):
        user = await get_current_user(authorization=None, auth_provider=MockAuthProvider(enabled=False))
        assert user.id == "dev_user"

    @pytest.mark.asyncio
    async def test_enabled_auth_requires_header(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(authorization=None, auth_provider=MockAuthProvider(enabled=True))
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_rejects_non_bearer_scheme(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(authorization="Basic abc", auth_provider=MockAuthProvider(enabled=True))
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_mock_token_is_user_id(self):
        user = await get_current_user(
            authorization="Bearer planner-7", auth_provider=MockAuthProvider(enabled=True)
        )
        assert user.id == "planner-7"
