"""
Local JWT authentication provider.

Tokens are HS256-signed with LOCAL_JWT_SECRET; the subject is the id of a
stored user account.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from app.core.config import Settings
from app.interfaces.auth_provider import IAuthProvider, User
from app.interfaces.user_repository import IUserRepository
from app.models.user import UserAccount


def _to_user(account: UserAccount) -> User:
    return User(id=str(account.id), email=account.email, display_name=account.display_name)


class LocalAuthProvider(IAuthProvider):
    """Local auth provider with HMAC JWT validation."""

    def __init__(self, settings: Settings, user_repo: IUserRepository):
        if not settings.LOCAL_JWT_SECRET:
            raise ValueError("LOCAL_JWT_SECRET must be set for local auth")
        self._settings = settings
        self._user_repo = user_repo

    def _decode_token(self, token: str) -> dict[str, object]:
        options = {"verify_iss": bool(self._settings.LOCAL_JWT_ISSUER)}
        return jwt.decode(
            token,
            self._settings.LOCAL_JWT_SECRET,
            algorithms=["HS256"],
            issuer=self._settings.LOCAL_JWT_ISSUER or None,
            options=options,
        )

    async def verify_token(self, token: str) -> User:
        claims = self._decode_token(token)
        subject = claims.get("sub")
        if not subject:
            raise JWTError("Missing subject")
        user = await self.get_user(str(subject))
        if not user:
            raise JWTError("User not found")
        return user

    async def get_user(self, user_id: str) -> Optional[User]:
        try:
            account_id = UUID(user_id)
        except ValueError:
            return None
        account = await self._user_repo.get(account_id)
        if not account or not account.is_active:
            return None
        return _to_user(account)

    def is_enabled(self) -> bool:
        return True
