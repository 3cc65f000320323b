"""
Mock authentication provider for local development.
"""

from typing import Optional

from app.interfaces.auth_provider import IAuthProvider, User

DEV_USER = User(id="dev_user", email="dev@example.com", display_name="Developer")


class MockAuthProvider(IAuthProvider):
    """Mock auth provider: the bearer token is taken as the user id."""

    def __init__(self, enabled: bool = False):
        """
        Initialize mock auth provider.

        Args:
            enabled: Whether authentication is required
        """
        self._enabled = enabled

    async def verify_token(self, token: str) -> User:
        """
        Verify token - in mock mode, token is treated as user_id.

        Args:
            token: User ID (in mock mode)

        Returns:
            Mock user
        """
        if token == DEV_USER.id:
            return DEV_USER
        return User(id=token, email=f"{token}@example.com", display_name=token)

    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return DEV_USER if user_id == DEV_USER.id else None

    def is_enabled(self) -> bool:
        """Check if authentication is enabled."""
        return self._enabled
