"""
Authentication provider interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated caller."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IAuthProvider(ABC):
    """Abstract interface for token verification."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Verify a bearer token and return its user."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if authentication is enforced."""
        pass
