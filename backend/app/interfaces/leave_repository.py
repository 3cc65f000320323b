"""
Leave repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from app.models.leave import Leave, LeaveCreate


class ILeaveRepository(ABC):
    """Abstract interface for leave and holiday records."""

    @abstractmethod
    async def create_many(self, leaves: list[LeaveCreate]) -> list[Leave]:
        """Store several leave records at once."""
        pass

    @abstractmethod
    async def list_approved_leaves_for_user(self, user_id: UUID) -> list[Leave]:
        """List the user's approved leaves, holidays excluded."""
        pass

    @abstractmethod
    async def list_holidays(self, year: Optional[int] = None) -> list[Leave]:
        """List holidays, optionally only those starting in `year`."""
        pass
