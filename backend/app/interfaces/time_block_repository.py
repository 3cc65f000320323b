"""
Time block repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from app.models.time_block import TimeBlock, TimeBlockChangeSet, TimeBlockWithProject


class ITimeBlockRepository(ABC):
    """Abstract interface for time block persistence."""

    @abstractmethod
    async def list_active_for_user(
        self,
        user_id: UUID,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> list[TimeBlockWithProject]:
        """
        List the user's active blocks on active projects.

        Covers every assignment of the user; `end_date` is inclusive and
        open-ended when omitted.
        """
        pass

    @abstractmethod
    async def get_many(self, block_ids: list[int]) -> list[TimeBlock]:
        """Get blocks by ID, active or not."""
        pass

    @abstractmethod
    async def sum_durations(self, block_ids: list[int]) -> float:
        """Sum stored durations of the given blocks."""
        pass

    @abstractmethod
    async def sum_active_hours(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> float:
        """Sum the user's active hours on active projects, optionally within dates."""
        pass

    @abstractmethod
    async def apply_changes(self, changes: TimeBlockChangeSet) -> list[TimeBlock]:
        """
        Apply a submission atomically.

        Returns:
            The inserted blocks
        """
        pass
