"""
Assignment repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from app.models.assignment import Assignment, AssignmentCreate


class IAssignmentRepository(ABC):
    """Abstract interface for assignment persistence."""

    @abstractmethod
    async def get_by_user_and_project(
        self, user_id: UUID, project_id: UUID
    ) -> Optional[Assignment]:
        """Get the assignment for a (user, project) pair."""
        pass

    @abstractmethod
    async def create(self, data: AssignmentCreate) -> Assignment:
        """Create an assignment."""
        pass
