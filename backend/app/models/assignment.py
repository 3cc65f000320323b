"""
Assignment models.

An assignment pairs a user with a project and a role; it owns the user's
time blocks for that project.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.enums import AssignmentStatus


class AssignmentCreate(BaseModel):
    """Create an assignment for a (user, project) pair."""

    project_id: UUID
    user_id: UUID
    role: str = Field(..., min_length=1, max_length=100)
    comment: Optional[str] = None
    status: AssignmentStatus = AssignmentStatus.ACTIVE


class Assignment(AssignmentCreate):
    """Assignment with metadata."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
