"""
Time block models.

A time block is one contiguous scheduled interval on one date for one user
under one assignment.
"""

from __future__ import annotations

from datetime import date as date_type
from datetime import datetime, time
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.assignment import AssignmentCreate
from app.models.enums import TimeBlockMode


class TimeBlockInput(BaseModel):
    """Block as submitted by a client (new or edited)."""

    id: Optional[int] = Field(None, description="Required for edited blocks")
    date: date_type
    start_time: time
    end_time: time
    mode: TimeBlockMode = TimeBlockMode.MANUAL


class GeneratedTimeBlock(BaseModel):
    """Block proposed by the cascade simulator (not persisted)."""

    date: date_type
    start_time: time
    end_time: time
    duration_hours: float
    mode: TimeBlockMode = TimeBlockMode.CASCADE


class TimeBlock(BaseModel):
    """Stored time block joined with its owner."""

    id: int
    assignment_id: UUID
    user_id: UUID
    project_id: UUID
    date: date_type
    start_time: time
    end_time: time
    duration_hours: float
    is_active: bool = True
    mode: TimeBlockMode = TimeBlockMode.MANUAL
    assign_by_user_id: UUID
    comment: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TimeBlockWithProject(TimeBlock):
    """Stored time block with project and role context for listings."""

    project_name: str
    assignment_role: str


class TimeBlockCreate(BaseModel):
    """Row to insert; assignment_id is filled by the repository when pending."""

    assignment_id: Optional[UUID] = None
    date: date_type
    start_time: time
    end_time: time
    duration_hours: float
    assign_by_user_id: UUID
    comment: Optional[str] = None
    mode: TimeBlockMode = TimeBlockMode.MANUAL


class TimeBlockUpdate(BaseModel):
    """Replacement values for an existing block."""

    id: int
    date: date_type
    start_time: time
    end_time: time
    duration_hours: float
    assign_by_user_id: UUID
    comment: Optional[str] = None
    mode: TimeBlockMode = TimeBlockMode.MANUAL


class TimeBlockChangeSet(BaseModel):
    """
    Everything one fixed-block submission writes.

    Applied in a single transaction: deactivations, then updates, then
    inserts. When `new_assignment` is set the repository creates (or reuses)
    the assignment and attaches the inserted blocks to it.
    """

    deactivate_ids: list[int] = Field(default_factory=list)
    updates: list[TimeBlockUpdate] = Field(default_factory=list)
    creates: list[TimeBlockCreate] = Field(default_factory=list)
    new_assignment: Optional[AssignmentCreate] = None

    def is_empty(self) -> bool:
        return not (self.deactivate_ids or self.updates or self.creates)
