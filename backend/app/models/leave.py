"""
Leave and holiday models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.enums import LeaveStatus, LeaveType


class LeaveCreate(BaseModel):
    """Register a leave (user_id set) or a holiday (user_id empty)."""

    user_id: Optional[UUID] = None
    start_date: date
    end_date: date
    type: LeaveType
    status: LeaveStatus = LeaveStatus.APPROVED
    title: Optional[str] = Field(None, max_length=255)

    @model_validator(mode="after")
    def _check_owner(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.type == LeaveType.HOLIDAY and self.user_id is not None:
            raise ValueError("holidays apply to everyone and take no user_id")
        if self.type != LeaveType.HOLIDAY and self.user_id is None:
            raise ValueError("user_id is required for non-holiday leave")
        return self

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class Leave(LeaveCreate):
    """Stored leave record."""

    id: int
    created_at: datetime

    class Config:
        from_attributes = True
