"""
Project model definitions.

Only the fields the scheduling engine reads are modelled here.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class ProjectBase(BaseModel):
    """Base project fields."""

    name: str = Field(..., min_length=1, max_length=200, description="Project name")
    description: Optional[str] = Field(None, max_length=2000)
    start_date: date = Field(..., description="First day time can be booked")
    end_date: date = Field(..., description="Last planned day of the project")

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""

    pass


class Project(ProjectBase):
    """Complete project model."""

    id: UUID
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
