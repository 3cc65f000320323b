"""
Request and response schemas for the assignment scheduling endpoints.

Field names follow the public JSON contract of the assignments API.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.time_block import GeneratedTimeBlock, TimeBlockInput, TimeBlockWithProject


class BlockComments(BaseModel):
    """Justifications attached to a submission."""

    more_than_8_hours: str = ""
    out_of_project_range: str = ""


class FixedBlockRequest(BaseModel):
    """Manual time block submission for one (user, project) pair."""

    project_id: UUID
    user_id: UUID
    role: str = Field(..., min_length=1, max_length=100)
    comments: BlockComments = Field(default_factory=BlockComments)
    assign_by_user_id: UUID
    time_blocks: list[TimeBlockInput] = Field(default_factory=list)
    edited_time_blocks: list[TimeBlockInput] = Field(default_factory=list)
    deleted_time_block_ids: list[int] = Field(default_factory=list)


class FixedBlockResponse(BaseModel):
    message: str


class CascadeRequest(BaseModel):
    """Ask for `total_hours` to be spread forward from `start_date`."""

    project_id: UUID
    user_id: UUID
    start_date: date
    total_hours: float = Field(..., ge=0)
    assign_by_user_id: UUID


class CascadeResponse(BaseModel):
    generated_time_blocks: list[GeneratedTimeBlock]
    message: str


class UtilizationResponse(BaseModel):
    percentage: float


class AssignedTimeBlocks(BaseModel):
    """Active blocks of a user in a date window."""

    user_id: UUID
    time_blocks: list[TimeBlockWithProject]
