"""
Assignment scheduling API endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.api.deps import Cascade, CurrentUser, FixedBlocks, TimeBlockRepo, Utilization
from app.core.exceptions import InvalidRangeError
from app.models.scheduling import (
    AssignedTimeBlocks,
    CascadeRequest,
    CascadeResponse,
    FixedBlockRequest,
    FixedBlockResponse,
    UtilizationResponse,
)

router = APIRouter()


@router.get("", response_model=AssignedTimeBlocks)
async def list_time_blocks(
    user: CurrentUser,
    repo: TimeBlockRepo,
    user_id: UUID = Query(...),
    start_datetime: datetime = Query(...),
    end_datetime: datetime = Query(...),
):
    """List a user's active time blocks between two dates (date part only)."""
    if end_datetime < start_datetime:
        raise InvalidRangeError("end_datetime must not be before start_datetime")
    blocks = await repo.list_active_for_user(user_id, start_datetime.date(), end_datetime.date())
    return AssignedTimeBlocks(user_id=user_id, time_blocks=blocks)


@router.post("/fixed-blocks", response_model=FixedBlockResponse, status_code=status.HTTP_201_CREATED)
async def process_fixed_blocks(
    request: FixedBlockRequest,
    user: CurrentUser,
    processor: FixedBlocks,
):
    """Delete, edit and create manual time blocks in one submission."""
    return await processor.process(request)


@router.post("/simulate-cascade", response_model=CascadeResponse, status_code=status.HTTP_201_CREATED)
async def simulate_cascade(
    request: CascadeRequest,
    user: CurrentUser,
    simulator: Cascade,
):
    """Propose cascade time blocks without saving them."""
    return await simulator.simulate(request)


@router.get("/used-hours-percentage/{user_id}", response_model=UtilizationResponse)
async def used_hours_percentage(
    user_id: UUID,
    user: CurrentUser,
    calculator: Utilization,
):
    percentage = await calculator.utilization_percentage(user_id)
    return UtilizationResponse(percentage=percentage)
