"""
Leave and holiday API endpoints.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, LeaveRepo
from app.models.leave import Leave, LeaveCreate

router = APIRouter()


@router.get("", response_model=list[Leave])
async def list_leaves(
    user: CurrentUser,
    repo: LeaveRepo,
    user_id: UUID = Query(...),
):
    """Approved leaves of a user."""
    return await repo.list_approved_leaves_for_user(user_id)


@router.get("/holidays", response_model=list[Leave])
async def list_holidays(
    user: CurrentUser,
    repo: LeaveRepo,
    year: Optional[int] = Query(None, ge=1900, le=9999),
):
    return await repo.list_holidays(year)


@router.post("", response_model=list[Leave], status_code=status.HTTP_201_CREATED)
async def create_leaves(
    leaves: list[LeaveCreate],
    user: CurrentUser,
    repo: LeaveRepo,
):
    """Register leaves or holidays."""
    if not leaves:
        return []
    return await repo.create_many(leaves)
