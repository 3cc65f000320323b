"""
Scheduling configuration API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from app.api.deps import ConfigRepo, CurrentUser
from app.core.exceptions import ConfigurationMissingError
from app.models.working_hours import SeasonConfig, WorkingHoursPolicy

router = APIRouter()


@router.get("/season", response_model=SeasonConfig)
async def get_season(user: CurrentUser, repo: ConfigRepo):
    """Current season selector; reads as auto when never set."""
    return await repo.get_season_config() or SeasonConfig()


@router.put("/season", response_model=SeasonConfig)
async def update_season(payload: SeasonConfig, user: CurrentUser, repo: ConfigRepo):
    return await repo.save_season_config(payload)


@router.get("/working-hours", response_model=WorkingHoursPolicy)
async def get_working_hours(user: CurrentUser, repo: ConfigRepo):
    policy = await repo.get_working_hours_policy()
    if policy is None:
        raise ConfigurationMissingError("Working-hours configuration not found")
    return policy


@router.put("/working-hours", response_model=WorkingHoursPolicy)
async def update_working_hours(payload: WorkingHoursPolicy, user: CurrentUser, repo: ConfigRepo):
    return await repo.save_working_hours_policy(payload)
