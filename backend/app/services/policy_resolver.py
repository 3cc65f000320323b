"""
Working-hours policy resolution.

Turns the stored working-hours policy and season selector into the flat
limits the validator and the cascade simulator work with. Nothing is cached:
every scheduling operation resolves the policy again.
"""

from __future__ import annotations

import calendar
from datetime import datetime, time
from typing import Optional

from app.core.exceptions import ConfigurationMissingError
from app.core.logger import setup_logger
from app.interfaces.config_repository import IConfigRepository
from app.models.enums import SeasonMode
from app.models.working_hours import (
    DEFAULT_LUNCH_END,
    DEFAULT_LUNCH_START,
    DEFAULT_MAX_DAILY_HOURS,
    DEFAULT_MAX_DAILY_OVERTIME_HOURS,
    DEFAULT_WORK_END,
    DEFAULT_WORK_START,
    EffectivePolicy,
    SeasonConfig,
    WorkingHoursPolicy,
)

logger = setup_logger(__name__)


def _month_day_to_datetime(year: int, month_day: str, at: time) -> datetime:
    month, day = (int(part) for part in month_day.split("-"))
    if (month, day) == (2, 29) and not calendar.isleap(year):
        day = 28
    return datetime(year, month, day, at.hour, at.minute, at.second)


def is_high_season(policy: WorkingHoursPolicy, now: datetime) -> bool:
    """
    Check whether `now` falls in the policy's high-season range.

    The MM-DD boundaries are placed in the current year; the end day counts
    through 23:59:59. A range whose start is after its end wraps over New Year.
    """
    start_md = policy.common.high_start_date
    end_md = policy.common.high_end_date
    if not start_md or not end_md:
        return False

    start = _month_day_to_datetime(now.year, start_md, time(0, 0, 0))
    end = _month_day_to_datetime(now.year, end_md, time(23, 59, 59))
    if start <= end:
        return start <= now <= end
    return now >= start or now <= end


def resolve_season(
    season_config: Optional[SeasonConfig],
    policy: WorkingHoursPolicy,
    now: Optional[datetime] = None,
) -> SeasonMode:
    """
    Resolve the active season (HIGH or NORMAL).

    A missing season config counts as NORMAL; AUTO is decided from today's
    date against the policy's high-season range.
    """
    if season_config is None:
        return SeasonMode.NORMAL
    if season_config.season_mode != SeasonMode.AUTO:
        return season_config.season_mode

    now = now or datetime.now()
    return SeasonMode.HIGH if is_high_season(policy, now) else SeasonMode.NORMAL


def effective_policy(policy: WorkingHoursPolicy, season: SeasonMode) -> EffectivePolicy:
    """Flatten the common fields and the season's overtime cap, filling defaults."""
    common = policy.common
    season_section = policy.high if season == SeasonMode.HIGH else policy.normal
    return EffectivePolicy(
        season=season,
        max_daily_hours=common.max_daily_hours or DEFAULT_MAX_DAILY_HOURS,
        max_daily_overtime_hours=(
            season_section.max_daily_hours_overtime or DEFAULT_MAX_DAILY_OVERTIME_HOURS
        ),
        work_start_time=common.work_start_time or DEFAULT_WORK_START,
        work_end_time=common.work_end_time or DEFAULT_WORK_END,
        lunch_start_time=common.lunch_start_time or DEFAULT_LUNCH_START,
        lunch_end_time=common.lunch_end_time or DEFAULT_LUNCH_END,
    )


class PolicyResolver:
    """Loads configuration and resolves the effective policy."""

    def __init__(self, config_repo: IConfigRepository):
        self._config_repo = config_repo

    async def load(self, now: Optional[datetime] = None) -> EffectivePolicy:
        """
        Read the stored configuration and resolve today's policy.

        Raises:
            ConfigurationMissingError: If no working-hours policy is stored
        """
        policy = await self._config_repo.get_working_hours_policy()
        if policy is None:
            logger.error("Working-hours policy is not configured")
            raise ConfigurationMissingError("Working-hours configuration not found")

        season_config = await self._config_repo.get_season_config()
        season = resolve_season(season_config, policy, now)
        return effective_policy(policy, season)
