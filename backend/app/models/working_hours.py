"""
Working-hours policy and season configuration models.

The stored policy may omit fields; `EffectivePolicy` is the flattened view
with defaults applied.
"""

from __future__ import annotations

import re
from datetime import date, time
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.enums import SeasonMode

DEFAULT_MAX_DAILY_HOURS = 8.0
DEFAULT_MAX_DAILY_OVERTIME_HOURS = 10.0
DEFAULT_WORK_START = time(9, 0)
DEFAULT_WORK_END = time(18, 0)
DEFAULT_LUNCH_START = time(13, 0)
DEFAULT_LUNCH_END = time(14, 0)

_MONTH_DAY_RE = re.compile(r"^(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")


class WorkingHoursCommon(BaseModel):
    """Season-independent part of the policy."""

    max_daily_hours: Optional[float] = Field(None, gt=0, le=24)
    lunch_start_time: Optional[time] = None
    lunch_end_time: Optional[time] = None
    work_start_time: Optional[time] = None
    work_end_time: Optional[time] = None
    high_start_date: Optional[str] = Field(None, description="MM-DD")
    high_end_date: Optional[str] = Field(None, description="MM-DD")

    @field_validator("high_start_date", "high_end_date")
    @classmethod
    def _check_month_day(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not _MONTH_DAY_RE.match(value):
            raise ValueError("expected MM-DD")
        month, day = (int(part) for part in value.split("-"))
        try:
            # 2000 is a leap year, so 02-29 is accepted
            date(2000, month, day)
        except ValueError:
            raise ValueError(f"{value} is not a calendar day") from None
        return value


class SeasonOvertime(BaseModel):
    """Per-season overtime ceiling."""

    max_daily_hours_overtime: Optional[float] = Field(None, gt=0, le=24)


class WorkingHoursPolicy(BaseModel):
    """Stored working-hours configuration (config key `working_hours`)."""

    common: WorkingHoursCommon = Field(default_factory=WorkingHoursCommon)
    normal: SeasonOvertime = Field(default_factory=SeasonOvertime)
    high: SeasonOvertime = Field(default_factory=SeasonOvertime)


class SeasonConfig(BaseModel):
    """Stored season selector (config key `season`)."""

    season_mode: SeasonMode = SeasonMode.AUTO


class EffectivePolicy(BaseModel):
    """Policy resolved for one season with defaults filled in."""

    season: SeasonMode
    max_daily_hours: float = DEFAULT_MAX_DAILY_HOURS
    max_daily_overtime_hours: float = DEFAULT_MAX_DAILY_OVERTIME_HOURS
    work_start_time: time = DEFAULT_WORK_START
    work_end_time: time = DEFAULT_WORK_END
    lunch_start_time: time = DEFAULT_LUNCH_START
    lunch_end_time: time = DEFAULT_LUNCH_END
