"""
User utilization against a standard two-month baseline.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from app.core.config import get_settings
from app.interfaces.time_block_repository import ITimeBlockRepository

WEEKS_PER_MONTH = 4
BASELINE_MONTHS = 2


class UtilizationCalculator:
    """Percentage of standard hours already booked for a user."""

    def __init__(
        self,
        time_block_repo: ITimeBlockRepository,
        window_days: Optional[int] = None,
        standard_weekly_hours: Optional[float] = None,
    ):
        settings = get_settings()
        self._time_block_repo = time_block_repo
        self._window_days = window_days if window_days is not None else settings.UTILIZATION_WINDOW_DAYS
        self._standard_weekly_hours = (
            standard_weekly_hours
            if standard_weekly_hours is not None
            else settings.STANDARD_WEEKLY_HOURS
        )

    @property
    def baseline_hours(self) -> float:
        return self._standard_weekly_hours * WEEKS_PER_MONTH * BASELINE_MONTHS

    async def utilization_percentage(self, user_id: UUID, today: Optional[date] = None) -> float:
        """Active hours in [today, today + window] over the baseline, in percent (2 decimals)."""
        today = today or date.today()
        total_hours = await self._time_block_repo.sum_active_hours(
            user_id, today, today + timedelta(days=self._window_days)
        )
        return round(total_hours / self.baseline_hours * 100, 2)
