"""
Configuration store interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.models.working_hours import SeasonConfig, WorkingHoursPolicy


class IConfigRepository(ABC):
    """Abstract interface for named configuration values."""

    @abstractmethod
    async def get_working_hours_policy(self) -> Optional[WorkingHoursPolicy]:
        """Get the stored working-hours policy, if any."""
        pass

    @abstractmethod
    async def get_season_config(self) -> Optional[SeasonConfig]:
        """Get the stored season selector, if any."""
        pass

    @abstractmethod
    async def save_working_hours_policy(self, policy: WorkingHoursPolicy) -> WorkingHoursPolicy:
        """Create or replace the working-hours policy."""
        pass

    @abstractmethod
    async def save_season_config(self, season: SeasonConfig) -> SeasonConfig:
        """Create or replace the season selector."""
        pass
