"""
SQLite implementation of the configuration store.

Values are JSON documents stored under a unique name.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select

from app.infrastructure.local.database import ConfigORM, get_session_factory
from app.interfaces.config_repository import IConfigRepository
from app.models.working_hours import SeasonConfig, WorkingHoursPolicy

WORKING_HOURS_KEY = "working_hours"
SEASON_KEY = "season"


class SqliteConfigRepository(IConfigRepository):
    """SQLite implementation of configuration repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def _get_value(self, name: str) -> Optional[dict[str, Any]]:
        async with self._session_factory() as session:
            result = await session.execute(select(ConfigORM).where(ConfigORM.name == name))
            orm = result.scalar_one_or_none()
            return orm.value if orm else None

    async def _put_value(self, name: str, value: dict[str, Any]) -> None:
        async with self._session_factory() as session:
            result = await session.execute(select(ConfigORM).where(ConfigORM.name == name))
            orm = result.scalar_one_or_none()
            if orm is None:
                session.add(ConfigORM(name=name, value=value))
            else:
                orm.value = value
            await session.commit()

    async def get_working_hours_policy(self) -> Optional[WorkingHoursPolicy]:
        value = await self._get_value(WORKING_HOURS_KEY)
        return WorkingHoursPolicy.model_validate(value) if value is not None else None

    async def get_season_config(self) -> Optional[SeasonConfig]:
        value = await self._get_value(SEASON_KEY)
        return SeasonConfig.model_validate(value) if value is not None else None

    async def save_working_hours_policy(self, policy: WorkingHoursPolicy) -> WorkingHoursPolicy:
        await self._put_value(WORKING_HOURS_KEY, policy.model_dump(mode="json"))
        return policy

    async def save_season_config(self, season: SeasonConfig) -> SeasonConfig:
        await self._put_value(SEASON_KEY, season.model_dump(mode="json"))
        return season
