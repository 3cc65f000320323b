"""
Shared fixtures: in-memory database, repositories and a seeded scheduling setup.
"""

from datetime import date, time
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.infrastructure.local.assignment_repository import SqliteAssignmentRepository
from app.infrastructure.local.audit_repository import SqliteAuditRepository
from app.infrastructure.local.config_repository import SqliteConfigRepository
from app.infrastructure.local.database import Base
from app.infrastructure.local.leave_repository import SqliteLeaveRepository
from app.infrastructure.local.project_repository import SqliteProjectRepository
from app.infrastructure.local.time_block_repository import SqliteTimeBlockRepository
from app.infrastructure.local.user_repository import SqliteUserRepository
from app.models.enums import SeasonMode
from app.models.project import ProjectCreate
from app.models.user import UserCreate
from app.models.working_hours import (
    SeasonConfig,
    SeasonOvertime,
    WorkingHoursCommon,
    WorkingHoursPolicy,
)

# 2026-01-05 is a Monday
PROJECT_START = date(2026, 1, 5)
PROJECT_END = date(2026, 3, 31)


def make_policy() -> WorkingHoursPolicy:
    return WorkingHoursPolicy(
        common=WorkingHoursCommon(
            max_daily_hours=8,
            work_start_time=time(9, 0),
            work_end_time=time(18, 0),
            lunch_start_time=time(13, 0),
            lunch_end_time=time(14, 0),
            high_start_date="12-01",
            high_end_date="12-31",
        ),
        normal=SeasonOvertime(max_daily_hours_overtime=10),
        high=SeasonOvertime(max_daily_hours_overtime=12),
    )


@pytest.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def repos(session_factory):
    return SimpleNamespace(
        projects=SqliteProjectRepository(session_factory),
        users=SqliteUserRepository(session_factory),
        assignments=SqliteAssignmentRepository(session_factory),
        time_blocks=SqliteTimeBlockRepository(session_factory),
        leaves=SqliteLeaveRepository(session_factory),
        config=SqliteConfigRepository(session_factory),
        audit=SqliteAuditRepository(session_factory),
    )


@pytest.fixture
async def seeded(repos):
    """A project, a worker, a manager and a normal-season policy."""
    project = await repos.projects.create(
        ProjectCreate(name="Harbor Bridge", start_date=PROJECT_START, end_date=PROJECT_END)
    )
    worker = await repos.users.create(UserCreate(email="worker@example.com", display_name="Worker"))
    manager = await repos.users.create(UserCreate(email="manager@example.com", display_name="Manager"))
    await repos.config.save_working_hours_policy(make_policy())
    await repos.config.save_season_config(SeasonConfig(season_mode=SeasonMode.NORMAL))
    return SimpleNamespace(project=project, worker=worker, manager=manager)
