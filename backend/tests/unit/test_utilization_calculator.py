from datetime import date, time
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.models.scheduling import FixedBlockRequest
from app.models.time_block import TimeBlockInput
from app.services.audit_service import AuditService
from app.services.fixed_block_processor import FixedBlockProcessor
from app.services.user_locks import UserLockRegistry
from app.services.utilization_calculator import UtilizationCalculator


@pytest.mark.asyncio
async def test_percentage_of_two_month_baseline():
    repo = AsyncMock()
    repo.sum_active_hours.return_value = 80.0
    user_id = uuid4()

    percentage = await UtilizationCalculator(repo, window_days=60, standard_weekly_hours=40).utilization_percentage(
        user_id, today=date(2026, 1, 5)
    )

    assert percentage == 25.0
    repo.sum_active_hours.assert_awaited_once_with(user_id, date(2026, 1, 5), date(2026, 3, 6))


@pytest.mark.asyncio
async def test_percentage_is_rounded_to_two_decimals():
    repo = AsyncMock()
    repo.sum_active_hours.return_value = 7.0

    percentage = await UtilizationCalculator(repo, window_days=60, standard_weekly_hours=40).utilization_percentage(
        uuid4(), today=date(2026, 1, 5)
    )

    assert percentage == 2.19


@pytest.mark.asyncio
async def test_no_hours_is_zero():
    repo = AsyncMock()
    repo.sum_active_hours.return_value = 0.0
    calculator = UtilizationCalculator(repo, window_days=60, standard_weekly_hours=40)
    assert await calculator.utilization_percentage(uuid4(), today=date(2026, 1, 5)) == 0.0


@pytest.mark.asyncio
async def test_only_blocks_inside_window_count(repos, seeded):
    await FixedBlockProcessor(
        repos.projects,
        repos.users,
        repos.assignments,
        repos.time_blocks,
        repos.config,
        AuditService(repos.audit),
        locks=UserLockRegistry(),
    ).process(
        FixedBlockRequest(
            project_id=seeded.project.id,
            user_id=seeded.worker.id,
            role="Engineer",
            assign_by_user_id=seeded.manager.id,
            time_blocks=[
                TimeBlockInput(date=date(2026, 1, 6), start_time=time(9, 0), end_time=time(13, 0)),
                TimeBlockInput(date=date(2026, 3, 30), start_time=time(9, 0), end_time=time(13, 0)),
            ],
        )
    )

    calculator = UtilizationCalculator(repos.time_blocks, window_days=60, standard_weekly_hours=40)

    assert await calculator.utilization_percentage(seeded.worker.id, today=date(2026, 1, 5)) == 1.25
