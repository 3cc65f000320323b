"""
Unit tests for the SQLite repositories.
"""

from datetime import date, time

import pytest

from app.core.exceptions import NotFoundError
from app.infrastructure.local.database import ProjectORM
from app.models.assignment import AssignmentCreate
from app.models.enums import LeaveStatus, LeaveType, SeasonMode, TimeBlockMode
from app.models.leave import LeaveCreate
from app.models.project import ProjectCreate
from app.models.time_block import TimeBlockChangeSet, TimeBlockCreate, TimeBlockUpdate
from app.models.working_hours import SeasonConfig


def _create(day: date, start: tuple, end: tuple, seeded, assignment_id=None) -> TimeBlockCreate:
    return TimeBlockCreate(
        assignment_id=assignment_id,
        date=day,
        start_time=time(*start),
        end_time=time(*end),
        duration_hours=end[0] - start[0],
        assign_by_user_id=seeded.manager.id,
        mode=TimeBlockMode.CASCADE,
    )


def _new_assignment(seeded) -> AssignmentCreate:
    return AssignmentCreate(project_id=seeded.project.id, user_id=seeded.worker.id, role="Engineer")


@pytest.mark.asyncio
async def test_apply_changes_creates_pending_assignment(repos, seeded):
    created = await repos.time_blocks.apply_changes(
        TimeBlockChangeSet(
            creates=[_create(date(2026, 1, 6), (9, 0), (11, 0), seeded)],
            new_assignment=_new_assignment(seeded),
        )
    )

    assert len(created) == 1
    assert created[0].user_id == seeded.worker.id
    assert created[0].project_id == seeded.project.id
    assert created[0].mode == TimeBlockMode.CASCADE
    assignment = await repos.assignments.get_by_user_and_project(seeded.worker.id, seeded.project.id)
    assert created[0].assignment_id == assignment.id


@pytest.mark.asyncio
async def test_apply_changes_reuses_existing_assignment(repos, seeded):
    existing = await repos.assignments.create(_new_assignment(seeded))

    created = await repos.time_blocks.apply_changes(
        TimeBlockChangeSet(
            creates=[_create(date(2026, 1, 6), (9, 0), (11, 0), seeded)],
            new_assignment=_new_assignment(seeded),
        )
    )

    assert created[0].assignment_id == existing.id


@pytest.mark.asyncio
async def test_apply_changes_is_atomic(repos, seeded):
    assignment = await repos.assignments.create(_new_assignment(seeded))
    (block,) = await repos.time_blocks.apply_changes(
        TimeBlockChangeSet(creates=[_create(date(2026, 1, 6), (9, 0), (11, 0), seeded, assignment.id)])
    )

    with pytest.raises(NotFoundError):
        await repos.time_blocks.apply_changes(
            TimeBlockChangeSet(
                deactivate_ids=[block.id],
                updates=[
                    TimeBlockUpdate(
                        id=12345,
                        date=date(2026, 1, 7),
                        start_time=time(9, 0),
                        end_time=time(10, 0),
                        duration_hours=1,
                        assign_by_user_id=seeded.manager.id,
                    )
                ],
            )
        )

    (still_there,) = await repos.time_blocks.get_many([block.id])
    assert still_there.is_active is True


@pytest.mark.asyncio
async def test_active_listing_skips_inactive_projects_and_blocks(repos, seeded, session_factory):
    other = await repos.projects.create(
        ProjectCreate(name="Archived", start_date=date(2026, 1, 1), end_date=date(2026, 12, 31))
    )
    mine = await repos.assignments.create(_new_assignment(seeded))
    archived = await repos.assignments.create(
        AssignmentCreate(project_id=other.id, user_id=seeded.worker.id, role="Reviewer")
    )
    created = await repos.time_blocks.apply_changes(
        TimeBlockChangeSet(
            creates=[
                _create(date(2026, 1, 6), (9, 0), (11, 0), seeded, mine.id),
                _create(date(2026, 1, 6), (14, 0), (16, 0), seeded, mine.id),
                _create(date(2026, 1, 7), (9, 0), (11, 0), seeded, archived.id),
            ]
        )
    )
    await repos.time_blocks.apply_changes(TimeBlockChangeSet(deactivate_ids=[created[1].id]))
    async with session_factory() as session:
        orm = await session.get(ProjectORM, str(other.id))
        orm.is_active = False
        await session.commit()

    blocks = await repos.time_blocks.list_active_for_user(seeded.worker.id, date(2026, 1, 1))

    assert [block.id for block in blocks] == [created[0].id]
    assert blocks[0].project_name == "Harbor Bridge"
    assert blocks[0].assignment_role == "Engineer"
    assert await repos.time_blocks.sum_active_hours(seeded.worker.id) == 2
    assert await repos.time_blocks.sum_durations([block.id for block in created]) == 6
    assert await repos.projects.get_by_id(other.id) is None


@pytest.mark.asyncio
async def test_active_listing_end_date_is_inclusive(repos, seeded):
    assignment = await repos.assignments.create(_new_assignment(seeded))
    await repos.time_blocks.apply_changes(
        TimeBlockChangeSet(
            creates=[
                _create(date(2026, 1, 6), (9, 0), (11, 0), seeded, assignment.id),
                _create(date(2026, 1, 8), (9, 0), (11, 0), seeded, assignment.id),
            ]
        )
    )

    blocks = await repos.time_blocks.list_active_for_user(
        seeded.worker.id, date(2026, 1, 6), date(2026, 1, 6)
    )
    assert [block.date for block in blocks] == [date(2026, 1, 6)]


@pytest.mark.asyncio
async def test_leaves_and_holidays(repos, seeded):
    await repos.leaves.create_many(
        [
            LeaveCreate(
                user_id=seeded.worker.id,
                start_date=date(2026, 2, 2),
                end_date=date(2026, 2, 6),
                type=LeaveType.VACATION,
            ),
            LeaveCreate(
                user_id=seeded.worker.id,
                start_date=date(2026, 3, 2),
                end_date=date(2026, 3, 2),
                type=LeaveType.PERMISSION,
                status=LeaveStatus.PENDING,
            ),
            LeaveCreate(start_date=date(2026, 1, 1), end_date=date(2026, 1, 1), type=LeaveType.HOLIDAY),
            LeaveCreate(start_date=date(2027, 1, 1), end_date=date(2027, 1, 1), type=LeaveType.HOLIDAY),
        ]
    )

    leaves = await repos.leaves.list_approved_leaves_for_user(seeded.worker.id)
    assert [leave.type for leave in leaves] == [LeaveType.VACATION]
    assert len(await repos.leaves.list_holidays()) == 2
    assert [h.start_date for h in await repos.leaves.list_holidays(2027)] == [date(2027, 1, 1)]


def test_holiday_cannot_belong_to_a_user():
    with pytest.raises(ValueError):
        LeaveCreate(
            user_id="0b1d2c3a-0000-4000-8000-000000000001",
            start_date=date(2026, 1, 1),
            end_date=date(2026, 1, 1),
            type=LeaveType.HOLIDAY,
        )


@pytest.mark.asyncio
async def test_config_values_are_replaced(repos):
    assert await repos.config.get_season_config() is None
    assert await repos.config.get_working_hours_policy() is None

    await repos.config.save_season_config(SeasonConfig(season_mode=SeasonMode.HIGH))
    await repos.config.save_season_config(SeasonConfig(season_mode=SeasonMode.AUTO))

    assert (await repos.config.get_season_config()).season_mode == SeasonMode.AUTO


@pytest.mark.asyncio
async def test_stored_policy_round_trips_times(repos, seeded):
    policy = await repos.config.get_working_hours_policy()
    assert policy.common.lunch_start_time == time(13, 0)
    assert policy.high.max_daily_hours_overtime == 12
