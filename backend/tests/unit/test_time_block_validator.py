"""
Unit tests for time block placement validation.
"""

from datetime import date, datetime, time
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.exceptions import (
    CommentRequiredError,
    DailyLimitExceededError,
    InvalidTimeRangeError,
    OutOfProjectRangeError,
    OverlapError,
)
from app.models.project import Project
from app.models.scheduling import BlockComments
from app.models.time_block import TimeBlockInput, TimeBlockWithProject
from app.services.time_block_validator import (
    PendingChanges,
    PlannedBlock,
    TimeBlockValidator,
    check_daily_hours,
    check_overlaps,
    check_project_range,
)

USER_ID = uuid4()
NO_COMMENTS = BlockComments()


def _project() -> Project:
    now = datetime(2026, 1, 1)
    return Project(
        id=uuid4(),
        name="Harbor Bridge",
        start_date=date(2026, 1, 5),
        end_date=date(2026, 1, 30),
        created_at=now,
        updated_at=now,
    )


def _block(day: int, start: tuple, end: tuple, block_id=None) -> TimeBlockInput:
    return TimeBlockInput(id=block_id, date=date(2026, 1, day), start_time=time(*start), end_time=time(*end))


def _stored(block_id: int, day: int, start: tuple, end: tuple) -> TimeBlockWithProject:
    return TimeBlockWithProject(
        id=block_id,
        assignment_id=uuid4(),
        user_id=USER_ID,
        project_id=uuid4(),
        date=date(2026, 1, day),
        start_time=time(*start),
        end_time=time(*end),
        duration_hours=(end[0] - start[0]),
        assign_by_user_id=uuid4(),
        created_at=datetime(2026, 1, 1),
        project_name="Other",
        assignment_role="Engineer",
    )


def _validator(existing=None) -> TimeBlockValidator:
    repo = AsyncMock()
    repo.list_active_for_user.return_value = existing or []
    return TimeBlockValidator(repo)


async def _validate(validator, blocks, comments=NO_COMMENTS, pending=None):
    await validator.validate(blocks, USER_ID, _project(), comments, 8, 10, pending=pending)


# ---- daily hours ----


def test_nine_hour_block_without_comment_is_rejected():
    with pytest.raises(CommentRequiredError):
        check_daily_hours([_block(6, (8, 0), (17, 0))], NO_COMMENTS, 8, 10)


def test_nine_hour_block_with_comment_is_accepted():
    comments = BlockComments(more_than_8_hours="Release night")
    check_daily_hours([_block(6, (8, 0), (17, 0))], comments, 8, 10)


def test_two_short_blocks_over_max_need_no_comment():
    blocks = [_block(6, (8, 0), (12, 0)), _block(6, (13, 0), (18, 0))]
    check_daily_hours(blocks, NO_COMMENTS, 8, 10)


def test_daily_total_above_overtime_is_rejected_even_with_comment():
    blocks = [_block(6, (7, 0), (13, 0)), _block(6, (14, 0), (19, 30))]
    comments = BlockComments(more_than_8_hours="Crunch")
    with pytest.raises(DailyLimitExceededError):
        check_daily_hours(blocks, comments, 8, 10)


def test_single_block_above_overtime_is_rejected():
    comments = BlockComments(more_than_8_hours="Crunch")
    with pytest.raises(DailyLimitExceededError):
        check_daily_hours([_block(6, (7, 0), (18, 0))], comments, 8, 10)


def test_booked_hours_count_towards_daily_total():
    with pytest.raises(DailyLimitExceededError):
        check_daily_hours([_block(6, (14, 0), (17, 0))], NO_COMMENTS, 8, 10, {date(2026, 1, 6): 8})


# ---- project range ----


def test_block_before_project_start_is_always_rejected():
    comments = BlockComments(out_of_project_range="Kick-off prep")
    with pytest.raises(OutOfProjectRangeError):
        check_project_range([_block(2, (9, 0), (10, 0))], _project(), comments)


def test_block_after_project_end_requires_comment():
    late = TimeBlockInput(date=date(2026, 2, 2), start_time=time(9, 0), end_time=time(10, 0))
    with pytest.raises(OutOfProjectRangeError):
        check_project_range([late], _project(), NO_COMMENTS)

    check_project_range([late], _project(), BlockComments(out_of_project_range="Handover"))


# ---- overlaps ----


def test_overlap_with_existing_block_is_rejected():
    with pytest.raises(OverlapError) as exc_info:
        check_overlaps([_block(6, (9, 0), (11, 0))], [_stored(1, 6, (10, 0), (12, 0))])
    assert "2026-01-06 09:00-11:00" in str(exc_info.value)


def test_touching_existing_block_is_accepted():
    check_overlaps([_block(6, (9, 0), (10, 0))], [_stored(1, 6, (10, 0), (12, 0))])


def test_overlap_within_batch_is_rejected():
    with pytest.raises(OverlapError):
        check_overlaps([_block(6, (9, 0), (11, 0)), _block(6, (10, 0), (12, 0))], [])


def test_block_is_not_compared_with_its_stored_version():
    check_overlaps([_block(6, (9, 30), (11, 0), block_id=1)], [_stored(1, 6, (9, 0), (11, 0))])


# ---- validator ----


@pytest.mark.asyncio
async def test_empty_batch_does_not_touch_repository():
    validator = _validator()
    await _validate(validator, [])
    validator._time_block_repo.list_active_for_user.assert_not_called()


@pytest.mark.asyncio
async def test_reversed_block_is_rejected_first():
    with pytest.raises(InvalidTimeRangeError):
        await _validate(_validator(), [_block(2, (11, 0), (10, 0))])


@pytest.mark.asyncio
async def test_existing_blocks_are_loaded_over_batch_dates():
    validator = _validator()
    await _validate(validator, [_block(9, (9, 0), (10, 0)), _block(6, (9, 0), (10, 0))])
    validator._time_block_repo.list_active_for_user.assert_awaited_once_with(
        USER_ID, date(2026, 1, 6), date(2026, 1, 9)
    )


@pytest.mark.asyncio
async def test_overlap_with_other_project_block_is_rejected():
    validator = _validator([_stored(7, 6, (10, 0), (12, 0))])
    with pytest.raises(OverlapError):
        await _validate(validator, [_block(6, (11, 0), (13, 0))])


@pytest.mark.asyncio
async def test_pending_removal_frees_the_slot():
    validator = _validator([_stored(7, 6, (10, 0), (12, 0))])
    await _validate(validator, [_block(6, (11, 0), (13, 0))], pending=PendingChanges(removed_ids={7}))


@pytest.mark.asyncio
async def test_pending_addition_blocks_the_slot():
    pending = PendingChanges(added=[PlannedBlock(None, date(2026, 1, 6), time(9, 0), time(12, 0))])
    with pytest.raises(OverlapError):
        await _validate(_validator(), [_block(6, (11, 0), (13, 0))], pending=pending)


@pytest.mark.asyncio
async def test_existing_hours_push_day_over_limit():
    validator = _validator([_stored(7, 6, (8, 0), (16, 0))])
    with pytest.raises(DailyLimitExceededError):
        await _validate(validator, [_block(6, (16, 0), (19, 0))])


@pytest.mark.asyncio
async def test_edited_block_does_not_count_twice():
    validator = _validator([_stored(7, 6, (8, 0), (16, 0))])
    await _validate(
        validator,
        [_block(6, (9, 0), (17, 0), block_id=7)],
        pending=PendingChanges(removed_ids={7}),
    )
