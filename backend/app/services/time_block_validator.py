"""
Time block placement validation.

Runs every placement rule over a whole batch before anything is written:
chronology, daily hour limits, project date range and overlaps with the
user's other active blocks. The first violation aborts the batch.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterable, Optional, Protocol, Sequence
from uuid import UUID

from app.core.exceptions import (
    CommentRequiredError,
    DailyLimitExceededError,
    InvalidTimeRangeError,
    OutOfProjectRangeError,
    OverlapError,
)
from app.interfaces.time_block_repository import ITimeBlockRepository
from app.models.project import Project
from app.models.scheduling import BlockComments
from app.utils.time_intervals import duration_hours, format_time, intervals_overlap


class BlockSpan(Protocol):
    """Anything placed on a date between two clock times."""

    id: Optional[int]
    date: date
    start_time: time
    end_time: time


@dataclass(frozen=True)
class PlannedBlock:
    """A block that will exist once the current submission is committed."""

    id: Optional[int]
    date: date
    start_time: time
    end_time: time


@dataclass
class PendingChanges:
    """
    Uncommitted effects of earlier phases of the same submission.

    `removed_ids` are blocks deleted or about to be rewritten; `added` are
    their replacements (and any other block that will exist after commit).
    """

    removed_ids: set[int] = field(default_factory=set)
    added: list[PlannedBlock] = field(default_factory=list)


def _describe(block: BlockSpan) -> str:
    return f"{block.date.isoformat()} {format_time(block.start_time)}-{format_time(block.end_time)}"


def check_chronology(blocks: Sequence[BlockSpan]) -> None:
    for block in blocks:
        if block.start_time >= block.end_time:
            raise InvalidTimeRangeError(
                f"Time block {block.date.isoformat()} has an invalid time range: start "
                f"({format_time(block.start_time)}) must be before end ({format_time(block.end_time)})."
            )


def check_daily_hours(
    blocks: Sequence[BlockSpan],
    comments: BlockComments,
    max_daily_hours: float,
    max_daily_overtime_hours: float,
    booked_hours: Optional[dict[date, float]] = None,
) -> None:
    """
    Enforce the per-block comment rule and the per-date overtime ceiling.

    The comment is required only when a single block is longer than
    `max_daily_hours`; the ceiling applies to the running total of the date,
    starting from hours already booked outside this batch.
    """
    daily_totals: dict[date, float] = defaultdict(float)
    if booked_hours:
        daily_totals.update(booked_hours)

    for block in blocks:
        hours = duration_hours(block.date, block.start_time, block.end_time)
        daily_totals[block.date] += hours

        if max_daily_hours < hours <= max_daily_overtime_hours and not comments.more_than_8_hours:
            raise CommentRequiredError(
                f"Time block {_describe(block)} requires a comment because it lasts between "
                f"{max_daily_hours:g} and {max_daily_overtime_hours:g} hours."
            )
        if daily_totals[block.date] > max_daily_overtime_hours:
            raise DailyLimitExceededError(
                f"Hours booked on {block.date.isoformat()} exceed the daily limit of "
                f"{max_daily_overtime_hours:g} hours."
            )


def check_project_range(
    blocks: Sequence[BlockSpan],
    project: Project,
    comments: BlockComments,
) -> None:
    """Blocks before the project start always fail; after the end they need a comment."""
    for block in blocks:
        before_start = block.date < project.start_date
        after_end = block.date > project.end_date
        if before_start or (after_end and not comments.out_of_project_range):
            raise OutOfProjectRangeError(
                f"Time block {block.date.isoformat()} is outside the project date range "
                f"({project.start_date.isoformat()} to {project.end_date.isoformat()})"
                + ("." if before_start else " and requires a comment.")
            )


def check_overlaps(blocks: Sequence[BlockSpan], existing: Iterable[BlockSpan]) -> None:
    """
    Reject blocks that overlap existing blocks or each other.

    A block is never compared with a stored block carrying the same id.
    """
    by_date: dict[date, list[BlockSpan]] = defaultdict(list)
    for block in existing:
        by_date[block.date].append(block)

    for block in blocks:
        for other in by_date[block.date]:
            if block.id is not None and other.id == block.id:
                continue
            if intervals_overlap(block.start_time, block.end_time, other.start_time, other.end_time):
                raise OverlapError(
                    f"Time block {_describe(block)} overlaps an existing time block "
                    f"({_describe(other)})."
                )
        by_date[block.date].append(block)


def overlay_pending(
    stored: Iterable[BlockSpan],
    pending: Optional[PendingChanges],
    start_date: date,
    end_date: date,
) -> list[BlockSpan]:
    """Stored blocks as they will look after the pending changes commit."""
    if pending is None:
        return list(stored)
    current: list[BlockSpan] = [b for b in stored if b.id not in pending.removed_ids]
    current.extend(b for b in pending.added if start_date <= b.date <= end_date)
    return current


class TimeBlockValidator:
    """Validates a batch of proposed blocks for one user and project."""

    def __init__(self, time_block_repo: ITimeBlockRepository):
        self._time_block_repo = time_block_repo

    async def validate(
        self,
        blocks: Sequence[BlockSpan],
        user_id: UUID,
        project: Project,
        comments: BlockComments,
        max_daily_hours: float,
        max_daily_overtime_hours: float,
        pending: Optional[PendingChanges] = None,
    ) -> None:
        """
        Validate the batch; raises on the first violation.

        Args:
            blocks: Proposed blocks (new ones have no id)
            user_id: Owner of the blocks
            project: Project the blocks are booked against
            comments: Justifications sent with the submission
            max_daily_hours: Single-block length above which a comment is needed
            max_daily_overtime_hours: Ceiling for the hours of one date
            pending: Uncommitted changes from earlier phases of the submission

        Raises:
            InvalidTimeRangeError, CommentRequiredError, DailyLimitExceededError,
            OutOfProjectRangeError, OverlapError
        """
        if not blocks:
            return

        check_chronology(blocks)

        existing = await self._load_existing(blocks, user_id, pending)
        proposed_ids = {b.id for b in blocks if b.id is not None}
        booked: dict[date, float] = defaultdict(float)
        for other in existing:
            if other.id is None or other.id not in proposed_ids:
                booked[other.date] += duration_hours(other.date, other.start_time, other.end_time)

        check_daily_hours(blocks, comments, max_daily_hours, max_daily_overtime_hours, booked)
        check_project_range(blocks, project, comments)
        check_overlaps(blocks, existing)

    async def _load_existing(
        self,
        blocks: Sequence[BlockSpan],
        user_id: UUID,
        pending: Optional[PendingChanges],
    ) -> list[BlockSpan]:
        min_date = min(b.date for b in blocks)
        max_date = max(b.date for b in blocks)
        stored = await self._time_block_repo.list_active_for_user(user_id, min_date, max_date)
        return overlay_pending(stored, pending, min_date, max_date)
