"""
Cascade simulation: spread an hour quota forward over working days.

Walks calendar days from the requested start date, skipping weekends,
holidays and the user's approved leave, and fills each day's free capacity
from the earliest free slot onwards. The result is a proposal only; nothing
is written until the blocks are submitted as fixed blocks.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from app.core.config import get_settings
from app.core.exceptions import SimulationHorizonExceededError, SimulationStartBeforeProjectError
from app.core.logger import setup_logger
from app.interfaces.config_repository import IConfigRepository
from app.interfaces.leave_repository import ILeaveRepository
from app.interfaces.project_repository import IProjectRepository
from app.interfaces.time_block_repository import ITimeBlockRepository
from app.interfaces.user_repository import IUserRepository
from app.models.enums import TimeBlockMode
from app.models.leave import LeaveCreate
from app.models.scheduling import CascadeRequest, CascadeResponse
from app.models.time_block import GeneratedTimeBlock, TimeBlock
from app.models.working_hours import EffectivePolicy
from app.services.policy_resolver import PolicyResolver
from app.services.scheduling_context import require_project_and_users
from app.utils.time_intervals import Interval, add_hours, available_slots, duration_hours

logger = setup_logger(__name__)

SIMULATION_MESSAGE = "Assignment simulation completed successfully."

# Remaining-hour amounts below this are float noise, not work left to place
_HOURS_EPSILON = 1e-9

_SATURDAY = 5


def is_working_day(day: date, closures: Iterable[LeaveCreate]) -> bool:
    """Weekdays not covered by any leave or holiday."""
    if day.weekday() >= _SATURDAY:
        return False
    return not any(closure.covers(day) for closure in closures)


def _fill_day(
    day: date,
    remaining_hours: float,
    policy: EffectivePolicy,
    occupied: list[Interval],
    generated: list[GeneratedTimeBlock],
) -> float:
    """Place as many hours as the day allows; returns the hours still unplaced."""
    lunch = (policy.lunch_start_time, policy.lunch_end_time)
    while remaining_hours > _HOURS_EPSILON:
        occupied_hours = sum(duration_hours(day, start, end) for start, end in occupied)
        capacity = policy.max_daily_hours - occupied_hours
        if capacity <= _HOURS_EPSILON:
            break

        slot = next(
            available_slots([lunch, *occupied], policy.work_start_time, policy.work_end_time),
            None,
        )
        if slot is None:
            break

        slot_start, slot_end = slot
        hours = min(duration_hours(day, slot_start, slot_end), capacity, remaining_hours)
        block_end = add_hours(day, slot_start, hours)
        generated.append(
            GeneratedTimeBlock(
                date=day,
                start_time=slot_start,
                end_time=block_end,
                duration_hours=hours,
                mode=TimeBlockMode.CASCADE,
            )
        )
        occupied.append((slot_start, block_end))
        remaining_hours -= hours
    return remaining_hours


def plan_cascade(
    start_date: date,
    total_hours: float,
    policy: EffectivePolicy,
    existing_blocks: Iterable[TimeBlock],
    closures: list[LeaveCreate],
    horizon_days: int = 365,
) -> list[GeneratedTimeBlock]:
    """
    Generate blocks totalling `total_hours` from `start_date` onwards.

    Args:
        start_date: First day that may receive hours
        total_hours: Quota to place
        policy: Effective policy (daily cap, work and lunch windows)
        existing_blocks: User's active blocks from `start_date` on
        closures: Approved leaves of the user plus holidays
        horizon_days: Days after `start_date` the walk may reach

    Raises:
        SimulationHorizonExceededError: If hours remain after the horizon
    """
    occupied: dict[date, list[Interval]] = defaultdict(list)
    for block in existing_blocks:
        occupied[block.date].append((block.start_time, block.end_time))

    generated: list[GeneratedTimeBlock] = []
    remaining = total_hours
    day = start_date
    while remaining > _HOURS_EPSILON:
        if (day - start_date).days > horizon_days:
            raise SimulationHorizonExceededError(
                f"Could not place all hours within {horizon_days} days; "
                f"{remaining:g} hours left. Check the user's availability."
            )
        if is_working_day(day, closures):
            remaining = _fill_day(day, remaining, policy, occupied[day], generated)
        day += timedelta(days=1)

    return generated


class CascadeSimulator:
    """Proposes cascade time blocks for a user on a project."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        user_repo: IUserRepository,
        time_block_repo: ITimeBlockRepository,
        leave_repo: ILeaveRepository,
        config_repo: IConfigRepository,
        horizon_days: Optional[int] = None,
    ):
        self._project_repo = project_repo
        self._user_repo = user_repo
        self._time_block_repo = time_block_repo
        self._leave_repo = leave_repo
        self._policy_resolver = PolicyResolver(config_repo)
        self._horizon_days = (
            horizon_days if horizon_days is not None else get_settings().CASCADE_HORIZON_DAYS
        )

    async def simulate(self, request: CascadeRequest) -> CascadeResponse:
        """
        Simulate a cascade allocation without persisting it.

        Raises:
            NotFoundError: Project or users missing
            SimulationStartBeforeProjectError: Start date precedes the project
            SimulationHorizonExceededError: Quota does not fit in the horizon
            ConfigurationMissingError: No working-hours policy stored
        """
        project = await require_project_and_users(
            self._project_repo,
            self._user_repo,
            request.project_id,
            request.user_id,
            request.assign_by_user_id,
        )
        policy = await self._policy_resolver.load()

        if request.start_date < project.start_date:
            raise SimulationStartBeforeProjectError(
                f"Simulation start date {request.start_date.isoformat()} is before the "
                f"project start date {project.start_date.isoformat()}."
            )

        existing = await self._time_block_repo.list_active_for_user(
            request.user_id, request.start_date
        )
        leaves = await self._leave_repo.list_approved_leaves_for_user(request.user_id)
        holidays = await self._leave_repo.list_holidays()

        blocks = plan_cascade(
            request.start_date,
            request.total_hours,
            policy,
            existing,
            [*leaves, *holidays],
            self._horizon_days,
        )

        logger.info(
            f"Cascade for user {request.user_id} on project {project.id}: "
            f"{request.total_hours:g} hours in {len(blocks)} blocks from {request.start_date}"
        )
        return CascadeResponse(generated_time_blocks=blocks, message=SIMULATION_MESSAGE)
