"""
Fixed (manually specified) time block processing.

A submission carries deletions, edits and new blocks for one user on one
project. The phases are planned in that order, each one validated against
the state the previous phases leave behind, and then committed together in
a single transaction. Audit events follow the commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from app.core.exceptions import AssignmentNotFoundError, NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.assignment_repository import IAssignmentRepository
from app.interfaces.config_repository import IConfigRepository
from app.interfaces.project_repository import IProjectRepository
from app.interfaces.time_block_repository import ITimeBlockRepository
from app.interfaces.user_repository import IUserRepository
from app.models.assignment import Assignment, AssignmentCreate
from app.models.enums import AuditEntityType
from app.models.project import Project
from app.models.scheduling import BlockComments, FixedBlockRequest, FixedBlockResponse
from app.models.time_block import (
    TimeBlock,
    TimeBlockChangeSet,
    TimeBlockCreate,
    TimeBlockInput,
    TimeBlockUpdate,
)
from app.models.working_hours import EffectivePolicy
from app.services.audit_service import AuditService
from app.services.policy_resolver import PolicyResolver
from app.services.scheduling_context import require_project_and_users
from app.services.time_block_validator import PendingChanges, PlannedBlock, TimeBlockValidator
from app.services.user_locks import UserLockRegistry, scheduling_locks
from app.utils.time_intervals import duration_hours

logger = setup_logger(__name__)

FINISH_MESSAGE = "Assignments completed successfully."
COMMENT_SEPARATOR = " | "


def build_block_comment(
    block: TimeBlockInput,
    hours: float,
    project: Project,
    comments: BlockComments,
    max_daily_hours: float,
) -> Optional[str]:
    """Canned comments that apply to a block, joined with ' | '."""
    parts = []
    if hours > max_daily_hours and comments.more_than_8_hours:
        parts.append(comments.more_than_8_hours)
    if not project.start_date <= block.date <= project.end_date and comments.out_of_project_range:
        parts.append(comments.out_of_project_range)
    return COMMENT_SEPARATOR.join(parts) or None


@dataclass
class _SubmissionPlan:
    changes: TimeBlockChangeSet = field(default_factory=TimeBlockChangeSet)
    deleted_hours: float = 0.0
    edited_old_hours: float = 0.0
    edited_new_hours: float = 0.0
    created_hours: float = 0.0


class FixedBlockProcessor:
    """Creates, edits and soft-deletes manual time blocks."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        user_repo: IUserRepository,
        assignment_repo: IAssignmentRepository,
        time_block_repo: ITimeBlockRepository,
        config_repo: IConfigRepository,
        audit_service: AuditService,
        locks: Optional[UserLockRegistry] = None,
    ):
        self._project_repo = project_repo
        self._user_repo = user_repo
        self._assignment_repo = assignment_repo
        self._time_block_repo = time_block_repo
        self._policy_resolver = PolicyResolver(config_repo)
        self._validator = TimeBlockValidator(time_block_repo)
        self._audit = audit_service
        self._locks = locks or scheduling_locks

    async def process(self, request: FixedBlockRequest) -> FixedBlockResponse:
        """
        Apply one fixed-block submission.

        Raises:
            NotFoundError: Project, user, assignment or time block missing
            TimeBlockValidationError: Any placement rule violated
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

        async with self._locks.hold(request.user_id):
            hours_before = await self._time_block_repo.sum_active_hours(request.user_id)
            plan = await self._plan(request, project, policy)
            if not plan.changes.is_empty():
                await self._time_block_repo.apply_changes(plan.changes)

        logger.info(
            f"Fixed blocks for user {request.user_id} on project {project.id}: "
            f"{len(plan.changes.deactivate_ids)} deleted, {len(plan.changes.updates)} edited, "
            f"{len(plan.changes.creates)} created"
        )
        await self._record_audit(request, project, plan, hours_before)
        return FixedBlockResponse(message=FINISH_MESSAGE)

    async def _plan(
        self,
        request: FixedBlockRequest,
        project: Project,
        policy: EffectivePolicy,
    ) -> _SubmissionPlan:
        plan = _SubmissionPlan()
        pending = PendingChanges()
        assignment: Optional[Assignment] = None

        # Deletions
        deleted_ids = list(dict.fromkeys(request.deleted_time_block_ids))
        if deleted_ids:
            await self._owned_blocks(deleted_ids, request)
            plan.deleted_hours = await self._time_block_repo.sum_durations(deleted_ids)
            plan.changes.deactivate_ids = deleted_ids
            pending.removed_ids.update(deleted_ids)

        # Edits
        if request.edited_time_blocks:
            edited_ids = self._edited_ids(request.edited_time_blocks, pending)
            pending.removed_ids.update(edited_ids)
            await self._validator.validate(
                request.edited_time_blocks,
                request.user_id,
                project,
                request.comments,
                policy.max_daily_hours,
                policy.max_daily_overtime_hours,
                pending=pending,
            )

            assignment = await self._assignment_repo.get_by_user_and_project(
                request.user_id, request.project_id
            )
            if not assignment:
                raise AssignmentNotFoundError(
                    f"No assignment to edit for user {request.user_id} on project {request.project_id}"
                )

            stored = await self._owned_blocks(edited_ids, request)
            plan.edited_old_hours = sum(block.duration_hours for block in stored)
            for block in request.edited_time_blocks:
                hours = duration_hours(block.date, block.start_time, block.end_time)
                plan.edited_new_hours += hours
                plan.changes.updates.append(
                    TimeBlockUpdate(
                        id=block.id,
                        date=block.date,
                        start_time=block.start_time,
                        end_time=block.end_time,
                        duration_hours=hours,
                        assign_by_user_id=request.assign_by_user_id,
                        comment=build_block_comment(
                            block, hours, project, request.comments, policy.max_daily_hours
                        ),
                        mode=block.mode,
                    )
                )
                pending.added.append(
                    PlannedBlock(block.id, block.date, block.start_time, block.end_time)
                )

        # Creations
        if request.time_blocks:
            new_blocks = [block.model_copy(update={"id": None}) for block in request.time_blocks]
            await self._validator.validate(
                new_blocks,
                request.user_id,
                project,
                request.comments,
                policy.max_daily_hours,
                policy.max_daily_overtime_hours,
                pending=pending,
            )

            if assignment is None:
                assignment = await self._assignment_repo.get_by_user_and_project(
                    request.user_id, request.project_id
                )
            if assignment is None:
                plan.changes.new_assignment = AssignmentCreate(
                    project_id=request.project_id,
                    user_id=request.user_id,
                    role=request.role,
                )

            for block in new_blocks:
                hours = duration_hours(block.date, block.start_time, block.end_time)
                plan.created_hours += hours
                plan.changes.creates.append(
                    TimeBlockCreate(
                        assignment_id=assignment.id if assignment else None,
                        date=block.date,
                        start_time=block.start_time,
                        end_time=block.end_time,
                        duration_hours=hours,
                        assign_by_user_id=request.assign_by_user_id,
                        comment=build_block_comment(
                            block, hours, project, request.comments, policy.max_daily_hours
                        ),
                        mode=block.mode,
                    )
                )

        return plan

    def _edited_ids(self, blocks: list[TimeBlockInput], pending: PendingChanges) -> list[int]:
        ids: list[int] = []
        for block in blocks:
            if block.id is None:
                raise ValidationError("Edited time blocks must carry their id")
            if block.id in pending.removed_ids or block.id in ids:
                raise ValidationError(f"Time block {block.id} is changed more than once")
            ids.append(block.id)
        return ids

    async def _owned_blocks(
        self,
        block_ids: list[int],
        request: FixedBlockRequest,
    ) -> list[TimeBlock]:
        """Fetch blocks, requiring each to be active and belong to the submission's user and project."""
        blocks = {block.id: block for block in await self._time_block_repo.get_many(block_ids)}
        for block_id in block_ids:
            block = blocks.get(block_id)
            if (
                block is None
                or not block.is_active
                or block.user_id != request.user_id
                or block.project_id != request.project_id
            ):
                raise NotFoundError(f"Time block {block_id} not found for user {request.user_id}")
        return [blocks[block_id] for block_id in block_ids]

    async def _record_audit(
        self,
        request: FixedBlockRequest,
        project: Project,
        plan: _SubmissionPlan,
        hours_before: float,
    ) -> None:
        user_id = str(request.user_id)
        changes = plan.changes

        if changes.deactivate_ids:
            await self._audit.record_delete(
                AuditEntityType.TIME_BLOCK,
                project.id,
                request.assign_by_user_id,
                {"user_id": user_id, "hours": plan.deleted_hours},
            )

        if changes.updates:
            # Totals around the edit batch: after deletions, before and after edits
            old_total = hours_before - plan.deleted_hours
            new_total = old_total - plan.edited_old_hours + plan.edited_new_hours
            await self._audit.record_update(
                AuditEntityType.TIME_BLOCK,
                project.id,
                request.assign_by_user_id,
                {"user_id": user_id, "hours": old_total},
                {"user_id": user_id, "hours": new_total},
                compare_fields=False,
            )

        if changes.creates:
            await self._audit.record_create(
                AuditEntityType.TIME_BLOCK,
                project.id,
                request.assign_by_user_id,
                {"user_id": user_id, "hours": plan.created_hours},
            )
