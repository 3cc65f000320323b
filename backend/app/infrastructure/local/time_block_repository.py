"""
SQLite implementation of time block repository.

Blocks carry no user or project column of their own; both come from the
owning assignment, so every read joins through it.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update

from app.core.exceptions import NotFoundError
from app.infrastructure.local.assignment_repository import assignment_model_to_orm
from app.infrastructure.local.database import (
    AssignmentORM,
    ProjectORM,
    TimeBlockORM,
    get_session_factory,
)
from app.interfaces.time_block_repository import ITimeBlockRepository
from app.models.enums import TimeBlockMode
from app.models.time_block import TimeBlock, TimeBlockChangeSet, TimeBlockWithProject


def _block_fields(orm: TimeBlockORM, assignment: AssignmentORM) -> dict:
    return dict(
        id=orm.id,
        assignment_id=UUID(orm.assignment_id),
        user_id=UUID(assignment.user_id),
        project_id=UUID(assignment.project_id),
        date=orm.date,
        start_time=orm.start_time,
        end_time=orm.end_time,
        duration_hours=orm.duration_hours,
        is_active=orm.is_active,
        mode=TimeBlockMode(orm.mode),
        assign_by_user_id=UUID(orm.assign_by_user_id),
        comment=orm.comment,
        created_at=orm.created_at,
    )


class SqliteTimeBlockRepository(ITimeBlockRepository):
    """SQLite implementation of time block repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TimeBlockORM, assignment: AssignmentORM) -> TimeBlock:
        return TimeBlock(**_block_fields(orm, assignment))

    def _active_for_user(self, query, user_id: UUID):
        return (
            query.join(AssignmentORM, TimeBlockORM.assignment_id == AssignmentORM.id)
            .join(ProjectORM, AssignmentORM.project_id == ProjectORM.id)
            .where(
                AssignmentORM.user_id == str(user_id),
                TimeBlockORM.is_active.is_(True),
                ProjectORM.is_active.is_(True),
            )
        )

    async def list_active_for_user(
        self,
        user_id: UUID,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> list[TimeBlockWithProject]:
        async with self._session_factory() as session:
            query = self._active_for_user(
                select(TimeBlockORM, AssignmentORM, ProjectORM), user_id
            ).where(TimeBlockORM.date >= start_date)
            if end_date is not None:
                query = query.where(TimeBlockORM.date <= end_date)
            query = query.order_by(TimeBlockORM.date, TimeBlockORM.start_time)

            result = await session.execute(query)
            return [
                TimeBlockWithProject(
                    **_block_fields(block, assignment),
                    project_name=project.name,
                    assignment_role=assignment.role,
                )
                for block, assignment, project in result.all()
            ]

    async def get_many(self, block_ids: list[int]) -> list[TimeBlock]:
        if not block_ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(TimeBlockORM, AssignmentORM)
                .join(AssignmentORM, TimeBlockORM.assignment_id == AssignmentORM.id)
                .where(TimeBlockORM.id.in_(block_ids))
            )
            return [self._orm_to_model(block, assignment) for block, assignment in result.all()]

    async def sum_durations(self, block_ids: list[int]) -> float:
        if not block_ids:
            return 0.0
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.sum(TimeBlockORM.duration_hours)).where(TimeBlockORM.id.in_(block_ids))
            )
            return float(result.scalar() or 0.0)

    async def sum_active_hours(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> float:
        async with self._session_factory() as session:
            query = self._active_for_user(
                select(func.sum(TimeBlockORM.duration_hours)).select_from(TimeBlockORM), user_id
            )
            if start_date is not None:
                query = query.where(TimeBlockORM.date >= start_date)
            if end_date is not None:
                query = query.where(TimeBlockORM.date <= end_date)
            result = await session.execute(query)
            return float(result.scalar() or 0.0)

    async def apply_changes(self, changes: TimeBlockChangeSet) -> list[TimeBlock]:
        """
        Deactivate, update and insert in one transaction.

        Nothing is committed if any step fails.
        """
        async with self._session_factory() as session:
            if changes.deactivate_ids:
                await session.execute(
                    update(TimeBlockORM)
                    .where(TimeBlockORM.id.in_(changes.deactivate_ids))
                    .values(is_active=False)
                )

            for change in changes.updates:
                orm = await session.get(TimeBlockORM, change.id)
                if orm is None:
                    raise NotFoundError(f"Time block {change.id} not found")
                orm.date = change.date
                orm.start_time = change.start_time
                orm.end_time = change.end_time
                orm.duration_hours = change.duration_hours
                orm.assign_by_user_id = str(change.assign_by_user_id)
                orm.comment = change.comment
                orm.mode = change.mode.value

            pending_assignment = None
            if changes.new_assignment is not None:
                pending_assignment = await self._get_or_create_assignment(session, changes)

            created: list[tuple[TimeBlockORM, AssignmentORM]] = []
            for data in changes.creates:
                if data.assignment_id is not None:
                    assignment = await session.get(AssignmentORM, str(data.assignment_id))
                else:
                    assignment = pending_assignment
                if assignment is None:
                    raise NotFoundError("Assignment for new time block not found")

                orm = TimeBlockORM(
                    assignment_id=assignment.id,
                    date=data.date,
                    start_time=data.start_time,
                    end_time=data.end_time,
                    duration_hours=data.duration_hours,
                    is_active=True,
                    mode=data.mode.value,
                    assign_by_user_id=str(data.assign_by_user_id),
                    comment=data.comment,
                )
                session.add(orm)
                created.append((orm, assignment))

            await session.flush()
            await session.commit()
            return [self._orm_to_model(orm, assignment) for orm, assignment in created]

    async def _get_or_create_assignment(self, session, changes: TimeBlockChangeSet) -> AssignmentORM:
        data = changes.new_assignment
        result = await session.execute(
            select(AssignmentORM).where(
                AssignmentORM.user_id == str(data.user_id),
                AssignmentORM.project_id == str(data.project_id),
            )
        )
        orm = result.scalar_one_or_none()
        if orm is None:
            orm = assignment_model_to_orm(data)
            session.add(orm)
            await session.flush()
        return orm
