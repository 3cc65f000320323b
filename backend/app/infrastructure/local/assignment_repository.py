"""
SQLite implementation of assignment repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select

from app.infrastructure.local.database import AssignmentORM, get_session_factory
from app.interfaces.assignment_repository import IAssignmentRepository
from app.models.assignment import Assignment, AssignmentCreate
from app.models.enums import AssignmentStatus


def assignment_orm_to_model(orm: AssignmentORM) -> Assignment:
    return Assignment(
        id=UUID(orm.id),
        project_id=UUID(orm.project_id),
        user_id=UUID(orm.user_id),
        role=orm.role,
        comment=orm.comment,
        status=AssignmentStatus(orm.status),
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


def assignment_model_to_orm(data: AssignmentCreate) -> AssignmentORM:
    return AssignmentORM(
        id=str(uuid4()),
        project_id=str(data.project_id),
        user_id=str(data.user_id),
        role=data.role,
        comment=data.comment,
        status=data.status.value,
    )


class SqliteAssignmentRepository(IAssignmentRepository):
    """SQLite implementation of assignment repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def get_by_user_and_project(
        self, user_id: UUID, project_id: UUID
    ) -> Optional[Assignment]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(AssignmentORM).where(
                    AssignmentORM.user_id == str(user_id),
                    AssignmentORM.project_id == str(project_id),
                )
            )
            orm = result.scalar_one_or_none()
            return assignment_orm_to_model(orm) if orm else None

    async def create(self, data: AssignmentCreate) -> Assignment:
        async with self._session_factory() as session:
            orm = assignment_model_to_orm(data)
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return assignment_orm_to_model(orm)
