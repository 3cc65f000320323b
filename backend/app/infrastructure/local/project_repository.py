"""
SQLite implementation of Project repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select

from app.infrastructure.local.database import ProjectORM, get_session_factory
from app.interfaces.project_repository import IProjectRepository
from app.models.project import Project, ProjectCreate


class SqliteProjectRepository(IProjectRepository):
    """SQLite implementation of project repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ProjectORM) -> Project:
        """Convert ORM object to Pydantic model."""
        return Project(
            id=UUID(orm.id),
            name=orm.name,
            description=orm.description,
            start_date=orm.start_date,
            end_date=orm.end_date,
            is_active=orm.is_active,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def create(self, project: ProjectCreate) -> Project:
        """Create a new project."""
        async with self._session_factory() as session:
            orm = ProjectORM(
                id=str(uuid4()),
                name=project.name,
                description=project.description,
                start_date=project.start_date,
                end_date=project.end_date,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get_by_id(self, project_id: UUID) -> Optional[Project]:
        """Get an active project by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM).where(
                    ProjectORM.id == str(project_id),
                    ProjectORM.is_active.is_(True),
                )
            )
            orm = result.scalars().first()
            return self._orm_to_model(orm) if orm else None
