"""
SQLite implementation of user repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select

from app.infrastructure.local.database import UserORM, get_session_factory
from app.interfaces.user_repository import IUserRepository
from app.models.user import UserAccount, UserCreate


class SqliteUserRepository(IUserRepository):
    """SQLite implementation of user repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: UserORM) -> UserAccount:
        return UserAccount(
            id=UUID(orm.id),
            email=orm.email,
            display_name=orm.display_name,
            is_active=orm.is_active,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def get(self, user_id: UUID) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.id == str(user_id))
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def create(self, data: UserCreate) -> UserAccount:
        async with self._session_factory() as session:
            orm = UserORM(
                id=str(uuid4()),
                email=data.email,
                display_name=data.display_name,
                is_active=data.is_active,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)
