"""
SQLite implementation of leave repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import select

from app.infrastructure.local.database import LeaveORM, get_session_factory
from app.interfaces.leave_repository import ILeaveRepository
from app.models.enums import LeaveStatus, LeaveType
from app.models.leave import Leave, LeaveCreate


class SqliteLeaveRepository(ILeaveRepository):
    """SQLite implementation of leave repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: LeaveORM) -> Leave:
        return Leave(
            id=orm.id,
            user_id=UUID(orm.user_id) if orm.user_id else None,
            start_date=orm.start_date,
            end_date=orm.end_date,
            type=LeaveType(orm.type),
            status=LeaveStatus(orm.status),
            title=orm.title,
            created_at=orm.created_at,
        )

    async def create_many(self, leaves: list[LeaveCreate]) -> list[Leave]:
        async with self._session_factory() as session:
            orms = [
                LeaveORM(
                    user_id=str(leave.user_id) if leave.user_id else None,
                    start_date=leave.start_date,
                    end_date=leave.end_date,
                    type=leave.type.value,
                    status=leave.status.value,
                    title=leave.title,
                )
                for leave in leaves
            ]
            session.add_all(orms)
            await session.commit()
            for orm in orms:
                await session.refresh(orm)
            return [self._orm_to_model(orm) for orm in orms]

    async def list_approved_leaves_for_user(self, user_id: UUID) -> list[Leave]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(LeaveORM)
                .where(
                    LeaveORM.user_id == str(user_id),
                    LeaveORM.status == LeaveStatus.APPROVED.value,
                    LeaveORM.type != LeaveType.HOLIDAY.value,
                )
                .order_by(LeaveORM.start_date)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_holidays(self, year: Optional[int] = None) -> list[Leave]:
        async with self._session_factory() as session:
            query = select(LeaveORM).where(LeaveORM.type == LeaveType.HOLIDAY.value)
            if year is not None:
                query = query.where(
                    LeaveORM.start_date >= date(year, 1, 1),
                    LeaveORM.start_date <= date(year, 12, 31),
                )
            result = await session.execute(query.order_by(LeaveORM.start_date))
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
