"""
SQLite implementation of audit log repository.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import select

from app.infrastructure.local.database import AuditLogORM, get_session_factory
from app.interfaces.audit_repository import IAuditRepository
from app.models.audit import AuditLog, AuditLogCreate
from app.models.enums import AuditAction, AuditEntityType


class SqliteAuditRepository(IAuditRepository):
    """SQLite implementation of audit log repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: AuditLogORM) -> AuditLog:
        return AuditLog(
            id=UUID(orm.id),
            entity_type=AuditEntityType(orm.entity_type),
            entity_id=UUID(orm.entity_id),
            action=AuditAction(orm.action),
            changed_by=UUID(orm.changed_by),
            old_values=orm.old_values,
            new_values=orm.new_values,
            changed_fields=orm.changed_fields,
            metadata_info=orm.metadata_info or {},
            changed_at=orm.changed_at,
        )

    async def record(self, entry: AuditLogCreate) -> AuditLog:
        async with self._session_factory() as session:
            orm = AuditLogORM(
                id=str(uuid4()),
                entity_type=entry.entity_type.value,
                entity_id=str(entry.entity_id),
                action=entry.action.value,
                changed_by=str(entry.changed_by),
                old_values=entry.old_values,
                new_values=entry.new_values,
                changed_fields=entry.changed_fields,
                metadata_info=entry.metadata_info,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list_by_entity(self, entity_id: UUID) -> list[AuditLog]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(AuditLogORM)
                .where(AuditLogORM.entity_id == str(entity_id))
                .order_by(AuditLogORM.changed_at.desc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
