"""
Audit trail recording for scheduling changes.

Audit writes are best-effort: a failure is logged and never propagates, so
it cannot undo a scheduling write that already committed.
"""

from __future__ import annotations

from typing import Any, Callable, Optional
from uuid import UUID

from app.core.logger import setup_logger
from app.interfaces.audit_repository import IAuditRepository
from app.models.audit import AuditLogCreate
from app.models.enums import AuditAction, AuditEntityType

logger = setup_logger(__name__)


def _summarize_time_blocks(action: AuditAction, values: dict[str, Any]) -> str:
    hours = values.get("hours", 0.0)
    user_id = values.get("user_id")
    if action == AuditAction.CREATE:
        return f"{hours:g} hours assigned to user {user_id}"
    if action == AuditAction.DELETE:
        return f"{hours:g} hours removed from user {user_id}"
    return f"Assigned hours of user {user_id} are now {hours:g}"


_SUMMARIES: dict[AuditEntityType, Callable[[AuditAction, dict[str, Any]], str]] = {
    AuditEntityType.TIME_BLOCK: _summarize_time_blocks,
}


class AuditService:
    """Records create/update/delete events without failing the caller."""

    def __init__(self, audit_repo: IAuditRepository):
        self._audit_repo = audit_repo

    async def record_create(
        self,
        entity_type: AuditEntityType,
        entity_id: UUID,
        changed_by: UUID,
        new_entity: dict[str, Any],
    ) -> None:
        await self._record(
            AuditLogCreate(
                entity_type=entity_type,
                entity_id=entity_id,
                action=AuditAction.CREATE,
                changed_by=changed_by,
                new_values=new_entity,
            ),
            new_entity,
        )

    async def record_update(
        self,
        entity_type: AuditEntityType,
        entity_id: UUID,
        changed_by: UUID,
        old_snapshot: dict[str, Any],
        new_snapshot: dict[str, Any],
        compare_fields: bool = True,
    ) -> None:
        """
        Record an update.

        With `compare_fields` off both snapshots are stored as given instead of
        being reduced to the fields that differ.
        """
        old_values, new_values = old_snapshot, new_snapshot
        changed_fields: Optional[list[str]] = None
        if compare_fields:
            changed_fields = sorted(
                key
                for key in old_snapshot.keys() | new_snapshot.keys()
                if old_snapshot.get(key) != new_snapshot.get(key)
            )
            old_values = {key: old_snapshot.get(key) for key in changed_fields}
            new_values = {key: new_snapshot.get(key) for key in changed_fields}

        await self._record(
            AuditLogCreate(
                entity_type=entity_type,
                entity_id=entity_id,
                action=AuditAction.UPDATE,
                changed_by=changed_by,
                old_values=old_values,
                new_values=new_values,
                changed_fields=changed_fields,
            ),
            new_snapshot,
        )

    async def record_delete(
        self,
        entity_type: AuditEntityType,
        entity_id: UUID,
        changed_by: UUID,
        deleted_entity: dict[str, Any],
    ) -> None:
        await self._record(
            AuditLogCreate(
                entity_type=entity_type,
                entity_id=entity_id,
                action=AuditAction.DELETE,
                changed_by=changed_by,
                old_values=deleted_entity,
            ),
            deleted_entity,
        )

    async def _record(self, entry: AuditLogCreate, values: dict[str, Any]) -> None:
        entry.metadata_info["summary"] = _SUMMARIES[entry.entity_type](entry.action, values)
        try:
            await self._audit_repo.record(entry)
        except Exception:
            logger.exception(
                f"Failed to record {entry.action.value} audit for "
                f"{entry.entity_type.value} {entry.entity_id}"
            )
