"""
Audit log repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from app.models.audit import AuditLog, AuditLogCreate


class IAuditRepository(ABC):
    """Abstract interface for the audit trail."""

    @abstractmethod
    async def record(self, entry: AuditLogCreate) -> AuditLog:
        """Append an audit entry."""
        pass

    @abstractmethod
    async def list_by_entity(self, entity_id: UUID) -> list[AuditLog]:
        """List entries for an entity, newest first."""
        pass
