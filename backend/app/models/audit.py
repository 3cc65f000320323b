"""
Audit log models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.enums import AuditAction, AuditEntityType


class AuditLogCreate(BaseModel):
    """One audit event."""

    entity_type: AuditEntityType
    entity_id: UUID
    action: AuditAction
    changed_by: UUID
    old_values: Optional[dict[str, Any]] = None
    new_values: Optional[dict[str, Any]] = None
    changed_fields: Optional[list[str]] = None
    metadata_info: dict[str, Any] = Field(default_factory=dict)


class AuditLog(AuditLogCreate):
    """Stored audit event."""

    id: UUID
    changed_at: datetime

    class Config:
        from_attributes = True
