"""
Audit trail API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from app.api.deps import AuditRepo, CurrentUser
from app.models.audit import AuditLog

router = APIRouter()


@router.get("/{entity_id}", response_model=list[AuditLog])
async def list_audit_entries(entity_id: UUID, user: CurrentUser, repo: AuditRepo):
    """Audit entries for an entity, newest first."""
    return await repo.list_by_entity(entity_id)
