"""Pydantic models (schemas) for the application."""

from app.models.enums import (
    AssignmentStatus,
    AuditAction,
    AuditEntityType,
    LeaveStatus,
    LeaveType,
    SeasonMode,
    TimeBlockMode,
)
from app.models.assignment import Assignment, AssignmentCreate
from app.models.audit import AuditLog, AuditLogCreate
from app.models.leave import Leave, LeaveCreate
from app.models.project import Project, ProjectCreate
from app.models.time_block import (
    GeneratedTimeBlock,
    TimeBlock,
    TimeBlockChangeSet,
    TimeBlockCreate,
    TimeBlockInput,
    TimeBlockUpdate,
    TimeBlockWithProject,
)
from app.models.user import UserAccount, UserCreate
from app.models.working_hours import EffectivePolicy, SeasonConfig, WorkingHoursPolicy

__all__ = [
    # Enums
    "AssignmentStatus",
    "AuditAction",
    "AuditEntityType",
    "LeaveStatus",
    "LeaveType",
    "SeasonMode",
    "TimeBlockMode",
    # Models
    "Assignment",
    "AssignmentCreate",
    "AuditLog",
    "AuditLogCreate",
    "Leave",
    "LeaveCreate",
    "Project",
    "ProjectCreate",
    "GeneratedTimeBlock",
    "TimeBlock",
    "TimeBlockChangeSet",
    "TimeBlockCreate",
    "TimeBlockInput",
    "TimeBlockUpdate",
    "TimeBlockWithProject",
    "UserAccount",
    "UserCreate",
    "EffectivePolicy",
    "SeasonConfig",
    "WorkingHoursPolicy",
]
