"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/mode values.
"""

from enum import Enum


class TimeBlockMode(str, Enum):
    """How a time block was produced."""

    MANUAL = "manual"
    CASCADE = "cascade"


class SeasonMode(str, Enum):
    """
    Season selector for working-hours policy.

    AUTO = derive from the policy's high-season date range
    """

    AUTO = "auto"
    NORMAL = "normal"
    HIGH = "high"


class LeaveType(str, Enum):
    """Kind of absence."""

    VACATION = "vacation"
    LICENSE = "license"
    PERMISSION = "permission"
    HOLIDAY = "holiday"


class LeaveStatus(str, Enum):
    """Approval status of a leave record."""

    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class AssignmentStatus(str, Enum):
    """Assignment status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AuditAction(str, Enum):
    """Audit log action."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class AuditEntityType(str, Enum):
    """Entity types that produce audit entries."""

    TIME_BLOCK = "time_block"
