"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.assignment_repository import IAssignmentRepository
from app.interfaces.audit_repository import IAuditRepository
from app.interfaces.auth_provider import IAuthProvider
from app.interfaces.config_repository import IConfigRepository
from app.interfaces.leave_repository import ILeaveRepository
from app.interfaces.project_repository import IProjectRepository
from app.interfaces.time_block_repository import ITimeBlockRepository
from app.interfaces.user_repository import IUserRepository

__all__ = [
    "IAssignmentRepository",
    "IAuditRepository",
    "IAuthProvider",
    "IConfigRepository",
    "ILeaveRepository",
    "IProjectRepository",
    "ITimeBlockRepository",
    "IUserRepository",
]
