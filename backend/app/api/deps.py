"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from app.core.config import get_settings
from app.interfaces.assignment_repository import IAssignmentRepository
from app.interfaces.audit_repository import IAuditRepository
from app.interfaces.auth_provider import IAuthProvider, User
from app.interfaces.config_repository import IConfigRepository
from app.interfaces.leave_repository import ILeaveRepository
from app.interfaces.project_repository import IProjectRepository
from app.interfaces.time_block_repository import ITimeBlockRepository
from app.interfaces.user_repository import IUserRepository
from app.services.audit_service import AuditService
from app.services.cascade_simulator import CascadeSimulator
from app.services.fixed_block_processor import FixedBlockProcessor
from app.services.utilization_calculator import UtilizationCalculator


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_project_repository() -> IProjectRepository:
    """Get project repository instance."""
    from app.infrastructure.local.project_repository import SqliteProjectRepository
    return SqliteProjectRepository()


@lru_cache()
def get_user_repository() -> IUserRepository:
    """Get user repository instance."""
    from app.infrastructure.local.user_repository import SqliteUserRepository
    return SqliteUserRepository()


@lru_cache()
def get_assignment_repository() -> IAssignmentRepository:
    """Get assignment repository instance."""
    from app.infrastructure.local.assignment_repository import SqliteAssignmentRepository
    return SqliteAssignmentRepository()


@lru_cache()
def get_time_block_repository() -> ITimeBlockRepository:
    """Get time block repository instance."""
    from app.infrastructure.local.time_block_repository import SqliteTimeBlockRepository
    return SqliteTimeBlockRepository()


@lru_cache()
def get_leave_repository() -> ILeaveRepository:
    """Get leave repository instance."""
    from app.infrastructure.local.leave_repository import SqliteLeaveRepository
    return SqliteLeaveRepository()


@lru_cache()
def get_config_repository() -> IConfigRepository:
    """Get configuration repository instance."""
    from app.infrastructure.local.config_repository import SqliteConfigRepository
    return SqliteConfigRepository()


@lru_cache()
def get_audit_repository() -> IAuditRepository:
    """Get audit log repository instance."""
    from app.infrastructure.local.audit_repository import SqliteAuditRepository
    return SqliteAuditRepository()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    if settings.AUTH_PROVIDER == "local":
        from app.infrastructure.auth.local_auth import LocalAuthProvider

        return LocalAuthProvider(settings, get_user_repository())

    from app.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=False)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ProjectRepo = Annotated[IProjectRepository, Depends(get_project_repository)]
UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
AssignmentRepo = Annotated[IAssignmentRepository, Depends(get_assignment_repository)]
TimeBlockRepo = Annotated[ITimeBlockRepository, Depends(get_time_block_repository)]
LeaveRepo = Annotated[ILeaveRepository, Depends(get_leave_repository)]
ConfigRepo = Annotated[IConfigRepository, Depends(get_config_repository)]
AuditRepo = Annotated[IAuditRepository, Depends(get_audit_repository)]


# ===========================================
# Service Dependencies
# ===========================================


def get_fixed_block_processor(
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    assignment_repo: AssignmentRepo,
    time_block_repo: TimeBlockRepo,
    config_repo: ConfigRepo,
    audit_repo: AuditRepo,
) -> FixedBlockProcessor:
    return FixedBlockProcessor(
        project_repo,
        user_repo,
        assignment_repo,
        time_block_repo,
        config_repo,
        AuditService(audit_repo),
    )


def get_cascade_simulator(
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    time_block_repo: TimeBlockRepo,
    leave_repo: LeaveRepo,
    config_repo: ConfigRepo,
) -> CascadeSimulator:
    return CascadeSimulator(project_repo, user_repo, time_block_repo, leave_repo, config_repo)


def get_utilization_calculator(time_block_repo: TimeBlockRepo) -> UtilizationCalculator:
    return UtilizationCalculator(time_block_repo)


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With authentication disabled every request runs as the development user.
    """
    if not auth_provider.is_enabled():
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


CurrentUser = Annotated[User, Depends(get_current_user)]
FixedBlocks = Annotated[FixedBlockProcessor, Depends(get_fixed_block_processor)]
Cascade = Annotated[CascadeSimulator, Depends(get_cascade_simulator)]
Utilization = Annotated[UtilizationCalculator, Depends(get_utilization_calculator)]
