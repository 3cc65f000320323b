"""
Lookups shared by the scheduling operations.
"""

from uuid import UUID

from app.core.exceptions import NotFoundError
from app.interfaces.project_repository import IProjectRepository
from app.interfaces.user_repository import IUserRepository
from app.models.project import Project


async def require_project_and_users(
    project_repo: IProjectRepository,
    user_repo: IUserRepository,
    project_id: UUID,
    user_id: UUID,
    assign_by_user_id: UUID,
) -> Project:
    """
    Resolve the project and check both users exist.

    Raises:
        NotFoundError: If the project, the target user or the assigning user is missing
    """
    project = await project_repo.get_by_id(project_id)
    if not project:
        raise NotFoundError(f"Project {project_id} not found")

    if not await user_repo.get(user_id):
        raise NotFoundError(f"User {user_id} not found")

    if not await user_repo.get(assign_by_user_id):
        raise NotFoundError(f"Assigning user {assign_by_user_id} not found")

    return project
