"""
User CRUD endpoints.
Validation runs in the dependencies (id first, then body); UserService does the rest.
"""

from fastapi import APIRouter, status

from task_manager.api.responses import success_response
from task_manager.core.dependencies import UserId, ValidUser
from task_manager.db.repositories.user_repository import UserRepository
from task_manager.db.session import DbSession
from task_manager.services.user_service import UserService

router = APIRouter()


def _get_user_service(session: DbSession) -> UserService:
    """Factory for service with repository injection."""
    return UserService(UserRepository(session))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(session: DbSession, data: ValidUser):
    svc = _get_user_service(session)
    user = await svc.create(data)
    return success_response("User created successfully", user, status_code=status.HTTP_201_CREATED)


@router.get("")
async def list_users(session: DbSession):
    """All users, newest first, with a count."""
    svc = _get_user_service(session)
    users = await svc.list_users()
    return success_response("Users retrieved successfully", users, count=len(users))


@router.get("/{user_id}")
async def get_user(session: DbSession, user_id: UserId):
    svc = _get_user_service(session)
    user = await svc.get_by_id(user_id)
    return success_response("User retrieved successfully", user)


@router.put("/{user_id}")
async def update_user(session: DbSession, user_id: UserId, data: ValidUser):
    """Full replace of name and email."""
    svc = _get_user_service(session)
    user = await svc.update(user_id, data)
    return success_response("User updated successfully", user)


@router.delete("/{user_id}")
async def delete_user(session: DbSession, user_id: UserId):
    """Delete a user. Tasks owned by the user are not removed."""
    svc = _get_user_service(session)
    await svc.delete(user_id)
    return success_response("User deleted successfully")
