"""
User service - orchestrates validation output, existence checks and repository calls.
Raises ApiErrors; endpoints only format the success envelope.
"""

import logging

from task_manager.core.errors import Conflict, DuplicateEmailError, NotFound
from task_manager.db.repositories.user_repository import UserRepository
from task_manager.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
EMAIL_TAKEN = "A user with this email already exists"


class UserService:
    """Handles all user use cases."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def create(self, data: UserCreate) -> UserResponse:
        try:
            user = await self.user_repo.create(data.name, data.email)
        except DuplicateEmailError as exc:
            raise Conflict(EMAIL_TAKEN) from exc
        logger.info("Created user id=%s", user.id)
        return UserResponse.model_validate(user)

    async def list_users(self) -> list[UserResponse]:
        users = await self.user_repo.find_all()
        return [UserResponse.model_validate(u) for u in users]

    async def get_by_id(self, id: int) -> UserResponse:
        user = await self.user_repo.find_by_id(id)
        if user is None:
            raise NotFound(USER_NOT_FOUND)
        return UserResponse.model_validate(user)

    async def update(self, id: int, data: UserCreate) -> UserResponse:
        if await self.user_repo.find_by_id(id) is None:
            raise NotFound(USER_NOT_FOUND)
        try:
            user = await self.user_repo.update(id, data.name, data.email)
        except DuplicateEmailError as exc:
            raise Conflict(EMAIL_TAKEN) from exc
        if user is None:
            # Deleted between the check and the update
            raise NotFound(USER_NOT_FOUND)
        logger.info("Updated user id=%s", id)
        return UserResponse.model_validate(user)

    async def delete(self, id: int) -> None:
        if await self.user_repo.find_by_id(id) is None:
            raise NotFound(USER_NOT_FOUND)
        await self.user_repo.delete(id)
        logger.info("Deleted user id=%s", id)
