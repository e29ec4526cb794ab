"""
Task service - sequencing for task use cases.
validate (done by the endpoint dependencies) -> existence check -> repository -> response model.
"""

import logging

from task_manager.core.errors import NoFieldsToUpdateError, NotFound, ValidationFailed
from task_manager.core.pagination import build_pagination_meta
from task_manager.core.validation import UPDATE_EMPTY
from task_manager.db.models.task import Task
from task_manager.db.repositories.task_repository import TaskRepository
from task_manager.db.repositories.user_repository import UserRepository
from task_manager.schemas.common import PaginationMeta
from task_manager.schemas.task import (
    TaskCreate,
    TaskListQuery,
    TaskResponse,
    TaskUpdate,
    TaskWithUserResponse,
)

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"
USER_NOT_FOUND = "User not found"
ASSIGNED_USER_NOT_FOUND = "Assigned user not found"


def _task_to_response(task: Task) -> TaskWithUserResponse:
    """Map a joined row (Task.user loaded) to the API shape with embedded owner."""
    return TaskWithUserResponse.model_validate(task)


class TaskService:
    """Handles all task use cases: CRUD, filtered listings, per-user listings."""

    def __init__(self, task_repo: TaskRepository, user_repo: UserRepository):
        self.task_repo = task_repo
        self.user_repo = user_repo

    async def create(self, data: TaskCreate) -> TaskResponse:
        if not await self.user_repo.exists(data.user_id):
            raise NotFound(ASSIGNED_USER_NOT_FOUND)
        task = await self.task_repo.create(data)
        logger.info("Created task id=%s for user id=%s", task.id, task.user_id)
        return TaskResponse.model_validate(task)

    async def list_tasks(
        self, query: TaskListQuery, user_id: int | None = None
    ) -> tuple[list[TaskWithUserResponse], PaginationMeta]:
        """One page of tasks plus pagination metadata. user_id, when given, overrides the query filter."""
        filters = query.filters(user_id=user_id) if user_id is not None else query.filters()
        # A single AsyncSession cannot run statements concurrently; both reads are independent.
        tasks = await self.task_repo.find_all(filters, limit=query.limit, offset=query.offset)
        total_count = await self.task_repo.get_count(filters)
        meta = build_pagination_meta(query.page, query.limit, total_count)
        return [_task_to_response(t) for t in tasks], meta

    async def list_user_tasks(
        self, user_id: int, query: TaskListQuery
    ) -> tuple[list[TaskWithUserResponse], PaginationMeta]:
        if not await self.user_repo.exists(user_id):
            raise NotFound(USER_NOT_FOUND)
        return await self.list_tasks(query, user_id=user_id)

    async def get_by_id(self, id: int) -> TaskWithUserResponse:
        task = await self.task_repo.find_by_id(id)
        if task is None:
            raise NotFound(TASK_NOT_FOUND)
        return _task_to_response(task)

    async def update(self, id: int, data: TaskUpdate) -> TaskWithUserResponse:
        """Partial update, then re-read through the join for the response."""
        if not await self.task_repo.exists(id):
            raise NotFound(TASK_NOT_FOUND)
        try:
            updated = await self.task_repo.update(id, data.changes())
        except NoFieldsToUpdateError as exc:
            raise ValidationFailed("Validation failed", [UPDATE_EMPTY]) from exc
        task = await self.task_repo.find_by_id(id) if updated is not None else None
        if task is None:
            raise NotFound(TASK_NOT_FOUND)
        logger.info("Updated task id=%s fields=%s", id, sorted(data.changes()))
        return _task_to_response(task)

    async def delete(self, id: int) -> None:
        if not await self.task_repo.exists(id):
            raise NotFound(TASK_NOT_FOUND)
        await self.task_repo.delete(id)
        logger.info("Deleted task id=%s", id)
