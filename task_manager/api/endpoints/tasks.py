"""
Task endpoints - CRUD, filtered/paginated listing, listing per user.
Thin controllers: dependencies validate, TaskService sequences the work.
"""

from fastapi import APIRouter, status

from task_manager.api.responses import success_response
from task_manager.core.dependencies import ListQuery, OwnerId, TaskId, ValidTask, ValidTaskUpdate
from task_manager.db.repositories.task_repository import TaskRepository
from task_manager.db.repositories.user_repository import UserRepository
from task_manager.db.session import DbSession
from task_manager.services.task_service import TaskService

router = APIRouter()


def _get_task_service(session: DbSession) -> TaskService:
    """Factory for service with repository injection."""
    return TaskService(TaskRepository(session), UserRepository(session))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(session: DbSession, data: ValidTask):
    """Create a task for an existing user. 404 if the user does not exist."""
    svc = _get_task_service(session)
    task = await svc.create(data)
    return success_response("Task created successfully", task, status_code=status.HTTP_201_CREATED)


@router.get("")
async def list_tasks(session: DbSession, query: ListQuery):
    """GET /api/tasks?status=&deadline=&user_id=&page=1&limit=10"""
    svc = _get_task_service(session)
    tasks, pagination = await svc.list_tasks(query)
    return success_response("Tasks retrieved successfully", tasks, pagination=pagination)


@router.get("/user/{user_id}")
async def list_user_tasks(session: DbSession, user_id: OwnerId, query: ListQuery):
    svc = _get_task_service(session)
    tasks, pagination = await svc.list_user_tasks(user_id, query)
    return success_response("User tasks retrieved successfully", tasks, pagination=pagination)


@router.get("/{task_id}")
async def get_task(session: DbSession, task_id: TaskId):
    svc = _get_task_service(session)
    task = await svc.get_by_id(task_id)
    return success_response("Task retrieved successfully", task)


@router.put("/{task_id}")
async def update_task(session: DbSession, task_id: TaskId, data: ValidTaskUpdate):
    """Partial update: only the supplied fields change."""
    svc = _get_task_service(session)
    task = await svc.update(task_id, data)
    return success_response("Task updated successfully", task)


@router.delete("/{task_id}")
async def delete_task(session: DbSession, task_id: TaskId):
    svc = _get_task_service(session)
    await svc.delete(task_id)
    return success_response("Task deleted successfully")
