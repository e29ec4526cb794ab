from task_manager.schemas.common import PaginationMeta
from task_manager.schemas.task import (
    TASK_STATUSES,
    TaskCreate,
    TaskFilters,
    TaskListQuery,
    TaskOwner,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
    TaskWithUserResponse,
)
from task_manager.schemas.user import UserCreate, UserResponse

__all__ = [
    "PaginationMeta",
    "TASK_STATUSES",
    "TaskCreate",
    "TaskFilters",
    "TaskListQuery",
    "TaskOwner",
    "TaskResponse",
    "TaskStatus",
    "TaskUpdate",
    "TaskWithUserResponse",
    "UserCreate",
    "UserResponse",
]
