# Repository pattern: data access behind a session injected by the caller

from task_manager.db.repositories.task_repository import TaskRepository
from task_manager.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "TaskRepository"]
