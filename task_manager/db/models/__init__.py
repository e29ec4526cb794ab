from task_manager.db.models.task import Task
from task_manager.db.models.user import User

__all__ = ["Task", "User"]
