"""
Task repository - filtered, paginated reads joined with the owning user, and partial updates.

Reads use an inner join on users: a task whose user row is gone is excluded from listings
and reported as missing by find_by_id, even though the task row itself still exists.
"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import contains_eager

from task_manager.core.errors import NoFieldsToUpdateError
from task_manager.db.models.task import Task
from task_manager.db.models.user import User
from task_manager.db.repositories.base_repository import BaseRepository
from task_manager.schemas.task import TaskCreate, TaskFilters

UPDATABLE_FIELDS = ("title", "description", "status", "deadline")


def _conditions(filters: TaskFilters | None) -> list:
    """Equality predicates for the filters that are set, combined with AND by the caller."""
    if filters is None:
        return []
    conditions = []
    if filters.status:
        conditions.append(Task.status == filters.status)
    if filters.deadline:
        conditions.append(Task.deadline == filters.deadline)
    if filters.user_id:
        conditions.append(Task.user_id == filters.user_id)
    return conditions


class TaskRepository(BaseRepository[Task]):
    """Task-specific queries. Joined reads populate Task.user in the same statement."""

    def __init__(self, session):
        super().__init__(session, Task)

    def _joined(self) -> Select:
        return (
            select(Task)
            .join(User, Task.user_id == User.id)
            .options(contains_eager(Task.user))
            .execution_options(populate_existing=True)
        )

    async def create(self, data: TaskCreate) -> Task:
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status or "pending",
            deadline=data.deadline,
            user_id=data.user_id,
        )
        return await self.add(task)

    async def find_by_id(self, id: int) -> Task | None:
        result = await self.session.execute(self._joined().where(Task.id == id))
        return result.scalar_one_or_none()

    async def find_all(
        self,
        filters: TaskFilters | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Task]:
        """Newest first. offset is only applied together with limit."""
        stmt = self._joined().where(*_conditions(filters)).order_by(
            Task.created_at.desc(), Task.id.desc()
        )
        if limit:
            stmt = stmt.limit(limit)
            if offset:
                stmt = stmt.offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_count(self, filters: TaskFilters | None = None) -> int:
        """Row count for the same filters, ignoring pagination."""
        stmt = select(func.count()).select_from(Task).where(*_conditions(filters))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def update(self, id: int, changes: dict[str, Any]) -> Task | None:
        """Rewrite only the supplied fields and refresh updated_at. None if the row is gone."""
        values = {name: changes[name] for name in UPDATABLE_FIELDS if name in changes}
        if not values:
            raise NoFieldsToUpdateError("No fields to update")

        task = await self.get_by_id(id)
        if task is None:
            return None
        for name, value in values.items():
            setattr(task, name, value)
        task.updated_at = func.now()
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def delete(self, id: int) -> int | None:
        return await self.delete_by_id(id)
