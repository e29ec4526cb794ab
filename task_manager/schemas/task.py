"""Task request/response schemas - REST API contract."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


TASK_STATUSES = [s.value for s in TaskStatus]


class TaskCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    deadline: date | None = None
    user_id: int


class TaskUpdate(BaseModel):
    """Partial update. Only fields explicitly set (model_fields_set) are written."""

    model_config = ConfigDict(use_enum_values=True)

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    deadline: date | None = None

    def changes(self) -> dict:
        """Field name -> new value, for supplied fields only. description may be None (cleared)."""
        return self.model_dump(exclude_unset=True)


class TaskFilters(BaseModel):
    """Equality predicates combined with AND. None means no predicate."""

    model_config = ConfigDict(use_enum_values=True)

    status: TaskStatus | None = None
    deadline: date | None = None
    user_id: int | None = None


class TaskListQuery(TaskFilters):
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def filters(self, **overrides) -> TaskFilters:
        data = {"status": self.status, "deadline": self.deadline, "user_id": self.user_id}
        data.update(overrides)
        return TaskFilters(**data)


class TaskResponse(BaseModel):
    """Flat task row, as returned by create/update."""

    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    deadline: date | None = None
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskOwner(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class TaskWithUserResponse(BaseModel):
    """Task joined with the owning user's current id/name/email."""

    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    deadline: date | None = None
    created_at: datetime
    updated_at: datetime
    user: TaskOwner

    model_config = {"from_attributes": True}
