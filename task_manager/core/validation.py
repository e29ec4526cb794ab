"""
Validation engine - pure functions, no I/O.
Each validator inspects raw input (parsed JSON body, query string, path segment) and returns
a ValidationResult: the normalized value when valid, otherwise every violated rule in field order.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Generic, TypeVar

from task_manager.schemas.task import TASK_STATUSES, TaskCreate, TaskListQuery, TaskUpdate
from task_manager.schemas.user import UserCreate

T = TypeVar("T")

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# ASCII digits with an optional all-zero fraction: "7", "7.0"
NUMERIC_ID_RE = re.compile(r"[0-9]+(?:\.0*)?")

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
MAX_PAGE_LIMIT = 100
DEFAULT_PAGE_LIMIT = 10

_STATUS_LIST = ", ".join(TASK_STATUSES)

# Messages
NAME_REQUIRED = "Name is required and must be a non-empty string"
NAME_TOO_LONG = f"Name must be less than {NAME_MAX_LENGTH} characters"
EMAIL_REQUIRED = "Email is required and must be a string"
EMAIL_INVALID = "Email must be a valid email address"
EMAIL_TOO_LONG = f"Email must be less than {EMAIL_MAX_LENGTH} characters"
TITLE_REQUIRED = "Title is required and must be a non-empty string"
TITLE_EMPTY = "Title must be a non-empty string"
TITLE_TOO_LONG = f"Title must be less than {TITLE_MAX_LENGTH} characters"
DESCRIPTION_NOT_STRING = "Description must be a string"
DESCRIPTION_TOO_LONG = f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters"
STATUS_INVALID = f"Status must be one of: {_STATUS_LIST}"
DEADLINE_INVALID = "Deadline must be a valid date in YYYY-MM-DD format"
USER_ID_REQUIRED = "User ID is required"
USER_ID_INVALID = "User ID must be a positive integer"
UPDATE_EMPTY = "At least one field (title, description, status, deadline) must be provided for update"
STATUS_FILTER_INVALID = f"Status filter must be one of: {_STATUS_LIST}"
DEADLINE_FILTER_INVALID = "Deadline filter must be a valid date in YYYY-MM-DD format"
USER_ID_FILTER_INVALID = "User ID filter must be a positive integer"
PAGE_INVALID = "Page must be a positive integer"
LIMIT_INVALID = f"Limit must be a positive integer between 1 and {MAX_PAGE_LIMIT}"
ID_INVALID = "ID must be a positive integer"


@dataclass
class ValidationResult(Generic[T]):
    value: T | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _blank(value: Any) -> bool:
    """Missing-ish values: None, empty string, zero, False."""
    return value is None or value == "" or value is False or value == 0


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def parse_positive_int(value: Any) -> int | None:
    """Coerce numbers and numeric strings ("7", "7.0") to a positive int. None if not possible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not NUMERIC_ID_RE.fullmatch(text):
            return None
        number = int(text.split(".")[0])
    else:
        return None
    return number if number > 0 else None


def parse_date(value: Any) -> date | None:
    """Parse an ISO date ("2024-12-31") or ISO datetime string. None if unparseable."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def validate_user_input(raw: Mapping[str, Any]) -> ValidationResult[UserCreate]:
    """name + email, both required. Email is trimmed and lowercased."""
    errors: list[str] = []
    name = raw.get("name")
    email = raw.get("email")

    if not _non_empty_str(name):
        errors.append(NAME_REQUIRED)
    elif len(name.strip()) > NAME_MAX_LENGTH:
        errors.append(NAME_TOO_LONG)

    if not isinstance(email, str) or email == "":
        errors.append(EMAIL_REQUIRED)
    elif not EMAIL_RE.fullmatch(email.strip()):
        errors.append(EMAIL_INVALID)
    elif len(email.strip()) > EMAIL_MAX_LENGTH:
        errors.append(EMAIL_TOO_LONG)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(value=UserCreate(name=name.strip(), email=email.strip().lower()))


def _check_optional_task_fields(raw: Mapping[str, Any], errors: list[str]) -> None:
    """description / status / deadline rules shared by create and update. Key present = supplied."""
    if "description" in raw:
        description = raw["description"]
        if not isinstance(description, str):
            errors.append(DESCRIPTION_NOT_STRING)
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            errors.append(DESCRIPTION_TOO_LONG)

    if "status" in raw:
        status = raw["status"]
        if not isinstance(status, str) or status not in TASK_STATUSES:
            errors.append(STATUS_INVALID)

    # null clears the deadline
    if "deadline" in raw and raw["deadline"] is not None and parse_date(raw["deadline"]) is None:
        errors.append(DEADLINE_INVALID)


def _normalized_optional_fields(raw: Mapping[str, Any]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if "description" in raw:
        data["description"] = raw["description"].strip() or None
    if "status" in raw:
        data["status"] = raw["status"]
    if "deadline" in raw:
        data["deadline"] = None if raw["deadline"] is None else parse_date(raw["deadline"])
    return data


def validate_task_input(raw: Mapping[str, Any]) -> ValidationResult[TaskCreate]:
    """Creation mode: title and user_id required; description, status, deadline optional."""
    errors: list[str] = []
    title = raw.get("title")

    if not _non_empty_str(title):
        errors.append(TITLE_REQUIRED)
    elif len(title.strip()) > TITLE_MAX_LENGTH:
        errors.append(TITLE_TOO_LONG)

    _check_optional_task_fields(raw, errors)

    user_id = raw.get("user_id")
    if _blank(user_id):
        errors.append(USER_ID_REQUIRED)
    elif parse_positive_int(user_id) is None:
        errors.append(USER_ID_INVALID)

    if errors:
        return ValidationResult(errors=errors)

    data = _normalized_optional_fields(raw)
    return ValidationResult(
        value=TaskCreate(title=title.strip(), user_id=parse_positive_int(user_id), **data)
    )


def validate_task_update_input(raw: Mapping[str, Any]) -> ValidationResult[TaskUpdate]:
    """Update mode: every field optional, but at least one of the four must carry a value.

    user_id is ignored here; ownership cannot be changed through an update.
    """
    errors: list[str] = []

    if all(_blank(raw.get(name)) for name in ("title", "description", "status", "deadline")):
        errors.append(UPDATE_EMPTY)

    if "title" in raw:
        title = raw["title"]
        if not _non_empty_str(title):
            errors.append(TITLE_EMPTY)
        elif len(title.strip()) > TITLE_MAX_LENGTH:
            errors.append(TITLE_TOO_LONG)

    _check_optional_task_fields(raw, errors)

    if errors:
        return ValidationResult(errors=errors)

    data = _normalized_optional_fields(raw)
    if "title" in raw:
        data["title"] = raw["title"].strip()
    return ValidationResult(value=TaskUpdate(**data))


def validate_list_query(
    raw: Mapping[str, Any], default_limit: int = DEFAULT_PAGE_LIMIT
) -> ValidationResult[TaskListQuery]:
    """Filters (status, deadline, user_id) and pagination (page, limit). Empty values are ignored."""
    errors: list[str] = []
    status = raw.get("status")
    deadline = raw.get("deadline")
    user_id = raw.get("user_id")
    page = raw.get("page")
    limit = raw.get("limit")

    if status and status not in TASK_STATUSES:
        errors.append(STATUS_FILTER_INVALID)

    if deadline and parse_date(deadline) is None:
        errors.append(DEADLINE_FILTER_INVALID)

    if user_id and parse_positive_int(user_id) is None:
        errors.append(USER_ID_FILTER_INVALID)

    if page and parse_positive_int(page) is None:
        errors.append(PAGE_INVALID)

    if limit:
        parsed_limit = parse_positive_int(limit)
        if parsed_limit is None or parsed_limit > MAX_PAGE_LIMIT:
            errors.append(LIMIT_INVALID)

    if errors:
        return ValidationResult(errors=errors)

    return ValidationResult(
        value=TaskListQuery(
            status=status or None,
            deadline=parse_date(deadline) if deadline else None,
            user_id=parse_positive_int(user_id) if user_id else None,
            page=parse_positive_int(page) if page else 1,
            limit=parse_positive_int(limit) if limit else default_limit,
        )
    )


def validate_id_parameter(raw: Any) -> ValidationResult[int]:
    """Path identifiers (user id, task id, userId segment)."""
    value = parse_positive_int(raw)
    if value is None:
        return ValidationResult(errors=[ID_INVALID])
    return ValidationResult(value=value)
