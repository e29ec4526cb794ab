"""
FastAPI dependencies - request parsing and validation ahead of the endpoints.
Each dependency runs a validation-engine function and raises ValidationFailed before any
database work happens. Declared in the endpoint signature in the order they must run.
"""

import json
from typing import Annotated, Any
from urllib.parse import parse_qsl

from fastapi import Depends, Request

from task_manager.config import get_settings
from task_manager.core.errors import MalformedBody, PayloadTooLarge, ValidationFailed
from task_manager.core.validation import (
    validate_id_parameter,
    validate_list_query,
    validate_task_input,
    validate_task_update_input,
    validate_user_input,
)
from task_manager.schemas.task import TaskCreate, TaskListQuery, TaskUpdate
from task_manager.schemas.user import UserCreate

BODY_INVALID = "Validation failed"
QUERY_INVALID = "Invalid query parameters"
ID_PARAM_INVALID = "Invalid ID parameter. ID must be a positive integer"
USER_ID_PARAM_INVALID = "Invalid user ID parameter. User ID must be a positive integer"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def json_body(request: Request) -> dict[str, Any]:
    """Read and decode the request body: JSON, or a urlencoded form. Size is checked before decoding."""
    max_bytes = get_settings().max_body_bytes
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLarge("Request body too large")

    raw = await request.body()
    if len(raw) > max_bytes:
        raise PayloadTooLarge("Request body too large")
    if not raw.strip():
        return {}
    if request.headers.get("content-type", "").startswith(FORM_CONTENT_TYPE):
        return _form_fields(raw)
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise MalformedBody("Invalid JSON in request body") from exc
    # Arrays and scalars carry no fields; field validation reports what is missing
    return data if isinstance(data, dict) else {}


def _form_fields(raw: bytes) -> dict[str, Any]:
    # Repeated keys: the last value wins. Every value arrives as a string.
    try:
        return dict(parse_qsl(raw.decode("utf-8"), keep_blank_values=True))
    except UnicodeDecodeError as exc:
        raise MalformedBody("Invalid form data in request body") from exc


JsonBody = Annotated[dict[str, Any], Depends(json_body)]


def _require_id(raw: str, message: str) -> int:
    result = validate_id_parameter(raw)
    if not result.ok:
        raise ValidationFailed(message)
    return result.value


async def valid_user_id(user_id: str) -> int:
    return _require_id(user_id, ID_PARAM_INVALID)


async def valid_task_id(task_id: str) -> int:
    return _require_id(task_id, ID_PARAM_INVALID)


async def valid_owner_id(user_id: str) -> int:
    """userId segment of /tasks/user/{user_id}."""
    return _require_id(user_id, USER_ID_PARAM_INVALID)


async def valid_user_input(body: JsonBody) -> UserCreate:
    result = validate_user_input(body)
    if not result.ok:
        raise ValidationFailed(BODY_INVALID, result.errors)
    return result.value


async def valid_task_input(body: JsonBody) -> TaskCreate:
    result = validate_task_input(body)
    if not result.ok:
        raise ValidationFailed(BODY_INVALID, result.errors)
    return result.value


async def valid_task_update(body: JsonBody) -> TaskUpdate:
    result = validate_task_update_input(body)
    if not result.ok:
        raise ValidationFailed(BODY_INVALID, result.errors)
    return result.value


async def valid_list_query(request: Request) -> TaskListQuery:
    result = validate_list_query(
        dict(request.query_params), default_limit=get_settings().default_page_size
    )
    if not result.ok:
        raise ValidationFailed(QUERY_INVALID, result.errors)
    return result.value


UserId = Annotated[int, Depends(valid_user_id)]
TaskId = Annotated[int, Depends(valid_task_id)]
OwnerId = Annotated[int, Depends(valid_owner_id)]
ValidUser = Annotated[UserCreate, Depends(valid_user_input)]
ValidTask = Annotated[TaskCreate, Depends(valid_task_input)]
ValidTaskUpdate = Annotated[TaskUpdate, Depends(valid_task_update)]
ListQuery = Annotated[TaskListQuery, Depends(valid_list_query)]
