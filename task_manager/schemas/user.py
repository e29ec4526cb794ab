"""User request/response schemas - API contract."""

from datetime import datetime

from pydantic import BaseModel


class UserCreate(BaseModel):
    """Normalized user input (name trimmed, email trimmed and lowercased). Used for create and update."""

    name: str
    email: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
