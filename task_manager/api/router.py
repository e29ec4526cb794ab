"""
API router - aggregates the resource endpoint modules under /api.
"""

from fastapi import APIRouter

from task_manager.api.endpoints import tasks, users

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])

AVAILABLE_ROUTES = [
    "GET /",
    "GET /health",
    "GET /api/users",
    "POST /api/users",
    "GET /api/users/:id",
    "PUT /api/users/:id",
    "DELETE /api/users/:id",
    "GET /api/tasks",
    "POST /api/tasks",
    "GET /api/tasks/:id",
    "PUT /api/tasks/:id",
    "DELETE /api/tasks/:id",
    "GET /api/tasks/user/:userId",
]
