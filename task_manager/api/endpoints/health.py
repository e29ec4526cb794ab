"""
Health check and API index - for load balancers and humans.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from task_manager.api.responses import success_response
from task_manager.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("/health")
async def health():
    """Liveness: is the process up?"""
    return success_response(
        "Server is running properly",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.environment,
    )


@router.get("/")
async def root():
    return success_response(
        f"Welcome to {settings.app_name}",
        version=settings.version,
        endpoints={"users": "/api/users", "tasks": "/api/tasks", "health": "/health"},
    )
