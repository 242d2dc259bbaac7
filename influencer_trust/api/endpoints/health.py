"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter

from ...infrastructure.dependencies import get_service_container

router = APIRouter(tags=["health"])


@router.get("/ping")
async def ping() -> Dict[str, str]:
    """Liveness check."""
    return {"message": "pong"}


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Check the health of the oracle and post source.

    Returns:
        Availability of each external collaborator
    """
    return {
        "status": "healthy",
        **get_service_container().status(),
    }
