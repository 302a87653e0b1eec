"""
Health check endpoint.
Verifies storage connectivity.
"""
from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_console
from app.services.console import ConsoleSession

router = APIRouter()


@router.get("")
def health_check(console: ConsoleSession = Depends(get_console)):
    """
    Health check endpoint.
    Returns status of the storage connection. Read-only: the cached
    bucket list and the selection are left alone.
    """
    health_status = {
        "status": "healthy",
        "storage": "unknown"
    }

    try:
        health_status["buckets"] = console.directory.ping()
        health_status["storage"] = "connected"
    except Exception as e:
        health_status["storage"] = f"error: {str(e)}"
        health_status["status"] = "unhealthy"

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
