"""
Console status endpoint: status line, log and dashboard link.
"""
from fastapi import APIRouter, Depends

from app.api.dependencies import get_console
from app.schemas.console import ConsoleStatusResponse, StatusResponse, LogEntryResponse
from app.services.console import ConsoleSession

router = APIRouter()


@router.get("/status", response_model=ConsoleStatusResponse)
def console_status(console: ConsoleSession = Depends(get_console)):
    bucket = console.selected_bucket
    return ConsoleStatusResponse(
        status=StatusResponse.model_validate(console.status.status),
        log=[LogEntryResponse.model_validate(e) for e in console.status.entries()],
        selected_bucket=bucket,
        staged_count=len(console.staged),
        studio_url=console.studio_link(bucket),
    )
