"""
Pydantic schemas for the console status surface.
"""
from pydantic import BaseModel
from typing import Any, List, Optional
from datetime import datetime
from app.services.status_board import StatusKind


class StatusResponse(BaseModel):
    kind: StatusKind
    text: str

    class Config:
        from_attributes = True


class LogEntryResponse(BaseModel):
    timestamp: datetime
    message: str
    detail: Optional[Any] = None

    class Config:
        from_attributes = True


class ConsoleStatusResponse(BaseModel):
    """Status line, recent log entries, selection and dashboard link."""
    status: StatusResponse
    log: List[LogEntryResponse]
    selected_bucket: Optional[str] = None
    staged_count: int
    studio_url: Optional[str] = None
