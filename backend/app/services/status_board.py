"""
Status line and event log of the console.

The status line holds the latest outcome (info/success/warning/error).
The log is a bounded, append-only list of timestamped entries that the
browser renders as-is. Every entry is also sent to the JSON logger.
"""
import enum
import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

logger = logging.getLogger("app.console")


class StatusKind(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    kind: StatusKind
    text: str


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    message: str
    detail: Optional[Any] = None


class StatusBoard:
    """Holds the current status message and the recent log entries."""

    def __init__(self, max_entries: int = 500):
        self._status = StatusMessage(StatusKind.INFO, "")
        self._entries = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def status(self) -> StatusMessage:
        return self._status

    def set_status(self, kind: StatusKind, text: str = "") -> StatusMessage:
        self._status = StatusMessage(StatusKind(kind), text or "")
        return self._status

    def log(self, message: str, detail: Optional[Any] = None) -> LogEntry:
        entry = LogEntry(timestamp=datetime.now(timezone.utc), message=message, detail=detail)
        with self._lock:
            self._entries.append(entry)
        extra = {"event": "console_log"}
        if detail is not None:
            extra["detail"] = detail
        logger.info(message, extra=extra)
        return entry

    def entries(self) -> List[LogEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        self._status = StatusMessage(StatusKind.INFO, "")
