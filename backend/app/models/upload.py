"""
Upload outcome models. Produced per upload attempt, never persisted.
"""
import enum
from dataclasses import dataclass, field
from typing import List, Optional


class UploadOutcome(str, enum.Enum):
    """Outcome of one staged file within a batch."""
    UPLOADED = "uploaded"
    SKIPPED = "skipped"    # Not an accepted image type, no remote call made
    FAILED = "failed"      # Remote upload returned an error


@dataclass(frozen=True)
class UploadResult:
    filename: str
    content_type: str
    outcome: UploadOutcome
    key: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == UploadOutcome.UPLOADED


@dataclass
class UploadBatchResult:
    """All outcomes of one upload attempt, in staged-file order."""
    bucket: str
    results: List[UploadResult] = field(default_factory=list)

    @property
    def uploaded(self) -> List[UploadResult]:
        return [r for r in self.results if r.outcome == UploadOutcome.UPLOADED]

    @property
    def not_uploaded(self) -> List[UploadResult]:
        return [r for r in self.results if r.outcome != UploadOutcome.UPLOADED]

    @property
    def skipped(self) -> List[UploadResult]:
        return [r for r in self.results if r.outcome == UploadOutcome.SKIPPED]

    @property
    def failed(self) -> List[UploadResult]:
        return [r for r in self.results if r.outcome == UploadOutcome.FAILED]

    @property
    def succeeded(self) -> bool:
        return bool(self.uploaded)

    @property
    def status_text(self) -> str:
        if self.succeeded:
            return f"Uploaded {len(self.uploaded)} file(s) to {self.bucket}"
        return f"Nothing uploaded. {len(self.not_uploaded)} file(s) skipped/failed."
