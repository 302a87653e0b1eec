"""
Upload staging.

Picker selections and drag-and-drop both end up here with the same
semantics: the new set replaces the old one. Content types are not
checked here; only files over the bucket size limit are refused.
"""
import logging
from typing import BinaryIO, Iterable

from app.errors import ValidationError
from app.models.media import StagedFile, StagedSet, StagingSource
from app.utils.logging import log_files_staged
from app.utils.metrics import files_staged_total

logger = logging.getLogger(__name__)


def stage(files: Iterable[StagedFile], source: StagingSource = StagingSource.PICKER) -> StagedSet:
    """Build the staged set that replaces whatever was staged before."""
    source = StagingSource(source)
    staged = StagedSet(files=tuple(files), source=source)
    files_staged_total.labels(source=source.value).inc(len(staged))
    log_files_staged(logger, count=len(staged), source=source.value)
    return staged


def staged_status_text(staged: StagedSet) -> str:
    return f"{len(staged)} file(s) staged for upload"


def clear() -> StagedSet:
    return StagedSet()


def read_staged_file(filename: str, content_type: str, stream: BinaryIO, max_bytes: int) -> StagedFile:
    """
    Read one incoming file into a StagedFile, reading at most max_bytes + 1.

    Raises:
        ValidationError: If the file is larger than max_bytes
    """
    data = stream.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(
            f"File too large: {filename}",
            {"filename": filename, "max_bytes": max_bytes},
        )
    return StagedFile(filename=filename, content_type=content_type, data=data)
