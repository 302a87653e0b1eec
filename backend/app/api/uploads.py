"""
Staging and upload endpoints.

Flow:
1. POST /uploads/staged - Stage files from the picker or a drop (replaces the previous set)
2. POST /uploads - Upload the staged set to the selected bucket

Uploads go through the server so the privileged storage credentials
never reach the browser.
"""
from typing import List

from fastapi import APIRouter, Depends, File, Query, UploadFile

from app.api.dependencies import get_console
from app.models.media import StagedSet, StagingSource
from app.schemas.upload import (
    StagedFileResponse,
    StagedSetResponse,
    UploadResultResponse,
    UploadBatchResponse,
)
from app.services.console import ConsoleSession
from app.services.staging import read_staged_file, staged_status_text
from app.storage.memory import parse_size_limit

router = APIRouter()


def _staged_response(staged: StagedSet) -> StagedSetResponse:
    return StagedSetResponse(
        files=[StagedFileResponse.model_validate(f) for f in staged],
        source=staged.source,
        count=len(staged),
        message=staged_status_text(staged),
    )


@router.get("/staged", response_model=StagedSetResponse)
def get_staged(console: ConsoleSession = Depends(get_console)):
    """Return the files currently staged for upload."""
    return _staged_response(console.staged)


@router.post("/staged", response_model=StagedSetResponse)
def stage_files(
    files: List[UploadFile] = File(..., description="Selected or dropped files"),
    source: StagingSource = Query(StagingSource.PICKER, description="picker or drop"),
    console: ConsoleSession = Depends(get_console),
):
    """
    Stage files for upload.

    Replaces the current staged set. Non-image files are reported as
    skipped at upload time. Files over the bucket size limit are refused
    and the previous staged set is kept.
    """
    max_bytes = parse_size_limit(console.settings.bucket_file_size_limit)
    staged_files = [
        read_staged_file(upload.filename or "", upload.content_type or "", upload.file, max_bytes)
        for upload in files
    ]
    return _staged_response(console.stage_files(staged_files, source))


@router.delete("/staged", response_model=StagedSetResponse)
def clear_staged(console: ConsoleSession = Depends(get_console)):
    """Drop all staged files."""
    return _staged_response(console.clear_staged())


@router.post("", response_model=UploadBatchResponse)
def upload_staged(console: ConsoleSession = Depends(get_console)):
    """
    Upload the staged set to the selected bucket.

    Files are uploaded one at a time in staged order. Skipped and failed
    files are reported per file; the request itself only fails when no
    bucket is selected or nothing is staged.
    """
    batch = console.upload()
    return UploadBatchResponse(
        bucket=batch.bucket,
        results=[UploadResultResponse.model_validate(r) for r in batch.results],
        uploaded=len(batch.uploaded),
        skipped=len(batch.skipped),
        failed=len(batch.failed),
        success=batch.succeeded,
        message=batch.status_text,
        studio_url=console.studio_link(batch.bucket) if batch.succeeded else None,
    )
