"""
Bucket endpoints: list, create, select.

Storage calls block, so handlers are plain functions and FastAPI runs
them in its threadpool.
"""
from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_console
from app.schemas.bucket import BucketCreate, BucketSelect, BucketResponse, BucketListResponse
from app.services.console import ConsoleSession

router = APIRouter()


def _bucket_list(console: ConsoleSession) -> BucketListResponse:
    return BucketListResponse(
        buckets=[BucketResponse.model_validate(b) for b in console.directory.buckets],
        selected=console.selected_bucket,
    )


@router.get("", response_model=BucketListResponse)
def list_buckets(console: ConsoleSession = Depends(get_console)):
    """
    Refresh the bucket directory from storage.

    Keeps the current selection when the bucket still exists.
    """
    console.refresh_buckets()
    return _bucket_list(console)


@router.post("", response_model=BucketListResponse, status_code=status.HTTP_201_CREATED)
def create_bucket(request: BucketCreate, console: ConsoleSession = Depends(get_console)):
    """
    Create a private bucket and select it.

    The name is trimmed and lowercased. Creating an existing bucket is
    not an error.
    """
    console.create_bucket(request.name)
    return _bucket_list(console)


@router.put("/selected", response_model=BucketListResponse)
def select_bucket(request: BucketSelect, console: ConsoleSession = Depends(get_console)):
    """Select the bucket that uploads and the gallery apply to."""
    console.select_bucket(request.name)
    return _bucket_list(console)
