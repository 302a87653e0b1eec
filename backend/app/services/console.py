"""
Console session.

Holds what the operator last chose (selected bucket, staged files) and
runs each console action against the services, reporting the result on
the status board. The services themselves receive bucket and files as
explicit arguments and keep no hidden state.
"""
import logging
import threading
from typing import Iterable, Optional

from app.config import Settings, settings as app_settings
from app.errors import ConsoleError, RemoteError
from app.models.bucket import Bucket
from app.models.gallery import Gallery
from app.models.media import StagedFile, StagedSet, StagingSource
from app.models.upload import UploadBatchResult
from app.services import staging
from app.services.bucket_directory import BucketDirectory
from app.services.gallery_service import GalleryService
from app.services.lightbox import Lightbox
from app.services.status_board import StatusBoard, StatusKind
from app.services.upload_service import UploadService
from app.storage import get_storage_client
from app.storage.base import StorageClient
from app.utils.logging import log_storage_failure
from app.utils.metrics import storage_failures_total
from app.utils.studio import compute_studio_bucket_url

logger = logging.getLogger(__name__)


class ConsoleSession:
    """State and actions of one bucket console."""

    def __init__(self, storage: StorageClient, settings: Settings):
        self.settings = settings
        self.directory = BucketDirectory(storage, file_size_limit=settings.bucket_file_size_limit)
        self.uploads = UploadService(storage, cache_max_age=settings.upload_cache_max_age)
        self.gallery = GalleryService(
            storage,
            signed_url_ttl=settings.signed_url_ttl,
            list_limit=settings.gallery_list_limit,
        )
        self.lightbox = Lightbox()
        self.status = StatusBoard(max_entries=settings.log_buffer_size)
        self._staged = StagedSet()
        self._lock = threading.Lock()

    @property
    def selected_bucket(self) -> Optional[str]:
        return self.directory.selected

    @property
    def staged(self) -> StagedSet:
        return self._staged

    def _fail(self, operation: str, status_text: str, log_message: str, error: ConsoleError) -> None:
        self.status.set_status(StatusKind.ERROR, status_text)
        self.status.log(log_message, {"error": error.message, **error.details})
        if isinstance(error, RemoteError):
            storage_failures_total.labels(operation=operation).inc()
            log_storage_failure(logger, operation=operation, error=error.message, bucket=self.selected_bucket)

    def studio_link(self, bucket: Optional[str]) -> Optional[str]:
        if not bucket:
            return None
        return compute_studio_bucket_url(
            bucket,
            studio_url=self.settings.studio_url,
            project_ref=self.settings.project_ref,
            fallback_url=self.settings.storage_endpoint,
        )

    # Buckets

    def boot(self) -> None:
        """Initial bucket load. Never raises: a broken storage config only sets a warning."""
        try:
            buckets = self.directory.refresh()
        except ConsoleError as e:
            self.status.set_status(StatusKind.WARNING, "Could not load buckets (check storage credentials).")
            self.status.log("Initial bucket load failed", {"error": e.message})
            storage_failures_total.labels(operation="list_buckets").inc()
            log_storage_failure(logger, operation="list_buckets", error=e.message, include_traceback=False)
            return
        self.status.set_status(StatusKind.INFO, f"Buckets loaded ({len(buckets)})")

    def refresh_buckets(self) -> list:
        try:
            buckets = self.directory.refresh()
        except ConsoleError as e:
            self._fail("list_buckets", f"List buckets failed: {e.message}", "List buckets failed", e)
            raise
        self.status.set_status(StatusKind.INFO, f"Found {len(buckets)} buckets")
        return buckets

    def create_bucket(self, name: str) -> Bucket:
        try:
            bucket = self.directory.create(name)
        except ConsoleError as e:
            self._fail("create_bucket", e.message, "Create bucket failed", e)
            raise
        self.status.set_status(StatusKind.SUCCESS, f"Bucket ready: {bucket.name}")
        self.status.log(f"Bucket ready: {bucket.name}")
        return bucket

    def select_bucket(self, name: str) -> str:
        try:
            return self.directory.select(name)
        except ConsoleError as e:
            self._fail("select_bucket", e.message, "Select bucket failed", e)
            raise

    # Staging and upload

    def stage_files(self, files: Iterable[StagedFile], source: StagingSource = StagingSource.PICKER) -> StagedSet:
        staged = staging.stage(files, source)
        with self._lock:
            self._staged = staged
        self.status.set_status(StatusKind.INFO, staging.staged_status_text(staged))
        self.status.log(f"Staged {len(staged)} file(s) from {staged.source.value}")
        return staged

    def clear_staged(self) -> StagedSet:
        with self._lock:
            self._staged = staging.clear()
        return self._staged

    def upload(self) -> UploadBatchResult:
        bucket = self.selected_bucket
        with self._lock:
            staged = self._staged

        try:
            self.status.set_status(StatusKind.INFO, "Uploading…")
            batch = self.uploads.upload(bucket, staged)
        except ConsoleError as e:
            self._fail("upload", f"Upload failed: {e.message}", "Upload failed", e)
            raise

        with self._lock:
            # Only clear what this attempt consumed; a newer stage wins
            if self._staged is staged:
                self._staged = staging.clear()

        if batch.succeeded:
            self.status.set_status(StatusKind.SUCCESS, batch.status_text)
        else:
            self.status.set_status(StatusKind.ERROR, batch.status_text)

        for result in batch.results:
            if result.ok:
                self.status.log(f"Uploaded {result.filename} → {bucket}", {"key": result.key})
            else:
                self.status.log(f"Upload failed: {result.filename}", {"error": result.error})
        return batch

    # Gallery

    def load_gallery(self) -> Gallery:
        bucket = self.selected_bucket
        try:
            if bucket:
                self.status.set_status(StatusKind.INFO, f"Loading gallery for {bucket}…")
            gallery = self.gallery.load(bucket)
        except ConsoleError as e:
            self._fail("load_gallery", f"Load gallery failed: {e.message}", "Load gallery failed", e)
            raise
        self.status.set_status(StatusKind.SUCCESS, f"Gallery loaded for {bucket}")
        return gallery


# Singleton instance
_console: Optional[ConsoleSession] = None


def get_console() -> ConsoleSession:
    """
    Get the process-wide console session.

    Returns:
        ConsoleSession bound to the configured storage client
    """
    global _console
    if _console is None:
        _console = ConsoleSession(get_storage_client(), app_settings)
    return _console
