"""
Gallery renderer.

Lists the objects at a bucket root and resolves a viewable URL for each:
a one hour signed URL first, the public URL if signing fails. URLs are
resolved on every render and never cached.
"""
import logging
import time
from typing import Optional, Tuple

from app.errors import RemoteError, ValidationError
from app.models.gallery import EMPTY_BUCKET_MESSAGE, NO_BUCKET_MESSAGE, Gallery, Thumbnail
from app.storage.base import StorageClient
from app.utils.logging import log_gallery_rendered
from app.utils.metrics import (
    gallery_render_duration_seconds,
    gallery_renders_total,
    signed_url_fallbacks_total,
)

logger = logging.getLogger(__name__)


class GalleryService:
    """Builds thumbnail sequences for a bucket."""

    def __init__(self, storage: StorageClient, signed_url_ttl: int = 3600, list_limit: int = 1000):
        self._storage = storage
        self._signed_url_ttl = signed_url_ttl
        self._list_limit = list_limit

    def resolve_url(self, bucket: str, key: str) -> Tuple[str, bool]:
        """
        Resolve a viewable URL for one object.

        Returns:
            (url, used_fallback) -- url is "" when both methods fail
        """
        try:
            url = self._storage.create_signed_url(bucket, key, self._signed_url_ttl)
            if url:
                return url, False
        except RemoteError as e:
            logger.debug(f"Signed URL failed for {bucket}/{key}, using public URL: {e.message}")

        signed_url_fallbacks_total.inc()
        try:
            return self._storage.get_public_url(bucket, key) or "", True
        except RemoteError as e:
            logger.warning(f"No viewable URL for {bucket}/{key}: {e.message}")
            return "", True

    def render(self, bucket: Optional[str]) -> Gallery:
        """
        Render the gallery for bucket.

        With no bucket, or a bucket without files, returns an empty gallery
        carrying the matching empty-state message.

        Raises:
            RemoteError: If the object listing fails
        """
        if not bucket:
            return Gallery(bucket=None, empty_message=NO_BUCKET_MESSAGE)

        start_time = time.time()
        objects = self._storage.list_objects(bucket, "", limit=self._list_limit, sort_by="name")
        files = [obj for obj in objects if not obj.is_folder]

        thumbnails = []
        fallbacks = 0
        for obj in files:
            url, used_fallback = self.resolve_url(bucket, obj.key)
            fallbacks += used_fallback
            thumbnails.append(Thumbnail(key=obj.key, url=url, size=obj.size, last_modified=obj.last_modified))

        duration = time.time() - start_time
        gallery_renders_total.inc()
        gallery_render_duration_seconds.observe(duration)
        log_gallery_rendered(
            logger,
            bucket=bucket,
            count=len(thumbnails),
            duration_ms=duration * 1000,
            fallbacks=fallbacks,
        )
        if not thumbnails:
            return Gallery(bucket=bucket, empty_message=EMPTY_BUCKET_MESSAGE)
        return Gallery(bucket=bucket, thumbnails=thumbnails)

    def load(self, bucket: Optional[str]) -> Gallery:
        """
        The "Load gallery" action: like render, but requires a selection.

        Raises:
            ValidationError: If no bucket is selected
            RemoteError: If the object listing fails
        """
        if not bucket:
            raise ValidationError("Pick a bucket first.")
        return self.render(bucket)
