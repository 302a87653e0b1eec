"""
Deep links into the storage provider's dashboard (Studio).

Purely informational: the console shows the link next to upload and
gallery results. Nothing here affects storage behavior.
"""
from typing import Optional
from urllib.parse import quote


def compute_studio_bucket_url(
    bucket: str,
    studio_url: Optional[str] = None,
    project_ref: Optional[str] = None,
    fallback_url: Optional[str] = None,
) -> Optional[str]:
    """
    Build the dashboard URL for a bucket.

    With both a base URL and a project ref, links straight to
    Storage → Buckets → bucket. With only a base URL, links to the base.

    Args:
        bucket: Bucket name
        studio_url: Dashboard base URL
        project_ref: Project identifier
        fallback_url: Base used when studio_url is unset (the storage endpoint)

    Returns:
        URL string, or None when no base URL is known
    """
    base = studio_url or fallback_url or ""
    if base and project_ref:
        return f"{base.rstrip('/')}/project/{project_ref}/storage/buckets/{quote(bucket, safe='')}"
    return base or None
