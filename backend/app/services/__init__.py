"""
Console services.
"""
from app.services.bucket_directory import BucketDirectory
from app.services.console import ConsoleSession, get_console
from app.services.gallery_service import GalleryService
from app.services.lightbox import Lightbox
from app.services.status_board import StatusBoard
from app.services.upload_service import UploadService

__all__ = [
    "BucketDirectory",
    "ConsoleSession",
    "GalleryService",
    "Lightbox",
    "StatusBoard",
    "UploadService",
    "get_console",
]
