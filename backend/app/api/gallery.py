"""
Gallery and lightbox endpoints.
"""
from fastapi import APIRouter, Depends

from app.api.dependencies import get_console
from app.schemas.gallery import (
    ThumbnailResponse,
    GalleryResponse,
    LightboxOpen,
    LightboxBackdropClick,
    LightboxKeyPress,
    LightboxResponse,
)
from app.services.console import ConsoleSession

router = APIRouter()
lightbox_router = APIRouter()


@router.get("", response_model=GalleryResponse)
def load_gallery(console: ConsoleSession = Depends(get_console)):
    """
    Load the gallery of the selected bucket.

    Every object gets a fresh one hour signed URL, or its public URL when
    signing fails. Folders are not listed.
    """
    gallery = console.load_gallery()
    return GalleryResponse(
        bucket=gallery.bucket,
        thumbnails=[ThumbnailResponse.model_validate(t) for t in gallery.thumbnails],
        count=gallery.count,
        empty_message=gallery.empty_message,
        studio_url=console.studio_link(gallery.bucket),
    )


@lightbox_router.get("", response_model=LightboxResponse)
def get_lightbox(console: ConsoleSession = Depends(get_console)):
    return console.lightbox.state


@lightbox_router.post("/open", response_model=LightboxResponse)
def open_lightbox(request: LightboxOpen, console: ConsoleSession = Depends(get_console)):
    return console.lightbox.open(request.url, request.caption)


@lightbox_router.post("/close", response_model=LightboxResponse)
def close_lightbox(console: ConsoleSession = Depends(get_console)):
    return console.lightbox.close()


@lightbox_router.post("/backdrop", response_model=LightboxResponse)
def backdrop_click(request: LightboxBackdropClick, console: ConsoleSession = Depends(get_console)):
    """Close only when the click landed on the backdrop, not on the image."""
    return console.lightbox.backdrop_click(request.target_is_backdrop)


@lightbox_router.post("/key", response_model=LightboxResponse)
def key_press(request: LightboxKeyPress, console: ConsoleSession = Depends(get_console)):
    """Escape closes the lightbox; other keys are ignored."""
    return console.lightbox.key_press(request.key)
