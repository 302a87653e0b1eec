"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter
from app.api import health, buckets, uploads, gallery, console

api_router = APIRouter()

# Include route modules
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(buckets.router, prefix="/buckets", tags=["buckets"])
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
api_router.include_router(gallery.router, prefix="/gallery", tags=["gallery"])
api_router.include_router(gallery.lightbox_router, prefix="/lightbox", tags=["lightbox"])
api_router.include_router(console.router, prefix="/console", tags=["console"])
