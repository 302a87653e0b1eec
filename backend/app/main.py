"""
FastAPI application entry point.
Sets up the API with lifespan events for the initial bucket load.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.api.router import api_router
from app.api.dependencies import get_console
from app.api.exception_handlers import console_exception_handler
from app.errors import ConsoleError
from app.middleware.metrics_middleware import MetricsMiddleware
from app.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: Configure logging and load the bucket directory
    - Shutdown: Nothing to release
    """
    # Configure structured JSON logging
    configure_logging('bucket-console', settings.log_level)

    # Initial bucket load; a storage outage only sets a warning status
    console = app.dependency_overrides.get(get_console, get_console)()
    await run_in_threadpool(console.boot)

    yield


# Create FastAPI app
app = FastAPI(
    title="Bucket Console API",
    description="Admin console for buckets, image uploads and signed-URL galleries",
    version="0.1.0",
    lifespan=lifespan
)

# CORS middleware (for the browser console)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Metrics middleware (must be after CORS to track all requests)
app.add_middleware(MetricsMiddleware)

app.add_exception_handler(ConsoleError, console_exception_handler)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Bucket Console API",
        "version": "0.1.0",
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
