"""
Test configuration and fixtures.
Uses the in-memory storage client; no storage service is needed.
"""
import os

# Set test environment before any imports
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["ENVIRONMENT"] = "test"

import pytest
from typing import AsyncGenerator

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.config import Settings
from app.models.media import StagedFile
from app.services.console import ConsoleSession
from app.storage.memory import InMemoryStorageClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def make_file(filename: str, content_type: str, data: bytes = PNG_BYTES) -> StagedFile:
    """Build a staged file."""
    return StagedFile(filename=filename, content_type=content_type, data=data)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with dashboard links enabled."""
    return Settings(
        storage_backend="memory",
        storage_endpoint="https://demo.storage.example.com",
        studio_url="https://studio.example.com/",
        project_ref="demo-ref",
    )


@pytest.fixture
def storage() -> InMemoryStorageClient:
    """Create an empty in-memory storage client."""
    return InMemoryStorageClient()


@pytest.fixture
def photos_storage(storage: InMemoryStorageClient) -> InMemoryStorageClient:
    """Storage with a 'photos' bucket."""
    storage.create_bucket("photos")
    return storage


@pytest.fixture
def console(storage: InMemoryStorageClient, test_settings: Settings) -> ConsoleSession:
    """Create a console session bound to the in-memory storage."""
    return ConsoleSession(storage, test_settings)


def get_test_app(console: ConsoleSession) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    from app.main import app
    from app.api.dependencies import get_console

    app.dependency_overrides[get_console] = lambda: console
    return app


@pytest.fixture
async def client(console: ConsoleSession) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(console)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def file_factory():
    """Factory for staged files: file_factory("cat.png", "image/png")."""
    return make_file
