"""API test fixtures."""

from typing import AsyncGenerator, Generator, cast

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient, Timeout
from starlette.testclient import TestClient
from starlette.types import ASGIApp

from hashbrowns.content_store import MemoryContentStore
from hashbrowns.core.config import Settings
from hashbrowns.main import create_app

# Default timeout configuration
DEFAULT_TIMEOUT: Timeout = Timeout(
    timeout=5.0,  # Default total timeout
    connect=2.0,  # Connection timeout
    read=5.0,  # Read timeout
    write=5.0,  # Write timeout
    pool=2.0,  # Pool timeout
)

APPROVED_HOST = "hashbrowns.test"


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    """Settings with a single approved test host and the memory backend."""
    return Settings(APPROVED_HOSTS=f"{APPROVED_HOST},localhost:8000")


@pytest.fixture(scope="function")
def test_app(test_settings: Settings, memory_store: MemoryContentStore) -> FastAPI:
    """Get FastAPI test application.

    Returns:
        FastAPI application serving ``memory_store``
    """
    return create_app(test_settings, store=memory_store)


@pytest.fixture(scope="function")
def test_app_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    """Get FastAPI test client.

    Args:
        test_app: FastAPI application for testing

    Yields:
        Test client for making synchronous requests
    """
    with TestClient(test_app, base_url=f"http://{APPROVED_HOST}") as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def test_app_async_client(
    test_app: FastAPI,
) -> AsyncGenerator[AsyncClient, None]:
    """Get FastAPI async test client.

    Args:
        test_app: FastAPI application for testing

    Yields:
        Test client for making asynchronous requests
    """
    transport = ASGITransport(app=cast(ASGIApp, test_app))
    async with AsyncClient(
        transport=transport,
        base_url=f"http://{APPROVED_HOST}",
        timeout=DEFAULT_TIMEOUT,
    ) as client:
        yield client
