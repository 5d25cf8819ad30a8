"""Test configuration."""

import os
from pathlib import Path

import pytest
from pytest import Config

from hashbrowns.core.logging import configure_logging

os.environ["TESTING"] = "true"

fixture = pytest.fixture


@fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


pytest_plugins: list[str] = [
    "tests.fixtures.api",
    "tests.fixtures.content_store",
]


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    configure_logging(testing=True)
    config.addinivalue_line("markers", "integration: mark test as an integration test")
