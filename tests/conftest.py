"""
Pytest configuration and shared fixtures for Catapult SDK tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from catapult.client import Client
from catapult.transport.mock import MockTransport


TEST_USER_ID = "u-123"
TEST_API_TOKEN = "t-abc"
TEST_API_SECRET = "s-xyz"
TEST_BASE_URL = "https://api.example.com"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def transport() -> MockTransport:
    """Empty mock transport; tests register the routes they need."""
    return MockTransport()


@pytest.fixture
def client(transport: MockTransport) -> Client:
    """Client wired to the mock transport."""
    return Client(
        TEST_USER_ID,
        TEST_API_TOKEN,
        TEST_API_SECRET,
        base_url=TEST_BASE_URL,
        transport=transport,
    )
