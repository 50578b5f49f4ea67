"""
Pytest configuration for the redirect middleware tests.

Settings are read from the environment, so a local .env file at the project root
is loaded first.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")


@pytest.fixture
def memory_sink():
    from r2h_redirect.utils.diagnostics import MemorySink

    return MemorySink()


@pytest.fixture
def client():
    from r2h_redirect.main import app

    with TestClient(app) as test_client:
        yield test_client
