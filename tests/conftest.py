import os
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

# Predictable settings for tests.
os.environ["DEBOUNCE_TIME_S"] = "5"
os.environ["PORT"] = "8000"
os.environ["LOG_FORMAT"] = "pretty"

from app.main import app  # noqa: E402
from app.registry import registry  # noqa: E402


@pytest.fixture
def dispatch_mock(monkeypatch):
    mock = AsyncMock(return_value=True)
    monkeypatch.setattr(registry, "_dispatch", mock)
    return mock


@pytest.fixture
def client(dispatch_mock):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture(autouse=True)
def clear_registry():
    """Reset the shared registry between tests."""
    registry.cancel_all()
    yield
    registry.cancel_all()
