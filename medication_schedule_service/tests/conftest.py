from __future__ import annotations

from datetime import datetime
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from medschedule.main import app
from medschedule.services import medication_store


@pytest.fixture(autouse=True)
def empty_store() -> Iterator[None]:
    """Every test starts with an empty medication registry."""
    medication_store.clear()
    yield
    medication_store.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def tuesday_morning() -> datetime:
    """2026-10-20 is a Tuesday."""
    return datetime(2026, 10, 20, 8, 0)
