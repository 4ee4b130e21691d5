"""
Fixtures for API integration tests.

Each test gets a fresh memory-backed RecordStore with a fixed clock,
injected through FastAPI dependency overrides. The app lifespan is not
run, so the real config and database are never touched.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from adhd_planner.core.store import MemoryAdapter, RecordStore
from backend.main import app
from backend.dependencies import get_store, get_list_limit


# Wednesday of the week starting Monday 2024-03-11
NOW = datetime(2024, 3, 13, 10, 0)


@pytest.fixture
def store():
    return RecordStore(MemoryAdapter(), clock=lambda: NOW)


@pytest.fixture
def test_client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_list_limit] = lambda: 10
    yield TestClient(app)
    app.dependency_overrides.clear()
