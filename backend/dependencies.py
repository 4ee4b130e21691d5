"""
Dependency injection for FastAPI endpoints.

Provides singleton instances of Config and RecordStore, and per-request
agents/report builders that share them. Tests swap the store through
``app.dependency_overrides[get_store]``.
"""

from functools import lru_cache
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from fastapi import Depends

from adhd_planner.core.config import Config
from adhd_planner.core.store import RecordStore, create_store
from adhd_planner.agents import ReviewAgent
from adhd_planner.analytics.report import ReportBuilder


@lru_cache()
def get_config() -> Config:
    """
    Get cached Config instance.

    lru_cache ensures we only create one Config instance
    for the lifetime of the application (singleton pattern).
    """
    return Config()


@lru_cache()
def get_store() -> RecordStore:
    """Get the cached RecordStore for the configured backend."""
    return create_store(get_config())


def get_list_limit() -> int:
    """Default number of records returned by limited list endpoints."""
    return get_config().get("default_list_limit", default=10)


def get_report_builder(store: RecordStore = Depends(get_store)) -> ReportBuilder:
    return ReportBuilder(store, clock=store.clock)


def get_review_agent(store: RecordStore = Depends(get_store)) -> ReviewAgent:
    """Get ReviewAgent for analysis operations."""
    return ReviewAgent(store)
