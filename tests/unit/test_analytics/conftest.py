"""
Shared fixtures for analytics tests.
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from adhd_planner.analytics.windows import week_window
from analytics_records import WEDNESDAY


@pytest.fixture
def week():
    return week_window(WEDNESDAY)
