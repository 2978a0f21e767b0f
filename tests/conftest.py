"""Pytest configuration and fixtures for the bandwidth check tests."""

from datetime import datetime, timezone

import pytest

from config.settings import Thresholds


LOG_LINE = (
    "Jan 15 11:10:38 BIGIP-CLOUD notice tmm[126422]: 01010045:5: Bandwidth utilization "
    "is 1070 Mbps, exceeded 75% of Licensed 1000 Mbps."
)


@pytest.fixture
def thresholds() -> Thresholds:
    """Default thresholds: warning 75%, critical 80%, alert 5 min, no alert 10 min."""
    return Thresholds(warning=75, critical=80, age_alert=5, age_no_alert=10)


@pytest.fixture
def log_line() -> str:
    return LOG_LINE


@pytest.fixture
def now() -> datetime:
    """Two minutes after the sample log line, on a fixed UTC clock."""
    return datetime(2026, 1, 15, 11, 12, 38, tzinfo=timezone.utc)
