"""Shared fixtures for the rsiscope test suite."""

import math
import sys
from pathlib import Path

import pytest

# Add project root to path so main.py is importable without installing
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from rsiscope.technical_analysis.series import make_series


SCENARIO_CLOSES = [
    100, 102, 101, 105, 107, 106, 110, 108, 111, 115,
    114, 116, 120, 118, 119, 121, 123, 122, 125, 124,
]


@pytest.fixture
def scenario_series():
    """Twenty closes with mixed gains and losses."""
    return make_series(SCENARIO_CLOSES)


@pytest.fixture
def long_series():
    """120 deterministic closes oscillating around an upward drift."""
    return make_series([100 + 10 * math.sin(i / 5) + 0.1 * i for i in range(120)])


@pytest.fixture
def sample_klines():
    """Three Binance kline rows, 15 minutes apart."""
    base = 1700000000000
    step = 15 * 60 * 1000
    rows = []
    for i, close in enumerate(["100.5", "101.25", "99.75"]):
        open_time = base + i * step
        rows.append([
            open_time, "100.0", "102.0", "99.0", close, "10.0",
            open_time + step - 1, "1000.0", 5, "5.0", "500.0", "0",
        ])
    return rows
