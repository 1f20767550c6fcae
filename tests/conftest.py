"""Shared fixtures for REGIME SIGNALS tests."""

import math
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure regime_signals is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from regime_signals.config import SignalConfig
from regime_signals.types import TimePoint

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2
SCENARIO_START = date(2021, 1, 4)
SCENARIO_DAYS = 3 * 365


def daily_points(start: date, values: list[float]) -> list[TimePoint]:
    """One point per calendar day starting at start."""
    return [TimePoint(start + timedelta(days=i), v) for i, v in enumerate(values)]


@pytest.fixture
def config() -> SignalConfig:
    return SignalConfig()


@pytest.fixture
def scenario_series() -> dict[str, list[TimePoint]]:
    """
    Three years of daily data.

    hy_oas oscillates 3%-8%, vix is an exact linear image of hy_oas
    (12-40), yield_curve_spread is equidistributed noise in [-1%, 2%]
    unrelated to either. recession is a monthly 0/1 indicator.
    """
    hy = [5.5 + 2.5 * math.sin(2 * math.pi * i / 365) for i in range(SCENARIO_DAYS)]
    vix = [12.0 + (h - 3.0) / 5.0 * 28.0 for h in hy]
    curve = [-1.0 + 3.0 * ((i * GOLDEN_RATIO) % 1.0) for i in range(SCENARIO_DAYS)]

    recession = []
    for year in (2021, 2022, 2023):
        for month in range(1, 13):
            flag = 1.0 if (year == 2022 and 3 <= month <= 6) else 0.0
            recession.append(TimePoint(date(year, month, 1), flag))

    return {
        "hy_oas": daily_points(SCENARIO_START, hy),
        "vix": daily_points(SCENARIO_START, vix),
        "yield_curve_spread": daily_points(SCENARIO_START, curve),
        "recession": recession,
    }


@pytest.fixture
def short_series() -> dict[str, list[TimePoint]]:
    """Only ~3 months of anchor history."""
    return {"hy_oas": daily_points(date(2025, 1, 1), [4.0 + 0.01 * i for i in range(90)])}
