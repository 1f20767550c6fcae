"""
REGIME SIGNALS - Lag-Aware Series Alignment

Maps irregular, possibly lagged source series onto a grid without
lookahead: the value at grid[i] only ever comes from a source point
dated on or before grid[i] - lag_days.

Nothing in this module looks forward in time. Forward-looking outcome
labels for backtests live in regime_signals.triggers.event_study.
"""

from __future__ import annotations

from bisect import bisect_right
from datetime import date, timedelta
from typing import Mapping, Optional, Sequence

from regime_signals.types import TimePoint


def value_as_of(
    series: Sequence[TimePoint],
    as_of: date,
    lag_days: int = 0,
) -> Optional[TimePoint]:
    """
    Last point that was knowable on `as_of` given the publication lag.

    Args:
        series: Points sorted ascending by date.
        as_of: The grid date being computed.
        lag_days: Publication lag in calendar days.

    Returns:
        The last point dated <= as_of - lag_days, or None if the series
        starts after the cutoff.
    """
    if not series:
        return None
    cutoff = as_of - timedelta(days=lag_days)
    idx = bisect_right(series, cutoff, key=lambda p: p.date)
    return series[idx - 1] if idx > 0 else None


def align_to_grid(
    series: Sequence[TimePoint],
    grid: Sequence[date],
    lag_days: int = 0,
) -> list[Optional[float]]:
    """Forward-fill a series onto the grid, respecting the lag. Same length as grid."""
    aligned: list[Optional[float]] = []
    for d in grid:
        point = value_as_of(series, d, lag_days)
        aligned.append(point.value if point is not None else None)
    return aligned


def align_multiple_series(
    series_map: Mapping[str, tuple[Sequence[TimePoint], int]],
    grid: Sequence[date],
) -> dict[str, list[Optional[float]]]:
    """Align every (points, lag_days) entry to one common grid."""
    return {
        series_id: align_to_grid(points, grid, lag_days)
        for series_id, (points, lag_days) in series_map.items()
    }
