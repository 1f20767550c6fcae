"""
REGIME SIGNALS - Causal Series Statistics

Trailing-window and expanding-window statistics over aligned series.
Every output at index i depends only on entries [0, i]: appending data
never changes an earlier result.

Uses pure Python math (no numpy dependency).
"""

from __future__ import annotations

import math
from bisect import bisect_right, insort
from typing import Optional, Sequence

Values = Sequence[Optional[float]]


def rolling_mean(values: Values, window: int) -> list[Optional[float]]:
    """
    Trailing mean over the non-null points in [i - window + 1, i].

    None until index window - 1, and None when the window holds no data.
    """
    if window <= 0:
        raise ValueError(f"window must be positive, got {window}")

    result: list[Optional[float]] = []
    for i in range(len(values)):
        if i < window - 1:
            result.append(None)
            continue
        present = [v for v in values[i - window + 1 : i + 1] if v is not None]
        result.append(math.fsum(present) / len(present) if present else None)
    return result


def n_day_change(values: Values, n: int) -> list[Optional[float]]:
    """value[i] - value[i - n]; None if either endpoint is missing or i < n."""
    result: list[Optional[float]] = []
    for i, current in enumerate(values):
        previous = values[i - n] if i >= n else None
        if current is None or previous is None:
            result.append(None)
        else:
            result.append(current - previous)
    return result


def n_day_percent_change(values: Values, n: int) -> list[Optional[float]]:
    """Percent change vs. value[i - n], relative to |value[i - n]|. None when that is 0."""
    result: list[Optional[float]] = []
    for i, current in enumerate(values):
        previous = values[i - n] if i >= n else None
        if current is None or previous is None or previous == 0:
            result.append(None)
        else:
            result.append((current - previous) / abs(previous) * 100.0)
    return result


def expanding_percentile(values: Values, min_window: int = 252) -> list[Optional[float]]:
    """
    Percentile rank of value[i] among all non-null values in [0, i].

    rank = (count(v <= current) - 1) / (total - 1) * 100, clamped to [0, 100].
    None until min_window non-null observations have accumulated, and
    wherever the current value itself is missing.
    """
    history: list[float] = []  # kept sorted
    result: list[Optional[float]] = []

    for current in values:
        if current is not None:
            insort(history, current)

        total = len(history)
        if current is None or total < min_window:
            result.append(None)
            continue
        if total == 1:
            result.append(0.0)
            continue

        rank = bisect_right(history, current)
        percentile = (rank - 1) / (total - 1) * 100.0
        result.append(max(0.0, min(100.0, percentile)))

    return result


def expanding_z_score(values: Values, min_window: int = 252) -> list[Optional[float]]:
    """
    (value[i] - mean[0..i]) / std[0..i] using population std.

    Running moments via Welford's update. 0 when std is 0.
    """
    count = 0
    mean = 0.0
    m2 = 0.0
    result: list[Optional[float]] = []

    for current in values:
        if current is not None:
            count += 1
            delta = current - mean
            mean += delta / count
            m2 += delta * (current - mean)

        if current is None or count < min_window:
            result.append(None)
            continue

        std = math.sqrt(m2 / count) if m2 > 0 else 0.0
        result.append(0.0 if std == 0 else (current - mean) / std)

    return result
