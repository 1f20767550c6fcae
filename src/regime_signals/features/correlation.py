"""
REGIME SIGNALS - Rolling Correlation Engine

Pearson and Spearman correlation between aligned series, single-pair
and all-pairs, over trailing windows anchored at a grid index.
Uses pure Python math (no numpy dependency).

A window with fewer than MIN_PAIRED_OBSERVATIONS valid pairs yields
None: insufficient data is informative, not an error.
"""

from __future__ import annotations

import math
from datetime import date
from itertools import combinations
from typing import Mapping, Optional, Sequence

from regime_signals.config import CorrelationWindow
from regime_signals.types import CorrelationPair, RollingCorrelationWindow

MIN_PAIRED_OBSERVATIONS = 10

METHODS = ("pearson", "spearman")


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson product-moment correlation.

    NaN if fewer than 2 points, mismatched lengths, or zero variance
    on either side.
    """
    n = len(x)
    if n < 2 or n != len(y):
        return math.nan
    if min(x) == max(x) or min(y) == max(y):
        return math.nan

    mean_x = math.fsum(x) / n
    mean_y = math.fsum(y) / n
    dx = [xi - mean_x for xi in x]
    dy = [yi - mean_y for yi in y]
    cov = math.fsum(a * b for a, b in zip(dx, dy))
    var_x = math.fsum(a * a for a in dx)
    var_y = math.fsum(b * b for b in dy)
    denom = math.sqrt(var_x) * math.sqrt(var_y)
    if denom == 0:
        return math.nan
    return max(-1.0, min(1.0, cov / denom))


def rank_average(values: Sequence[float]) -> list[float]:
    """1-based fractional ranks; tied values share the average of their positions."""
    order = sorted(range(len(values)), key=lambda k: values[k])
    ranks = [0.0] * len(values)

    i = 0
    while i < len(order):
        j = i
        while j < len(order) and values[order[j]] == values[order[i]]:
            j += 1
        avg_rank = (i + 1 + j) / 2.0
        for k in range(i, j):
            ranks[order[k]] = avg_rank
        i = j

    return ranks


def spearman(x: Sequence[float], y: Sequence[float]) -> float:
    """Spearman rank correlation: Pearson over fractional ranks."""
    if len(x) < 2 or len(x) != len(y):
        return math.nan
    return pearson(rank_average(x), rank_average(y))


def _paired_window(
    a: Sequence[Optional[float]],
    b: Sequence[Optional[float]],
    start: int,
    end: int,
) -> tuple[list[float], list[float]]:
    """Values in [start, end] where both sides are present."""
    xs: list[float] = []
    ys: list[float] = []
    for k in range(max(0, start), end + 1):
        av = a[k] if k < len(a) else None
        bv = b[k] if k < len(b) else None
        if av is not None and bv is not None:
            xs.append(av)
            ys.append(bv)
    return xs, ys


def _correlate(xs: list[float], ys: list[float], method: str) -> Optional[float]:
    if len(xs) < MIN_PAIRED_OBSERVATIONS:
        return None
    corr = pearson(xs, ys) if method == "pearson" else spearman(xs, ys)
    return None if math.isnan(corr) else corr


def rolling_correlation(
    x: Sequence[Optional[float]],
    y: Sequence[Optional[float]],
    window: int,
    method: str = "pearson",
) -> list[Optional[float]]:
    """
    Correlation over the trailing `window` grid points at every index.

    Args:
        x, y: Aligned series of identical length.
        window: Number of grid points per window.
        method: "pearson" or "spearman".

    Returns:
        One value per index; None before index window - 1 and wherever
        fewer than 10 valid pairs exist.
    """
    if len(x) != len(y):
        raise ValueError(f"Series must have same length ({len(x)} != {len(y)})")
    if method not in METHODS:
        raise ValueError(f"Unknown correlation method: {method}")
    if window <= 0:
        raise ValueError(f"window must be positive, got {window}")

    result: list[Optional[float]] = []
    for i in range(len(x)):
        if i < window - 1:
            result.append(None)
            continue
        xs, ys = _paired_window(x, y, i - window + 1, i)
        result.append(_correlate(xs, ys, method))
    return result


def compute_correlation_pairs(
    aligned: Mapping[str, Sequence[Optional[float]]],
    end_index: int,
    window: int,
) -> list[CorrelationPair]:
    """
    All unordered pairs among the supplied series, over the window ending at end_index.

    Each pair is judged independently; an undersized pair carries None
    correlations.
    """
    pairs: list[CorrelationPair] = []
    start = end_index - window + 1

    for a_id, b_id in combinations(list(aligned.keys()), 2):
        xs, ys = _paired_window(aligned[a_id], aligned[b_id], start, end_index)
        pairs.append(
            CorrelationPair(
                series_a=a_id,
                series_b=b_id,
                pearson=_correlate(xs, ys, "pearson"),
                spearman=_correlate(xs, ys, "spearman"),
            )
        )

    return pairs


def compute_rolling_correlations(
    aligned: Mapping[str, Sequence[Optional[float]]],
    grid: Sequence[date],
    windows: Sequence[CorrelationWindow],
) -> list[RollingCorrelationWindow]:
    """
    Pairwise correlations for each window length, anchored at the latest grid index.

    Pairs without enough data are omitted from the window.
    """
    if not grid:
        return []

    latest_index = len(grid) - 1
    results: list[RollingCorrelationWindow] = []

    for w in windows:
        pairs = [
            CorrelationPair(
                series_a=p.series_a,
                series_b=p.series_b,
                pearson=round(p.pearson, 4),
                spearman=round(p.spearman, 4),
            )
            for p in compute_correlation_pairs(aligned, latest_index, w.days)
            if p.pearson is not None and p.spearman is not None
        ]
        results.append(
            RollingCorrelationWindow(
                as_of=grid[latest_index],
                window_label=w.label,
                window_days=w.days,
                pairs=pairs,
            )
        )

    return results


def top_correlations(
    window: RollingCorrelationWindow,
    n: int = 5,
    method: str = "spearman",
) -> list[CorrelationPair]:
    """The n most extreme pairs (positive or negative) in one window."""
    if method not in METHODS:
        raise ValueError(f"Unknown correlation method: {method}")
    scored = [p for p in window.pairs if getattr(p, method) is not None]
    return sorted(scored, key=lambda p: abs(getattr(p, method)), reverse=True)[:n]
