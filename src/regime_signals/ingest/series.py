"""
REGIME SIGNALS - Series Ingestion

Turns collaborator-supplied observations into clean, sorted TimePoint
series. Malformed values (non-numeric, non-finite, "missing" sentinels
such as FRED's ".") are dropped here, never coerced to zero and never
passed on as NaN.

This module does not fetch anything; callers hand in what they fetched.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

import pandas as pd

from regime_signals.alignment.calendar import parse_date
from regime_signals.types import TimePoint

logger = logging.getLogger(__name__)

MISSING_SENTINELS = frozenset({".", "", "nan", "na", "n/a", "null", "none", "-"})


def _to_float(value: Any) -> Optional[float]:
    """Numeric value or None for anything malformed."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        if value.strip().lower() in MISSING_SENTINELS:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clean_series(
    points: Iterable[TimePoint],
    start_date: Optional[date] = None,
) -> list[TimePoint]:
    """
    Filter malformed values, sort ascending, keep the last value per date.

    Args:
        points: Raw observations in any order.
        start_date: Drop observations before this date (earliest reliable start).

    Returns:
        Sorted list with unique dates.
    """
    by_date: dict[date, float] = {}
    dropped = 0
    for p in points:
        value = _to_float(p.value)
        if value is None:
            dropped += 1
            continue
        try:
            d = parse_date(p.date)
        except (TypeError, ValueError):
            logger.debug(f"Skipping observation with bad date: {p.date!r}")
            continue
        if start_date is not None and d < start_date:
            continue
        by_date[d] = value

    if dropped:
        logger.debug(f"Dropped {dropped} malformed observations")

    return [TimePoint(d, by_date[d]) for d in sorted(by_date)]


def parse_observations(
    rows: Iterable[Mapping[str, Any]],
    start_date: Optional[date] = None,
) -> list[TimePoint]:
    """Parse {"date": ..., "value": ...} rows (as returned by statistical-agency APIs)."""
    points: list[TimePoint] = []
    for row in rows:
        raw_date = row.get("date")
        if not raw_date:
            continue
        try:
            d = parse_date(raw_date)
        except (TypeError, ValueError):
            logger.debug(f"Skipping observation with bad date: {raw_date!r}")
            continue
        # Value checked in clean_series
        points.append(TimePoint(d, row.get("value")))  # type: ignore[arg-type]
    return clean_series(points, start_date)


def points_from_frame(
    frame: pd.DataFrame,
    date_column: Optional[str] = "date",
    value_column: str = "value",
    start_date: Optional[date] = None,
) -> list[TimePoint]:
    """
    Convert a DataFrame of observations into a clean series.

    Args:
        frame: Observations, one row per date.
        date_column: Column holding dates; None to use the index.
        value_column: Column holding values.
        start_date: Earliest reliable start.

    Returns:
        Sorted, de-duplicated TimePoint list.
    """
    if frame.empty:
        return []

    raw_dates = frame.index.to_series() if date_column is None else frame[date_column]
    dates = pd.to_datetime(raw_dates, errors="coerce")
    values = pd.to_numeric(frame[value_column], errors="coerce")

    cleaned = pd.DataFrame({"date": dates.to_numpy(), "value": values.to_numpy()}).dropna()
    if len(cleaned) < len(frame):
        logger.debug(f"Dropped {len(frame) - len(cleaned)} unparseable rows")

    points = [
        TimePoint(ts.date(), float(v)) for ts, v in zip(cleaned["date"], cleaned["value"])
    ]
    return clean_series(points, start_date)


def derive_net_liquidity(
    balance_sheet: Sequence[TimePoint],
    tga: Sequence[TimePoint],
    rrp: Sequence[TimePoint],
) -> list[TimePoint]:
    """
    Net liquidity = Fed balance sheet - TGA - ON RRP, in billions.

    Balance sheet is in billions; TGA and RRP arrive in millions. Each
    component is forward-filled over the union of observation dates, and
    nothing is emitted until a balance sheet value is known.
    """
    components = [
        {p.date: p.value for p in balance_sheet},
        {p.date: p.value for p in tga},
        {p.date: p.value for p in rrp},
    ]
    all_dates = sorted(set().union(*components))

    last = [0.0, 0.0, 0.0]
    points: list[TimePoint] = []
    for d in all_dates:
        for k, component in enumerate(components):
            if d in component:
                last[k] = component[d]
        walcl, tga_value, rrp_value = last
        if walcl > 0:
            points.append(TimePoint(d, walcl - tga_value / 1000 - rrp_value / 1000))

    return points
