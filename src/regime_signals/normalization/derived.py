"""
REGIME SIGNALS - Derived Series

Builds secondary series (percentiles, n-period changes, z-scores,
rolling means) from aligned primaries according to configuration.
Every transform is causal. No side effects.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from regime_signals.config import DerivedKind, DerivedSeriesSpec
from regime_signals.features.statistics import (
    expanding_percentile,
    expanding_z_score,
    n_day_change,
    n_day_percent_change,
    rolling_mean,
)

_TRANSFORMS = {
    DerivedKind.PERCENTILE: expanding_percentile,
    DerivedKind.CHANGE: n_day_change,
    DerivedKind.PERCENT_CHANGE: n_day_percent_change,
    DerivedKind.Z_SCORE: expanding_z_score,
    DerivedKind.ROLLING_MEAN: rolling_mean,
}


def derive_series(
    aligned: Mapping[str, list[Optional[float]]],
    specs: Sequence[DerivedSeriesSpec],
) -> tuple[dict[str, list[Optional[float]]], list[str]]:
    """
    Build derived series in configuration order.

    An entry may use an earlier entry's output as its source. Entries
    whose source is not available are skipped.

    Args:
        aligned: Aligned primary series keyed by id.
        specs: Derived series to build.

    Returns:
        (derived: {id: values}, skipped: ids whose source was missing)
    """
    derived: dict[str, list[Optional[float]]] = {}
    skipped: list[str] = []

    for spec in specs:
        source = derived.get(spec.source, aligned.get(spec.source))
        if source is None:
            skipped.append(spec.id)
            continue
        derived[spec.id] = _TRANSFORMS[spec.kind](source, spec.window)

    return derived, skipped
