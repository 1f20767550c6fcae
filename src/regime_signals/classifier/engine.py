"""
REGIME SIGNALS - Composite Regime Scorer

Rules:
1. Each component's percentile becomes a directional stress score
   (percentile if higher is bad, else 100 - percentile)
2. contribution = stress * weight
3. score = sum(contribution) / sum(weight of components with data),
   rounded to one decimal, clamped to [0, 100]
4. Label: >= 75 Stress, >= 55 Risk-Off, >= 40 Neutral, else Risk-On

A component without a percentile contributes nothing and is reported
as unavailable. Each day is independent; no smoothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence

from regime_signals.config import ComponentDefinition
from regime_signals.explain.generator import describe_label
from regime_signals.types import RegimeComponentScore, RegimeLabel, RegimeScore

STRESS_THRESHOLD = 75.0
RISK_OFF_THRESHOLD = 55.0
NEUTRAL_THRESHOLD = 40.0

NEUTRAL_SCORE = 50.0  # Used when no component has data
STALENESS_GRACE_DAYS = 3
DEFAULT_EXPECTED_LAG_DAYS = 3
TOP_DRIVER_COUNT = 3


@dataclass(frozen=True)
class ComponentInput:
    """Latest observation for one scored component."""

    raw_value: Optional[float] = None
    percentile: Optional[float] = None
    as_of: Optional[date] = None


def regime_label(score: float) -> RegimeLabel:
    """Map a 0-100 score onto its categorical label."""
    if score >= STRESS_THRESHOLD:
        return RegimeLabel.STRESS
    if score >= RISK_OFF_THRESHOLD:
        return RegimeLabel.RISK_OFF
    if score >= NEUTRAL_THRESHOLD:
        return RegimeLabel.NEUTRAL
    return RegimeLabel.RISK_ON


def compute_regime_score(
    inputs: Mapping[str, ComponentInput],
    components: Sequence[ComponentDefinition],
    as_of: date,
    active_alerts: Sequence[str] = (),
    publication_lags: Optional[Mapping[str, int]] = None,
) -> RegimeScore:
    """
    Combine component percentiles into one composite regime score.

    Args:
        inputs: Latest (raw value, percentile, as-of) keyed by component id.
        components: Component definitions (direction, weight).
        as_of: Scoring date (latest grid date).
        active_alerts: Names of triggers firing on the latest snapshot.
        publication_lags: Declared lag in days keyed by source series id,
            for staleness checks.

    Returns:
        RegimeScore snapshot.
    """
    publication_lags = publication_lags or {}
    scored: list[RegimeComponentScore] = []
    warnings: list[str] = []
    weighted_sum = 0.0
    total_weight = 0.0

    for definition in components:
        component_input = inputs.get(definition.id, ComponentInput())

        if component_input.percentile is None:
            scored.append(
                RegimeComponentScore(
                    id=definition.id,
                    name=definition.name,
                    raw_value=component_input.raw_value,
                    percentile=None,
                    contribution=0.0,
                    as_of=component_input.as_of,
                    weight=definition.weight,
                    lag_description=definition.lag_description,
                )
            )
            warnings.append(f"{definition.name}: data unavailable")
            continue

        percentile = component_input.percentile
        stress = percentile if definition.higher_is_bad else 100.0 - percentile
        contribution = stress * definition.weight
        weighted_sum += contribution
        total_weight += definition.weight

        scored.append(
            RegimeComponentScore(
                id=definition.id,
                name=definition.name,
                raw_value=component_input.raw_value,
                percentile=round(percentile, 1),
                contribution=round(contribution, 1),
                as_of=component_input.as_of,
                weight=definition.weight,
                lag_description=definition.lag_description,
            )
        )

    if total_weight > 0:
        score = round(weighted_sum / total_weight, 1)
    else:
        score = NEUTRAL_SCORE
    score = max(0.0, min(100.0, score))
    label = regime_label(score)

    drivers = sorted(
        (c for c in scored if c.contribution > 0),
        key=lambda c: c.contribution,
        reverse=True,
    )
    top_drivers = [c.name for c in drivers[:TOP_DRIVER_COUNT]]

    # Staleness
    sources = {d.id: d.source for d in components}
    for component in scored:
        if component.as_of is None:
            continue
        age_days = (as_of - component.as_of).days
        expected_lag = publication_lags.get(sources[component.id], DEFAULT_EXPECTED_LAG_DAYS)
        if age_days > expected_lag + STALENESS_GRACE_DAYS:
            warnings.append(f"{component.name}: data stale ({age_days} days old)")

    return RegimeScore(
        as_of=as_of,
        score=score,
        label=label,
        description=describe_label(label),
        components=scored,
        top_drivers=top_drivers,
        active_alerts=list(active_alerts),
        warnings=warnings,
    )
