"""
REGIME SIGNALS - Trigger Event Study

Measures how predictive each trigger was historically: base rate vs.
conditional rate of a forward outcome, lift, and a Wilson 95% interval.

This is the ONLY module that looks forward in time. compute_forward_outcome
labels each date with what happened afterwards, for backtest statistics.
Its output must never feed the live regime score.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional, Sequence

from regime_signals.config import TriggerThresholds
from regime_signals.triggers.definitions import (
    DEFAULT_TRIGGERS,
    TriggerDefinition,
    evaluate_triggers,
)
from regime_signals.types import TriggerStat

Z_95 = 1.96
LOW_TRIGGER_COUNT = 10
SIGNIFICANT_LIFT = 2.0


def compute_forward_outcome(
    outcome: Sequence[Optional[float]],
    horizon_days: int,
) -> list[bool]:
    """
    For each index i, True if the 0/1 outcome equals 1 anywhere in [i, i + horizon_days).

    Forward-looking by construction: backtest labels only.
    """
    n = len(outcome)
    result: list[bool] = []
    for i in range(n):
        window = outcome[i : min(i + horizon_days, n)]
        result.append(any(v == 1 for v in window))
    return result


def wilson_interval(successes: int, total: int, z: float = Z_95) -> tuple[float, float]:
    """
    Wilson score interval for a binomial proportion.

    More reliable than the normal approximation for small or skewed
    samples. (0, 1) when total is 0.
    """
    if total == 0:
        return (0.0, 1.0)

    p = successes / total
    z2 = z * z
    denom = 1 + z2 / total
    center = p + z2 / (2 * total)
    spread = z * math.sqrt((p * (1 - p) + z2 / (4 * total)) / total)

    lower = max(0.0, (center - spread) / denom)
    upper = min(1.0, (center + spread) / denom)
    # Exact endpoints at p = 0 and p = 1
    if successes == 0:
        lower = 0.0
    if successes == total:
        upper = 1.0
    return (lower, upper)


def compute_trigger_stat(
    fired: Sequence[bool],
    outcome: Sequence[bool],
    horizon_days: int,
    trigger_id: str,
    trigger_name: str = "",
) -> TriggerStat:
    """
    Base rate, conditional rate, lift and Wilson CI for one trigger.

    Args:
        fired: Whether the trigger fired at each grid index.
        outcome: Forward outcome label at each grid index.
        horizon_days: Horizon the outcome labels were built with.
        trigger_id: Trigger identifier.
        trigger_name: Display name.

    Raises:
        ValueError: If fired and outcome differ in length.
    """
    if len(fired) != len(outcome):
        raise ValueError(f"Arrays must have same length ({len(fired)} != {len(outcome)})")

    n = len(fired)
    total_outcomes = sum(1 for o in outcome if o)
    total_triggers = sum(1 for f in fired if f)
    triggers_with_outcome = sum(1 for f, o in zip(fired, outcome) if f and o)

    base_rate = total_outcomes / n if n > 0 else 0.0
    conditional_rate = triggers_with_outcome / total_triggers if total_triggers > 0 else 0.0
    lift = conditional_rate / base_rate if base_rate > 0 else 0.0
    low, high = wilson_interval(triggers_with_outcome, total_triggers)

    notes: list[str] = []
    if total_triggers < LOW_TRIGGER_COUNT:
        notes.append("Low trigger count - interpret with caution")
    if lift > SIGNIFICANT_LIFT:
        notes.append("Significant lift detected")

    return TriggerStat(
        trigger_id=trigger_id,
        trigger_name=trigger_name or trigger_id,
        horizon_days=horizon_days,
        triggered_count=total_triggers,
        outcome_count=triggers_with_outcome,
        base_rate=round(base_rate, 4),
        conditional_rate=round(conditional_rate, 4),
        lift=round(lift, 2),
        ci95=(round(low, 4), round(high, 4)),
        notes=notes,
    )


def compute_all_trigger_stats(
    columns: Mapping[str, Sequence[Optional[float]]],
    length: int,
    outcome_key: str,
    horizon_days: int,
    thresholds: TriggerThresholds,
    triggers: Sequence[TriggerDefinition] = DEFAULT_TRIGGERS,
) -> list[TriggerStat]:
    """Evaluate every trigger over the grid and score it against one forward outcome."""
    outcome_values = columns.get(outcome_key, [None] * length)
    forward = compute_forward_outcome(outcome_values, horizon_days)
    fired_by_trigger = evaluate_triggers(columns, length, thresholds, triggers)

    return [
        compute_trigger_stat(
            fired_by_trigger[t.id], forward, horizon_days, t.id, t.name
        )
        for t in triggers
    ]
