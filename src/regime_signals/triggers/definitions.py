"""
REGIME SIGNALS - Trigger Definitions

Each trigger is a pure, stateless predicate over one snapshot of named
signal values and the configured thresholds. Triggers never depend on
each other and are evaluated independently at every grid point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

from regime_signals.config import TriggerThresholds

Signals = Mapping[str, Optional[float]]


@dataclass(frozen=True)
class TriggerDefinition:
    id: str
    name: str
    description: str
    predicate: Callable[[Signals, TriggerThresholds], bool]

    def fires(self, signals: Signals, thresholds: TriggerThresholds) -> bool:
        return self.predicate(signals, thresholds)


def _above(signals: Signals, key: str, threshold: float) -> bool:
    v = signals.get(key)
    return v is not None and v > threshold


def _below(signals: Signals, key: str, threshold: float) -> bool:
    v = signals.get(key)
    return v is not None and v < threshold


def _srf_takeup(s: Signals, t: TriggerThresholds) -> bool:
    return _above(s, "srf_accepted", t.srf_accepted)


def _rmp_increase(s: Signals, t: TriggerThresholds) -> bool:
    return _above(s, "rmp_wow_change", t.rmp_wow_change)


def _liquidity_stress(s: Signals, t: TriggerThresholds) -> bool:
    return _below(s, "net_liquidity_pctile", t.liquidity_percentile)


def _credit_stress(s: Signals, t: TriggerThresholds) -> bool:
    # Level OR widening
    return _above(s, "hy_oas", t.hy_oas) or _above(s, "hy_oas_3m_change", t.hy_oas_3m_change)


def _volatility_spike(s: Signals, t: TriggerThresholds) -> bool:
    return _above(s, "vix", t.vix)


def _yield_curve_inversion(s: Signals, t: TriggerThresholds) -> bool:
    return _below(s, "yield_curve_spread", t.yield_curve_spread)


DEFAULT_TRIGGERS: tuple[TriggerDefinition, ...] = (
    TriggerDefinition(
        "srf_takeup", "SRF Take-up", "Standing Repo Facility usage > 0", _srf_takeup
    ),
    TriggerDefinition(
        "rmp_increase",
        "RMP Bills Increase",
        "SOMA Treasury bills WoW change > threshold",
        _rmp_increase,
    ),
    TriggerDefinition(
        "liquidity_stress",
        "Liquidity Stress",
        "Net liquidity percentile below threshold",
        _liquidity_stress,
    ),
    TriggerDefinition(
        "credit_stress",
        "Credit Stress",
        "HY OAS above threshold or widening significantly",
        _credit_stress,
    ),
    TriggerDefinition(
        "volatility_spike", "Volatility Spike", "VIX above threshold", _volatility_spike
    ),
    TriggerDefinition(
        "yield_curve_inversion",
        "Yield Curve Inversion",
        "10Y-2Y spread below zero",
        _yield_curve_inversion,
    ),
)


def snapshot_at(columns: Mapping[str, Sequence[Optional[float]]], index: int) -> dict[str, Optional[float]]:
    """Named signal values at one grid index."""
    return {key: (col[index] if index < len(col) else None) for key, col in columns.items()}


def evaluate_triggers(
    columns: Mapping[str, Sequence[Optional[float]]],
    length: int,
    thresholds: TriggerThresholds,
    triggers: Sequence[TriggerDefinition] = DEFAULT_TRIGGERS,
) -> dict[str, list[bool]]:
    """
    Evaluate every trigger at every grid index.

    Args:
        columns: Aligned (and derived) series keyed by signal name.
        length: Grid length.
        thresholds: Trigger thresholds.
        triggers: Trigger set to evaluate.

    Returns:
        {trigger_id: [fired at index i]}
    """
    snapshots = [snapshot_at(columns, i) for i in range(length)]
    return {
        trigger.id: [trigger.fires(snap, thresholds) for snap in snapshots]
        for trigger in triggers
    }


def get_currently_firing_triggers(
    signals: Signals,
    thresholds: TriggerThresholds,
    triggers: Sequence[TriggerDefinition] = DEFAULT_TRIGGERS,
) -> list[TriggerDefinition]:
    """Triggers firing on the latest snapshot (the active alerts)."""
    return [t for t in triggers if t.fires(signals, thresholds)]
