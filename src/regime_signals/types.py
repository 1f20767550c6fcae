"""
REGIME SIGNALS - Core Type Definitions

All dataclasses and enums used across the system.
No logic, only data structures and their serialization.

Nullable numeric fields are Optional[float]: None always means
"unavailable or insufficient data", never zero.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class Frequency(Enum):
    """Native observation frequency of a source series."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    IRREGULAR = "irregular"


class RegimeLabel(Enum):
    """Categorical summary of the composite stress score."""

    RISK_ON = "Risk-On"
    NEUTRAL = "Neutral"
    RISK_OFF = "Risk-Off"
    STRESS = "Stress"


class RunStatus(Enum):
    """Outcome variant of one orchestrator run."""

    OK = "OK"
    PARTIAL = "PARTIAL"
    INSUFFICIENT_HISTORY = "INSUFFICIENT_HISTORY"


@dataclass(frozen=True)
class TimePoint:
    """One observation of a named series. Immutable."""

    date: date
    value: float


@dataclass(frozen=True)
class CorrelationPair:
    """Pearson/Spearman correlation of two series over one trailing window."""

    series_a: str
    series_b: str
    pearson: Optional[float] = None
    spearman: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "a": self.series_a,
            "b": self.series_b,
            "pearson": self.pearson,
            "spearman": self.spearman,
        }


@dataclass(frozen=True)
class RollingCorrelationWindow:
    """All pairwise correlations for one window length, anchored at as_of."""

    as_of: date
    window_label: str
    window_days: int
    pairs: list[CorrelationPair] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "asOf": self.as_of.isoformat(),
            "window": self.window_label,
            "windowDays": self.window_days,
            "pairs": [p.to_dict() for p in self.pairs],
        }


@dataclass(frozen=True)
class TriggerStat:
    """Event-study statistics for one trigger over the full historical grid."""

    trigger_id: str
    trigger_name: str
    horizon_days: int
    triggered_count: int
    outcome_count: int
    base_rate: float
    conditional_rate: float
    lift: float
    ci95: tuple[float, float]
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "triggerId": self.trigger_id,
            "triggerName": self.trigger_name,
            "horizonDays": self.horizon_days,
            "triggeredCount": self.triggered_count,
            "outcomeCount": self.outcome_count,
            "baseRate": self.base_rate,
            "conditionalRate": self.conditional_rate,
            "lift": self.lift,
            "ci95": list(self.ci95),
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class RegimeComponentScore:
    """One scored component of the composite regime score."""

    id: str
    name: str
    raw_value: Optional[float]
    percentile: Optional[float]
    contribution: float
    as_of: Optional[date]
    weight: float
    lag_description: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "value": self.raw_value,
            "percentile": self.percentile,
            "contribution": self.contribution,
            "asOf": self.as_of.isoformat() if self.as_of is not None else None,
            "weight": self.weight,
            "lagDescription": self.lag_description,
        }


@dataclass(frozen=True)
class RegimeScore:
    """Composite regime score for one as-of date. Immutable snapshot."""

    as_of: date
    score: float
    label: RegimeLabel
    description: str
    components: list[RegimeComponentScore]
    top_drivers: list[str]
    active_alerts: list[str]
    warnings: list[str]

    def to_dict(self) -> dict:
        return {
            "asOf": self.as_of.isoformat(),
            "score": self.score,
            "regimeLabel": self.label.value,
            "description": self.description,
            "components": [c.to_dict() for c in self.components],
            "topDrivers": list(self.top_drivers),
            "activeAlerts": list(self.active_alerts),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class DataRange:
    start: date
    end: date


@dataclass(frozen=True)
class ResponseMeta:
    computed_at: datetime
    version: str
    data_range: DataRange


@dataclass(frozen=True)
class RegimeSignalsResponse:
    """Final output of one regime signals run."""

    regime: RegimeScore
    correlations: list[RollingCorrelationWindow]
    trigger_stats: list[TriggerStat]
    meta: ResponseMeta

    def to_dict(self) -> dict:
        """Serialize to output JSON format."""
        return {
            "regime": self.regime.to_dict(),
            "correlations": [w.to_dict() for w in self.correlations],
            "triggerStats": [t.to_dict() for t in self.trigger_stats],
            "meta": {
                "computedAt": self.meta.computed_at.isoformat(),
                "version": self.meta.version,
                "dataRange": {
                    "start": self.meta.data_range.start.isoformat(),
                    "end": self.meta.data_range.end.isoformat(),
                },
            },
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class SignalsResult:
    """
    Explicit result variant returned across the engine boundary.

    OK carries a response and no warnings, PARTIAL carries a response
    plus warnings, INSUFFICIENT_HISTORY carries only an error message.
    """

    status: RunStatus
    response: Optional[RegimeSignalsResponse] = None
    warnings: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.response is not None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "data": self.response.to_dict() if self.response is not None else None,
            "warnings": list(self.warnings),
            "error": self.error,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
