"""
REGIME SIGNALS - Pipeline Orchestration

Flow: ingest -> grid -> align -> derive -> correlate -> trigger stats -> score

SignalsPipeline.process() is the single entry point. It accepts series
already fetched by collaborators and always returns a SignalsResult:
missing inputs degrade individual components, and insufficient history
is reported as a result status rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Mapping, Optional, Sequence

import pandas as pd

from regime_signals.alignment.aligner import align_multiple_series, value_as_of
from regime_signals.alignment.calendar import Granularity, generate_grid
from regime_signals.classifier.engine import ComponentInput, compute_regime_score
from regime_signals.config import SignalConfig
from regime_signals.features.correlation import compute_rolling_correlations
from regime_signals.ingest.series import clean_series
from regime_signals.normalization.derived import derive_series
from regime_signals.triggers.definitions import (
    DEFAULT_TRIGGERS,
    TriggerDefinition,
    get_currently_firing_triggers,
    snapshot_at,
)
from regime_signals.triggers.event_study import compute_all_trigger_stats
from regime_signals.types import (
    DataRange,
    RegimeScore,
    RegimeSignalsResponse,
    ResponseMeta,
    RollingCorrelationWindow,
    RunStatus,
    SignalsResult,
    TimePoint,
    TriggerStat,
)

logger = logging.getLogger(__name__)

Columns = dict[str, list[Optional[float]]]


class InsufficientHistoryError(Exception):
    """Grid too short for percentiles and correlations to be meaningful."""


class SignalsPipeline:
    """
    Regime signals pipeline.

    Orchestrates: ingest -> grid -> align -> derive -> correlate -> trigger stats -> score
    """

    def __init__(
        self,
        config: SignalConfig | None = None,
        triggers: Sequence[TriggerDefinition] = DEFAULT_TRIGGERS,
    ) -> None:
        self.config = config or SignalConfig()
        self.triggers = tuple(triggers)

    def process(
        self,
        series: Mapping[str, Sequence[TimePoint]],
        computed_at: datetime | None = None,
        fresh: bool = False,
    ) -> SignalsResult:
        """
        Compute the full regime signals response.

        Args:
            series: Raw observations keyed by dataset id.
            computed_at: Timestamp recorded in the response (default: now, UTC).
                Pin it to make repeated runs byte-identical.
            fresh: Upstream cache-bypass flag; has no effect here.

        Returns:
            SignalsResult with status OK, PARTIAL or INSUFFICIENT_HISTORY.
        """
        logger.info(f"Regime signals run starting ({len(series)} series, fresh={fresh})")
        warnings: list[str] = []

        # Steps 1-3: Ingest, grid, history check
        prepared = self._prepare(series, warnings)
        try:
            grid = self._build_grid(prepared)
        except InsufficientHistoryError as e:
            logger.error(str(e))
            return SignalsResult(
                status=RunStatus.INSUFFICIENT_HISTORY,
                warnings=warnings,
                error=str(e),
            )

        # Steps 4-5: Align and derive
        columns = self._align(prepared, grid)
        columns.update(self._derive(columns))

        # Step 6: Rolling correlations
        correlations = self._compute_correlations(columns, grid, warnings)

        # Step 7: Trigger statistics (forward-looking backtest)
        trigger_stats = self._compute_trigger_stats(columns, len(grid), warnings)

        # Step 8: Regime score at the latest grid point (causal inputs only)
        regime = self._score(prepared, columns, grid)
        all_warnings = warnings + regime.warnings
        regime = replace(regime, warnings=all_warnings)

        response = RegimeSignalsResponse(
            regime=regime,
            correlations=correlations,
            trigger_stats=trigger_stats,
            meta=ResponseMeta(
                computed_at=computed_at or datetime.now(timezone.utc),
                version=self.config.version,
                data_range=DataRange(start=grid[0], end=grid[-1]),
            ),
        )

        status = RunStatus.PARTIAL if all_warnings else RunStatus.OK
        logger.info(
            f"Regime signals {grid[-1]}: {regime.score} {regime.label.value} "
            f"[{status.value}] drivers={regime.top_drivers}"
        )
        return SignalsResult(status=status, response=response, warnings=all_warnings)

    def aligned_frame(self, series: Mapping[str, Sequence[TimePoint]]) -> pd.DataFrame:
        """
        Aligned and derived dataset as a DataFrame indexed by grid date.

        Audit view of exactly what the scorer and trigger layers see.
        Empty when there is not enough history to build a grid.
        """
        warnings: list[str] = []
        prepared = self._prepare(series, warnings)
        try:
            grid = self._build_grid(prepared)
        except InsufficientHistoryError as e:
            logger.warning(str(e))
            return pd.DataFrame()

        columns = self._align(prepared, grid)
        columns.update(self._derive(columns))
        index = pd.DatetimeIndex(pd.to_datetime(grid), name="date")
        return pd.DataFrame(
            {k: pd.Series(v, index=index, dtype="float64") for k, v in columns.items()},
            index=index,
        )

    def _prepare(
        self,
        series: Mapping[str, Sequence[TimePoint]],
        warnings: list[str],
    ) -> dict[str, list[TimePoint]]:
        """Clean every supplied series; skip unknown ids and empty series."""
        prepared: dict[str, list[TimePoint]] = {}
        for series_id, points in series.items():
            descriptor = self.config.datasets.get(series_id)
            if descriptor is None:
                msg = f"{series_id}: no dataset descriptor configured, series ignored"
                logger.warning(msg)
                warnings.append(msg)
                continue

            cleaned = clean_series(points, descriptor.start_date)
            if not cleaned:
                msg = f"{descriptor.name}: no valid observations"
                logger.warning(msg)
                warnings.append(msg)
                continue
            prepared[series_id] = cleaned
        return prepared

    def _build_grid(self, prepared: Mapping[str, list[TimePoint]]) -> list[date]:
        """Business-day grid spanning the anchor series."""
        anchor_id = self.config.anchor_series
        anchor = prepared.get(anchor_id)
        if not anchor:
            raise InsufficientHistoryError(f"Anchor series '{anchor_id}' unavailable")

        grid = list(generate_grid(anchor[0].date, anchor[-1].date, Granularity.BUSINESS_DAY))
        required = self.config.min_history_points
        if len(grid) < required:
            raise InsufficientHistoryError(
                f"Insufficient history: {len(grid)} grid points (need {required})"
            )
        logger.info(f"Grid {grid[0]} -> {grid[-1]} ({len(grid)} business days)")
        return grid

    def _align(self, prepared: Mapping[str, list[TimePoint]], grid: list[date]) -> Columns:
        datasets = self.config.datasets
        return align_multiple_series(
            {sid: (points, datasets[sid].publication_lag_days) for sid, points in prepared.items()},
            grid,
        )

    def _derive(self, columns: Columns) -> Columns:
        derived, skipped = derive_series(columns, self.config.derived_series)
        for series_id in skipped:
            logger.debug(f"Derived series {series_id} skipped: source unavailable")
        return derived

    def _compute_correlations(
        self,
        columns: Columns,
        grid: list[date],
        warnings: list[str],
    ) -> list[RollingCorrelationWindow]:
        selected = {}
        for series_id in self.config.correlation_series:
            if series_id in columns:
                selected[series_id] = columns[series_id]
            else:
                warnings.append(f"Correlation series unavailable: {series_id}")

        windows = compute_rolling_correlations(selected, grid, self.config.correlation_windows)

        n = len(selected)
        expected_pairs = n * (n - 1) // 2
        for w in windows:
            omitted = expected_pairs - len(w.pairs)
            if omitted:
                warnings.append(
                    f"Correlations {w.window_label}: {omitted} pair(s) omitted, insufficient data"
                )
        return windows

    def _compute_trigger_stats(
        self,
        columns: Columns,
        length: int,
        warnings: list[str],
    ) -> list[TriggerStat]:
        outcome_id = self.config.outcome_series
        if outcome_id not in columns:
            msg = f"Outcome series '{outcome_id}' unavailable, trigger statistics skipped"
            logger.warning(msg)
            warnings.append(msg)
            return []

        return compute_all_trigger_stats(
            columns,
            length,
            outcome_id,
            self.config.outcome_horizon_days,
            self.config.thresholds,
            self.triggers,
        )

    def _score(
        self,
        prepared: Mapping[str, list[TimePoint]],
        columns: Columns,
        grid: list[date],
    ) -> RegimeScore:
        latest_index = len(grid) - 1
        latest_date = grid[latest_index]
        datasets = self.config.datasets

        inputs: dict[str, ComponentInput] = {}
        for definition in self.config.components:
            raw = columns.get(definition.source)
            pctile = columns.get(definition.percentile_source)
            as_of = None
            if definition.source in prepared:
                # Newest observation on or before the scoring date; the lag is
                # allowed for in the staleness tolerance
                point = value_as_of(prepared[definition.source], latest_date)
                as_of = point.date if point is not None else None
            inputs[definition.id] = ComponentInput(
                raw_value=raw[latest_index] if raw is not None else None,
                percentile=pctile[latest_index] if pctile is not None else None,
                as_of=as_of,
            )

        firing = get_currently_firing_triggers(
            snapshot_at(columns, latest_index), self.config.thresholds, self.triggers
        )

        return compute_regime_score(
            inputs,
            self.config.components,
            latest_date,
            active_alerts=[t.name for t in firing],
            publication_lags={sid: d.publication_lag_days for sid, d in datasets.items()},
        )


def compute_regime_signals(
    series: Mapping[str, Sequence[TimePoint]],
    config: SignalConfig | None = None,
    computed_at: datetime | None = None,
    fresh: bool = False,
) -> SignalsResult:
    """Convenience wrapper for one-off runs."""
    return SignalsPipeline(config).process(series, computed_at=computed_at, fresh=fresh)
