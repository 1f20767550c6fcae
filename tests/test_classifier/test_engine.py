"""Tests for the composite regime scorer."""

from datetime import date, timedelta

import pytest

from regime_signals.classifier.engine import (
    NEUTRAL_SCORE,
    ComponentInput,
    compute_regime_score,
    regime_label,
)
from regime_signals.config import DEFAULT_COMPONENTS, ComponentDefinition
from regime_signals.types import RegimeLabel

AS_OF = date(2025, 6, 10)

CREDIT = ComponentDefinition("credit", "Credit", "hy_oas", "hy_oas_pctile", True, 1.5)
LIQUIDITY = ComponentDefinition("liquidity", "Liquidity", "net_liquidity", "nl_pctile", False, 1.5)
VOL = ComponentDefinition("vol", "Volatility", "vix", "vix_pctile", True, 1.0)


def _inputs(**percentiles):
    return {key: ComponentInput(raw_value=1.0, percentile=p, as_of=AS_OF) for key, p in percentiles.items()}


class TestRegimeLabel:
    """Thresholds are inclusive at the lower bound."""

    @pytest.mark.parametrize(
        "score,label",
        [
            (100.0, RegimeLabel.STRESS),
            (75.0, RegimeLabel.STRESS),
            (74.9, RegimeLabel.RISK_OFF),
            (55.0, RegimeLabel.RISK_OFF),
            (54.9, RegimeLabel.NEUTRAL),
            (40.0, RegimeLabel.NEUTRAL),
            (39.9, RegimeLabel.RISK_ON),
            (0.0, RegimeLabel.RISK_ON),
        ],
    )
    def test_boundaries(self, score, label):
        assert regime_label(score) == label

    def test_scored_boundary(self):
        regime = compute_regime_score(_inputs(vol=74.9), [VOL], AS_OF)
        assert regime.score == 74.9
        assert regime.label == RegimeLabel.RISK_OFF

        regime = compute_regime_score(_inputs(vol=75.0), [VOL], AS_OF)
        assert regime.label == RegimeLabel.STRESS


class TestComputeRegimeScore:
    def test_direction(self):
        """Low liquidity percentile is stress; high credit percentile is stress."""
        regime = compute_regime_score(_inputs(credit=90.0, liquidity=10.0), [CREDIT, LIQUIDITY], AS_OF)
        assert regime.score == 90.0
        by_id = {c.id: c for c in regime.components}
        assert by_id["credit"].contribution == 135.0
        assert by_id["liquidity"].contribution == 135.0

    def test_weighted_average(self):
        regime = compute_regime_score(_inputs(credit=80.0, vol=20.0), [CREDIT, VOL], AS_OF)
        # (80 * 1.5 + 20 * 1.0) / 2.5
        assert regime.score == 56.0
        assert regime.label == RegimeLabel.RISK_OFF

    def test_score_bounds(self):
        for p in (0.0, 33.3, 50.0, 99.9, 100.0):
            regime = compute_regime_score(_inputs(credit=p, liquidity=p, vol=p), [CREDIT, LIQUIDITY, VOL], AS_OF)
            assert 0.0 <= regime.score <= 100.0

    def test_unavailable_component_excluded(self):
        inputs = _inputs(credit=60.0)
        inputs["vol"] = ComponentInput(raw_value=None, percentile=None, as_of=None)
        regime = compute_regime_score(inputs, [CREDIT, VOL], AS_OF)
        assert regime.score == 60.0
        vol = next(c for c in regime.components if c.id == "vol")
        assert vol.percentile is None
        assert vol.contribution == 0.0
        assert "Volatility: data unavailable" in regime.warnings

    def test_missing_input_is_unavailable(self):
        regime = compute_regime_score({}, [CREDIT], AS_OF)
        assert regime.warnings == ["Credit: data unavailable"]

    def test_no_data_is_neutral(self):
        regime = compute_regime_score({}, DEFAULT_COMPONENTS, AS_OF)
        assert regime.score == NEUTRAL_SCORE
        assert regime.label == RegimeLabel.NEUTRAL
        assert len(regime.warnings) == len(DEFAULT_COMPONENTS)

    def test_components_keep_definition_order(self):
        regime = compute_regime_score(_inputs(vol=10.0, credit=20.0), [VOL, CREDIT], AS_OF)
        assert [c.id for c in regime.components] == ["vol", "credit"]

    def test_top_drivers_by_contribution(self):
        regime = compute_regime_score(
            _inputs(credit=30.0, liquidity=20.0, vol=95.0), [CREDIT, LIQUIDITY, VOL], AS_OF
        )
        # contributions: credit 45, liquidity 120, vol 95
        assert regime.top_drivers == ["Liquidity", "Volatility", "Credit"]

    def test_zero_contribution_not_a_driver(self):
        regime = compute_regime_score(_inputs(credit=0.0, vol=50.0), [CREDIT, VOL], AS_OF)
        assert regime.top_drivers == ["Volatility"]

    def test_percentile_rounded(self):
        regime = compute_regime_score(_inputs(vol=42.345), [VOL], AS_OF)
        assert regime.components[0].percentile == 42.3
        assert regime.score == 42.3

    def test_active_alerts_and_description(self):
        regime = compute_regime_score(
            _inputs(vol=90.0), [VOL], AS_OF, active_alerts=["Volatility Spike"]
        )
        assert regime.active_alerts == ["Volatility Spike"]
        assert regime.description.startswith("Multiple stress indicators")


class TestStaleness:
    def _score_with_age(self, age_days, lag=1):
        inputs = {"vol": ComponentInput(raw_value=20.0, percentile=50.0, as_of=AS_OF - timedelta(days=age_days))}
        return compute_regime_score(inputs, [VOL], AS_OF, publication_lags={"vix": lag})

    def test_stale_component_warns(self):
        regime = self._score_with_age(10)
        assert regime.warnings == ["Volatility: data stale (10 days old)"]

    def test_within_grace_period(self):
        assert self._score_with_age(4).warnings == []

    def test_stale_still_scored(self):
        regime = self._score_with_age(30)
        assert regime.score == 50.0

    def test_longer_lag_tolerates_older_data(self):
        assert self._score_with_age(30, lag=30).warnings == []

    def test_default_expected_lag(self):
        inputs = {"vol": ComponentInput(raw_value=20.0, percentile=50.0, as_of=AS_OF - timedelta(days=7))}
        regime = compute_regime_score(inputs, [VOL], AS_OF)
        assert regime.warnings == ["Volatility: data stale (7 days old)"]
