"""Tests for trigger predicates and evaluation."""

import pytest

from regime_signals.config import TriggerThresholds
from regime_signals.triggers.definitions import (
    DEFAULT_TRIGGERS,
    TriggerDefinition,
    evaluate_triggers,
    get_currently_firing_triggers,
    snapshot_at,
)


@pytest.fixture
def thresholds():
    return TriggerThresholds()


def _trigger(trigger_id: str) -> TriggerDefinition:
    return next(t for t in DEFAULT_TRIGGERS if t.id == trigger_id)


class TestPredicates:
    def test_missing_signals_never_fire(self, thresholds):
        for trigger in DEFAULT_TRIGGERS:
            assert trigger.fires({}, thresholds) is False

    def test_null_signals_never_fire(self, thresholds):
        signals = {
            "srf_accepted": None,
            "rmp_wow_change": None,
            "net_liquidity_pctile": None,
            "hy_oas": None,
            "hy_oas_3m_change": None,
            "vix": None,
            "yield_curve_spread": None,
        }
        assert get_currently_firing_triggers(signals, thresholds) == []

    def test_srf_takeup(self, thresholds):
        trigger = _trigger("srf_takeup")
        assert trigger.fires({"srf_accepted": 0.5}, thresholds)
        assert not trigger.fires({"srf_accepted": 0.0}, thresholds)

    def test_rmp_increase(self, thresholds):
        trigger = _trigger("rmp_increase")
        assert trigger.fires({"rmp_wow_change": 30.0}, thresholds)
        assert not trigger.fires({"rmp_wow_change": 25.0}, thresholds)

    def test_liquidity_stress(self, thresholds):
        trigger = _trigger("liquidity_stress")
        assert trigger.fires({"net_liquidity_pctile": 10.0}, thresholds)
        assert not trigger.fires({"net_liquidity_pctile": 20.0}, thresholds)

    def test_credit_stress_by_level(self, thresholds):
        assert _trigger("credit_stress").fires({"hy_oas": 5.5}, thresholds)

    def test_credit_stress_by_widening(self, thresholds):
        signals = {"hy_oas": 4.0, "hy_oas_3m_change": 1.2}
        assert _trigger("credit_stress").fires(signals, thresholds)

    def test_credit_stress_calm(self, thresholds):
        signals = {"hy_oas": 4.0, "hy_oas_3m_change": 0.3}
        assert not _trigger("credit_stress").fires(signals, thresholds)

    def test_volatility_spike(self, thresholds):
        trigger = _trigger("volatility_spike")
        assert trigger.fires({"vix": 25.1}, thresholds)
        assert not trigger.fires({"vix": 25.0}, thresholds)

    def test_yield_curve_inversion(self, thresholds):
        trigger = _trigger("yield_curve_inversion")
        assert trigger.fires({"yield_curve_spread": -0.1}, thresholds)
        assert not trigger.fires({"yield_curve_spread": 0.0}, thresholds)

    def test_custom_thresholds(self):
        strict = TriggerThresholds(vix=40.0)
        assert not _trigger("volatility_spike").fires({"vix": 30.0}, strict)


class TestEvaluateTriggers:
    def test_one_flag_per_index(self, thresholds):
        columns = {"vix": [20.0, 30.0, None, 26.0]}
        fired = evaluate_triggers(columns, 4, thresholds)
        assert set(fired) == {t.id for t in DEFAULT_TRIGGERS}
        assert fired["volatility_spike"] == [False, True, False, True]
        assert fired["srf_takeup"] == [False] * 4

    def test_snapshot_at(self):
        columns = {"vix": [20.0, 30.0], "hy_oas": [4.0]}
        assert snapshot_at(columns, 1) == {"vix": 30.0, "hy_oas": None}

    def test_currently_firing(self, thresholds):
        signals = {"vix": 31.0, "yield_curve_spread": -0.4, "hy_oas": 3.5}
        names = [t.name for t in get_currently_firing_triggers(signals, thresholds)]
        assert names == ["Volatility Spike", "Yield Curve Inversion"]
