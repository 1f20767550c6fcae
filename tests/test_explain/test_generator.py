"""Tests for the explanation generator."""

from datetime import date

from regime_signals.classifier.engine import ComponentInput, compute_regime_score
from regime_signals.config import DEFAULT_COMPONENTS
from regime_signals.explain.generator import (
    LABEL_DESCRIPTIONS,
    describe_label,
    generate_explanation,
)
from regime_signals.types import RegimeLabel

AS_OF = date(2026, 1, 2)


def _score(percentiles, alerts=()):
    inputs = {
        key: ComponentInput(raw_value=4.25, percentile=p, as_of=AS_OF)
        for key, p in percentiles.items()
    }
    return compute_regime_score(inputs, DEFAULT_COMPONENTS, AS_OF, active_alerts=alerts)


class TestDescribeLabel:
    def test_every_label_described(self):
        for label in RegimeLabel:
            assert describe_label(label) == LABEL_DESCRIPTIONS[label]

    def test_risk_on(self):
        assert "favor risk-taking" in describe_label(RegimeLabel.RISK_ON)


class TestGenerateExplanation:
    def test_default_message(self):
        regime = _score({})
        assert generate_explanation(regime) == ["All components within normal ranges"]

    def test_driver_line(self):
        regime = _score({"credit_stress": 88.0})
        lines = generate_explanation(regime)
        assert lines == ["Credit Stress: 4.25 (percentile: 88, contribution: 132.0)"]

    def test_trigger_lines_follow_drivers(self):
        regime = _score({"volatility": 90.0}, alerts=["Volatility Spike"])
        lines = generate_explanation(regime)
        assert lines[0].startswith("Volatility: 4.25")
        assert lines[-1] == "Trigger firing: Volatility Spike"

    def test_at_most_three_drivers(self):
        regime = _score(
            {
                "credit_stress": 90.0,
                "liquidity_stress": 10.0,
                "volatility": 80.0,
                "funding_stress": 70.0,
                "curve_inversion": 40.0,
            }
        )
        lines = generate_explanation(regime)
        assert len(lines) == 3
        assert not any(line.startswith("Trigger firing") for line in lines)
