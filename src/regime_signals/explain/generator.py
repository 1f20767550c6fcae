"""
REGIME SIGNALS - Explanation Generator

Produces human-readable regime descriptions and driver statements.
Drivers are factual statements about component percentiles and firing
triggers. No predictions, no narratives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from regime_signals.types import RegimeLabel

if TYPE_CHECKING:
    from regime_signals.types import RegimeScore

LABEL_DESCRIPTIONS = {
    RegimeLabel.RISK_ON: (
        "Market conditions favor risk-taking. Liquidity ample, credit tight, volatility low."
    ),
    RegimeLabel.NEUTRAL: "Mixed signals. No strong directional bias in regime indicators.",
    RegimeLabel.RISK_OFF: (
        "Elevated caution warranted. Some stress indicators elevated but not extreme."
    ),
    RegimeLabel.STRESS: (
        "Multiple stress indicators firing. Historically associated with risk-off episodes."
    ),
}


def describe_label(label: RegimeLabel) -> str:
    return LABEL_DESCRIPTIONS[label]


def generate_explanation(regime: RegimeScore) -> list[str]:
    """
    Generate driver statements for a scored regime.

    Args:
        regime: Composite regime score.

    Returns:
        Lines describing top drivers and active alerts, or a default
        message when nothing stands out.
    """
    lines: list[str] = []
    by_name = {c.name: c for c in regime.components}

    for name in regime.top_drivers:
        component = by_name[name]
        value_str = f"{component.raw_value:.2f}" if component.raw_value is not None else "N/A"
        lines.append(
            f"{name}: {value_str} (percentile: {component.percentile:.0f}, "
            f"contribution: {component.contribution:.1f})"
        )

    for alert in regime.active_alerts:
        lines.append(f"Trigger firing: {alert}")

    if not lines:
        lines.append("All components within normal ranges")

    return lines
