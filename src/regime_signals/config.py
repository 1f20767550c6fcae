"""
REGIME SIGNALS - Configuration & Thresholds

Single source of truth for dataset metadata, derived series, scored
components and trigger thresholds. All values are named, documented,
and centralized. Nothing here is process-wide state: a SignalConfig is
built per run and handed to the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from regime_signals.types import Frequency


@dataclass(frozen=True)
class DatasetDescriptor:
    """Static metadata for one named source series."""

    id: str
    name: str
    frequency: Frequency
    publication_lag_days: int  # Days between reference date and release
    start_date: date  # Earliest reliable observation
    units: str = ""
    notes: str = ""


class DerivedKind(Enum):
    """Causal transforms available for secondary series."""

    PERCENTILE = "percentile"
    CHANGE = "change"
    PERCENT_CHANGE = "percent_change"
    Z_SCORE = "z_score"
    ROLLING_MEAN = "rolling_mean"


@dataclass(frozen=True)
class DerivedSeriesSpec:
    """A secondary series computed from an aligned primary (or earlier derived) series."""

    id: str
    source: str
    kind: DerivedKind
    window: int  # min_window for expanding stats, n for changes, length for means


@dataclass(frozen=True)
class CorrelationWindow:
    """Trailing window for the rolling correlation layer."""

    label: str
    days: int  # Grid points, not calendar days


@dataclass(frozen=True)
class ComponentDefinition:
    """One input to the composite regime score."""

    id: str
    name: str
    source: str  # Aligned series supplying the raw value and as-of date
    percentile_source: str  # Derived percentile series
    higher_is_bad: bool  # False -> low percentile means stress
    weight: float = 1.0
    lag_description: str = ""


@dataclass(frozen=True)
class TriggerThresholds:
    """Trigger thresholds for the event-study layer."""

    srf_accepted: float = 0.0  # Any Standing Repo Facility usage
    rmp_wow_change: float = 25.0  # $25B weekly increase in SOMA bills
    liquidity_percentile: float = 20.0  # Bottom quintile of net liquidity
    hy_oas: float = 5.0  # HY OAS above 5%
    hy_oas_3m_change: float = 1.0  # 100bp widening over ~3 months
    vix: float = 25.0
    yield_curve_spread: float = 0.0  # 10Y-2Y below zero means inverted


def default_datasets() -> dict[str, DatasetDescriptor]:
    """Canonical descriptors for the series the default configuration uses."""
    descriptors = [
        DatasetDescriptor(
            id="hy_oas",
            name="High-Yield OAS",
            frequency=Frequency.DAILY,
            publication_lag_days=1,  # T+1 close
            start_date=date(1996, 12, 31),
            units="percent",
            notes="ICE BofA US High Yield Index OAS (BAMLH0A0HYM2)",
        ),
        DatasetDescriptor(
            id="ig_oas",
            name="Investment Grade OAS",
            frequency=Frequency.DAILY,
            publication_lag_days=1,
            start_date=date(1996, 12, 31),
            units="percent",
            notes="ICE BofA US Corporate Index OAS (BAMLC0A0CM)",
        ),
        DatasetDescriptor(
            id="bbb_oas",
            name="BBB OAS",
            frequency=Frequency.DAILY,
            publication_lag_days=1,
            start_date=date(1996, 12, 31),
            units="percent",
            notes="ICE BofA BBB US Corporate Index OAS (BAMLC0A4CBBB)",
        ),
        DatasetDescriptor(
            id="vix",
            name="VIX",
            frequency=Frequency.DAILY,
            publication_lag_days=1,
            start_date=date(1990, 1, 2),
            units="index",
            notes="CBOE Volatility Index (VIXCLS)",
        ),
        DatasetDescriptor(
            id="yield_curve_spread",
            name="10Y-2Y Treasury Spread",
            frequency=Frequency.DAILY,
            publication_lag_days=1,
            start_date=date(1976, 6, 1),
            units="percent",
            notes="T10Y2Y or DGS10 - DGS2",
        ),
        DatasetDescriptor(
            id="net_liquidity",
            name="Net Liquidity",
            frequency=Frequency.WEEKLY,
            publication_lag_days=7,  # Weekly release, can be delayed
            start_date=date(2003, 1, 1),
            units="billions USD",
            notes="WALCL - TGA - ON RRP",
        ),
        DatasetDescriptor(
            id="rrp",
            name="Overnight Reverse Repo",
            frequency=Frequency.DAILY,
            publication_lag_days=1,
            start_date=date(2013, 9, 23),
            units="billions USD",
            notes="RRPONTSYD",
        ),
        DatasetDescriptor(
            id="srf_accepted",
            name="SRF Accepted Amount",
            frequency=Frequency.DAILY,
            publication_lag_days=0,  # Near real-time
            start_date=date(2021, 7, 28),  # Facility launch
            units="billions USD",
            notes="Standing Repo Facility accepted amounts",
        ),
        DatasetDescriptor(
            id="rmp_bills",
            name="SOMA Treasury Bills Held",
            frequency=Frequency.WEEKLY,
            publication_lag_days=3,
            start_date=date(2014, 1, 1),
            units="billions USD",
            notes="Reserve management purchases proxy",
        ),
        DatasetDescriptor(
            id="recession",
            name="NBER Recession Indicator",
            frequency=Frequency.MONTHLY,
            publication_lag_days=30,  # Dated ex-post
            start_date=date(1854, 12, 1),
            units="binary (0/1)",
            notes="USREC",
        ),
        DatasetDescriptor(
            id="sp500",
            name="S&P 500",
            frequency=Frequency.DAILY,
            publication_lag_days=1,
            start_date=date(1950, 1, 3),
            units="index level",
            notes="SP500",
        ),
        DatasetDescriptor(
            id="consumer_sentiment",
            name="Consumer Sentiment",
            frequency=Frequency.MONTHLY,
            publication_lag_days=14,  # Released mid-month
            start_date=date(1952, 11, 1),
            units="index",
            notes="University of Michigan (UMCSENT)",
        ),
        DatasetDescriptor(
            id="heavy_truck_sales",
            name="Heavy Weight Truck Sales",
            frequency=Frequency.MONTHLY,
            publication_lag_days=30,
            start_date=date(1967, 1, 1),
            units="millions of units (SAAR)",
            notes="HTRUCKSSAAR",
        ),
    ]
    return {d.id: d for d in descriptors}


DEFAULT_DERIVED_SERIES = (
    DerivedSeriesSpec("hy_oas_3m_change", "hy_oas", DerivedKind.CHANGE, 63),
    DerivedSeriesSpec("hy_oas_pctile", "hy_oas", DerivedKind.PERCENTILE, 252),
    DerivedSeriesSpec("vix_pctile", "vix", DerivedKind.PERCENTILE, 252),
    DerivedSeriesSpec("yield_curve_pctile", "yield_curve_spread", DerivedKind.PERCENTILE, 252),
    DerivedSeriesSpec("net_liquidity_pctile", "net_liquidity", DerivedKind.PERCENTILE, 252),
    DerivedSeriesSpec("srf_accepted_pctile", "srf_accepted", DerivedKind.PERCENTILE, 252),
    DerivedSeriesSpec("rmp_wow_change", "rmp_bills", DerivedKind.CHANGE, 5),  # 5 business days
)

DEFAULT_COMPONENTS = (
    ComponentDefinition(
        id="credit_stress",
        name="Credit Stress",
        source="hy_oas",
        percentile_source="hy_oas_pctile",
        higher_is_bad=True,
        weight=1.5,
        lag_description="Daily (T+1)",
    ),
    ComponentDefinition(
        id="liquidity_stress",
        name="Liquidity Stress",
        source="net_liquidity",
        percentile_source="net_liquidity_pctile",
        higher_is_bad=False,
        weight=1.5,
        lag_description="Weekly",
    ),
    ComponentDefinition(
        id="volatility",
        name="Volatility",
        source="vix",
        percentile_source="vix_pctile",
        higher_is_bad=True,
        weight=1.0,
        lag_description="Daily (T+1)",
    ),
    ComponentDefinition(
        id="funding_stress",
        name="Funding Stress",
        source="srf_accepted",
        percentile_source="srf_accepted_pctile",
        higher_is_bad=True,
        weight=1.0,
        lag_description="Near real-time",
    ),
    ComponentDefinition(
        id="curve_inversion",
        name="Yield Curve",
        source="yield_curve_spread",
        percentile_source="yield_curve_pctile",
        higher_is_bad=False,
        weight=1.0,
        lag_description="Daily (T+1)",
    ),
)


@dataclass(frozen=True)
class SignalConfig:
    """Master configuration for one regime signals run."""

    datasets: dict[str, DatasetDescriptor] = field(default_factory=default_datasets)
    anchor_series: str = "hy_oas"  # Most reliable daily coverage; sets grid bounds
    min_history_points: int = 504  # ~2 years of business days
    correlation_series: tuple[str, ...] = (
        "hy_oas",
        "vix",
        "yield_curve_spread",
        "net_liquidity_pctile",
    )
    correlation_windows: tuple[CorrelationWindow, ...] = (
        CorrelationWindow("60d", 60),
        CorrelationWindow("126d", 126),
    )
    derived_series: tuple[DerivedSeriesSpec, ...] = DEFAULT_DERIVED_SERIES
    components: tuple[ComponentDefinition, ...] = DEFAULT_COMPONENTS
    thresholds: TriggerThresholds = TriggerThresholds()
    outcome_series: str = "recession"
    outcome_horizon_days: int = 252  # ~12 months of business days
    version: str = "v1.0.0"
