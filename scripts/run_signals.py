#!/usr/bin/env python3
"""
REGIME SIGNALS run over a directory of CSV files.

Each file is named <series_id>.csv and holds `date,value` columns,
exactly as exported by the upstream fetchers.

Usage:
    python scripts/run_signals.py data/
    python scripts/run_signals.py data/ --json
    python scripts/run_signals.py data/ --anchor vix -v
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import pandas as pd

# Ensure regime_signals is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from regime_signals.config import SignalConfig
from regime_signals.explain.generator import generate_explanation
from regime_signals.features.correlation import top_correlations
from regime_signals.ingest.series import points_from_frame
from regime_signals.pipeline.signals import SignalsPipeline

logger = logging.getLogger("regime_signals.cli")


def load_directory(data_dir: Path) -> dict:
    """Load every <series_id>.csv in data_dir."""
    series = {}
    for path in sorted(data_dir.glob("*.csv")):
        frame = pd.read_csv(path)
        series[path.stem] = points_from_frame(frame)
        logger.debug(f"Loaded {path.name}: {len(series[path.stem])} observations")
    return series


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Compute the regime score from pre-fetched series",
    )
    parser.add_argument("data_dir", type=Path, help="Directory of <series_id>.csv files")
    parser.add_argument("--anchor", "-a", type=str, default=None, help="Anchor series id")
    parser.add_argument("--json", "-j", action="store_true", help="Output JSON only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not args.data_dir.is_dir():
        print(f"Error: '{args.data_dir}' is not a directory.")
        return 1

    config = SignalConfig()
    if args.anchor:
        config = replace(config, anchor_series=args.anchor)

    result = SignalsPipeline(config).process(load_directory(args.data_dir))

    if args.json:
        print(result.to_json())
        return 0 if result.ok else 2

    if not result.ok:
        print(f"Error: {result.error}")
        return 2

    regime = result.response.regime
    print()
    print("=" * 60)
    print("REGIME SIGNALS")
    print("=" * 60)
    print(f"As of:   {regime.as_of}")
    print(f"Score:   {regime.score:.1f}")
    print(f"Regime:  {regime.label.value}")
    print(f"Status:  {result.status.value}")
    print("-" * 60)
    print("Drivers:")
    for line in generate_explanation(regime):
        print(f"  - {line}")
    print("-" * 60)
    for window in result.response.correlations:
        print(f"Top correlations ({window.window_label}):")
        for pair in top_correlations(window, n=3):
            print(f"  {pair.series_a} / {pair.series_b}: {pair.spearman:+.2f}")
    if result.warnings:
        print("-" * 60)
        print("Warnings:")
        for w in result.warnings:
            print(f"  - {w}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
