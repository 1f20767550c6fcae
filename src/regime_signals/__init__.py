"""
REGIME SIGNALS - Macro Regime Signal Engine

Turns already-fetched macro/market series into one auditable regime score:
"Given what was knowable on each historical date, how stressed is the
macro backdrop today?"

Design Principles:
- No lookahead: every aligned value was knowable at its grid date
- Descriptive, backward-looking statistics only
- No data fetching, no persistence
- Deterministic, configuration-driven
- Partial data degrades components, never the whole run
"""

__version__ = "1.0.0"
