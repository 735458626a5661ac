"""
Configuration constants and environment lookups for cycle-finder.
"""

import os
from typing import Optional


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS
# ─────────────────────────────────────────────────────────────────────

DEFAULT_DISH_SPINS: int = 1_000_000_000
CLI_LOG_FORMAT: str = "%(name)s %(message)s"


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def get_default_max_iterations() -> Optional[int]:
    """
    Get the iteration bound used by the CLI when none is passed.

    Set CYCLE_FINDER_MAX_ITERATIONS in .env. Unset, empty, non-numeric
    or non-positive values mean unbounded (None).
    """
    raw = os.environ.get("CYCLE_FINDER_MAX_ITERATIONS", "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def get_default_dish_spins() -> int:
    """
    Get the number of spin cycles for `cycle-finder dish`.

    Set CYCLE_FINDER_DISH_SPINS in .env (default: 1_000_000_000).
    """
    try:
        value = int(os.environ.get("CYCLE_FINDER_DISH_SPINS", str(DEFAULT_DISH_SPINS)))
    except ValueError:
        return DEFAULT_DISH_SPINS
    return value if value >= 0 else DEFAULT_DISH_SPINS
