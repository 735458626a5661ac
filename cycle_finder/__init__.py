"""
cycle-finder: detect where a deterministic state sequence starts
repeating and read states arbitrarily far ahead from the cycle.
"""

from cycle_finder.cycle_detection import find_cycle, find_value_at
from cycle_finder.schemas import (
    CycleAnalysis,
    CycleDetectionError,
    NoCycleFound,
    InvalidArgument,
)

__all__ = [
    "find_cycle",
    "find_value_at",
    "CycleAnalysis",
    "CycleDetectionError",
    "NoCycleFound",
    "InvalidArgument",
]
