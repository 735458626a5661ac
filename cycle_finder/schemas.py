"""
Cycle analysis result model and error hierarchy.

CycleAnalysis is produced once per find_cycle() call and is read-only
afterwards. Extrapolation to arbitrary indexes lives here so the result
can answer "what state comes at step N" on its own.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ─────────────────────────────────────────────────────────────────────
# Exception hierarchy
# ─────────────────────────────────────────────────────────────────────


class CycleDetectionError(Exception):
    """Base exception for cycle detection failures."""
    pass


class NoCycleFound(CycleDetectionError):
    """No repeated state within the inspected horizon.

    ``iterations`` is the number of states examined. ``exhausted`` is True
    when the producer ran dry before the iteration bound was reached.
    """

    def __init__(self, iterations: int, exhausted: bool = False):
        self.iterations = iterations
        self.exhausted = exhausted
        if exhausted:
            message = (
                f"No cycle found: input sequence ended after {iterations} values."
            )
        else:
            message = (
                f"No cycle found in input sequence after checking {iterations} iterations."
            )
        super().__init__(message)


class InvalidArgument(CycleDetectionError, ValueError):
    """Malformed input to the analyzer (rejected before any iteration)."""
    pass


# ─────────────────────────────────────────────────────────────────────
# Result model
# ─────────────────────────────────────────────────────────────────────


class CycleAnalysis(BaseModel):
    """Where a sequence starts repeating, and every state seen until then.

    ``observed_values`` holds the states in emission order including the
    one that closed the cycle, so
    ``observed_values[cycle_start_index + cycle_length]`` is the repeat of
    ``observed_values[cycle_start_index]``.

    Hashing an analysis hashes every observed state, so it raises
    TypeError when the states themselves are unhashable.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    cycle_start_index: int = Field(ge=0)
    cycle_length: int = Field(ge=1)
    observed_values: tuple[Any, ...]

    @model_validator(mode="after")
    def _check_observed_length(self) -> "CycleAnalysis":
        required = self.cycle_start_index + self.cycle_length + 1
        if len(self.observed_values) < required:
            raise ValueError(
                f"observed_values must hold at least {required} states "
                f"(got {len(self.observed_values)})"
            )
        return self

    @property
    def prefix(self) -> tuple[Any, ...]:
        """States before the cycle begins."""
        return self.observed_values[: self.cycle_start_index]

    @property
    def cycle(self) -> tuple[Any, ...]:
        """One full period of the cycle, starting at cycle_start_index."""
        start = self.cycle_start_index
        return self.observed_values[start : start + self.cycle_length]

    def value_at(self, target_index: int) -> Any:
        """State the process would emit at ``target_index``.

        Indexes in the prefix are returned directly; anything later is
        folded back into the first period with modulo arithmetic.
        """
        if isinstance(target_index, bool) or not isinstance(target_index, int):
            raise InvalidArgument(
                f"target_index must be an int, got {type(target_index).__name__}"
            )
        if target_index < 0:
            raise InvalidArgument(f"target_index must be >= 0, got {target_index}")

        if target_index < self.cycle_start_index:
            return self.observed_values[target_index]
        offset = (target_index - self.cycle_start_index) % self.cycle_length
        return self.observed_values[self.cycle_start_index + offset]
