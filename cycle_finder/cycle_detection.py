"""
Generalized cycle detection for deterministic state sequences.

Pulls states from a (possibly infinite) producer one at a time and stops
at the first state that repeats an earlier one. From that point on the
process is periodic, so any later state can be read back from the
observed history with modulo arithmetic instead of being simulated.

Two lookup strategies:
    - fingerprint map: ``key(state) -> first index``. O(n). Used when a
      ``key`` is given, or when no ``equals`` is given and states are
      hashable.
    - linear scan of the history with ``equals``. O(n²). Used when only a
      predicate is given, or when states turn out to be unhashable.

A ``key`` must agree with ``equals`` when both are supplied: states that
are equal must produce equal keys. Keys that collide are confirmed with
``equals``.
"""
import logging
import operator
from typing import Any, Callable, Hashable, Iterable, Optional

from cycle_finder.schemas import CycleAnalysis, InvalidArgument, NoCycleFound

logger = logging.getLogger(__name__)

EqualityPredicate = Callable[[Any, Any], bool]
Fingerprint = Callable[[Any], Hashable]


def _validate_max_iterations(max_iterations: Optional[int]) -> None:
    if max_iterations is None:
        return
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise InvalidArgument(
            f"max_iterations must be an int or None, got {type(max_iterations).__name__}"
        )
    if max_iterations <= 0:
        raise InvalidArgument(f"max_iterations must be > 0, got {max_iterations}")


def _scan(observed: list[Any], current: Any, equals: EqualityPredicate) -> Optional[int]:
    """Index of the first observed state equal to current, or None."""
    for index, seen in enumerate(observed):
        if equals(seen, current):
            return index
    return None


def _lookup(
    buckets: dict[Hashable, list[int]],
    fingerprint: Hashable,
    observed: list[Any],
    current: Any,
    equals: Optional[EqualityPredicate],
) -> Optional[int]:
    """Index of the first observed state sharing current's fingerprint.

    Without a predicate a fingerprint hit is a match. With one, every
    candidate in the bucket is confirmed in emission order.
    """
    candidates = buckets.get(fingerprint)
    if not candidates:
        return None
    if equals is None:
        return candidates[0]
    for index in candidates:
        if equals(observed[index], current):
            return index
    return None


def find_cycle(
    sequence: Iterable[Any],
    equals: Optional[EqualityPredicate] = None,
    max_iterations: Optional[int] = None,
    key: Optional[Fingerprint] = None,
) -> CycleAnalysis:
    """
    Find where a deterministic sequence starts repeating.

    Args:
        sequence: Iterable of states, consumed lazily through one iterator.
            Each pull should advance the underlying process by one step.
        equals: Optional predicate ``(earlier, current) -> bool`` deciding
            whether two states are the same. Defaults to ``==``.
        max_iterations: Maximum number of states to examine
            (default: unbounded).
        key: Optional fingerprint function mapping a state to a hashable
            value, enabling the O(n) lookup.

    Returns:
        CycleAnalysis with the earliest repeated index as cycle_start_index.

    Raises:
        InvalidArgument: max_iterations is not a positive int, or equals/key
            is not callable. Raised before anything is pulled.
        NoCycleFound: max_iterations states were examined (or the sequence
            ended) without a repeat.

    Examples:
        >>> find_cycle([1, 2, 3, 1, 2, 3]).cycle_length
        3
        >>> find_cycle([99, 100, 1, 2, 1, 2]).cycle_start_index
        2
    """
    _validate_max_iterations(max_iterations)
    if equals is not None and not callable(equals):
        raise InvalidArgument("equals must be callable")
    if key is not None and not callable(key):
        raise InvalidArgument("key must be callable")

    use_fingerprint = key is not None or equals is None
    fingerprint_of = key if key is not None else (lambda state: state)
    scan_equals = equals if equals is not None else operator.eq
    # dict lookups short-circuit on identity, so hashed states are still confirmed with ==
    confirm_equals = scan_equals if key is None else equals
    logger.debug(
        "find_cycle: strategy=%s max_iterations=%s",
        "fingerprint" if use_fingerprint else "scan",
        max_iterations,
    )

    observed: list[Any] = []
    buckets: dict[Hashable, list[int]] = {}
    iterator = iter(sequence)
    index = 0

    while max_iterations is None or index < max_iterations:
        try:
            current = next(iterator)
        except StopIteration:
            raise NoCycleFound(index, exhausted=True) from None

        fingerprint = None
        if use_fingerprint:
            try:
                fingerprint = fingerprint_of(current)
                hash(fingerprint)
            except TypeError:
                if key is not None:
                    raise
                # States are not hashable; history so far is still valid for a scan
                logger.debug("find_cycle: unhashable state at index %d, falling back to scan", index)
                use_fingerprint = False

        if use_fingerprint:
            seen_at = _lookup(buckets, fingerprint, observed, current, confirm_equals)
        else:
            seen_at = _scan(observed, current, scan_equals)

        observed.append(current)

        if seen_at is not None:
            analysis = CycleAnalysis(
                cycle_start_index=seen_at,
                cycle_length=index - seen_at,
                observed_values=observed,
            )
            logger.debug(
                "find_cycle: cycle found start=%d length=%d after %d values",
                analysis.cycle_start_index,
                analysis.cycle_length,
                len(observed),
            )
            return analysis

        if use_fingerprint:
            buckets.setdefault(fingerprint, []).append(index)
        index += 1

    raise NoCycleFound(max_iterations)


def find_value_at(analysis: CycleAnalysis, target_index: int) -> Any:
    """
    State the analysed process would emit at ``target_index``.

    Nothing is simulated: prefix indexes are read directly from the
    observed history and later indexes are folded into the first period.

    Example:
        >>> analysis = find_cycle([99, 100, 1, 2, 1, 2])
        >>> find_value_at(analysis, 1_000_000)
        1
    """
    return analysis.value_at(target_index)
