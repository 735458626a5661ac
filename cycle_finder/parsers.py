"""
Text parsing utilities for cycle-finder inputs.
"""

import re


def to_lines(text: str, skip_empty: bool = False) -> list[str]:
    """Split text into lines (LF or CRLF), trimming trailing whitespace."""
    lines = [line.rstrip() for line in text.splitlines()]
    if skip_empty:
        lines = [line for line in lines if line]
    return lines


def all_indexes_of(text: str, value: str, ignore_case: bool = False) -> list[int]:
    """
    Start index of every non-overlapping occurrence of value in text.

    Raises:
        ValueError: value is empty
    """
    if not value:
        raise ValueError("the string to find may not be empty")

    # Matching on the original text keeps indexes valid when case mapping changes length
    flags = re.IGNORECASE if ignore_case else 0
    return [match.start() for match in re.finditer(re.escape(value), text, flags)]


def find_substrings(
    text: str, values: list[str], ignore_case: bool = False
) -> list[tuple[str, int]]:
    """Find every occurrence of each value, as (value, index) pairs ordered by index."""
    found = []
    for value in values:
        for index in all_indexes_of(text, value, ignore_case=ignore_case):
            found.append((value, index))
    # stable sort keeps input order for values found at the same index
    return sorted(found, key=lambda pair: pair[1])
