"""CLI entry point for cycle-finder.

Entry point:
    cycle-finder analyze <file> [--at N ...] [--max-iterations N] [--json]
    cycle-finder dish <file> [--spins N] [--json]

`analyze` treats each non-empty line of the file as one state.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from cycle_finder.config import (
    CLI_LOG_FORMAT,
    get_default_dish_spins,
    get_default_max_iterations,
)
from cycle_finder.schemas import CycleDetectionError

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# ARGUMENT PARSING
# ─────────────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cycle-finder",
        description="Detect repeating states in a deterministic sequence.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    # analyze
    analyze_p = sub.add_parser("analyze", help="Find the cycle in a file of states (one per line)")
    analyze_p.add_argument("file", help="Input file, one state per line")
    analyze_p.add_argument(
        "--at", type=int, action="append", default=[], dest="indexes",
        help="Report the state at this index (repeatable)",
    )
    analyze_p.add_argument(
        "--max-iterations", type=int, default=None,
        help="Stop after this many states (default: CYCLE_FINDER_MAX_ITERATIONS or unbounded)",
    )
    analyze_p.add_argument("--json", action="store_true", dest="json_output", help="JSON output")

    # dish
    dish_p = sub.add_parser("dish", help="Reflector dish load after N spin cycles")
    dish_p.add_argument("file", help="Dish grid file")
    dish_p.add_argument(
        "--spins", type=int, default=None,
        help="Spin cycles to extrapolate to (default: CYCLE_FINDER_DISH_SPINS or 1000000000)",
    )
    dish_p.add_argument("--json", action="store_true", dest="json_output", help="JSON output")

    return parser


# ─────────────────────────────────────────────────────────────────────
# COMMANDS
# ─────────────────────────────────────────────────────────────────────


def _read_input(path: str) -> Optional[str]:
    input_file = Path(path)
    if not input_file.exists():
        print(f"Error: input file not found: {path}", file=sys.stderr)
        return None
    try:
        return input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: could not read input file {path}: {e}", file=sys.stderr)
        return None


def _emit(payload: dict, json_output: bool) -> None:
    if json_output:
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for name, value in payload.items():
            if isinstance(value, dict):
                for sub_name, sub_value in value.items():
                    print(f"{name}[{sub_name}]: {sub_value}")
            else:
                print(f"{name}: {value}")


def _cmd_analyze(
    path: str,
    indexes: list[int],
    max_iterations: Optional[int] = None,
    json_output: bool = False,
) -> int:
    """Run cycle detection over the lines of a file. Returns exit code."""
    from cycle_finder.cycle_detection import find_cycle, find_value_at
    from cycle_finder.parsers import to_lines

    text = _read_input(path)
    if text is None:
        return 1

    if max_iterations is None:
        max_iterations = get_default_max_iterations()

    try:
        analysis = find_cycle(to_lines(text, skip_empty=True), max_iterations=max_iterations)
        values = {str(i): find_value_at(analysis, i) for i in indexes}
    except CycleDetectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payload = {
        "cycle_start_index": analysis.cycle_start_index,
        "cycle_length": analysis.cycle_length,
        "values_observed": len(analysis.observed_values),
    }
    if values:
        payload["values"] = values
    _emit(payload, json_output)
    return 0


def _cmd_dish(path: str, spins: Optional[int] = None, json_output: bool = False) -> int:
    """Report reflector dish loads. Returns exit code."""
    from cycle_finder.dish import ReflectorDish, load_after_north_tilt, load_after_spins

    text = _read_input(path)
    if text is None:
        return 1

    if spins is None:
        spins = get_default_dish_spins()

    try:
        dish = ReflectorDish.parse(text)
        logger.debug("Loaded dish with %d rows and %d columns", dish.row_count, dish.column_count)
        payload = {
            "rows": dish.row_count,
            "columns": dish.column_count,
            "north_tilt_load": load_after_north_tilt(dish),
            "spins": spins,
            "spin_load": load_after_spins(dish, spins, max_iterations=get_default_max_iterations()),
        }
    except (CycleDetectionError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _emit(payload, json_output)
    return 0


# ─────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format=CLI_LOG_FORMAT, stream=sys.stderr)

    # Load env
    from dotenv import load_dotenv
    load_dotenv()

    # Dispatch
    if args.command == "analyze":
        code = _cmd_analyze(
            path=args.file,
            indexes=args.indexes,
            max_iterations=args.max_iterations,
            json_output=args.json_output,
        )
    elif args.command == "dish":
        code = _cmd_dish(path=args.file, spins=args.spins, json_output=args.json_output)
    else:
        parser.print_help()
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
