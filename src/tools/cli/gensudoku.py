"""Command line entry point: generate a Sudoku puzzle and print it."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import List

from contracts.errors import GenerationError
from contracts.schema_validator import validate_bundle
from orchestrator import log as run_log
from orchestrator.sampling import derive_seed
from project_config import get_section
from sudoku_generator import GenerationResult, generate_puzzle, print_grid

_LOGGER = logging.getLogger("gensudoku")


def _parse_seed(value: str) -> int:
    try:
        return derive_seed(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _record_event(result: GenerationResult) -> None:
    path = run_log.append_event(
        {
            "seed": result.seed,
            "extra_hints": result.extra_hints,
            "hints": result.hints,
            "deduced_removed": result.deduced_removed,
            "uniqueness_checks": result.uniqueness_checks,
            "elapsed_ms": result.elapsed_ms,
        }
    )
    _LOGGER.debug("run event appended to %s", path)


def _generate(seed: int, extra_hints: int, events: bool) -> GenerationResult:
    result = generate_puzzle(extra_hints, seed=seed)
    if events:
        _record_event(result)
    return result


def cmd_generate(args: argparse.Namespace) -> int:
    events_dir = args.event_log or get_section("logging.events_dir", "")
    if events_dir:
        run_log.configure(events_dir)

    try:
        if args.pdf:
            return _write_pdf(args, bool(events_dir))
        result = _generate(args.seed, args.add_hints, bool(events_dir))
    except GenerationError as exc:
        _LOGGER.error("%s (seed %s)", exc, args.seed)
        return 1

    if args.format == "json":
        bundle = result.to_bundle()
        validate_bundle(bundle)
        print(json.dumps(bundle, indent=2, sort_keys=True))
        return 0

    print(f"seed: {args.seed}")
    print(print_grid(result.solution if args.solution else result.puzzle))
    return 0


def _write_pdf(args: argparse.Namespace, events: bool) -> int:
    from printer.pdf import export_pdf

    grids = []
    seeds = []
    for i in range(args.count):
        seed = args.seed + i
        _LOGGER.info("generating puzzle %d/%d (seed %d)", i + 1, args.count, seed)
        result = _generate(seed, args.add_hints, events)
        grids.append(result.solution if args.solution else result.puzzle)
        seeds.append(str(seed))
    pages = export_pdf(grids, args.pdf, labels=seeds)
    print(f"PDF with {pages} pages and {len(grids)} puzzles saved to: {Path(args.pdf).resolve()}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    from printer.pdf import DEFAULT_PUZZLES

    parser = argparse.ArgumentParser(
        prog="gensudoku",
        description="Generate a 9x9 Sudoku puzzle with a unique solution.",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=_parse_seed,
        default=None,
        help="Use a specific seed (integer or text). Defaults to the current time.",
    )
    parser.add_argument(
        "-a",
        "--add-hints",
        type=int,
        default=int(get_section("generator.extra_hints", 0)),
        metavar="NUM",
        help="Add NUM extra hints to the puzzle (default from [generator] extra_hints).",
    )
    parser.add_argument("--solution", action="store_true", help="Print the solution.")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument("--pdf", default=None, metavar="PATH", help="Render puzzles into a PDF file.")
    parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_PUZZLES,
        help="Number of puzzles for --pdf, seeded SEED, SEED+1, ... (default from config).",
    )
    parser.add_argument("--event-log", default=None, metavar="DIR", help="Append JSONL run events to DIR.")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default from config, else WARNING).",
    )
    parser.set_defaults(func=cmd_generate)
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.count < 1:
        parser.error("--count must be at least 1")
    run_log.configure_logging(args.log_level or get_section("logging.level", "WARNING"))
    if args.seed is None:
        args.seed = int(time.time())
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
