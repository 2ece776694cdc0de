#!/usr/bin/env python3
"""Command-line runner: notation in, analysed pattern JSON out."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from jif.cycles import get_juggler_cycle, get_limb_cycle
from jif.errors import ParseError, PatternError
from jif.loader import load_with_defaults
from jif.logging_config import configure_logging
from jif.manipulation import apply_manipulators
from jif.notation import parse_notation, prechac_to_pattern, siteswap_to_pattern
from jif.orbits import calculate_orbits
from jif.preset_loader import load_preset_by_slug
from jif.runtime_config import PipelineConfig, pipeline_config_from_env
from jif.schema_validator import validate_pattern
from jif.trace import TraceRecorder, TraceSink
from jif.types import Pattern


LOGGER = logging.getLogger("jif.pipeline")


def analyze_pattern(
    pattern: Pattern,
    include_orbits: bool = True,
    trace: Optional[TraceSink] = None,
) -> Dict[str, Any]:
    """JSON document with the pattern, its orbits and its relabeling cycles."""
    orbits = (
        [[thrw.to_dict() for thrw in orbit] for orbit in calculate_orbits(pattern, trace=trace)]
        if include_orbits
        else None
    )
    return {
        "pattern": pattern.to_dict(),
        "orbits": orbits,
        "jugglerCycle": get_juggler_cycle(pattern),
        "limbCycle": get_limb_cycle(pattern),
    }


def _read_input(path: Path, jugglers: int) -> Pattern:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON in {path}: {exc}") from exc
        validate_pattern(payload)
        return load_with_defaults(payload)
    return load_with_defaults(parse_notation(text, jugglers))


def build_pattern(
    args: argparse.Namespace,
    config: PipelineConfig,
    trace: Optional[TraceSink] = None,
) -> Pattern:
    """Load the pattern selected on the command line and add its manipulators."""
    jugglers = args.jugglers if args.jugglers is not None else config.siteswap_jugglers
    if args.preset:
        pattern = load_preset_by_slug(args.preset, jugglers=jugglers, trace=trace)
    elif args.prechac:
        pattern = load_with_defaults(prechac_to_pattern(args.prechac))
    elif args.siteswap:
        pattern = load_with_defaults(siteswap_to_pattern(args.siteswap, jugglers))
    else:
        pattern = _read_input(args.input, jugglers)
    return apply_manipulators(pattern, args.manipulator or [], trace=trace)


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse a juggling pattern, add manipulators and compute its orbits."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--prechac",
        action="append",
        metavar="LINE",
        help="Prechac line for one juggler; repeat once per juggler.",
    )
    source.add_argument("--siteswap", help="Vanilla siteswap shared by all jugglers.")
    source.add_argument(
        "--input",
        type=Path,
        help="JSON pattern (.json) or notation text file.",
    )
    source.add_argument("--preset", metavar="SLUG", help="Built-in preset to load.")
    parser.add_argument(
        "--jugglers",
        type=int,
        default=None,
        help="Number of jugglers for siteswap input (default: JIF_SITESWAP_JUGGLERS or 2).",
    )
    parser.add_argument(
        "--manipulator",
        action="append",
        metavar="LINE",
        help='Manipulator instructions such as "- - sA"; repeat to add several.',
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON result here instead of stdout.",
    )
    parser.add_argument(
        "--no-orbits",
        action="store_true",
        help="Skip the orbit calculation.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print errors.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = pipeline_config_from_env()
    configure_logging(logging.WARNING if args.quiet else config.log_level_number)

    recorder = TraceRecorder(logger=LOGGER) if config.trace else None
    try:
        pattern = build_pattern(args, config, trace=recorder)
        result = analyze_pattern(pattern, include_orbits=not args.no_orbits, trace=recorder)
    except (PatternError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.output:
        _write_json(args.output, result)
        if not args.quiet:
            print(f"Pattern written to {args.output}", file=sys.stderr)
    else:
        print(json.dumps(result, indent=2))

    if recorder is not None and not args.quiet:
        print(recorder.get_summary(), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
