from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bundlers import default_registry
from reducer.api import run_from_config
from reducer.configuration import parse_override_args
from reducer.errors import ReduceError
from reducer.verify import compare_directories

_DEFAULT_PATTERNS = ["**/*.css", "**/*.js"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bundle assets from a reduce config.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    build = commands.add_parser("build", help="Build every target in a config file")
    build.add_argument("config", type=Path, help="Path to YAML/JSON build config")
    build.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="PATH=VALUE",
        help="Override a config value, e.g. --set output_dir=dist (repeatable)",
    )
    build.add_argument(
        "--expected",
        type=Path,
        default=None,
        help="Optional golden directory to compare the build output against",
    )
    build.add_argument(
        "--pattern",
        dest="patterns",
        action="append",
        default=None,
        help="Glob restricting the comparison (repeatable, default: **/*.css and **/*.js)",
    )

    verify = commands.add_parser("verify", help="Compare two directory trees")
    verify.add_argument("actual", type=Path)
    verify.add_argument("expected", type=Path)
    verify.add_argument("--pattern", dest="patterns", action="append", default=None)

    commands.add_parser("transforms", help="List available transforms")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    registry = default_registry()

    if args.command == "transforms":
        for info in registry.list():
            print(f"{info.key}\t{info.name} {info.version}\t{info.description or ''}")
        return 0

    if args.command == "verify":
        return _report(args.actual, args.expected, args.patterns or _DEFAULT_PATTERNS)

    try:
        result = run_from_config(
            args.config,
            registry=registry,
            overrides=parse_override_args(args.overrides),
        )
    except ReduceError as exc:
        print(f"build failed: {exc}", file=sys.stderr)
        return 1

    for target in result.targets:
        print(f"{target.name}: {target.output} ({target.size} bytes, sha256 {target.sha256[:12]})")

    if args.expected is None:
        return 0
    return _report(result.output_dir, args.expected, args.patterns or _DEFAULT_PATTERNS)


def _report(actual: Path, expected: Path, patterns: list[str]) -> int:
    try:
        outcome = compare_directories(actual, expected, patterns)
    except FileNotFoundError as exc:
        print(f"verify failed: {exc}", file=sys.stderr)
        return 1
    print(outcome.format_report())
    return 0 if outcome.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
