"""CLI entrypoint for jsdocgen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import OUTPUT_FORMATS, ConfigError, load_config
from .discovery import InputValidationError, SourceTooLargeError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsdocgen",
        description="Generate an API reference from JavaScript classes and their doc comments.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .jsdocgen.yml (defaults to the one in the current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="File to write the reference to (overrides the config).",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (overrides the config).",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Source files or directories to document.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jsdocgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(args.config or Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if args.format:
        config.format = args.format

    orchestrator = Orchestrator(config)
    try:
        outcome = orchestrator.run(args.paths, output=args.output)
    except (InputValidationError, SourceTooLargeError, OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"jsdocgen failed: {exc}\n")

    if not outcome.ok:
        parser.exit(1, f"jsdocgen failed: {outcome.error}\nRun with --verbose for more details.\n")
    print(f"API reference written to {_relativize(outcome.output)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
