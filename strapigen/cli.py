# File: strapigen/cli.py
"""
StrapiGen - Command-Line Interface
===================================

Runs the full generation with no arguments; everything about the source
database comes from ``SOURCE_DB_*`` environment variables.

Usage examples::

    # Generate into ./src/api using the environment
    strapigen

    # Preview without writing, with INFO logging
    strapigen --dry-run -v

    # CommonJS stubs into another Strapi project
    python -m strapigen --output-root ../cms --extension js

Exit codes:
    0 — success
    1 — database connection error
    2 — catalog query error
    3 — filesystem error
    4 — configuration error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

from pydantic import ValidationError

from strapigen.errors import (
    ConfigurationError,
    FilesystemError,
    SchemaConnectionError,
    SchemaQueryError,
    StrapiGenError,
)

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_CONNECTION_ERROR: int = 1
EXIT_QUERY_ERROR: int = 2
EXIT_FILESYSTEM_ERROR: int = 3
EXIT_CONFIG_ERROR: int = 4


def exit_code_for(exc: StrapiGenError) -> int:
    """Map an error class onto its process exit code."""
    if isinstance(exc, SchemaConnectionError):
        return EXIT_CONNECTION_ERROR
    if isinstance(exc, SchemaQueryError):
        return EXIT_QUERY_ERROR
    if isinstance(exc, FilesystemError):
        return EXIT_FILESYSTEM_ERROR
    return EXIT_CONFIG_ERROR


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the ``strapigen`` logger based on verbosity level.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))

    root_logger: logging.Logger = logging.getLogger("strapigen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from strapigen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="strapigen",
        description=(
            "Generate Strapi content types, controllers, services and routes "
            "from a MySQL database schema.\n\n"
            "Connection settings are read from SOURCE_DB_HOST, SOURCE_DB_USER, "
            "SOURCE_DB_PASSWORD, SOURCE_DB_NAME, SOURCE_DB_PORT and "
            "SOURCE_DB_TABLE_PREFIX (or a .env file)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"StrapiGen v{__version__}",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--output-root",
        type=str,
        default=None,
        metavar="DIR",
        help="Strapi project root (default: current directory).",
    )
    output_group.add_argument(
        "--extension",
        type=str,
        default="ts",
        choices=["ts", "js"],
        help="Language of the generated stubs (default: ts).",
    )
    output_group.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Read the schema and report what would be written, without writing.",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument(
        "--env-file",
        type=str,
        default=None,
        metavar="PATH",
        help="Read SOURCE_DB_* settings from this dotenv file instead of ./.env.",
    )

    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress log output (progress and errors are still printed).",
    )
    return parser


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def run(args: argparse.Namespace) -> int:
    """Build settings from *args*, run the generator, return an exit code."""
    from strapigen.config import GeneratorSettings, load_database_settings
    from strapigen.generator import StrapiGenerator

    print("Starting generate...")
    try:
        db_settings = load_database_settings(
            Path(args.env_file) if args.env_file else None
        )
        try:
            gen_settings = GeneratorSettings(
                output_root=Path(args.output_root).resolve()
                if args.output_root
                else Path.cwd(),
                stub_extension=args.extension,
                dry_run=args.dry_run,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid generator settings: {exc}") from exc

        generator = StrapiGenerator(db_settings, gen_settings, progress=print)
        report = generator.generate_all()
    except StrapiGenError as exc:
        print(f"Error generating modules: {exc}", file=sys.stderr)
        return exit_code_for(exc)

    if logger.isEnabledFor(logging.INFO):
        print(report.summary(), file=sys.stderr)
    print("Generation complete!")
    return EXIT_SUCCESS


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        logging.disable(logging.CRITICAL)
        _setup_logging(0)
    else:
        _setup_logging(args.verbose)

    sys.exit(run(args))


def main() -> None:
    """Console-script entry point."""
    cli_main()


__all__: List[str] = [
    "EXIT_CONFIG_ERROR",
    "EXIT_CONNECTION_ERROR",
    "EXIT_FILESYSTEM_ERROR",
    "EXIT_QUERY_ERROR",
    "EXIT_SUCCESS",
    "cli_main",
    "exit_code_for",
    "main",
]

logger.debug("strapigen.cli loaded.")
