# File: cs2ts/cli.py
"""
cs2ts - Command-Line Interface
==============================

Usage examples::

    # Translate one file to stdout
    cs2ts -s Models/Customer.cs

    # Several files as one unit, written to a file
    cs2ts -s Customer.cs -s Order.cs -o src/types/models.ts

    # Import overrides and keyof enums
    cs2ts -s Models.cs --type-map "Money=@shared/money" --enums "Color:keyof"

    # Settings from a YAML file
    cs2ts -s Models.cs --config cs2ts.yaml

    # Start the web adapter
    cs2ts --serve --port 8000

Exit codes:
    0 - success
    1 - warnings present and --fail-on-warnings set
    2 - source could not be parsed
    4 - input/argument/configuration error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, List, NoReturn, Optional, Sequence

if TYPE_CHECKING:
    from cs2ts.models import GeneratorConfig

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_WARNINGS: int = 1
EXIT_PARSE_ERROR: int = 2
EXIT_INPUT_ERROR: int = 4


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root cs2ts logger based on verbosity level.

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

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("cs2ts")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from cs2ts import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="cs2ts",
        description=(
            "cs2ts - C# to TypeScript declaration translator.\n\n"
            "Turns C# classes, interfaces, structs and enums into "
            "TypeScript type declarations."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -s Customer.cs\n"
            "  %(prog)s -s Customer.cs -s Order.cs -o models.ts\n"
            "  %(prog)s -s Models.cs --enums 'Color:keyof' --type-map 'Money=@shared/money'\n"
            "  %(prog)s --serve --port 8000\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"cs2ts v{__version__}",
    )

    # --- Input / output ---
    parser.add_argument(
        "-s", "--source",
        dest="sources",
        action="append",
        default=[],
        metavar="PATH",
        help="C# source file. Repeat to translate several files as one unit.",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="FILE",
        help="Write the TypeScript output to FILE instead of stdout.",
    )

    # --- Translation settings ---
    config_group = parser.add_argument_group("translation settings")
    config_group.add_argument(
        "--enums",
        type=str,
        default="",
        metavar="LIST",
        help="Known enums, 'Name[:mode],...'. Mode 'keyof' emits a key union type.",
    )
    config_group.add_argument(
        "--type-map",
        type=str,
        default="",
        metavar="LIST",
        help="Import path overrides, 'Name=path,...'.",
    )
    config_group.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="YAML",
        help="YAML file with 'known_types' and 'enums'; command-line values win.",
    )

    # --- Behaviour flags ---
    behaviour_group = parser.add_argument_group("behaviour flags")
    behaviour_group.add_argument(
        "--fail-on-warnings",
        action="store_true",
        default=False,
        help="Exit with status 1 when any construct could not be translated.",
    )

    # --- Server ---
    server_group = parser.add_argument_group("web server")
    server_group.add_argument(
        "--serve",
        action="store_true",
        default=False,
        help="Start the HTTP API instead of translating files.",
    )
    server_group.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Bind address for --serve (default: 127.0.0.1).",
    )
    server_group.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for --serve (default: 8000).",
    )

    # --- Verbosity ---
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
        help="Suppress all output except errors.",
    )

    return parser


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """File settings first, command-line strings layered on top."""
    from cs2ts.generator import load_config_file
    from cs2ts.models import GeneratorConfig

    config: GeneratorConfig = GeneratorConfig()
    if args.config is not None:
        config = load_config_file(Path(args.config).resolve())
    return config.merged(
        GeneratorConfig.from_strings(type_map=args.type_map, enums=args.enums)
    )


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


def _run_server(args: argparse.Namespace, config: GeneratorConfig) -> int:
    import uvicorn

    from cs2ts.web import create_app

    logger.info("Serving on http://%s:%d", args.host, args.port)
    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return EXIT_SUCCESS


def _run_generation(args: argparse.Namespace, config: GeneratorConfig) -> int:
    """
    Translate the source files and write the result.

    Returns the appropriate exit code.
    """
    from cs2ts.errors import SourceParseError
    from cs2ts.generator import GenerationResult, Generator
    from cs2ts.utils import read_source_files, write_file

    paths: List[Path] = [Path(p).resolve() for p in args.sources]
    try:
        source: str = read_source_files(paths)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Failed to read source: %s", exc)
        return EXIT_INPUT_ERROR

    try:
        result: GenerationResult = Generator(config).generate(source)
    except SourceParseError as exc:
        logger.error("Failed to parse source: %s", exc)
        return EXIT_PARSE_ERROR

    if args.output is not None:
        output_path: Path = Path(args.output).resolve()
        try:
            write_file(output_path, result.output)
        except OSError as exc:
            logger.error("Failed to write %s: %s", output_path, exc)
            return EXIT_INPUT_ERROR
        logger.info("Wrote %s.", output_path)
    else:
        sys.stdout.write(result.output)
        if result.output and not result.output.endswith("\n"):
            sys.stdout.write("\n")

    logger.info("\n%s", result.summary())

    if result.has_warnings and args.fail_on_warnings:
        logger.error("%d construct(s) could not be translated.", len(result.warnings))
        return EXIT_WARNINGS
    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    from cs2ts.errors import ConfigurationError

    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        verbosity: int = -1
    else:
        verbosity = args.verbose

    _setup_logging(verbosity)
    if args.quiet:
        logging.getLogger("cs2ts").setLevel(logging.ERROR)

    try:
        config = _build_config(args)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        sys.exit(EXIT_INPUT_ERROR)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(EXIT_INPUT_ERROR)

    if args.serve:
        sys.exit(_run_server(args, config))

    if not args.sources:
        logger.error("At least one source file is required. Use -s/--source or --serve.")
        parser.print_usage(sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    sys.exit(_run_generation(args, config))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_WARNINGS",
    "EXIT_PARSE_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("cs2ts.cli loaded.")
