"""Main CLI entry point for licenseanalyzer.

Provides commands: report, resolve
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from licenseanalyzer.cli.report import report_command
from licenseanalyzer.cli.resolve import resolve_command

logger = logging.getLogger("licenseanalyzer.cli")


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        log_file: Also write logs to this file (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handlers: List[logging.Handler] = [
        RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            log_time_format="[%H:%M:%S]",
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="licenseanalyzer",
        description="Licenseanalyzer - Dependency License Analysis Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    report_parser = subparsers.add_parser(
        "report",
        help="Resolve licenses for all dependencies of a project",
    )
    report_parser.add_argument(
        "project",
        nargs="?",
        default="pom.xml",
        help="Project pom.xml (default: ./pom.xml). Ignored with --manifest.",
    )
    report_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output report file (JSON)",
    )
    report_parser.add_argument(
        "-g",
        "--group",
        action="append",
        dest="groups",
        help=(
            "Dependency group (Maven scope or manifest group) to analyse. "
            "Repeatable. Defaults to the configured groups."
        ),
    )
    report_parser.add_argument(
        "--manifest",
        help="JSON/TOML manifest mapping group names to coordinate lists",
    )
    report_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional analyser configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. Built-in defaults otherwise."
        ),
    )
    report_parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Coordinates resolved concurrently (overrides configuration)",
    )
    report_parser.add_argument(
        "--no-table",
        action="store_true",
        help="Do not print the result table",
    )

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve licenses for a single coordinate",
    )
    resolve_parser.add_argument(
        "coordinate",
        help="Artifact coordinate group:name:version",
    )
    resolve_parser.add_argument(
        "-c",
        "--config",
        help="Optional analyser configuration (path or inline TOML/JSON)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, log_file=args.log_file)

    if args.command == "report":
        return report_command(args)
    elif args.command == "resolve":
        return resolve_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
