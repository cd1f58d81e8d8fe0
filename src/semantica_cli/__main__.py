"""
Semantica CLI entry point.

Usage:
    semantica analyze [--file PATH] [--pretty]   < request.json
    semantica languages [--pretty]
    semantica --help
    semantica --version
"""

import argparse
import sys
from pathlib import Path

from semantica_cli.commands import (
    analyze_command,
    invalid_request,
    languages_command,
    load_settings,
    write_json,
)
from semantica_core import __version__
from semantica_core.config import SemanticaSettings
from semantica_core.exceptions import ValidationError
from semantica_core.logging_service import LoggingService


def configure_logging(settings: SemanticaSettings) -> None:
    """Route structured logs to stderr; stdout carries the response only."""
    if LoggingService.is_configured():
        LoggingService.reset()
    LoggingService.configure_logging(level=settings.log_level, format=settings.log_format)


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="semantica", description="Multi-language semantic extraction"
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze a JSON request from stdin, or a file with --file"
    )
    analyze_parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Analyze this file; the extension is taken from the path",
    )
    analyze_parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")

    # languages command
    languages_parser = subparsers.add_parser(
        "languages", help="List supported extensions and their languages"
    )
    languages_parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        settings = load_settings()
    except ValidationError as e:
        # Logging is not configured yet; the reason travels in the response.
        write_json(invalid_request(e.message).to_wire(), args.pretty)
        sys.exit(0)
    configure_logging(settings)

    if args.command == "analyze":
        sys.exit(analyze_command(settings, file_path=args.file, pretty=args.pretty))
    elif args.command == "languages":
        sys.exit(languages_command(pretty=args.pretty))


if __name__ == "__main__":
    main()
