import argparse
from typing import List, Optional

EPILOG = """examples:
  autofix npm run dev
  autofix npx next dev
  autofix --dry-run node server.js

environment:
  GOOGLE_API_KEY  Required for the google_gemini provider.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autofix",
        description="Auto-fix errors in your dev server as they happen.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show detected errors without fixing them."
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML configuration file (default: ./autofix.yml if present)."
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level."
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="The dev command to run and monitor."
    )
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Configures and parses command line arguments for the application.

    --dry-run is also honoured when it appears among the command words, so
    `autofix npm run dev --dry-run` works as expected.

    Returns:
        argparse.Namespace: An object containing the parsed arguments, with
        `command_line` holding the command to run as a single string.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if "--dry-run" in args.command:
        args.dry_run = True
        args.command = [word for word in args.command if word != "--dry-run"]

    args.command_line = " ".join(args.command)
    args.print_help = parser.print_help
    return args
