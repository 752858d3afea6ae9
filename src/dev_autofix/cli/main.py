# src/dev_autofix/cli/main.py
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dev_autofix.cli.commands.argument_parser import parse_arguments
from dev_autofix.cli.commands.config_loader import load_config, ensure_app_directories
from dev_autofix.cli.commands.logging_setup import setup_logging
from dev_autofix.cli.commands.run_command import handle_run


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = parse_arguments(argv)
    # Help only for a bare invocation; options without a command reach handle_run
    if not argv:
        args.print_help()
        return 0

    config = load_config(Path.cwd(), args.config)
    if args.log_level:
        config['logging']['level'] = args.log_level

    ensure_app_directories(config)
    setup_logging(config)
    logging.getLogger(__name__).debug(f"Running with arguments: {vars(args)}")

    return handle_run(args, config)


if __name__ == "__main__":
    sys.exit(main())
