import logging
from typing import Dict, Any

from rich.console import Console
from rich.markup import escape

from dev_autofix.infrastructure.adapters.ui.rich_ui_adapter import AUTOFIX_THEME, RichLoggingHandler


def setup_logging(config: Dict[str, Any]):
    """Configures logging based on the application configuration."""
    log_config = config.get('logging', {})
    level_name = log_config.get('level', 'WARNING').upper()
    level = getattr(logging, level_name, logging.WARNING)
    log_format = log_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    log_file = log_config.get('log_file')  # Path is already resolved

    # Diagnostics go to stderr so they never mix with the mirrored stdout of the child
    console = Console(theme=AUTOFIX_THEME, stderr=True)
    handlers = [RichLoggingHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
    )]

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(log_format))
            handlers.append(file_handler)
        except Exception as e:
            console.print(f"[warning]Warning: Could not configure file logging to {escape(str(log_file))}: {escape(str(e))}[/warning]")

    # Use force=True to allow reconfiguration if called multiple times (e.g., in tests)
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    # Suppress verbose logs from dependencies
    dependencies_to_silence = {
        "asyncio": logging.WARNING,
        "httpx": logging.WARNING,
        "google.api_core": logging.WARNING,
        "google.auth": logging.WARNING,
        "urllib3": logging.WARNING,
    }
    for name, lvl in dependencies_to_silence.items():
        logging.getLogger(name).setLevel(lvl)

    logging.info(f"Logging configured. Level: {level_name}, File: {log_file or 'None'}")
