"""
Rich-based implementation of the UI service.
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from dev_autofix.domain.ports.ui_service import LogLevel, UIServicePort

STATUS_PREFIX = "[autofix]"

AUTOFIX_THEME = Theme({
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "critical": "red bold",
    "debug": "bright_black",
    "panel.border": "cyan",
    "panel.title": "cyan bold",
})


class RichUIAdapter(UIServicePort):
    """Rich implementation of the UI service."""

    def __init__(self, config: dict = None):
        config = config or {}
        ui_config = config.get('ui', {})
        self.show_prefix = ui_config.get('show_prefix', True)
        self.console = Console(theme=AUTOFIX_THEME, highlight=False)
        self.error_console = Console(theme=AUTOFIX_THEME, highlight=False, stderr=True)

    def log(self, message: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
        """
        Print a styled status line.

        Leading newlines are kept in front of the prefix; indented detail lines
        are printed without it. Child output may contain square brackets, so the
        message is never interpreted as markup.
        """
        body = message.lstrip("\n")
        leading = message[:len(message) - len(body)]
        if self.show_prefix and body and not body[0].isspace():
            body = f"{STATUS_PREFIX} {body}"

        console = self.error_console if level in (LogLevel.ERROR, LogLevel.CRITICAL) else self.console
        console.print(Text(leading) + Text(body, style=level.value), **kwargs)

    def panel(self, content: str, title: str = "", **kwargs) -> None:
        self.console.print(Panel(Text(content), title=title, **kwargs))

    def passthrough(self, text: str, is_error_stream: bool = False) -> None:
        stream = sys.stderr if is_error_stream else sys.stdout
        stream.write(text)
        stream.flush()

    def stream(self, text: str) -> None:
        self.console.print(Text(text, style="debug"), end="", soft_wrap=True)


class RichLoggingHandler(RichHandler):
    """Rich logging handler that styles level names with the autofix theme."""

    def get_level_text(self, record: logging.LogRecord) -> Text:
        # Style the rendered text only; the record is shared with other handlers
        if record.levelno >= logging.CRITICAL:
            style = "critical"
        elif record.levelno >= logging.ERROR:
            style = "error"
        elif record.levelno >= logging.WARNING:
            style = "warning"
        elif record.levelno >= logging.INFO:
            style = "info"
        else:
            style = "debug"
        return Text.styled(record.levelname.ljust(8), style)
