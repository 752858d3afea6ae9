# src/dev_autofix/application/services/stream_coordinator.py
"""
Buffers supervised process output until it goes quiet, then hands the
accumulated text to the error parser.
"""
import asyncio
import logging
from typing import Callable, Optional

from dev_autofix.domain.ports.error_parser import ErrorParserPort, ParsedError
from dev_autofix.domain.ports.ui_service import UIServicePort

logger = logging.getLogger(__name__)


class StreamCoordinator:
    """Owns the output buffer and the quiet-period timer."""

    def __init__(self,
                 error_parser: ErrorParserPort,
                 on_error: Callable[[ParsedError], None],
                 ui: UIServicePort,
                 quiet_period: float = 0.5,
                 max_buffer_chars: int = 20000):
        """
        Initialize the coordinator.

        Args:
            error_parser: Extracts a ParsedError from buffered text
            on_error: Receives every error the parser reports
            ui: Terminal the raw output is mirrored to
            quiet_period: Seconds without output before the buffer is parsed
            max_buffer_chars: Keep only this many trailing characters (0 = unbounded)
        """
        self.error_parser = error_parser
        self.on_error = on_error
        self.ui = ui
        self.quiet_period = quiet_period
        self.max_buffer_chars = max_buffer_chars
        self._buffer = ""
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def has_pending(self) -> bool:
        return self._timer is not None

    def feed(self, chunk: str, is_error_stream: bool = False) -> None:
        """Mirrors a chunk to the terminal and restarts the quiet-period timer."""
        self.ui.passthrough(chunk, is_error_stream)

        self._buffer += chunk
        if self.max_buffer_chars and len(self._buffer) > self.max_buffer_chars:
            self._buffer = self._buffer[-self.max_buffer_chars:]

        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().call_later(self.quiet_period, self.flush)

    def flush(self) -> Optional[ParsedError]:
        """Takes the whole buffer and parses it. Safe to call with nothing buffered."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        buffered_text, self._buffer = self._buffer, ""
        if not buffered_text:
            return None

        error = self.error_parser.extract(buffered_text)
        if error is None:
            return None

        logger.info("Detected %s at %s (pattern: %s)", error.type, error.location, error.pattern_name)
        self.on_error(error)
        return error

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._buffer = ""
