"""
Domain interfaces for UI components.
These interfaces define the contract for UI services in the application.
"""
from abc import ABC, abstractmethod
from enum import Enum


class LogLevel(Enum):
    """Log levels for UI messages."""
    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class UIServicePort(ABC):
    """Interface for UI services."""

    @abstractmethod
    def log(self, message: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
        """
        Show a status line to the operator.

        Args:
            message: The message to show
            level: The log level, used for styling
            **kwargs: Additional arguments for the specific implementation
        """
        pass

    @abstractmethod
    def panel(self, content: str, title: str = "", **kwargs) -> None:
        """
        Display content in a panel.

        Args:
            content: The content to display
            title: The panel title
            **kwargs: Additional arguments for the specific implementation
        """
        pass

    @abstractmethod
    def passthrough(self, text: str, is_error_stream: bool = False) -> None:
        """
        Mirror supervised process output verbatim.

        Args:
            text: The raw output chunk
            is_error_stream: True for the child's stderr, False for stdout
        """
        pass

    @abstractmethod
    def stream(self, text: str) -> None:
        """
        Show a fragment of streamed progress text without a trailing newline.

        Args:
            text: The text fragment
        """
        pass
