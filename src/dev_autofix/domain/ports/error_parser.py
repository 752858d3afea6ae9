from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple, Optional


class ErrorKey(NamedTuple):
    """Identity used to deduplicate repair attempts."""
    file: str
    line: int
    type: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.type}"


@dataclass(frozen=True)
class ParsedError:
    """Structured representation of an error reported by a JS/TS toolchain."""
    type: str  # e.g. 'TypeError', 'TS2322', 'ESLintError'
    message: str
    file: str  # Relative to the working directory
    line: int  # 1-based
    column: Optional[int] = None
    stack_trace: str = ""
    pattern_name: str = ""

    @property
    def key(self) -> ErrorKey:
        return ErrorKey(self.file, self.line, self.type)

    @property
    def location(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"


class ErrorParserPort(ABC):
    """Interface for extracting an error record from process output."""

    @abstractmethod
    def extract(self, raw_output: str) -> Optional[ParsedError]:
        """
        Parses a chunk of buffered process output.

        Args:
            raw_output: Accumulated stdout/stderr text of the supervised process.

        Returns:
            The first valid ParsedError found, or None if nothing qualifies.
        """
        pass
