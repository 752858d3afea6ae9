"""
Error pattern variants used by the regex extraction engine.

Each variant owns the capture-group layout of its combined matcher, so adding a
new toolchain format means adding a variant (or an instance) rather than
touching the engine.
"""
import re
from dataclasses import dataclass
from typing import Iterator, Match, Optional, Pattern

from dev_autofix.domain.ports.error_parser import ParsedError

ERROR_TYPE_PATTERN = re.compile(r"^[A-Z][a-zA-Z]*Error$")


def _group(match: Match[str], index: int) -> Optional[str]:
    """Returns a capture group, or None when the regex has fewer groups."""
    if index > match.re.groups:
        return None
    return match.group(index)


def _to_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def extract_error_type(match: Match[str]) -> str:
    """First capture group that looks like an error class name, else 'Error'."""
    for group in match.groups():
        if group and ERROR_TYPE_PATTERN.match(group):
            return group
    return "Error"


def extract_error_message(match: Match[str]) -> str:
    """Last capture group that is not itself an error class name."""
    for group in reversed(match.groups()):
        if group and not ERROR_TYPE_PATTERN.match(group):
            return group.strip()
    return match.group(0)


@dataclass(frozen=True)
class ErrorPattern:
    """
    A named error format with a combined matcher and a fallback matcher pair.

    The combined matcher of this base variant uses the positional layout
    (type, message, file, line, column).
    """
    name: str
    error_regex: Pattern[str]
    location_regex: Pattern[str]
    combined_regex: Optional[Pattern[str]] = None

    def candidates(self, text: str) -> Iterator[ParsedError]:
        """
        Yields raw candidates in preference order: combined match first, then
        the error + location fallback. File paths are not normalized and no
        stack trace is attached; the engine does both.
        """
        if self.combined_regex is not None:
            match = self.combined_regex.search(text)
            if match:
                candidate = self.from_combined_match(match)
                if candidate is not None:
                    yield candidate

        error_match = self.error_regex.search(text)
        if not error_match:
            return
        location_match = self.location_regex.search(text)
        if not location_match:
            return
        yield self.from_separate_matches(error_match, location_match)

    def from_combined_match(self, match: Match[str]) -> Optional[ParsedError]:
        return self._build(
            error_type=_group(match, 1) or "Error",
            message=_group(match, 2) or "",
            file=_group(match, 3) or "",
            line=_to_int(_group(match, 4)) or 0,
            column=_to_int(_group(match, 5)),
        )

    def from_separate_matches(self, error_match: Match[str], location_match: Match[str]) -> ParsedError:
        return ParsedError(
            type=extract_error_type(error_match),
            message=extract_error_message(error_match),
            file=location_match.group(1) or "",
            line=_to_int(_group(location_match, 2)) or 0,
            column=_to_int(_group(location_match, 3)),
            pattern_name=self.name,
        )

    def _build(self, error_type: str, message: str, file: str, line: int,
               column: Optional[int]) -> Optional[ParsedError]:
        if not file or not line:
            return None
        return ParsedError(
            type=error_type,
            message=message.strip(),
            file=file,
            line=line,
            column=column,
            pattern_name=self.name,
        )


@dataclass(frozen=True)
class CompilerDiagnosticPattern(ErrorPattern):
    """Combined layout: file, line, column, diagnostic code (used as type), message."""

    def from_combined_match(self, match: Match[str]) -> Optional[ParsedError]:
        return self._build(
            error_type=match.group(4),
            message=match.group(5),
            file=match.group(1),
            line=int(match.group(2)),
            column=int(match.group(3)),
        )


@dataclass(frozen=True)
class LinterPattern(ErrorPattern):
    """Combined layout: file, line, column, message. Type is fixed."""
    error_type: str = "ESLintError"

    def from_combined_match(self, match: Match[str]) -> Optional[ParsedError]:
        return self._build(
            error_type=self.error_type,
            message=match.group(4),
            file=match.group(1),
            line=int(match.group(2)),
            column=int(match.group(3)),
        )
