"""
Regex-based error parser for JavaScript/TypeScript toolchain output.
"""
import logging
import re
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence

from dev_autofix.domain.models.error_pattern import ErrorPattern
from dev_autofix.domain.ports.error_parser import ErrorParserPort, ParsedError
from dev_autofix.infrastructure.adapters.error_parsing.error_validator import ErrorValidator
from dev_autofix.infrastructure.adapters.error_parsing.patterns import ERROR_PATTERNS, MAX_STACK_TRACE_CHARS

logger = logging.getLogger(__name__)

FRAME_LINE = re.compile(r"^\s+at\s")
ERROR_LINE = re.compile(r"Error:|error:", re.IGNORECASE)
FALLBACK_CONTEXT_CHARS = 1000


def extract_stack_trace(output: str, max_chars: int = MAX_STACK_TRACE_CHARS) -> str:
    """
    Collects error and stack frame lines, stopping at the first blank line
    after frames begin. Falls back to the head of the output.
    """
    stack_lines = []
    in_stack = False

    for line in output.split("\n"):
        if "at " in line or FRAME_LINE.match(line):
            in_stack = True
            stack_lines.append(line)
        elif in_stack and line.strip() == "":
            break
        elif ERROR_LINE.search(line):
            stack_lines.append(line)
            in_stack = True

    stack_trace = "\n".join(stack_lines) or output[:FALLBACK_CONTEXT_CHARS]
    return stack_trace[:max_chars]


class RegexErrorParserAdapter(ErrorParserPort):
    """
    Error parser that tries each registered pattern in priority order and
    returns the first candidate that survives validation.
    """

    def __init__(self,
                 config: Dict[str, Any],
                 validator: Optional[ErrorValidator] = None,
                 patterns: Sequence[ErrorPattern] = ERROR_PATTERNS):
        """
        Initializes the adapter.

        Args:
            config: The application configuration dictionary.
            validator: Path normalizer and sanity checker; built from config when omitted.
            patterns: Ordered pattern registry.
        """
        self.config = config
        self.validator = validator or ErrorValidator.from_config(config)
        self.patterns = tuple(patterns)
        self.max_stack_trace_chars = config.get('detection', {}).get(
            'max_stack_trace_chars', MAX_STACK_TRACE_CHARS)
        logger.info("RegexErrorParserAdapter initialized with %d patterns.", len(self.patterns))

    def extract(self, raw_output: str) -> Optional[ParsedError]:
        if not raw_output or not raw_output.strip():
            return None

        stack_trace = extract_stack_trace(raw_output, self.max_stack_trace_chars)

        for pattern in self.patterns:
            for candidate in pattern.candidates(raw_output):
                error = replace(
                    candidate,
                    file=self.validator.normalize(candidate.file),
                    stack_trace=stack_trace,
                )
                if self.validator.is_valid(error):
                    logger.debug("Pattern '%s' matched %s (%s)", pattern.name, error.location, error.type)
                    return error

        return None
