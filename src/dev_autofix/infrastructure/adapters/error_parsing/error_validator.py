"""
Normalization and sanity checks for candidate errors.
"""
import logging
import os
import re
from typing import Any, Dict, Optional, Sequence

from dev_autofix.domain.ports.error_parser import ParsedError
from dev_autofix.infrastructure.adapters.error_parsing.patterns import FIXABLE_EXTENSIONS, IGNORE_PATHS

logger = logging.getLogger(__name__)

URL_SCHEME_PREFIX = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*)://")
LOADER_PREFIX = re.compile(r"^.*!")
QUERY_SUFFIX = re.compile(r"\?.*$")
ORPHANED_URL_SLASHES = "///"

MIN_MESSAGE_LENGTH = 3


class ErrorValidator:
    """Cleans up file paths reported by bundlers and rejects errors we should not touch."""

    def __init__(self,
                 root_dir: Optional[str] = None,
                 fixable_extensions: Sequence[str] = FIXABLE_EXTENSIONS,
                 ignore_paths: Sequence[str] = IGNORE_PATHS):
        self.root_dir = root_dir
        self.fixable_extensions = tuple(fixable_extensions)
        self.ignore_paths = tuple(ignore_paths)

    @classmethod
    def from_config(cls, config: Dict[str, Any], root_dir: Optional[str] = None) -> "ErrorValidator":
        detection = config.get('detection', {})
        return cls(
            root_dir=root_dir,
            fixable_extensions=detection.get('fixable_extensions') or FIXABLE_EXTENSIONS,
            ignore_paths=detection.get('ignore_paths') or IGNORE_PATHS,
        )

    def normalize(self, file_path: str) -> str:
        """
        Makes a reported path relative to the working directory.

        webpack-internal:///./src/foo.tsx?abc123 -> src/foo.tsx
        """
        normalized = file_path.strip()

        scheme = URL_SCHEME_PREFIX.match(normalized)
        if scheme:
            normalized = normalized[scheme.end():]
            if scheme.group(1).lower() != "file":
                normalized = normalized.lstrip("/")
        elif normalized.startswith(ORPHANED_URL_SLASHES):
            # Location matchers stop at the scheme colon: "webpack-internal:///./x" arrives as "///./x"
            normalized = normalized[3:] if normalized[3:].startswith("./") else normalized[2:]

        # Loader chains: babel-loader!./src/foo.js
        normalized = LOADER_PREFIX.sub("", normalized)
        normalized = QUERY_SUFFIX.sub("", normalized)

        cwd = self.root_dir or os.getcwd()
        if normalized.startswith(cwd):
            normalized = normalized[len(cwd) + 1:]

        if normalized.startswith("./"):
            normalized = normalized[2:]

        return normalized

    def is_valid(self, error: ParsedError) -> bool:
        _, ext = os.path.splitext(error.file)
        if ext not in self.fixable_extensions:
            logger.debug("Rejected %s: extension %r is not fixable", error.file, ext)
            return False

        for ignore_path in self.ignore_paths:
            if ignore_path in error.file:
                logger.debug("Rejected %s: matches ignored path %r", error.file, ignore_path)
                return False

        if not isinstance(error.line, int) or error.line < 1:
            logger.debug("Rejected %s: invalid line %r", error.file, error.line)
            return False

        if not error.message or len(error.message.strip()) < MIN_MESSAGE_LENGTH:
            logger.debug("Rejected %s: message too short", error.file)
            return False

        return True
