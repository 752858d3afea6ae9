# src/dev_autofix/infrastructure/adapters/error_parsing/patterns.py
"""
Error patterns for common JavaScript/TypeScript toolchains.

Order matters: the extraction engine returns the first pattern that yields a
valid error.
"""
import re
from typing import Tuple

from dev_autofix.domain.models.error_pattern import (
    CompilerDiagnosticPattern, ErrorPattern, LinterPattern
)

# Farthest a location may sit after the end of its error line
MAX_LOCATION_DISTANCE = 2000

ERROR_PATTERNS: Tuple[ErrorPattern, ...] = (
    # Next.js / React compilation errors, generic "XError: msg" + stack frame
    ErrorPattern(
        name="nextjs-compile",
        error_regex=re.compile(r"(?:Error|TypeError|SyntaxError|ReferenceError):\s*(.+)"),
        location_regex=re.compile(r"at\s+(?:\w+\s+)?\(?([^:\r\n]+):(\d+):(\d+)\)?"),
        combined_regex=re.compile(
            r"(?<![A-Za-z])([A-Za-z]*Error):\s*([^\r\n]+?)(?:\n|\r\n)"
            rf".{{0,{MAX_LOCATION_DISTANCE}}}?(?:at\s+(?:\w+\s+)?\(?)?"
            r"([^:\s()]+\.[jt]sx?):(\d+)(?::(\d+))?",
            re.DOTALL,
        ),
    ),
    # Next.js runtime overlay format
    ErrorPattern(
        name="nextjs-error",
        error_regex=re.compile(r"(?:Unhandled Runtime Error|Error):\s*(.+)"),
        location_regex=re.compile(r"(?:Source|File):\s*([^:\r\n]+):(\d+)"),
        combined_regex=re.compile(
            r"(?:Unhandled Runtime Error|Error)[:\s]+([A-Za-z]*Error)?:?\s*([^\r\n]+?)(?:\n|\r\n)"
            rf".{{0,{MAX_LOCATION_DISTANCE}}}?"
            r"(?:Source|File)?[:\s]*([^:\s]+\.[jt]sx?):(\d+)",
            re.DOTALL,
        ),
    ),
    # tsc: src/file.ts(10,5): error TS2322: message
    CompilerDiagnosticPattern(
        name="typescript",
        error_regex=re.compile(r"TS\d+:\s*(.+)"),
        location_regex=re.compile(r"([^(\r\n]+\.[jt]sx?)\((\d+),(\d+)\)"),
        combined_regex=re.compile(r"([^(\s]+\.[jt]sx?)\((\d+),(\d+)\):\s*error\s*(TS\d+):\s*(.+)"),
    ),
    # ESLint: src/file.js:3:7 error message @rule
    LinterPattern(
        name="eslint",
        error_regex=re.compile(r"(?:error|warning)\s+(.+?)\s+(?:@|eslint)", re.IGNORECASE),
        location_regex=re.compile(r"([^:\s]+\.[jt]sx?):(\d+):(\d+)"),
        combined_regex=re.compile(
            r"([^:\s]+\.[jt]sx?):(\d+):(\d+)\s*(?:error|warning)\s+(.+?)\s+(?:@|eslint)",
            re.IGNORECASE,
        ),
    ),
    # Node.js runtime errors
    ErrorPattern(
        name="node-runtime",
        error_regex=re.compile(r"^([A-Z][a-zA-Z]*Error):\s*(.+)$", re.MULTILINE),
        location_regex=re.compile(r"at\s+(?:[\w.<>]+\s+)?\(?([^:\r\n]+):(\d+):(\d+)\)?"),
    ),
    ErrorPattern(
        name="vite",
        error_regex=re.compile(r"\[vite\].*?(?:Error|error):\s*(.+)", re.IGNORECASE),
        location_regex=re.compile(r"([^:\s]+\.[jt]sx?):(\d+):(\d+)"),
    ),
    ErrorPattern(
        name="webpack",
        error_regex=re.compile(r"Module (?:build |parse )?failed.*?Error:\s*(.+)", re.IGNORECASE),
        location_regex=re.compile(r"@ ([^:\s]+\.[jt]sx?):?(\d+)?:?(\d+)?"),
    ),
    # Anything else that looks like a JS error with a location
    ErrorPattern(
        name="generic-js",
        error_regex=re.compile(r"(?:Uncaught\s+)?([A-Z][a-zA-Z]*Error):\s*(.+)"),
        location_regex=re.compile(r"(?:at\s+(?:[\w.<>]+\s+)?\(?)?([^:\s()]+\.[jt]sx?):(\d+)(?::(\d+))?\)?"),
    ),
)

# File extensions we can fix
FIXABLE_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs")

# Paths to ignore
IGNORE_PATHS: Tuple[str, ...] = (
    "node_modules",
    ".next",
    "dist",
    "build",
    ".git",
)

MAX_STACK_TRACE_CHARS = 4000
