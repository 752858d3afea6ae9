"""Shared fixtures for the autofix test suite."""

import copy
from typing import List, Tuple

import pytest

from dev_autofix.cli.commands.config_loader import DEFAULT_CONFIG
from dev_autofix.domain.ports.error_parser import ParsedError
from dev_autofix.domain.ports.ui_service import LogLevel, UIServicePort


class RecordingUI(UIServicePort):
    """UI service that remembers everything instead of printing it."""

    def __init__(self):
        self.messages: List[Tuple[str, LogLevel]] = []
        self.panels: List[Tuple[str, str]] = []
        self.passed_through: List[Tuple[str, bool]] = []
        self.streamed: List[str] = []

    def log(self, message, level=LogLevel.INFO, **kwargs):
        self.messages.append((message, level))

    def panel(self, content, title="", **kwargs):
        self.panels.append((content, title))

    def passthrough(self, text, is_error_stream=False):
        self.passed_through.append((text, is_error_stream))

    def stream(self, text):
        self.streamed.append(text)

    @property
    def text(self) -> str:
        return "\n".join(message for message, _ in self.messages)


@pytest.fixture
def ui():
    return RecordingUI()


@pytest.fixture
def config():
    """Default configuration with timings short enough for tests."""
    test_config = copy.deepcopy(DEFAULT_CONFIG)
    test_config['runner'].update({
        'quiet_period_ms': 20,
        'debounce_ms': 30,
        'cooldown_ms': 100,
    })
    test_config['generation']['llm_provider'] = 'mock'
    return test_config


@pytest.fixture
def parsed_error():
    return ParsedError(
        type="TypeError",
        message="Cannot read properties of undefined (reading 'map')",
        file="src/app.js",
        line=42,
        column=10,
        stack_trace="TypeError: Cannot read properties of undefined (reading 'map')",
        pattern_name="nextjs-compile",
    )
