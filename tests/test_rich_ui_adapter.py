"""Tests for the rich terminal adapter."""

import io
import logging

import pytest
from rich.console import Console

from dev_autofix.domain.ports.ui_service import LogLevel
from dev_autofix.infrastructure.adapters.ui.rich_ui_adapter import RichLoggingHandler, RichUIAdapter


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch):
    """Captured output is not a terminal; make sure nothing forces styling back on."""
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)


class TestRichUIAdapter:
    """Tests for RichUIAdapter."""

    def test_status_lines_carry_prefix(self, capsys):
        RichUIAdapter().log("\n🔧 Fixing...", LogLevel.INFO)

        assert capsys.readouterr().out == "\n[autofix] 🔧 Fixing...\n"

    def test_indented_detail_lines_have_no_prefix(self, capsys):
        RichUIAdapter().log("  Type: TypeError", LogLevel.DEBUG)

        assert capsys.readouterr().out == "  Type: TypeError\n"

    def test_prefix_can_be_disabled(self, capsys):
        RichUIAdapter({'ui': {'show_prefix': False}}).log("Dry run - would fix src/a.ts")

        assert capsys.readouterr().out == "Dry run - would fix src/a.ts\n"

    def test_errors_go_to_stderr(self, capsys):
        RichUIAdapter().log("❌ Could not fix automatically", LogLevel.ERROR)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[autofix] ❌ Could not fix automatically" in captured.err

    def test_passthrough_is_verbatim(self, capsys):
        adapter = RichUIAdapter()

        adapter.passthrough("[bold]not markup[/bold]\n", is_error_stream=False)
        adapter.passthrough("\x1b[31mred\x1b[0m", is_error_stream=True)

        captured = capsys.readouterr()
        assert captured.out == "[bold]not markup[/bold]\n"
        assert captured.err == "\x1b[31mred\x1b[0m"


class TestRichLoggingHandler:
    """Tests for RichLoggingHandler."""

    def test_level_text_does_not_touch_record(self):
        handler = RichLoggingHandler(console=Console(file=io.StringIO()))
        record = logging.LogRecord("autofix", logging.WARNING, __file__, 1, "slow", None, None)

        level_text = handler.get_level_text(record)

        assert level_text.plain == "WARNING "
        assert record.levelname == "WARNING"
