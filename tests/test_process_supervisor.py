"""Tests for spawning the dev command and relaying its output."""

import asyncio
import signal

import pytest

from dev_autofix.infrastructure.utils.process_supervisor import ProcessSupervisor


@pytest.fixture
def output():
    return []


@pytest.fixture
def supervisor(ui, output):
    supervisor = ProcessSupervisor(lambda chunk, is_err: output.append((chunk, is_err)), ui)
    yield supervisor
    supervisor.close()


def joined(output, is_error_stream):
    return "".join(chunk for chunk, is_err in output if is_err == is_error_stream)


class TestProcessSupervisor:
    """Tests for ProcessSupervisor."""

    async def test_relays_stdout(self, supervisor, output):
        handle = await supervisor.run("echo hello")

        assert handle is not None
        assert handle.command == ["echo", "hello"]
        assert await supervisor.wait() == 0
        assert joined(output, False) == "hello\n"
        assert not handle.is_running

    async def test_relays_stderr_and_reports_exit_code(self, supervisor, output, ui):
        await supervisor.run("echo oops 1>&2; exit 3")

        assert await supervisor.wait() == 3
        assert joined(output, True) == "oops\n"
        assert "Process exited with code 3" in ui.text

    async def test_color_is_forced(self, supervisor, output):
        await supervisor.run("echo color=$FORCE_COLOR")
        await supervisor.wait()

        assert joined(output, False) == "color=1\n"

    async def test_spawn_failure_is_reported(self, ui, output):
        supervisor = ProcessSupervisor(lambda chunk, is_err: output.append(chunk), ui,
                                       cwd="/nonexistent/autofix/dir")

        assert await supervisor.run("echo hello") is None
        assert "Failed to start command" in ui.text
        assert await supervisor.wait() is None

    async def test_forwarded_signal_requests_exit(self, supervisor, ui):
        handle = await supervisor.run("exec sleep 5")

        supervisor.forward_signal(signal.SIGTERM)

        assert supervisor.exit_requested.is_set()
        return_code = await asyncio.wait_for(supervisor.wait(), timeout=5)
        assert return_code != 0
        assert "Process exited with code" not in ui.text
        assert handle.to_dict()["return_code"] == return_code

    async def test_interrupt_is_announced(self, supervisor, ui):
        await supervisor.run("exec sleep 5")

        supervisor.forward_signal(signal.SIGINT)

        assert "Shutting down..." in ui.text
        await asyncio.wait_for(supervisor.wait(), timeout=5)

    async def test_invalid_utf8_is_replaced(self, supervisor, output):
        await supervisor.run(r"printf 'caf\303\251 \377\n'")
        await supervisor.wait()

        assert joined(output, False) == "café �\n"
