"""
Process Supervisor for running the monitored dev command.
"""
import asyncio
import codecs
import logging
import os
import signal
import time
from typing import Any, Callable, Dict, List, Optional

from dev_autofix.domain.ports.ui_service import LogLevel, UIServicePort

logger = logging.getLogger(__name__)

FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SupervisedProcess:
    """Represents the child process being supervised."""

    def __init__(self, process: asyncio.subprocess.Process, command: List[str], cwd: str):
        """
        Initialize a supervised process.

        Args:
            process: The asyncio subprocess handle
            command: The command split into executable and arguments
            cwd: The working directory
        """
        self.process = process
        self.process_id = process.pid
        self.command = command
        self.cwd = cwd
        self.start_time = time.time()
        self.end_time: Optional[float] = None
        self.return_code: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self.end_time is None and self.process.returncode is None

    @property
    def duration(self) -> float:
        """Get the duration of the process in seconds."""
        if self.end_time:
            return self.end_time - self.start_time
        return time.time() - self.start_time

    def send_signal(self, sig: int) -> bool:
        try:
            self.process.send_signal(sig)
            return True
        except ProcessLookupError:
            logger.debug(f"Process {self.process_id} already exited, signal {sig} not sent")
            return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "process_id": self.process_id,
            "command": " ".join(self.command),
            "cwd": self.cwd,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "return_code": self.return_code,
            "duration": self.duration,
            "is_running": self.is_running,
        }


class ProcessSupervisor:
    """Spawns the dev command, tees its output and forwards termination signals."""

    def __init__(self,
                 on_output: Callable[[str, bool], None],
                 ui: UIServicePort,
                 force_color: bool = True,
                 read_chunk_size: int = 4096,
                 cwd: Optional[str] = None):
        """
        Initialize the supervisor.

        Args:
            on_output: Receives (chunk, is_error_stream) for every decoded output chunk
            ui: Operator-facing status output
            force_color: Ask the child to keep colored output although it writes to a pipe
            read_chunk_size: Maximum bytes read from a pipe at once
            cwd: Working directory of the child (defaults to ours)
        """
        self.on_output = on_output
        self.ui = ui
        self.force_color = force_color
        self.read_chunk_size = read_chunk_size
        self.cwd = cwd or os.getcwd()
        self.exit_requested = asyncio.Event()
        self.handle: Optional[SupervisedProcess] = None
        self._pumps: List[asyncio.Task] = []
        self._installed_signals: List[int] = []
        self._signal_loop: Optional[asyncio.AbstractEventLoop] = None

    async def run(self, command_line: str) -> Optional[SupervisedProcess]:
        """
        Starts the command through the shell with stdin inherited.

        Returns:
            The process handle, or None when the command could not be started.
        """
        command = command_line.split()
        env = dict(os.environ)
        if self.force_color:
            env["FORCE_COLOR"] = "1"

        logger.info(f"Starting command: {command_line}")
        try:
            process = await asyncio.create_subprocess_shell(
                command_line,
                stdin=None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
                env=env,
            )
        except OSError as e:
            logger.error(f"Failed to start command '{command_line}': {e}")
            self.ui.log(f"\nFailed to start command: {e}", LogLevel.ERROR)
            return None

        self.handle = SupervisedProcess(process, command, self.cwd)
        logger.info(f"Started process with PID: {process.pid}")

        self._pumps = [
            asyncio.create_task(self._pump(process.stdout, False)),
            asyncio.create_task(self._pump(process.stderr, True)),
        ]
        self._install_signal_handlers()
        return self.handle

    async def wait(self) -> Optional[int]:
        """Waits for the child and both output pipes to finish."""
        if self.handle is None:
            return None

        return_code = await self.handle.process.wait()
        if self._pumps:
            await asyncio.gather(*self._pumps)

        self.handle.end_time = time.time()
        self.handle.return_code = return_code
        logger.info(f"Process {self.handle.process_id} exited with {return_code} after {self.handle.duration:.1f}s")

        # Negative codes mean the child was killed by a signal
        if return_code is not None and return_code > 0:
            self.ui.log(f"\nProcess exited with code {return_code}", LogLevel.WARNING)
        return return_code

    async def _pump(self, stream: Optional[asyncio.StreamReader], is_error_stream: bool) -> None:
        if stream is None:
            return
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            data = await stream.read(self.read_chunk_size)
            if not data:
                break
            text = decoder.decode(data)
            if text:
                self.on_output(text, is_error_stream)
        tail = decoder.decode(b"", final=True)
        if tail:
            self.on_output(tail, is_error_stream)

    def _install_signal_handlers(self) -> None:
        loop = self._signal_loop = asyncio.get_running_loop()
        for sig in FORWARDED_SIGNALS:
            try:
                loop.add_signal_handler(sig, self.forward_signal, sig)
                self._installed_signals.append(sig)
            except (NotImplementedError, RuntimeError):
                # Windows event loops and non-main threads cannot install handlers
                logger.debug(f"Signal handler for {sig} not installed")

    def forward_signal(self, sig: int) -> None:
        """Passes a signal on to the child and asks the caller to exit right away."""
        if sig == signal.SIGINT:
            self.ui.log("\nShutting down...", LogLevel.DEBUG)
        if self.handle is not None:
            self.handle.send_signal(sig)
        self.exit_requested.set()

    def close(self) -> None:
        """Restores the default signal handling. Safe to call after the loop stopped."""
        for sig in self._installed_signals:
            self._signal_loop.remove_signal_handler(sig)
        self._installed_signals.clear()
