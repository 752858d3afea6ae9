"""
Use case: run a dev command and repair the errors it reports.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

from dev_autofix.application.services.repair_dispatcher import RepairDispatcher
from dev_autofix.application.services.stream_coordinator import StreamCoordinator
from dev_autofix.domain.ports.error_parser import ErrorParserPort
from dev_autofix.domain.ports.repair_action import RepairActionPort
from dev_autofix.domain.ports.ui_service import UIServicePort
from dev_autofix.infrastructure.utils.process_supervisor import ProcessSupervisor

logger = logging.getLogger(__name__)


class RunWithAutofixUseCase:
    """
    Wires process supervision, output buffering and repair dispatch together.

    All coordination state (output buffer, in-flight keys, timers) lives on the
    components created here, so independent runs never share it.
    """

    def __init__(self,
                 error_parser: ErrorParserPort,
                 repair_action: RepairActionPort,
                 ui: UIServicePort,
                 config: Dict[str, Any],
                 dry_run: bool = False,
                 cwd: Optional[str] = None):
        runner_config = config.get('runner', {})
        self.ui = ui
        self.dispatcher = RepairDispatcher(
            repair_action=repair_action,
            ui=ui,
            debounce_delay=runner_config.get('debounce_ms', 2000) / 1000,
            cooldown=runner_config.get('cooldown_ms', 10000) / 1000,
            dry_run=dry_run,
            per_key_debounce=runner_config.get('per_key_debounce', False),
        )
        self.coordinator = StreamCoordinator(
            error_parser=error_parser,
            on_error=self.dispatcher.on_error_detected,
            ui=ui,
            quiet_period=runner_config.get('quiet_period_ms', 500) / 1000,
            max_buffer_chars=runner_config.get('max_buffer_chars', 20000),
        )
        self.supervisor = ProcessSupervisor(
            on_output=self.coordinator.feed,
            ui=ui,
            force_color=runner_config.get('force_color', True),
            read_chunk_size=runner_config.get('read_chunk_size', 4096),
            cwd=cwd,
        )

    async def execute(self, command_line: str) -> int:
        """
        Runs the command until it exits (and pending repairs finish) or an
        interrupt/termination signal arrives.

        Returns:
            Exit code for the supervisor process.
        """
        handle = await self.supervisor.run(command_line)
        if handle is None:
            return 1

        child_done = asyncio.create_task(self.supervisor.wait())
        exit_requested = asyncio.create_task(self.supervisor.exit_requested.wait())
        tasks = [child_done, exit_requested]
        try:
            await asyncio.wait({child_done, exit_requested}, return_when=asyncio.FIRST_COMPLETED)
            if exit_requested.done():
                logger.info("Exit requested, not waiting for the child to finish")
                return 0

            return_code = child_done.result()
            draining = asyncio.create_task(self._drain())
            tasks.append(draining)
            await asyncio.wait({draining, exit_requested}, return_when=asyncio.FIRST_COMPLETED)
            if not draining.done():
                logger.info("Exit requested, abandoning pending repairs")
                return 0
            draining.result()
            return return_code if return_code and return_code > 0 else 0
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            self.coordinator.close()
            self.dispatcher.close()
            self.supervisor.close()

    async def _drain(self) -> None:
        """Parses what the child wrote last and lets the resulting repairs complete."""
        # Both pipes are closed, so there is no quiet period left to wait for
        self.coordinator.flush()
        await self.dispatcher.drain()
