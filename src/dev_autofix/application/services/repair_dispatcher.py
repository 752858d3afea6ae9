# src/dev_autofix/application/services/repair_dispatcher.py
"""
Decides when a detected error is handed to the repair action.

Per error key the lifecycle is: absent -> pending (burst-collapse timer) ->
dispatched (repair in flight) -> cooling down -> absent.
"""
import asyncio
import logging
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from dev_autofix.domain.ports.error_parser import ErrorKey, ParsedError
from dev_autofix.domain.ports.repair_action import RepairActionPort
from dev_autofix.domain.ports.ui_service import LogLevel, UIServicePort

logger = logging.getLogger(__name__)


class RepairDispatcher:
    """Deduplicates detections and dispatches at most one repair per error key."""

    def __init__(self,
                 repair_action: RepairActionPort,
                 ui: UIServicePort,
                 debounce_delay: float = 2.0,
                 cooldown: float = 10.0,
                 dry_run: bool = False,
                 per_key_debounce: bool = False):
        """
        Initialize the dispatcher.

        Args:
            repair_action: The action invoked for each dispatched error
            ui: Operator-facing status output
            debounce_delay: Seconds a detection waits for newer ones before dispatch
            cooldown: Seconds a key stays blocked after its repair finished
            dry_run: Report detections without invoking the repair action
            per_key_debounce: Give every key its own burst timer instead of one shared timer
        """
        self.repair_action = repair_action
        self.ui = ui
        self.debounce_delay = debounce_delay
        self.cooldown = cooldown
        self.dry_run = dry_run
        self.per_key_debounce = per_key_debounce

        self._fixing: Set[ErrorKey] = set()
        self._debounce_timer: Optional[asyncio.TimerHandle] = None
        self._debounce_error: Optional[ParsedError] = None
        self._key_timers: Dict[ErrorKey, Tuple[asyncio.TimerHandle, ParsedError]] = {}
        self._cooldown_timers: Dict[ErrorKey, asyncio.TimerHandle] = {}
        self._tasks: Set[asyncio.Task] = set()

    @property
    def fixing_keys(self) -> FrozenSet[ErrorKey]:
        return frozenset(self._fixing)

    def on_error_detected(self, error: ParsedError) -> None:
        key = error.key
        if key in self._fixing:
            logger.debug("Skipping %s: already being fixed or cooling down", key)
            return

        loop = asyncio.get_running_loop()
        if self.per_key_debounce:
            waiting = self._key_timers.pop(key, None)
            if waiting is not None:
                waiting[0].cancel()
            self._key_timers[key] = (loop.call_later(self.debounce_delay, self._fire, error), error)
        else:
            # One timer for all keys: only the last error of a burst is dispatched.
            if self._debounce_timer is not None:
                self._debounce_timer.cancel()
            self._debounce_timer = loop.call_later(self.debounce_delay, self._fire, error)
            self._debounce_error = error

    def _fire(self, error: ParsedError) -> None:
        if self.per_key_debounce:
            self._key_timers.pop(error.key, None)
        else:
            self._debounce_timer = None
            self._debounce_error = None

        task = asyncio.get_running_loop().create_task(self._dispatch(error))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _dispatch(self, error: ParsedError) -> None:
        key = error.key
        if key in self._fixing:
            logger.debug("Skipping %s: dispatched while waiting", key)
            return
        self._fixing.add(key)

        self.ui.log("\n🔍 Error detected!", LogLevel.WARNING)
        self.ui.log(f"  Type: {error.type}", LogLevel.DEBUG)
        self.ui.log(f"  Message: {error.message}", LogLevel.DEBUG)
        self.ui.log(f"  File: {error.file}:{error.line}", LogLevel.DEBUG)

        if self.dry_run:
            self.ui.log(f"\nDry run - would fix {error.file}", LogLevel.INFO)
            self._fixing.discard(key)
            return

        self.ui.log("\n🔧 Fixing...", LogLevel.INFO)
        try:
            success = await self.repair_action.repair(error)
            if success:
                self.ui.log(f"\n✅ Fixed {error.file}", LogLevel.SUCCESS)
                self.ui.log("  Hot reload should kick in shortly...\n", LogLevel.DEBUG)
            else:
                self.ui.log("\n❌ Could not fix automatically", LogLevel.ERROR)
        except Exception as e:
            logger.error(f"Repair of {key} raised: {e}", exc_info=True)
            self.ui.log(f"\n❌ Fix failed: {e}", LogLevel.ERROR)
        finally:
            # Allow re-fixing after a delay in case the fix didn't work
            self._cooldown_timers[key] = asyncio.get_running_loop().call_later(
                self.cooldown, self._release, key)

    def _release(self, key: ErrorKey) -> None:
        self._cooldown_timers.pop(key, None)
        self._fixing.discard(key)
        logger.debug("Cooldown finished for %s", key)

    def _take_waiting(self) -> List[ParsedError]:
        """Cancels the burst timers and returns the errors they were holding."""
        waiting = []
        if self._debounce_timer is not None:
            self._debounce_timer.cancel()
            waiting.append(self._debounce_error)
            self._debounce_timer = None
            self._debounce_error = None
        for timer, error in self._key_timers.values():
            timer.cancel()
            waiting.append(error)
        self._key_timers.clear()
        return waiting

    async def drain(self) -> None:
        """
        Dispatches waiting errors without waiting out the burst window, then
        waits for every running repair. Used once no further output can arrive.
        """
        for error in self._take_waiting():
            self._fire(error)
        if self._tasks:
            await asyncio.gather(*self._tasks)

    def close(self) -> None:
        """Cancels every pending timer. In-flight repairs are left to their task."""
        self._take_waiting()
        for timer in self._cooldown_timers.values():
            timer.cancel()
        self._cooldown_timers.clear()
