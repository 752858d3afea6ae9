"""Tests for burst collapsing, in-flight suppression and cooldown."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from dev_autofix.application.services.repair_dispatcher import RepairDispatcher

DEBOUNCE = 0.03
COOLDOWN = 0.15


@pytest.fixture
def repair_action():
    action = AsyncMock()
    action.repair.return_value = True
    return action


@pytest.fixture
def dispatcher(repair_action, ui):
    dispatcher = RepairDispatcher(repair_action, ui, debounce_delay=DEBOUNCE, cooldown=COOLDOWN)
    yield dispatcher
    dispatcher.close()


class TestRepairDispatcher:
    """Tests for RepairDispatcher."""

    async def test_burst_dispatches_only_the_latest_error(self, dispatcher, repair_action, parsed_error):
        newer = replace(parsed_error, message="Cannot read properties of null (reading 'length')")

        dispatcher.on_error_detected(parsed_error)
        dispatcher.on_error_detected(newer)
        await asyncio.sleep(DEBOUNCE * 3)

        repair_action.repair.assert_awaited_once_with(newer)

    async def test_burst_across_keys_collapses_to_one_dispatch(self, dispatcher, repair_action, parsed_error):
        other = replace(parsed_error, file="src/other.ts", line=5)

        dispatcher.on_error_detected(parsed_error)
        dispatcher.on_error_detected(other)
        await asyncio.sleep(DEBOUNCE * 3)

        repair_action.repair.assert_awaited_once_with(other)

    async def test_key_is_suppressed_until_cooldown_ends(self, dispatcher, repair_action, parsed_error):
        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 3)
        assert parsed_error.key in dispatcher.fixing_keys

        dispatcher.on_error_detected(parsed_error)
        await dispatcher.drain()
        assert repair_action.repair.await_count == 1

        await asyncio.sleep(COOLDOWN)
        assert parsed_error.key not in dispatcher.fixing_keys

        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 3)
        assert repair_action.repair.await_count == 2

    async def test_success_is_reported(self, dispatcher, ui, parsed_error):
        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 3)

        assert "🔍 Error detected!" in ui.text
        assert "  Type: TypeError" in ui.text
        assert "  File: src/app.js:42" in ui.text
        assert "🔧 Fixing..." in ui.text
        assert "✅ Fixed src/app.js" in ui.text

    async def test_unsuccessful_repair_still_cools_down(self, dispatcher, repair_action, ui, parsed_error):
        repair_action.repair.return_value = False

        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 3)

        assert "❌ Could not fix automatically" in ui.text
        assert parsed_error.key in dispatcher.fixing_keys

    async def test_failing_repair_is_reported_and_cools_down(self, dispatcher, repair_action, ui, parsed_error):
        repair_action.repair.side_effect = RuntimeError("model unavailable")

        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 3)

        assert "❌ Fix failed: model unavailable" in ui.text
        assert parsed_error.key in dispatcher.fixing_keys

    async def test_dry_run_reports_without_repairing(self, repair_action, ui, parsed_error):
        dispatcher = RepairDispatcher(repair_action, ui, debounce_delay=DEBOUNCE, cooldown=COOLDOWN, dry_run=True)

        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 3)

        repair_action.repair.assert_not_awaited()
        assert "Dry run - would fix src/app.js" in ui.text
        assert dispatcher.fixing_keys == frozenset()
        dispatcher.close()

    async def test_in_flight_key_is_not_dispatched_twice(self, dispatcher, repair_action, parsed_error):
        release = asyncio.Event()

        async def slow_repair(error):
            await release.wait()
            return True

        repair_action.repair.side_effect = slow_repair
        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 3)
        assert parsed_error.key in dispatcher.fixing_keys

        dispatcher.on_error_detected(parsed_error)
        release.set()
        await dispatcher.drain()

        assert repair_action.repair.await_count == 1

    async def test_per_key_timers_dispatch_every_key(self, repair_action, ui, parsed_error):
        dispatcher = RepairDispatcher(repair_action, ui, debounce_delay=DEBOUNCE, cooldown=COOLDOWN,
                                      per_key_debounce=True)
        other = replace(parsed_error, file="src/other.ts", line=5)

        dispatcher.on_error_detected(parsed_error)
        dispatcher.on_error_detected(other)
        await asyncio.sleep(DEBOUNCE * 3)

        assert repair_action.repair.await_count == 2
        assert dispatcher.fixing_keys == {parsed_error.key, other.key}
        dispatcher.close()

    async def test_close_cancels_pending_dispatch(self, dispatcher, repair_action, parsed_error):
        dispatcher.on_error_detected(parsed_error)
        dispatcher.close()
        await asyncio.sleep(DEBOUNCE * 3)

        repair_action.repair.assert_not_awaited()


class TestDrain:
    """Tests for RepairDispatcher.drain."""

    async def test_waiting_error_is_dispatched_without_waiting_out_the_burst(self, repair_action, ui, parsed_error):
        dispatcher = RepairDispatcher(repair_action, ui, debounce_delay=5.0, cooldown=COOLDOWN)
        newer = replace(parsed_error, message="Cannot read properties of null (reading 'length')")
        dispatcher.on_error_detected(parsed_error)
        dispatcher.on_error_detected(newer)

        await asyncio.wait_for(dispatcher.drain(), timeout=1.0)

        repair_action.repair.assert_awaited_once_with(newer)
        dispatcher.close()

    async def test_waits_for_running_repair(self, dispatcher, repair_action, parsed_error):
        finished = []

        async def slow_repair(error):
            await asyncio.sleep(DEBOUNCE * 2)
            finished.append(error)
            return True

        repair_action.repair.side_effect = slow_repair
        dispatcher.on_error_detected(parsed_error)
        await asyncio.sleep(DEBOUNCE * 1.5)

        await dispatcher.drain()

        assert finished == [parsed_error]

    async def test_every_waiting_key_is_dispatched(self, repair_action, ui, parsed_error):
        dispatcher = RepairDispatcher(repair_action, ui, debounce_delay=5.0, cooldown=COOLDOWN,
                                      per_key_debounce=True)
        other = replace(parsed_error, file="src/other.ts", line=5)
        dispatcher.on_error_detected(parsed_error)
        dispatcher.on_error_detected(other)

        await asyncio.wait_for(dispatcher.drain(), timeout=1.0)

        assert repair_action.repair.await_count == 2
        dispatcher.close()

    async def test_nothing_waiting(self, dispatcher, repair_action):
        await dispatcher.drain()

        repair_action.repair.assert_not_awaited()
