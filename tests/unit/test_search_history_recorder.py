"""SearchHistoryRecorder: background writes that never surface failures."""

import asyncio
from unittest.mock import AsyncMock

from leaddesk.infrastructure.services import SearchHistoryRecorder


async def test_record_schedules_touch_and_drain_waits() -> None:
    repo = AsyncMock()
    recorder = SearchHistoryRecorder(repo)

    recorder.record("user-1", "acme")
    assert recorder.pending == 1
    await recorder.drain()

    repo.touch.assert_awaited_once_with("user-1", "acme")
    assert recorder.pending == 0


async def test_record_returns_before_write_completes() -> None:
    gate = asyncio.Event()
    repo = AsyncMock()

    async def wait_for_gate(*args):
        await gate.wait()

    repo.touch.side_effect = wait_for_gate
    recorder = SearchHistoryRecorder(repo)

    recorder.record("user-1", "acme")
    await asyncio.sleep(0)
    assert recorder.pending == 1
    gate.set()
    await recorder.drain()


async def test_failed_write_is_logged_not_raised(caplog) -> None:
    repo = AsyncMock()
    repo.touch.side_effect = RuntimeError("unique violation")
    recorder = SearchHistoryRecorder(repo)

    recorder.record("user-1", "acme")
    await recorder.drain()

    assert "Recent search write failed" in caplog.text


async def test_closed_recorder_drops_writes() -> None:
    repo = AsyncMock()
    recorder = SearchHistoryRecorder(repo)
    await recorder.aclose()

    recorder.record("user-1", "acme")

    assert recorder.pending == 0
    repo.touch.assert_not_awaited()
