"""Tests for the trailing-edge debouncer."""
from __future__ import annotations

import asyncio
import logging

import pytest

from coolplay.core.markers import Debouncer


@pytest.mark.asyncio
async def test_burst_runs_once() -> None:
    calls = []
    debouncer = Debouncer(0.05, lambda: calls.append(1))

    for _ in range(5):
        debouncer.trigger()
        await asyncio.sleep(0.01)
    assert calls == []
    assert debouncer.pending

    await asyncio.sleep(0.1)
    assert calls == [1]
    assert not debouncer.pending


@pytest.mark.asyncio
async def test_each_trigger_resets_timer() -> None:
    calls = []
    debouncer = Debouncer(0.1, lambda: calls.append(1))

    debouncer.trigger()
    await asyncio.sleep(0.06)
    debouncer.trigger()
    await asyncio.sleep(0.06)
    assert calls == []

    await asyncio.sleep(0.1)
    assert calls == [1]


@pytest.mark.asyncio
async def test_cancel_drops_pending_run() -> None:
    calls = []
    debouncer = Debouncer(0.02, lambda: calls.append(1))

    debouncer.trigger()
    debouncer.cancel()
    await asyncio.sleep(0.05)

    assert calls == []


@pytest.mark.asyncio
async def test_flush_runs_now() -> None:
    calls = []
    debouncer = Debouncer(10, lambda: calls.append(1))

    debouncer.trigger()
    debouncer.flush()

    assert calls == [1]
    assert not debouncer.pending
    debouncer.flush()
    assert calls == [1]


@pytest.mark.asyncio
async def test_async_callback_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    async def boom() -> None:
        raise RuntimeError("scan exploded")

    debouncer = Debouncer(0.01, boom, name="rescan")
    with caplog.at_level(logging.ERROR, logger="coolplay.core.markers.debounce"):
        debouncer.trigger()
        await asyncio.sleep(0.05)
        await debouncer.wait_idle()

    assert "rescan callback failed" in caplog.text
