"""Tests for the polling watcher."""
from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from coolplay.core.markers import FileEvent, PollingWatcher
from coolplay.core.workspace import Workspace
from helpers.files import write_source


@pytest.mark.asyncio
async def test_poll_once_reports_changes(workspace: Workspace, isolated_project_env: Path) -> None:
    events = []
    watcher = PollingWatcher(workspace, lambda kind, path: events.append((kind, path.name)))
    existing = write_source(isolated_project_env, "keep.ts", "a\n")

    assert await watcher.poll_once() == []

    write_source(isolated_project_env, "new.ts", "b\n")
    write_source(isolated_project_env, "keep.ts", "a longer body\n")
    write_source(isolated_project_env, "node_modules/dep.js", "x\n")
    write_source(isolated_project_env, "notes.txt", "x\n")
    await watcher.poll_once()
    assert len(events) == 2
    assert set(events) == {(FileEvent.CREATED, "new.ts"), (FileEvent.CHANGED, "keep.ts")}

    events.clear()
    existing.unlink()
    await watcher.poll_once()
    assert events == [(FileEvent.DELETED, "keep.ts")]


@pytest.mark.asyncio
async def test_start_and_stop(workspace: Workspace, isolated_project_env: Path) -> None:
    events = []
    watcher = PollingWatcher(workspace, lambda kind, path: events.append(kind), interval=0.01)

    watcher.start()
    await asyncio.sleep(0.05)
    write_source(isolated_project_env, "later.go", "package main\n")
    await asyncio.sleep(0.1)
    await watcher.stop()

    assert not watcher.running
    assert FileEvent.CREATED in events


@pytest.mark.asyncio
async def test_callback_errors_do_not_stop_polling(workspace: Workspace, isolated_project_env: Path) -> None:
    def explode(kind, path):
        raise RuntimeError("listener bug")

    watcher = PollingWatcher(workspace, explode)
    await watcher.poll_once()
    write_source(isolated_project_env, "x.ts", "1\n")

    events = await watcher.poll_once()

    assert [kind for kind, _ in events] == [FileEvent.CREATED]
