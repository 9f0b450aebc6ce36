"""Tests for the pending/completed view pair."""
from __future__ import annotations

from pathlib import Path

import pytest

from coolplay.core.exceptions import MarkerError
from coolplay.core.markers import MarkerPanels
from coolplay.core.workspace import Workspace
from helpers.files import read_source, settle, write_source


@pytest.fixture
def panels(workspace: Workspace):
    panels = MarkerPanels(workspace)
    yield panels
    panels.close()


@pytest.mark.asyncio
async def test_complete_moves_marker_between_views(panels: MarkerPanels, isolated_project_env: Path) -> None:
    path = write_source(isolated_project_env, "main.py", "// TODO: ship it\n")
    panels.set_active_document(path)
    await panels.refresh()
    [occ] = panels.pending.visible

    assert await panels.complete(occ) is True
    await settle(*panels.views)

    assert panels.pending.visible == []
    [done] = panels.completed.visible
    assert done.resolved and done.message == "ship it"
    assert read_source(path) == "// @DONE-TODO: ship it\n"


@pytest.mark.asyncio
async def test_reopen(panels: MarkerPanels, isolated_project_env: Path) -> None:
    path = write_source(isolated_project_env, "main.py", "// @DONE-REVIEW: api shape\n")
    panels.set_active_document(path)
    await panels.refresh()
    [occ] = panels.completed.visible

    assert await panels.reopen(occ) is True
    await settle(*panels.views)

    assert panels.completed.visible == []
    assert [o.label for o in panels.pending.visible] == ["REVIEW: api shape"]


@pytest.mark.asyncio
async def test_wrong_direction_raises(panels: MarkerPanels, isolated_project_env: Path) -> None:
    path = write_source(isolated_project_env, "main.py", "// TODO: a\n// @DONE-TODO: b\n")
    panels.set_active_document(path)
    await panels.refresh()

    with pytest.raises(MarkerError):
        await panels.complete(panels.completed.visible[0])
    with pytest.raises(MarkerError):
        await panels.reopen(panels.pending.visible[0])


@pytest.mark.asyncio
async def test_views_share_scanner_and_events(panels: MarkerPanels) -> None:
    assert panels.pending.scanner is panels.completed.scanner
    assert panels.view_for("completed") is panels.completed

    panels.notify_change()

    assert all(view.rescan_pending for view in panels.views)
