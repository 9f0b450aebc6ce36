"""Pending and completed marker views kept in step."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from coolplay.core.exceptions import MarkerError

from .models import MarkerOccurrence
from .scanner import MarkerScanner
from .view import MarkerView, Notifier, Partition

if TYPE_CHECKING:
    from coolplay.core.config import MarkersConfig
    from coolplay.core.workspace import Workspace


class MarkerPanels:
    """Two views over one scanner and one configuration.

    Active-document changes, filesystem events and refreshes go to both
    views. A toggle from either side reconciles both after the toggle delay,
    since the occurrence moves from one partition to the other.
    """

    def __init__(
        self,
        workspace: "Workspace",
        *,
        scanner: Optional[MarkerScanner] = None,
        config: Optional["MarkersConfig"] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.workspace = workspace
        self.config = config if config is not None else workspace.markers_config
        self.scanner = scanner if scanner is not None else MarkerScanner.from_config(self.config)
        self.pending = MarkerView(
            workspace, Partition.PENDING, scanner=self.scanner, config=self.config, notifier=notifier
        )
        self.completed = MarkerView(
            workspace, Partition.COMPLETED, scanner=self.scanner, config=self.config, notifier=notifier
        )

    @property
    def views(self) -> tuple[MarkerView, MarkerView]:
        return (self.pending, self.completed)

    def view_for(self, partition: Union[Partition, str]) -> MarkerView:
        return self.pending if Partition.parse(partition) is Partition.PENDING else self.completed

    async def refresh(self) -> None:
        for view in self.views:
            await view.refresh()

    def notify_change(self, path: Union[str, Path, None] = None) -> None:
        for view in self.views:
            view.notify_change(path)

    def set_active_document(self, path: Union[str, Path, None]) -> None:
        for view in self.views:
            view.set_active_document(path)

    async def complete(self, occurrence: MarkerOccurrence) -> bool:
        """Mark a pending occurrence as resolved."""
        if occurrence.resolved:
            raise MarkerError(f"{occurrence.label} is already completed", context={"line": occurrence.line})
        return await self._toggle_from(self.pending, occurrence)

    async def reopen(self, occurrence: MarkerOccurrence) -> bool:
        """Return a resolved occurrence to pending."""
        if not occurrence.resolved:
            raise MarkerError(f"{occurrence.label} is not completed", context={"line": occurrence.line})
        return await self._toggle_from(self.completed, occurrence)

    async def _toggle_from(self, owner: MarkerView, occurrence: MarkerOccurrence) -> bool:
        changed = await owner.toggle(occurrence)
        if changed:
            for view in self.views:
                if view is not owner:
                    view.schedule_rescan()
        return changed

    async def wait_idle(self) -> None:
        for view in self.views:
            await view.wait_idle()

    def close(self) -> None:
        for view in self.views:
            view.close()


__all__ = ["MarkerPanels"]
