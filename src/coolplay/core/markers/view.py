"""
Partitioned marker view.

A view caches the full occurrence set produced by the last completed scan
and derives its visible list from it: partition predicate first, then the
active document, then the optional tag filter. Deriving never touches disk.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Union

from coolplay.core.exceptions import MarkerToggleError

from .debounce import Debouncer
from .models import MarkerOccurrence
from .scanner import MarkerScanner
from .toggle import toggle_occurrence

if TYPE_CHECKING:
    from coolplay.core.config import MarkersConfig
    from coolplay.core.workspace import Workspace

logger = logging.getLogger(__name__)

ALL_TAGS = "All Comments"
TOGGLE_FAILED_MESSAGE = "Error occurred while updating comment"

Listener = Callable[["MarkerView"], None]
Notifier = Callable[[str], None]


class Partition(Enum):
    PENDING = "pending"
    COMPLETED = "completed"

    def accepts(self, occurrence: MarkerOccurrence) -> bool:
        return occurrence.resolved is (self is Partition.COMPLETED)

    @classmethod
    def parse(cls, value: Union[str, "Partition"]) -> "Partition":
        if isinstance(value, Partition):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown view: {value!r} (expected pending or completed)") from None


class MarkerView:
    """One partition of the workspace's markers, scoped to the active document."""

    def __init__(
        self,
        workspace: "Workspace",
        partition: Union[Partition, str],
        *,
        scanner: Optional[MarkerScanner] = None,
        config: Optional["MarkersConfig"] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.workspace = workspace
        self.partition = Partition.parse(partition)
        self.config = config if config is not None else workspace.markers_config
        self.scanner = scanner if scanner is not None else MarkerScanner.from_config(self.config)
        self._notifier = notifier
        self._all: List[MarkerOccurrence] = []
        self._visible: List[MarkerOccurrence] = []
        self._active: Optional[str] = None
        self._tag_filter: Optional[str] = None
        self._listeners: List[Listener] = []
        self._rescan = Debouncer(self.config.debounce_seconds, self.refresh, name=f"{self.partition.value} rescan")
        self._post_toggle = Debouncer(
            self.config.toggle_rescan_delay_seconds, self.refresh, name=f"{self.partition.value} toggle rescan"
        )

    def __repr__(self) -> str:
        return f"MarkerView({self.partition.value}, visible={len(self._visible)}, all={len(self._all)})"

    @property
    def all(self) -> List[MarkerOccurrence]:
        return list(self._all)

    @property
    def visible(self) -> List[MarkerOccurrence]:
        return list(self._visible)

    @property
    def active_document(self) -> Optional[str]:
        return self._active

    @property
    def tag_filter(self) -> Optional[str]:
        return self._tag_filter

    @property
    def rescan_pending(self) -> bool:
        return self._rescan.pending or self._post_toggle.pending

    # ------------------------------------------------------------------ scanning

    async def refresh(self) -> None:
        """Rescan now, dropping any debounced rescan still waiting."""
        self._rescan.cancel()
        self._post_toggle.cancel()
        occurrences = await self.scanner.scan(self.workspace)
        self._all = occurrences
        logger.debug("%r rescanned", self)
        self._apply()

    def notify_change(self, path: Union[str, Path, None] = None) -> None:
        """A watched file was created, changed or deleted."""
        if path is not None:
            logger.debug("Change in %s, scheduling %s rescan", path, self.partition.value)
        self._rescan.trigger()

    def schedule_rescan(self) -> None:
        """Rescan after the short post-toggle delay."""
        self._post_toggle.trigger()

    async def wait_idle(self) -> None:
        await self._rescan.wait_idle()
        await self._post_toggle.wait_idle()

    def close(self) -> None:
        self._rescan.cancel()
        self._post_toggle.cancel()

    # ------------------------------------------------------------------ filters

    def set_active_document(self, path: Union[str, Path, None]) -> None:
        self._active = str(self.workspace.canonical(path)) if path else None
        self._apply()

    def set_tag_filter(self, tag: Optional[str]) -> None:
        if tag is None or tag == ALL_TAGS or not tag.strip():
            self._tag_filter = None
        else:
            self._tag_filter = tag.strip().upper()
        self._apply()

    def available_tags(self) -> List[str]:
        return sorted({o.tag for o in self._all})

    def filter_options(self) -> List[str]:
        """Choices for a tag picker: the no-filter sentinel, then the tags present."""
        return [ALL_TAGS, *self.available_tags()]

    def derive(self) -> List[MarkerOccurrence]:
        items = [o for o in self._all if self.partition.accepts(o)]
        if self._active is None:
            return []
        items = [o for o in items if o.full_path == self._active]
        if self._tag_filter is not None:
            items = [o for o in items if o.tag == self._tag_filter]
        return items

    def _apply(self) -> None:
        self._visible = self.derive()
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Marker view listener failed")

    def on_change(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------ toggling

    async def toggle(self, occurrence: MarkerOccurrence) -> bool:
        """Flip ``occurrence`` on disk and schedule a rescan.

        I/O failures are reported through the notifier and return False;
        the cached sets are left as they were.
        """
        try:
            changed = await toggle_occurrence(occurrence, self.scanner.patterns)
        except MarkerToggleError as exc:
            logger.error("Toggle failed for %s:%d: %s", occurrence.full_path, occurrence.line, exc)
            if self._notifier is not None:
                self._notifier(TOGGLE_FAILED_MESSAGE)
            return False
        if changed:
            self.schedule_rescan()
        return changed


__all__ = ["ALL_TAGS", "TOGGLE_FAILED_MESSAGE", "Partition", "MarkerView"]
