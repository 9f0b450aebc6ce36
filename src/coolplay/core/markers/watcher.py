"""
Polling filesystem watcher.

Snapshots ``(mtime_ns, size)`` for every file the scanner would read and
reports the difference between consecutive snapshots. Uses the same
pruning and extension rules as the scanner, so edits to excluded
directories never wake a view.
"""
from __future__ import annotations

import asyncio
import logging
import os
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Tuple

from .scanner import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXTENSIONS

if TYPE_CHECKING:
    from coolplay.core.workspace import Workspace

logger = logging.getLogger(__name__)

Fingerprint = Tuple[int, int]


class FileEvent(Enum):
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


EventCallback = Callable[[FileEvent, Path], None]


class PollingWatcher:
    def __init__(
        self,
        workspace: "Workspace",
        callback: EventCallback,
        *,
        extensions: Optional[Iterable[str]] = None,
        excluded_dirs: Optional[Iterable[str]] = None,
        interval: float = 1.0,
    ) -> None:
        self.workspace = workspace
        self.callback = callback
        self.extensions = frozenset(e.lower() for e in extensions) if extensions is not None else DEFAULT_EXTENSIONS
        self.excluded_dirs = frozenset(excluded_dirs) if excluded_dirs is not None else DEFAULT_EXCLUDED_DIRS
        self.interval = interval
        self._snapshot: Optional[Dict[Path, Fingerprint]] = None
        self._task: Optional["asyncio.Task[None]"] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def snapshot(self) -> Dict[Path, Fingerprint]:
        found: Dict[Path, Fingerprint] = {}
        for root in self.workspace.roots:
            self._walk(root, found)
        return found

    def _walk(self, dir_path: Path, out: Dict[Path, Fingerprint]) -> None:
        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", dir_path, exc)
            return
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name not in self.excluded_dirs:
                        self._walk(Path(entry.path), out)
                elif entry.is_file(follow_symlinks=False):
                    if os.path.splitext(entry.name)[1].lower() in self.extensions:
                        st = entry.stat(follow_symlinks=False)
                        out[Path(entry.path)] = (st.st_mtime_ns, st.st_size)
            except OSError:
                # Vanished between listing and stat; the next poll reports it.
                continue

    async def poll_once(self) -> List[Tuple[FileEvent, Path]]:
        """Take a snapshot and report what changed since the previous one.

        The first call only records the baseline and reports nothing.
        """
        current = await asyncio.to_thread(self.snapshot)
        previous = self._snapshot
        self._snapshot = current
        if previous is None:
            return []

        events: List[Tuple[FileEvent, Path]] = []
        for path, fp in current.items():
            old = previous.get(path)
            if old is None:
                events.append((FileEvent.CREATED, path))
            elif old != fp:
                events.append((FileEvent.CHANGED, path))
        for path in previous:
            if path not in current:
                events.append((FileEvent.DELETED, path))

        for kind, path in events:
            logger.debug("%s %s", kind.value, path)
            try:
                self.callback(kind, path)
            except Exception:
                logger.exception("Watcher callback failed for %s", path)
        return events

    async def _run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


__all__ = ["FileEvent", "PollingWatcher"]
