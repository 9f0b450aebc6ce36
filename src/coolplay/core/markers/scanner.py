"""
Marker scanner: recursive traversal and per-line extraction.

Traversal prunes excluded directory names and only reads files whose
extension is in the allow-list. Any directory or file that cannot be read
contributes zero occurrences; the scan itself never fails.
"""
from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from coolplay.core.file_io import read_source_text

from .models import MarkerOccurrence
from .patterns import DEFAULT_PATTERNS, MarkerPattern, build_pattern_table

if TYPE_CHECKING:
    from coolplay.core.config import MarkersConfig
    from coolplay.core.workspace import Workspace

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = frozenset(
    {".ts", ".js", ".tsx", ".jsx", ".py", ".java", ".cpp", ".c", ".cs", ".php", ".go", ".rs"}
)
DEFAULT_EXCLUDED_DIRS = frozenset({"node_modules", ".git", "out", "dist", ".vscode"})


def sort_occurrences(occurrences: Iterable[MarkerOccurrence]) -> List[MarkerOccurrence]:
    """Order by tag, then relative path; stable, so lines keep file order."""
    return sorted(occurrences, key=lambda o: (o.tag, o.path))


def _list_entries(dir_path: Path) -> List[Tuple[str, bool, bool]]:
    # Symlinks are not followed (no loops); they are neither dirs nor files here.
    with os.scandir(dir_path) as it:
        return [
            (entry.name, entry.is_dir(follow_symlinks=False), entry.is_file(follow_symlinks=False))
            for entry in it
        ]


class MarkerScanner:
    """Produce the full marker occurrence set for a workspace."""

    def __init__(
        self,
        patterns: Optional[Sequence[MarkerPattern]] = None,
        extensions: Optional[Iterable[str]] = None,
        excluded_dirs: Optional[Iterable[str]] = None,
    ) -> None:
        self.patterns: Tuple[MarkerPattern, ...] = tuple(patterns) if patterns is not None else DEFAULT_PATTERNS
        self.extensions = (
            frozenset(e.lower() for e in extensions) if extensions is not None else DEFAULT_EXTENSIONS
        )
        self.excluded_dirs = frozenset(excluded_dirs) if excluded_dirs is not None else DEFAULT_EXCLUDED_DIRS

    @classmethod
    def from_config(cls, config: "MarkersConfig") -> "MarkerScanner":
        return cls(
            patterns=build_pattern_table(config.tags),
            extensions=config.extensions,
            excluded_dirs=config.excluded_dirs,
        )

    def is_excluded_dir(self, name: str) -> bool:
        return name in self.excluded_dirs

    def is_eligible_file(self, name: str) -> bool:
        return os.path.splitext(name)[1].lower() in self.extensions

    async def scan(self, workspace: "Workspace") -> List[MarkerOccurrence]:
        """Walk every workspace root and return the sorted occurrence set."""
        found: List[MarkerOccurrence] = []
        for root in workspace.roots:
            await self._scan_directory(root, root, found)
        return sort_occurrences(found)

    async def _scan_directory(self, dir_path: Path, root: Path, out: List[MarkerOccurrence]) -> None:
        try:
            entries = await asyncio.to_thread(_list_entries, dir_path)
        except OSError as exc:
            logger.warning("Error scanning directory %s: %s", dir_path, exc)
            return

        for name, is_dir, is_file in entries:
            full_path = dir_path / name
            if is_dir:
                if not self.is_excluded_dir(name):
                    await self._scan_directory(full_path, root, out)
            elif is_file and self.is_eligible_file(name):
                out.extend(await self._scan_file(full_path, full_path.relative_to(root).as_posix()))

    async def scan_file(self, path: Path | str, workspace: "Workspace") -> List[MarkerOccurrence]:
        """Extract occurrences from a single file, in line order."""
        full_path = workspace.canonical(path)
        return await self._scan_file(full_path, workspace.relative_path(full_path))

    async def _scan_file(self, full_path: Path, rel_path: str) -> List[MarkerOccurrence]:
        try:
            content = await asyncio.to_thread(read_source_text, full_path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Error reading file %s: %s", full_path, exc)
            return []
        return self.extract(content, str(full_path), rel_path)

    def extract(self, content: str, full_path: str, rel_path: str) -> List[MarkerOccurrence]:
        """Run every pattern once against every line of ``content``.

        Lines are split on ``\\n`` only. A line may yield several
        occurrences when more than one pattern matches it.
        """
        occurrences: List[MarkerOccurrence] = []
        for index, line in enumerate(content.split("\n")):
            trimmed = line.strip()
            for pattern in self.patterns:
                message = pattern.match(trimmed)
                if message is None:
                    continue
                occurrences.append(
                    MarkerOccurrence(
                        tag=pattern.tag,
                        message=message,
                        path=rel_path,
                        full_path=full_path,
                        line=index + 1,
                        resolved=pattern.is_resolved(line),
                        icon=pattern.icon,
                    )
                )
        return occurrences


__all__ = [
    "DEFAULT_EXTENSIONS",
    "DEFAULT_EXCLUDED_DIRS",
    "MarkerScanner",
    "sort_occurrences",
]
