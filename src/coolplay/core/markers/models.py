"""
Data models for the marker engine.

A MarkerOccurrence is derived from file content on every scan and never
persisted. Its identity for toggling is ``(full_path, line, tag)`` as seen
by the scan that produced it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple

RESOLVED_ICON = "check"


class NavigationTarget(NamedTuple):
    """Open-file-at-line target (zero-based line)."""

    path: str
    line: int


@dataclass(frozen=True)
class MarkerOccurrence:
    """One recognised marker comment in a source file.

    Attributes:
        tag: Canonical tag name (e.g. "TODO")
        message: Captured free text, trimmed
        path: Workspace-relative path (POSIX separators)
        full_path: Absolute, canonical path
        line: 1-based line number
        resolved: Whether the line carries the ``@DONE-<TAG>:`` token
        icon: Icon hint of the pattern that matched
    """

    tag: str
    message: str
    path: str
    full_path: str
    line: int
    resolved: bool = False
    icon: str = "comment"

    @property
    def key(self) -> tuple[str, int, str]:
        return (self.full_path, self.line, self.tag)

    @property
    def label(self) -> str:
        return f"{self.tag}: {self.message}"

    @property
    def tooltip(self) -> str:
        return f"{self.tag}: {self.message}\nFile: {self.path}\nLine: {self.line}"

    @property
    def description(self) -> str:
        return f"{self.path}:{self.line}"

    @property
    def icon_hint(self) -> str:
        return RESOLVED_ICON if self.resolved else self.icon

    @property
    def navigation(self) -> NavigationTarget:
        return NavigationTarget(self.full_path, max(self.line - 1, 0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "message": self.message,
            "path": self.path,
            "fullPath": self.full_path,
            "line": self.line,
            "resolved": self.resolved,
            "label": self.label,
            "description": self.description,
            "icon": self.icon_hint,
        }


__all__ = ["MarkerOccurrence", "NavigationTarget", "RESOLVED_ICON"]
