"""File status data models.

Provides the workflow status enum and the persisted per-file record.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FileStatusValue(str, Enum):
    DRAFT = "DRAFT"
    ONGOING = "ONGOING"
    DONE = "DONE"

    def next(self) -> "FileStatusValue":
        """DRAFT -> ONGOING -> DONE -> DRAFT."""
        order = list(FileStatusValue)
        return order[(order.index(self) + 1) % len(order)]

    @classmethod
    def parse(cls, value: "str | FileStatusValue") -> "FileStatusValue":
        if isinstance(value, FileStatusValue):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown status: {value!r} (expected one of {choices})") from None


@dataclass(frozen=True)
class StatusDecoration:
    """Badge shown next to a file in an explorer view."""

    badge: str
    tooltip: str
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {"badge": self.badge, "tooltip": self.tooltip, "color": self.color}


DECORATIONS: dict[FileStatusValue, StatusDecoration] = {
    FileStatusValue.DRAFT: StatusDecoration("D", "Draft", "charts.blue"),
    FileStatusValue.ONGOING: StatusDecoration("O", "Ongoing", "charts.yellow"),
    FileStatusValue.DONE: StatusDecoration("✓", "Done", "charts.green"),
}

ICONS: dict[FileStatusValue, str] = {
    FileStatusValue.DRAFT: "edit",
    FileStatusValue.ONGOING: "clock",
    FileStatusValue.DONE: "check",
}


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class FileStatusRecord:
    """Persisted status of one file.

    Attributes:
        file_path: Workspace-relative path (POSIX separators)
        status: Current workflow status
        last_modified: Epoch milliseconds of the last status change
    """

    file_path: str
    status: FileStatusValue
    last_modified: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileStatusRecord":
        return cls(
            file_path=data["filePath"],
            status=FileStatusValue.parse(data["status"]),
            last_modified=int(data.get("lastModified") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "status": self.status.value,
            "lastModified": self.last_modified,
        }


__all__ = [
    "DECORATIONS",
    "ICONS",
    "FileStatusRecord",
    "FileStatusValue",
    "StatusDecoration",
    "now_ms",
]
