"""Per-file workflow status (DRAFT, ONGOING, DONE)."""
from __future__ import annotations

from .models import DECORATIONS, ICONS, FileStatusRecord, FileStatusValue, StatusDecoration
from .store import FileStatusStore

__all__ = [
    "DECORATIONS",
    "ICONS",
    "FileStatusRecord",
    "FileStatusStore",
    "FileStatusValue",
    "StatusDecoration",
]
