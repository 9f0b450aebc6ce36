"""Domain-specific configuration for the marker scanner.

Provides cached access to the marker tag table, the file-type allow-list,
excluded directory names and the scan timing settings.
"""
from __future__ import annotations

from functools import cached_property
from typing import FrozenSet, List, Tuple

from ..base import BaseDomainConfig

DEFAULT_ICON = "comment"


class MarkersConfig(BaseDomainConfig):
    """Typed accessor for the ``markers`` section."""

    def _config_section(self) -> str:
        return "markers"

    @cached_property
    def tags(self) -> List[Tuple[str, str]]:
        """``(TAG, icon)`` pairs in pattern-table order; tags are upper-cased."""
        out: List[Tuple[str, str]] = []
        for entry in self.section.get("tags") or []:
            if isinstance(entry, str):
                out.append((entry.upper(), DEFAULT_ICON))
            else:
                out.append((str(entry["tag"]).upper(), str(entry.get("icon") or DEFAULT_ICON)))
        return out

    @cached_property
    def extensions(self) -> FrozenSet[str]:
        return frozenset(str(e).lower() for e in self.section.get("extensions") or [])

    @cached_property
    def excluded_dirs(self) -> FrozenSet[str]:
        # Directory names are matched exactly (case-sensitive).
        return frozenset(str(d) for d in self.section.get("excluded_dirs") or [])

    @cached_property
    def debounce_seconds(self) -> float:
        return float(self.section.get("debounce_ms", 500)) / 1000.0

    @cached_property
    def toggle_rescan_delay_seconds(self) -> float:
        return float(self.section.get("toggle_rescan_delay_ms", 100)) / 1000.0

    @cached_property
    def watch_interval_seconds(self) -> float:
        return float(self.section.get("watch_interval_ms", 1000)) / 1000.0


__all__ = ["MarkersConfig"]
