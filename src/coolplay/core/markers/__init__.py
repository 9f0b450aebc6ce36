"""
Marker engine: scan source files for ``// TAG: message`` comments, split
them into pending and completed views, and toggle them in place.
"""
from __future__ import annotations

from .debounce import Debouncer
from .models import RESOLVED_ICON, MarkerOccurrence, NavigationTarget
from .panels import MarkerPanels
from .patterns import (
    DEFAULT_PATTERNS,
    DEFAULT_TAGS,
    RESOLUTION_PREFIX,
    MarkerPattern,
    RegexMatcher,
    build_pattern_table,
    find_pattern,
)
from .scanner import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXTENSIONS, MarkerScanner, sort_occurrences
from .toggle import resolve_line, toggle_occurrence, unresolve_line
from .view import ALL_TAGS, MarkerView, Partition
from .watcher import FileEvent, PollingWatcher

__all__ = [
    "ALL_TAGS",
    "DEFAULT_EXCLUDED_DIRS",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_PATTERNS",
    "DEFAULT_TAGS",
    "RESOLUTION_PREFIX",
    "RESOLVED_ICON",
    "Debouncer",
    "FileEvent",
    "MarkerOccurrence",
    "MarkerPanels",
    "MarkerPattern",
    "MarkerScanner",
    "MarkerView",
    "NavigationTarget",
    "Partition",
    "PollingWatcher",
    "RegexMatcher",
    "build_pattern_table",
    "find_pattern",
    "resolve_line",
    "sort_occurrences",
    "toggle_occurrence",
    "unresolve_line",
]
