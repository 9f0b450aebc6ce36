"""
Marker pattern table.

Each pattern pairs a tag (TODO, FIXME, ...) with a matcher and an icon hint.
A matcher is anything that, given a trimmed source line, returns the
captured marker message or None. The default matcher recognises
``// TAG: message`` and ``// @DONE-TAG: message`` comments, case-insensitive
on the tag.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence, Tuple

RESOLUTION_PREFIX = "@DONE-"

DEFAULT_TAGS: Tuple[Tuple[str, str], ...] = (
    ("FIXME", "bug"),
    ("TODO", "checklist"),
    ("HACK", "warning"),
    ("NOTE", "info"),
    ("BUG", "bug"),
    ("REVIEW", "eye"),
    ("OPTIMIZE", "rocket"),
    ("WARNING", "alert"),
)


class Matcher(Protocol):
    """Attempt a match on a trimmed line and return the message, if any."""

    def match(self, line: str) -> Optional[str]: ...


@dataclass(frozen=True)
class RegexMatcher:
    """Matcher backed by a compiled regex whose first group is the message."""

    regex: "re.Pattern[str]"

    def match(self, line: str) -> Optional[str]:
        m = self.regex.search(line)
        if m is None:
            return None
        return m.group(1).strip()


def comment_regex(tag: str) -> "re.Pattern[str]":
    """``//`` opener, optional resolution prefix, the tag, optional colon, message."""
    return re.compile(
        r"//\s*(?:" + re.escape(RESOLUTION_PREFIX) + r")?" + re.escape(tag) + r":?\s*(.+)",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class MarkerPattern:
    tag: str
    matcher: Matcher
    icon: str = "comment"

    @classmethod
    def for_tag(cls, tag: str, icon: str = "comment") -> "MarkerPattern":
        tag = tag.upper()
        return cls(tag=tag, matcher=RegexMatcher(comment_regex(tag)), icon=icon)

    @property
    def resolution_token(self) -> str:
        """Literal token whose presence marks a line as resolved for this tag."""
        return f"{RESOLUTION_PREFIX}{self.tag}:"

    def match(self, trimmed_line: str) -> Optional[str]:
        return self.matcher.match(trimmed_line)

    def is_resolved(self, line: str) -> bool:
        return self.resolution_token in line


def build_pattern_table(tags: Iterable[Tuple[str, str]]) -> Tuple[MarkerPattern, ...]:
    """Build patterns from ``(tag, icon)`` pairs, keeping order and dropping duplicates."""
    table: list[MarkerPattern] = []
    seen: set[str] = set()
    for tag, icon in tags:
        key = tag.upper()
        if key in seen:
            continue
        seen.add(key)
        table.append(MarkerPattern.for_tag(key, icon))
    return tuple(table)


def find_pattern(patterns: Sequence[MarkerPattern], tag: str) -> Optional[MarkerPattern]:
    key = tag.upper()
    for pattern in patterns:
        if pattern.tag == key:
            return pattern
    return None


DEFAULT_PATTERNS: Tuple[MarkerPattern, ...] = build_pattern_table(DEFAULT_TAGS)


__all__ = [
    "RESOLUTION_PREFIX",
    "DEFAULT_TAGS",
    "DEFAULT_PATTERNS",
    "Matcher",
    "RegexMatcher",
    "MarkerPattern",
    "comment_regex",
    "build_pattern_table",
    "find_pattern",
]
