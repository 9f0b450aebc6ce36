"""
In-place marker toggle.

Flips one occurrence between pending and resolved by rewriting exactly its
source line. The file is read fresh, so a toggle against a stale scan either
targets whatever still matches on that line or leaves the file untouched.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Sequence

from coolplay.core.exceptions import MarkerError, MarkerToggleError
from coolplay.core.file_io import read_source_text, write_source_text

from .models import MarkerOccurrence
from .patterns import DEFAULT_PATTERNS, RESOLUTION_PREFIX, MarkerPattern, find_pattern

logger = logging.getLogger(__name__)


def resolve_line(line: str, tag: str) -> str:
    """Replace ``TAG:`` after the ``//`` opener with ``@DONE-TAG: ``.

    Returns the line unchanged when no pending marker for ``tag`` is found.
    """
    m = re.search(r"(//\s*)(" + re.escape(tag) + r":?\s*)(.+)", line, re.IGNORECASE)
    if m is None:
        return line
    start, end = m.span(2)
    return f"{line[:start]}{RESOLUTION_PREFIX}{tag.upper()}: {line[end:]}"


def unresolve_line(line: str, tag: str) -> str:
    """Drop the first ``@DONE-`` prefix in front of ``TAG``, keeping everything else."""
    pattern = re.escape(RESOLUTION_PREFIX) + r"(" + re.escape(tag.upper()) + r":?\s*)"
    return re.sub(pattern, lambda m: m.group(1), line, count=1)


def toggle_line(line: str, tag: str, resolved: bool) -> str:
    return unresolve_line(line, tag) if resolved else resolve_line(line, tag)


async def toggle_occurrence(
    occurrence: MarkerOccurrence,
    patterns: Sequence[MarkerPattern] = DEFAULT_PATTERNS,
) -> bool:
    """Flip ``occurrence`` in its source file.

    Returns:
        True when the file was rewritten; False for a stale target (line out
        of range or no longer shaped like a marker), which is not an error.

    Raises:
        MarkerError: If the occurrence's tag is not in the pattern table.
        MarkerToggleError: If the file cannot be read, decoded or written.
    """
    pattern = find_pattern(patterns, occurrence.tag)
    if pattern is None:
        raise MarkerError(
            f"Unknown marker tag: {occurrence.tag}",
            context={"tag": occurrence.tag, "known": [p.tag for p in patterns]},
        )

    path = occurrence.full_path
    try:
        content = await asyncio.to_thread(read_source_text, path)
    except (OSError, UnicodeError) as exc:
        raise MarkerToggleError(f"Cannot read {path}: {exc}", path=path, line=occurrence.line) from exc

    lines = content.split("\n")
    index = occurrence.line - 1
    if not 0 <= index < len(lines):
        logger.info("Skipping toggle of %s:%d, file has %d lines", path, occurrence.line, len(lines))
        return False

    current = lines[index]
    updated = toggle_line(current, pattern.tag, occurrence.resolved)
    if updated == current:
        logger.info("Skipping toggle of %s:%d, line no longer matches %s", path, occurrence.line, pattern.tag)
        return False

    lines[index] = updated
    try:
        await asyncio.to_thread(write_source_text, path, "\n".join(lines))
    except OSError as exc:
        raise MarkerToggleError(f"Cannot write {path}: {exc}", path=path, line=occurrence.line) from exc

    logger.debug("Toggled %s at %s:%d (resolved=%s)", pattern.tag, path, occurrence.line, not occurrence.resolved)
    return True


__all__ = ["resolve_line", "unresolve_line", "toggle_line", "toggle_occurrence"]
