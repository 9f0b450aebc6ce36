"""Helpers for writing source trees with exact bytes."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

# Longest time a test waits for a debounced rescan to land.
SETTLE_SECONDS = 0.2


def write_source(root: Path, rel: str, content: str) -> Path:
    """Write ``content`` under ``root`` without newline translation."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


def read_source(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


async def settle(*views, seconds: Optional[float] = None) -> None:
    """Sleep past pending debounce timers, then wait for the rescans they started."""
    await asyncio.sleep(SETTLE_SECONDS if seconds is None else seconds)
    for view in views:
        await view.wait_idle()
