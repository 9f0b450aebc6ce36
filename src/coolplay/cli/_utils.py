"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Awaitable, Optional, TypeVar

from coolplay.core.utils.paths import resolve_project_root
from coolplay.core.workspace import Workspace

T = TypeVar("T")


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get workspace root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).expanduser().resolve()
    return resolve_project_root()


def get_workspace(args: argparse.Namespace) -> Workspace:
    return Workspace.load(get_repo_root(args))


def get_active_file(args: argparse.Namespace) -> Optional[Path]:
    """Absolute path of ``--file``, or None when it was not given."""
    value: Any = getattr(args, "file", None)
    if not value:
        return None
    return Path(value).expanduser().resolve()


def run_async(coro: Awaitable[T]) -> T:
    """Run a coroutine to completion from a synchronous command."""
    return asyncio.run(coro)  # type: ignore[arg-type]


__all__ = ["get_repo_root", "get_workspace", "get_active_file", "run_async"]
