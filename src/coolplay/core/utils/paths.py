"""Project root resolution.

Resolution priority:
1. ``COOLPLAY_PROJECT_ROOT`` environment variable
2. Nearest ancestor of the current directory holding a ``.coolplay`` directory
3. Git repository root via ``git rev-parse --show-toplevel``
4. The current directory
"""
from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Optional

from coolplay.core.exceptions import WorkspaceError

PROJECT_ROOT_ENV = "COOLPLAY_PROJECT_ROOT"
DEFAULT_PROJECT_CONFIG_DIR = ".coolplay"


def _git_toplevel(cwd: Path) -> Optional[Path]:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            text=True,
            capture_output=True,
            check=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return None
    root_str = (result.stdout or "").strip()
    return Path(root_str).resolve() if root_str else None


def resolve_project_root() -> Path:
    """Resolve the workspace root for CLI invocations.

    Raises:
        WorkspaceError: If the environment override points at a missing path
            or at the metadata directory itself.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.is_dir():
            raise WorkspaceError(f"{PROJECT_ROOT_ENV} points at missing path: {env_path}")
        if env_path.name == DEFAULT_PROJECT_CONFIG_DIR:
            raise WorkspaceError(
                f"{PROJECT_ROOT_ENV} points to the {DEFAULT_PROJECT_CONFIG_DIR} directory: {env_path}. "
                "It must point to the project root."
            )
        return env_path

    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / DEFAULT_PROJECT_CONFIG_DIR).is_dir():
            return candidate

    git_root = _git_toplevel(cwd)
    if git_root is not None and git_root.exists():
        return git_root

    return cwd


__all__ = ["PROJECT_ROOT_ENV", "DEFAULT_PROJECT_CONFIG_DIR", "resolve_project_root"]
