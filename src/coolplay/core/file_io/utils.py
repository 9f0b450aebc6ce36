"""File I/O utilities for coolplay core.

Single source of truth for file access patterns:
- Atomic writes with fsync and advisory locks (metadata stores)
- In-place source text reads/writes that keep line endings untouched
- YAML support with consistent error handling
- Directory management utilities
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from contextlib import nullcontext
from pathlib import Path
from typing import Any, Callable, ContextManager, Optional, TextIO, Union

import yaml

PathLike = Union[str, Path]


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    lock_cm: Optional[ContextManager[Any]] = None,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, unlocked, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(path)
    ensure_parent_dir(path)

    lock_context = lock_cm or nullcontext()
    tmp_path: Optional[Path] = None
    try:
        with lock_context:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=encoding,
                dir=str(path.parent),
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                write_fn(f)
                f.flush()
                os.fsync(f.fileno())
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

            os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                # Best-effort cleanup; never fail callers on temp removal
                pass


# ============================================================================
# Source text I/O
# ============================================================================

def read_source_text(path: PathLike, encoding: str = "utf-8") -> str:
    """Read a source file without newline translation.

    ``\\r\\n`` sequences are returned as-is so callers splitting on ``\\n``
    see the carriage return at the end of each line.
    """
    with open(path, "r", encoding=encoding, newline="") as f:
        return f.read()


def write_source_text(path: PathLike, content: str, encoding: str = "utf-8") -> None:
    """Overwrite a source file in full without newline translation.

    The file is rewritten in place (same inode and permissions); this is
    not an atomic replace.
    """
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(content)


# ============================================================================
# YAML I/O
# ============================================================================

def read_yaml(path: PathLike, default: Any = None, *, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or empty (default: None)
        raise_on_error: Propagate parse/read errors instead of returning default

    Returns:
        Any: Parsed YAML data, or default
    """
    path = Path(path)
    if not path.exists():
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            data = yaml.safe_load(f)
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return data if data is not None else default


def iter_yaml_files(directory: Path) -> list[Path]:
    """Return ``*.yaml`` / ``*.yml`` files in ``directory`` in alphabetical order."""
    if not directory.is_dir():
        return []
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix in {".yaml", ".yml"}]
    return sorted(files, key=lambda p: p.name)


# ============================================================================
# Directory management
# ============================================================================

def ensure_directory(path: Path, create: bool = True) -> Path:
    """Ensure directory exists.

    Args:
        path: Directory path to check/create
        create: If True, create directory if missing; if False, raise if missing

    Returns:
        Path: The directory path (guaranteed to exist if create=True)

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If the path exists but is a file
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if create:
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise FileNotFoundError(f"Directory does not exist: {path}")


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "_atomic_write",
    "read_source_text",
    "write_source_text",
    "read_yaml",
    "iter_yaml_files",
    "ensure_directory",
]
