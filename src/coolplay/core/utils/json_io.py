"""JSON I/O utilities with atomic writes and advisory locks."""
from __future__ import annotations

import fcntl
import json
from pathlib import Path
from typing import Any, Callable, Dict

from coolplay.core.file_io import utils as io_utils

DEFAULT_JSON_CONFIG: Dict[str, Any] = {
    "indent": 2,
    "sort_keys": False,
    "ensure_ascii": False,
    "encoding": "utf-8",
}


def _json_writer(data: Any, cfg: Dict[str, Any]) -> Callable[[Any], None]:
    def _writer(f):
        json.dump(
            data,
            f,
            indent=cfg["indent"],
            sort_keys=cfg["sort_keys"],
            ensure_ascii=cfg["ensure_ascii"],
        )

    return _writer


def read_json(file_path: Path | str) -> Any:
    """Read JSON with shared lock; raises FileNotFoundError on missing files."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")

    with open(path, "r", encoding=DEFAULT_JSON_CONFIG["encoding"]) as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
        data = json.load(f)
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    return data


def write_json_atomic(
    file_path: Path | str,
    data: Any,
    *,
    indent: int | None = None,
    sort_keys: bool | None = None,
) -> None:
    """Atomically write JSON to ``file_path``.

    Key order is preserved by default so records keep the field order they
    were built with.
    """
    path = Path(file_path)
    cfg = DEFAULT_JSON_CONFIG.copy()

    if indent is not None:
        cfg["indent"] = indent
    if sort_keys is not None:
        cfg["sort_keys"] = sort_keys

    io_utils._atomic_write(  # type: ignore[attr-defined]
        path,
        _json_writer(data, cfg),
        encoding=cfg["encoding"],
    )


__all__ = ["read_json", "write_json_atomic", "DEFAULT_JSON_CONFIG"]
