"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. The cache key fingerprints environment overrides and project config
file mtimes so edits are picked up without an explicit reset.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from coolplay.core.file_io import iter_yaml_files
from coolplay.core.utils.paths import DEFAULT_PROJECT_CONFIG_DIR

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        from coolplay.core.utils.paths import resolve_project_root

        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path) -> str:
    env_items = sorted((k, v) for k, v in os.environ.items() if k.startswith("COOLPLAY_"))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(repo_root / DEFAULT_PROJECT_CONFIG_DIR / "config"):
        try:
            st = p.stat()
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((p.name, 0, 0))
    files_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:{env_fp}:{files_fp}"


def get_cached_config(repo_root: Optional[Path] = None, *, validate: bool = True) -> Dict[str, Any]:
    """Return the merged configuration for ``repo_root``, loading it once per fingerprint."""
    root = _normalize_repo_root(repo_root)
    key = _cache_key(root)
    cached = _config_cache.get(key)
    if cached is not None:
        return cached

    from .manager import ConfigManager

    cfg = ConfigManager(root).load_config(validate=validate)
    _config_cache[key] = cfg
    return cfg


def clear_all_caches() -> None:
    """Drop every cached configuration (tests and long-running hosts)."""
    _config_cache.clear()


__all__ = ["get_cached_config", "clear_all_caches"]
