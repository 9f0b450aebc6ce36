"""
coolplay configuration package.

Layered YAML configuration (bundled defaults, project overrides,
environment overrides) with typed per-domain accessors.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config
from .domains import LoggingConfig, MarkersConfig, StoreConfig
from .manager import ConfigManager


@lru_cache(maxsize=1)
def default_config() -> Dict[str, Any]:
    """Bundled defaults only (no project layer, no environment overrides)."""
    from coolplay.core.utils.merge import deep_merge
    from coolplay.data import list_files, read_yaml

    cfg: Dict[str, Any] = {}
    for path in list_files("config", "*.yaml"):
        cfg = deep_merge(cfg, read_yaml("config", path.name))
    return cfg


__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "LoggingConfig",
    "MarkersConfig",
    "StoreConfig",
    "clear_all_caches",
    "default_config",
    "get_cached_config",
]
