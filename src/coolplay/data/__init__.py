"""
coolplay data resource helpers.

Provides utilities for accessing bundled configuration files and schemas
using importlib.resources.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subfolder (e.g., "config", "schemas")
        filename: Optional filename within the subfolder

    Returns:
        Absolute path to the file or directory

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/coolplay/data/config/defaults.yaml')
    """
    pkg = resources.files("coolplay.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """
    Read and parse a bundled YAML data file (cached).

    Args:
        subpackage: Name of the data subfolder
        filename: YAML filename

    Returns:
        Parsed YAML content as dictionary
    """
    path = get_data_path(subpackage, filename)
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


@lru_cache(maxsize=16)
def read_json(subpackage: str, filename: str) -> dict[str, Any]:
    """
    Read and parse a bundled JSON data file (cached).

    Args:
        subpackage: Name of the data subfolder
        filename: JSON filename

    Returns:
        Parsed JSON content as dictionary
    """
    path = get_data_path(subpackage, filename)
    return json.loads(path.read_text(encoding="utf-8"))


def list_files(subpackage: str, pattern: str = "*") -> list[Path]:
    """List bundled files matching ``pattern``, sorted by name."""
    return sorted(get_data_path(subpackage).glob(pattern))


__all__ = ["get_data_path", "read_yaml", "read_json", "list_files"]
