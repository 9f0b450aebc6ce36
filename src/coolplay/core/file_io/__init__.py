"""
IO utilities package for coolplay core.
"""
from __future__ import annotations

from .utils import (
    ensure_directory,
    iter_yaml_files,
    read_source_text,
    read_yaml,
    write_source_text,
)

__all__ = [
    "ensure_directory",
    "iter_yaml_files",
    "read_source_text",
    "read_yaml",
    "write_source_text",
]
