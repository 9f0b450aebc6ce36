"""Shared utilities for coolplay core."""
from __future__ import annotations

from .json_io import read_json, write_json_atomic
from .paths import resolve_project_root

__all__ = ["read_json", "write_json_atomic", "resolve_project_root"]
