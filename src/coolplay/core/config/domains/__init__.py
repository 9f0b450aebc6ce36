"""Domain-specific configuration accessors."""
from __future__ import annotations

from .logging import LoggingConfig
from .markers import MarkersConfig
from .store import StoreConfig

__all__ = ["LoggingConfig", "MarkersConfig", "StoreConfig"]
