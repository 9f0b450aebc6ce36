"""Domain-specific configuration for coolplay logging.

Controls the level and location (relative to the metadata directory) of the
log file written by CLI invocations.
"""

from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "INFO").upper()

    @cached_property
    def file(self) -> str:
        return str(self.section.get("file") or "logs/coolplay.log")


__all__ = ["LoggingConfig"]
