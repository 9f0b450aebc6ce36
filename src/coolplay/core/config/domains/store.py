"""Domain-specific configuration for the metadata stores."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class StoreConfig(BaseDomainConfig):
    """Typed accessor for the ``store`` section (file names under the metadata dir)."""

    def _config_section(self) -> str:
        return "store"

    @cached_property
    def dir_name(self) -> str:
        return str(self.section.get("dir") or ".coolplay")

    @cached_property
    def file_statuses(self) -> str:
        return str(self.section.get("file_statuses") or "file-statuses.json")

    @cached_property
    def global_rules(self) -> str:
        return str(self.section.get("global_rules") or "global-rules.json")

    @cached_property
    def local_rules(self) -> str:
        return str(self.section.get("local_rules") or "local-rules.json")

    @cached_property
    def file_rules_prefix(self) -> str:
        return str(self.section.get("file_rules_prefix") or "rules-")

    @cached_property
    def default_rule_description(self) -> str:
        return str(self.section.get("default_rule_description") or "Custom rule")


__all__ = ["StoreConfig"]
