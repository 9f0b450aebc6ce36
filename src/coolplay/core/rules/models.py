"""
Data models for checkable rules.

- GlobalRule: applies to every file; check state is kept per file
- LocalRule: belongs to one file and carries its own check state
- FileRuleState: one global rule's check state for one file
- RuleItem: a rule as presented for the active file
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict

DESCRIPTION_PREVIEW_LIMIT = 40


class RuleScope(str, Enum):
    GLOBAL = "global"
    LOCAL = "local"

    @property
    def prefix(self) -> str:
        return "🌐" if self is RuleScope.GLOBAL else "📄"


class SortMode(str, Enum):
    DEFAULT = "default"
    CHECKED_FIRST = "checked-first"
    UNCHECKED_FIRST = "unchecked-first"

    def next(self) -> "SortMode":
        order = list(SortMode)
        return order[(order.index(self) + 1) % len(order)]


class FilterMode(str, Enum):
    ALL = "all"
    GLOBAL = "global"
    LOCAL = "local"


@dataclass(frozen=True)
class GlobalRule:
    id: str
    name: str
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlobalRule":
        return cls(id=data["id"], name=data["name"], description=data.get("description") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description}


@dataclass(frozen=True)
class LocalRule:
    """A rule attached to one file.

    Attributes:
        file_path: Workspace-relative path (POSIX separators)
        is_checked: Stored check state
    """

    id: str
    name: str
    description: str
    file_path: str
    is_checked: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocalRule":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description") or "",
            file_path=data["filePath"],
            is_checked=bool(data.get("isChecked", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "filePath": self.file_path,
            "isChecked": self.is_checked,
        }

    def with_changes(self, **changes: Any) -> "LocalRule":
        return replace(self, **changes)


@dataclass(frozen=True)
class FileRuleState:
    rule_id: str
    is_checked: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileRuleState":
        return cls(rule_id=data["ruleId"], is_checked=bool(data.get("isChecked", False)))

    def to_dict(self) -> Dict[str, Any]:
        return {"ruleId": self.rule_id, "isChecked": self.is_checked}


@dataclass(frozen=True)
class RuleItem:
    """A rule with its effective check state for the active file."""

    rule_id: str
    name: str
    description: str
    is_checked: bool
    scope: RuleScope

    @property
    def label(self) -> str:
        return f"{self.scope.prefix} {self.name}"

    @property
    def tooltip(self) -> str:
        kind = "Global" if self.scope is RuleScope.GLOBAL else "Local"
        state = "Completed" if self.is_checked else "Pending"
        return f"{self.name}: {self.description}\nType: {kind}\nStatus: {state}"

    @property
    def short_description(self) -> str:
        if len(self.description) > DESCRIPTION_PREVIEW_LIMIT:
            return self.description[:DESCRIPTION_PREVIEW_LIMIT] + "..."
        return self.description

    @property
    def icon(self) -> str:
        return "check" if self.is_checked else "circle-outline"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.rule_id,
            "name": self.name,
            "description": self.description,
            "isChecked": self.is_checked,
            "scope": self.scope.value,
            "label": self.label,
            "shortDescription": self.short_description,
            "icon": self.icon,
        }


__all__ = [
    "DESCRIPTION_PREVIEW_LIMIT",
    "FileRuleState",
    "FilterMode",
    "GlobalRule",
    "LocalRule",
    "RuleItem",
    "RuleScope",
    "SortMode",
]
