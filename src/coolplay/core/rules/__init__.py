"""Checkable global and file-local rules."""
from __future__ import annotations

from .models import FileRuleState, FilterMode, GlobalRule, LocalRule, RuleItem, RuleScope, SortMode
from .store import RulesStore, new_rule_id

__all__ = [
    "FileRuleState",
    "FilterMode",
    "GlobalRule",
    "LocalRule",
    "RuleItem",
    "RuleScope",
    "RulesStore",
    "SortMode",
    "new_rule_id",
]
