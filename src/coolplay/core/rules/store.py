"""
Rules store.

Layout under the metadata directory:

- ``global-rules.json``: list of global rules
- ``local-rules.json``: list of local rules (file-scoped, own check state)
- ``rules-<basename>.json``: ``{filePath, rules: [{ruleId, isChecked}]}``,
  the check state of global rules for one file

The per-file state is keyed by base name only, so two files sharing a base
name share global-rule check state.
"""
from __future__ import annotations

import json
import logging
import os
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Union

from coolplay.core.exceptions import NoActiveFileError, RuleNotFoundError, StoreError
from coolplay.core.schemas import SchemaValidationError, validate_payload
from coolplay.core.utils import read_json, write_json_atomic

from ..status.models import now_ms
from .models import FileRuleState, FilterMode, GlobalRule, LocalRule, RuleItem, RuleScope, SortMode

if TYPE_CHECKING:
    from coolplay.core.workspace import Workspace

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def new_rule_id(scope: RuleScope) -> str:
    return f"{scope.value}_rule_{now_ms()}_{uuid.uuid4().hex[:8]}"


class RulesStore:
    def __init__(self, workspace: "Workspace") -> None:
        self.workspace = workspace
        self.sort_mode = SortMode.DEFAULT
        self.filter_mode = FilterMode.ALL
        self.global_rules: List[GlobalRule] = []
        self.local_rules: List[LocalRule] = []
        self.load()

    # ------------------------------------------------------------------ persistence

    def _store_path(self, name: str, *, create: bool = False) -> Optional[Path]:
        store_dir = self.workspace.store_dir(create=create)
        return None if store_dir is None else store_dir / name

    def _file_rules_name(self, file: PathLike) -> str:
        return f"{self.workspace.store_config.file_rules_prefix}{os.path.basename(str(file))}.json"

    def _read(self, path: Optional[Path], definition: str) -> Optional[Any]:
        if path is None or not path.exists():
            return None
        try:
            data = read_json(path)
            validate_payload(data, "rules", definition=definition)
        except (OSError, json.JSONDecodeError, SchemaValidationError) as exc:
            logger.warning("Ignoring unreadable rules file %s: %s", path, exc)
            return None
        return data

    def _write(self, name: str, data: Any) -> bool:
        path = self._store_path(name, create=True)
        if path is None:
            logger.warning("No workspace root; %s is not persisted", name)
            return False
        try:
            write_json_atomic(path, data)
        except OSError as exc:
            logger.error("Failed to save %s: %s", path, exc)
            return False
        return True

    def load(self) -> None:
        cfg = self.workspace.store_config
        data = self._read(self._store_path(cfg.global_rules), "globalRules") or []
        self.global_rules = [GlobalRule.from_dict(d) for d in data]

        data = self._read(self._store_path(cfg.local_rules), "localRules") or []
        migrated = False
        self.local_rules = []
        for raw in data:
            rule = LocalRule.from_dict(raw)
            if os.path.isabs(rule.file_path):
                rule = rule.with_changes(file_path=self.workspace.relative_path(rule.file_path))
                migrated = True
            self.local_rules.append(rule)
        if migrated:
            logger.info("Migrated absolute paths in local rules to workspace-relative")
            self.save_local_rules()

    def save_global_rules(self) -> bool:
        return self._write(self.workspace.store_config.global_rules, [r.to_dict() for r in self.global_rules])

    def save_local_rules(self) -> bool:
        return self._write(self.workspace.store_config.local_rules, [r.to_dict() for r in self.local_rules])

    def load_file_states(self, file: PathLike) -> List[FileRuleState]:
        data = self._read(self._store_path(self._file_rules_name(file)), "fileRules")
        if data is None:
            return []
        return [FileRuleState.from_dict(d) for d in data.get("rules") or []]

    def save_file_states(self, file: PathLike, states: List[FileRuleState]) -> bool:
        payload = {
            "filePath": self.workspace.relative_path(file),
            "rules": [s.to_dict() for s in states],
        }
        return self._write(self._file_rules_name(file), payload)

    def _strip_from_file_states(self, rule_id: str) -> None:
        store_dir = self.workspace.store_dir(create=False)
        if store_dir is None or not store_dir.is_dir():
            return
        prefix = self.workspace.store_config.file_rules_prefix
        for path in sorted(store_dir.glob(f"{prefix}*.json")):
            data = self._read(path, "fileRules")
            if data is None:
                continue
            kept = [r for r in data.get("rules") or [] if r.get("ruleId") != rule_id]
            if len(kept) != len(data.get("rules") or []):
                data["rules"] = kept
                self._write(path.name, data)

    # ------------------------------------------------------------------ mutations

    def _description(self, description: Optional[str]) -> str:
        text = (description or "").strip()
        return text or self.workspace.store_config.default_rule_description

    def _require_name(self, name: str) -> str:
        if not name or not name.strip():
            raise StoreError("Rule name must not be empty")
        return name.strip()

    def add_global_rule(self, name: str, description: Optional[str] = None) -> GlobalRule:
        rule = GlobalRule(new_rule_id(RuleScope.GLOBAL), self._require_name(name), self._description(description))
        self.global_rules.append(rule)
        self.save_global_rules()
        logger.debug("Added global rule %s", rule.id)
        return rule

    def add_local_rule(self, name: str, description: Optional[str], file: Optional[PathLike]) -> LocalRule:
        if not file:
            raise NoActiveFileError("No active file to attach the rule to")
        rule = LocalRule(
            id=new_rule_id(RuleScope.LOCAL),
            name=self._require_name(name),
            description=self._description(description),
            file_path=self.workspace.relative_path(file),
        )
        self.local_rules.append(rule)
        self.save_local_rules()
        logger.debug("Added local rule %s for %s", rule.id, rule.file_path)
        return rule

    def find(self, rule_id: str) -> Union[GlobalRule, LocalRule]:
        for rule in self.global_rules:
            if rule.id == rule_id:
                return rule
        for local in self.local_rules:
            if local.id == rule_id:
                return local
        raise RuleNotFoundError(rule_id)

    def edit_rule(self, rule_id: str, name: str, description: Optional[str]) -> Union[GlobalRule, LocalRule]:
        name = self._require_name(name)
        text = self._description(description)
        for i, rule in enumerate(self.global_rules):
            if rule.id == rule_id:
                self.global_rules[i] = GlobalRule(rule.id, name, text)
                self.save_global_rules()
                return self.global_rules[i]
        for i, local in enumerate(self.local_rules):
            if local.id == rule_id:
                self.local_rules[i] = local.with_changes(name=name, description=text)
                self.save_local_rules()
                return self.local_rules[i]
        raise RuleNotFoundError(rule_id)

    def remove_rule(self, rule_id: str) -> None:
        """Delete a rule and every per-file check state that refers to it."""
        before = (len(self.global_rules), len(self.local_rules))
        self.global_rules = [r for r in self.global_rules if r.id != rule_id]
        self.local_rules = [r for r in self.local_rules if r.id != rule_id]
        if len(self.global_rules) != before[0]:
            self.save_global_rules()
        elif len(self.local_rules) != before[1]:
            self.save_local_rules()
        else:
            raise RuleNotFoundError(rule_id)
        self._strip_from_file_states(rule_id)

    def toggle_rule(self, rule_id: str, file: Optional[PathLike] = None) -> bool:
        """Flip a rule's check state and return the new state.

        Local rules flip their stored flag. Global rules flip the state
        recorded for ``file``; a rule never toggled for that file becomes
        checked.
        """
        for i, local in enumerate(self.local_rules):
            if local.id == rule_id:
                self.local_rules[i] = local.with_changes(is_checked=not local.is_checked)
                self.save_local_rules()
                return self.local_rules[i].is_checked

        if not any(r.id == rule_id for r in self.global_rules):
            raise RuleNotFoundError(rule_id)
        if not file:
            raise NoActiveFileError("No active file for global rule check state")

        states = self.load_file_states(file)
        for i, state in enumerate(states):
            if state.rule_id == rule_id:
                states[i] = FileRuleState(rule_id, not state.is_checked)
                checked = states[i].is_checked
                break
        else:
            states.append(FileRuleState(rule_id, True))
            checked = True
        self.save_file_states(file, states)
        return checked

    def cycle_sort_mode(self) -> SortMode:
        self.sort_mode = self.sort_mode.next()
        return self.sort_mode

    def set_filter_mode(self, mode: Union[str, FilterMode]) -> FilterMode:
        try:
            self.filter_mode = FilterMode(mode)
        except ValueError:
            raise StoreError(f"Unknown filter mode: {mode!r}", context={"mode": str(mode)}) from None
        return self.filter_mode

    # ------------------------------------------------------------------ presentation

    def visible_rules(self, file: Optional[PathLike]) -> List[RuleItem]:
        """Rules for ``file``: global ones with its check state, then its local ones."""
        if not file:
            return []
        checked = {s.rule_id: s.is_checked for s in self.load_file_states(file)}
        items: List[RuleItem] = []
        if self.filter_mode is not FilterMode.LOCAL:
            items.extend(
                RuleItem(r.id, r.name, r.description, checked.get(r.id, False), RuleScope.GLOBAL)
                for r in self.global_rules
            )
        if self.filter_mode is not FilterMode.GLOBAL:
            rel = self.workspace.relative_path(file)
            items.extend(
                RuleItem(r.id, r.name, r.description, r.is_checked, RuleScope.LOCAL)
                for r in self.local_rules
                if r.file_path == rel
            )

        if self.sort_mode is SortMode.CHECKED_FIRST:
            items.sort(key=lambda item: not item.is_checked)
        elif self.sort_mode is SortMode.UNCHECKED_FIRST:
            items.sort(key=lambda item: item.is_checked)
        return items


__all__ = ["RulesStore", "new_rule_id"]
