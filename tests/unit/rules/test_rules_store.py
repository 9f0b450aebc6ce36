"""Tests for the checkable rules store."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from coolplay.core.exceptions import NoActiveFileError, RuleNotFoundError, StoreError
from coolplay.core.rules import FilterMode, RuleItem, RuleScope, RulesStore, SortMode
from coolplay.core.workspace import Workspace


@pytest.fixture
def store(workspace: Workspace) -> RulesStore:
    return RulesStore(workspace)


@pytest.fixture
def active(isolated_project_env: Path) -> Path:
    return isolated_project_env / "src" / "app.ts"


def _meta(root: Path, name: str):
    return json.loads((root / ".coolplay" / name).read_text(encoding="utf-8"))


class TestAddAndEdit:
    def test_add_global_rule_defaults(self, store: RulesStore, isolated_project_env: Path) -> None:
        rule = store.add_global_rule("  Write tests ")

        assert rule.id.startswith("global_rule_")
        assert rule.name == "Write tests"
        assert rule.description == "Custom rule"
        assert _meta(isolated_project_env, "global-rules.json") == [rule.to_dict()]

    def test_add_local_rule_needs_file(self, store: RulesStore) -> None:
        with pytest.raises(NoActiveFileError):
            store.add_local_rule("Check perf", None, None)

    def test_add_local_rule(self, store: RulesStore, active: Path, isolated_project_env: Path) -> None:
        rule = store.add_local_rule("Check perf", "measure", active)

        assert rule.id.startswith("local_rule_")
        assert rule.file_path == "src/app.ts"
        assert rule.is_checked is False
        assert _meta(isolated_project_env, "local-rules.json")[0]["filePath"] == "src/app.ts"

    def test_blank_name_rejected(self, store: RulesStore) -> None:
        with pytest.raises(StoreError):
            store.add_global_rule("   ")

    def test_edit_rule(self, store: RulesStore, active: Path) -> None:
        g = store.add_global_rule("old", "desc")
        loc = store.add_local_rule("local", "desc", active)

        assert store.edit_rule(g.id, "new", "  ").description == "Custom rule"
        assert store.edit_rule(loc.id, "renamed", "why").name == "renamed"
        assert store.find(g.id).name == "new"

        with pytest.raises(StoreError):
            store.edit_rule(g.id, "", "x")
        with pytest.raises(RuleNotFoundError):
            store.edit_rule("missing", "x", "y")

    def test_rules_survive_reload(self, store: RulesStore, workspace: Workspace, active: Path) -> None:
        store.add_global_rule("g")
        store.add_local_rule("l", None, active)

        reloaded = RulesStore(workspace)

        assert [r.name for r in reloaded.global_rules] == ["g"]
        assert [r.name for r in reloaded.local_rules] == ["l"]


class TestToggleAndRemove:
    def test_global_toggle_is_per_file(self, store: RulesStore, active: Path, isolated_project_env: Path) -> None:
        rule = store.add_global_rule("g")
        other = isolated_project_env / "other.py"

        assert store.toggle_rule(rule.id, active) is True
        assert _meta(isolated_project_env, "rules-app.ts.json") == {
            "filePath": "src/app.ts",
            "rules": [{"ruleId": rule.id, "isChecked": True}],
        }
        assert [i.is_checked for i in store.visible_rules(other)] == [False]

        assert store.toggle_rule(rule.id, active) is False

    def test_global_toggle_needs_file(self, store: RulesStore) -> None:
        rule = store.add_global_rule("g")
        with pytest.raises(NoActiveFileError):
            store.toggle_rule(rule.id, None)

    def test_local_toggle(self, store: RulesStore, active: Path) -> None:
        rule = store.add_local_rule("l", None, active)

        assert store.toggle_rule(rule.id) is True
        assert store.toggle_rule(rule.id, active) is False

    def test_toggle_unknown(self, store: RulesStore, active: Path) -> None:
        with pytest.raises(RuleNotFoundError):
            store.toggle_rule("nope", active)

    def test_remove_strips_file_states(self, store: RulesStore, active: Path, isolated_project_env: Path) -> None:
        keep = store.add_global_rule("keep")
        drop = store.add_global_rule("drop")
        store.toggle_rule(keep.id, active)
        store.toggle_rule(drop.id, active)

        store.remove_rule(drop.id)

        assert [r.id for r in store.global_rules] == [keep.id]
        states = _meta(isolated_project_env, "rules-app.ts.json")["rules"]
        assert [s["ruleId"] for s in states] == [keep.id]
        with pytest.raises(RuleNotFoundError):
            store.remove_rule(drop.id)

    def test_remove_local(self, store: RulesStore, active: Path, isolated_project_env: Path) -> None:
        rule = store.add_local_rule("l", None, active)
        store.remove_rule(rule.id)
        assert _meta(isolated_project_env, "local-rules.json") == []


class TestVisibleRules:
    def test_no_active_file(self, store: RulesStore) -> None:
        store.add_global_rule("g")
        assert store.visible_rules(None) == []

    def test_order_filter_and_sort(self, store: RulesStore, active: Path, isolated_project_env: Path) -> None:
        g1 = store.add_global_rule("g1")
        g2 = store.add_global_rule("g2")
        l1 = store.add_local_rule("l1", None, active)
        store.add_local_rule("elsewhere", None, isolated_project_env / "other.ts")
        store.toggle_rule(g2.id, active)
        store.toggle_rule(l1.id)

        names = lambda: [i.name for i in store.visible_rules(active)]  # noqa: E731
        assert names() == ["g1", "g2", "l1"]

        assert store.cycle_sort_mode() is SortMode.CHECKED_FIRST
        assert names() == ["g2", "l1", "g1"]
        assert store.cycle_sort_mode() is SortMode.UNCHECKED_FIRST
        assert names() == ["g1", "g2", "l1"]
        assert store.cycle_sort_mode() is SortMode.DEFAULT

        store.set_filter_mode("local")
        assert names() == ["l1"]
        store.set_filter_mode(FilterMode.GLOBAL)
        assert names() == ["g1", "g2"]
        with pytest.raises(StoreError):
            store.set_filter_mode("archived")
        assert g1.id in {i.rule_id for i in store.visible_rules(active)}

    def test_local_paths_are_migrated(self, workspace: Workspace, isolated_project_env: Path, active: Path) -> None:
        meta = isolated_project_env / ".coolplay"
        meta.mkdir()
        (meta / "local-rules.json").write_text(
            json.dumps([{"id": "local_rule_1", "name": "n", "description": "d", "filePath": str(active), "isChecked": True}]),
            encoding="utf-8",
        )

        store = RulesStore(workspace)

        assert store.local_rules[0].file_path == "src/app.ts"
        assert _meta(isolated_project_env, "local-rules.json")[0]["filePath"] == "src/app.ts"
        assert [i.is_checked for i in store.visible_rules(active)] == [True]


class TestRuleItem:
    def test_presentation(self) -> None:
        item = RuleItem("global_rule_1", "Docs", "x" * 45, True, RuleScope.GLOBAL)

        assert item.label == "🌐 Docs"
        assert item.short_description == "x" * 40 + "..."
        assert item.icon == "check"
        assert item.tooltip.endswith("Type: Global\nStatus: Completed")

    def test_local_presentation(self) -> None:
        item = RuleItem("local_rule_1", "Perf", "short", False, RuleScope.LOCAL)

        assert item.label == "📄 Perf"
        assert item.short_description == "short"
        assert item.icon == "circle-outline"
        assert "Status: Pending" in item.tooltip
