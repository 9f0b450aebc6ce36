"""Tests for the marker pattern table."""
from __future__ import annotations

import pytest

from coolplay.core.markers.patterns import (
    DEFAULT_PATTERNS,
    MarkerPattern,
    build_pattern_table,
    find_pattern,
)


def _todo() -> MarkerPattern:
    return find_pattern(DEFAULT_PATTERNS, "TODO")


class TestMarkerPattern:
    def test_default_table_order(self) -> None:
        assert [p.tag for p in DEFAULT_PATTERNS] == [
            "FIXME", "TODO", "HACK", "NOTE", "BUG", "REVIEW", "OPTIMIZE", "WARNING",
        ]

    def test_icons(self) -> None:
        icons = {p.tag: p.icon for p in DEFAULT_PATTERNS}
        assert icons["FIXME"] == "bug"
        assert icons["TODO"] == "checklist"
        assert icons["OPTIMIZE"] == "rocket"

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("// TODO: fix the parser", "fix the parser"),
            ("//TODO fix", "fix"),
            ("// todo:   spaced out  ", "spaced out"),
            ("x = 1; // TODO: trailing", "trailing"),
            ("// @DONE-TODO: finished", "finished"),
            ("// TODO:", ":"),
        ],
    )
    def test_matches(self, line: str, expected: str) -> None:
        assert _todo().match(line) == expected

    @pytest.mark.parametrize("line", ["# TODO: python comment", "TODO: bare", "// TODO", "/* TODO: block */x"])
    def test_non_matches(self, line: str) -> None:
        # A block comment has no "//" opener. A bare "// TODO" leaves nothing to capture.
        assert _todo().match(line) is None

    def test_resolution_token_is_case_sensitive(self) -> None:
        todo = _todo()
        assert todo.is_resolved("// @DONE-TODO: x")
        assert not todo.is_resolved("// @done-todo: x")
        # The lower-case form still matches as a marker, just not as resolved.
        assert todo.match("// @done-todo: x") == "x"

    def test_resolution_requires_colon(self) -> None:
        assert not _todo().is_resolved("// @DONE-TODO x")


class TestPatternTable:
    def test_build_deduplicates_and_uppercases(self) -> None:
        table = build_pattern_table([("todo", "a"), ("TODO", "b"), ("fixme", "c")])
        assert [(p.tag, p.icon) for p in table] == [("TODO", "a"), ("FIXME", "c")]

    def test_find_pattern_is_case_insensitive(self) -> None:
        assert find_pattern(DEFAULT_PATTERNS, "hack").tag == "HACK"
        assert find_pattern(DEFAULT_PATTERNS, "NOPE") is None

    def test_custom_matcher(self) -> None:
        class Upper:
            def match(self, line: str):
                return line.upper() if line.startswith("!!") else None

        pattern = MarkerPattern(tag="SHOUT", matcher=Upper())
        assert pattern.match("!!hey") == "!!HEY"
        assert pattern.match("hey") is None
