"""Tests for in-place marker toggling."""
from __future__ import annotations

from pathlib import Path

import pytest

from coolplay.core.exceptions import MarkerError, MarkerToggleError
from coolplay.core.markers import MarkerOccurrence, resolve_line, toggle_occurrence, unresolve_line
from helpers.files import read_source, write_source


def _occ(path: Path, line: int, tag: str = "TODO", resolved: bool = False) -> MarkerOccurrence:
    return MarkerOccurrence(tag, "msg", path.name, str(path), line, resolved)


class TestLineRewrites:
    def test_resolve_keeps_indent_and_message(self) -> None:
        assert resolve_line("    // TODO: fix it", "TODO") == "    // @DONE-TODO: fix it"

    def test_resolve_keeps_code_before_comment(self) -> None:
        assert resolve_line("x = 1; // TODO: later", "TODO") == "x = 1; // @DONE-TODO: later"

    def test_resolve_canonicalises_tag(self) -> None:
        assert resolve_line("// todo fix", "TODO") == "// @DONE-TODO: fix"

    def test_resolve_without_marker_is_noop(self) -> None:
        assert resolve_line("const todo = 1;", "TODO") == "const todo = 1;"

    def test_unresolve(self) -> None:
        assert unresolve_line("  // @DONE-FIXME: crash", "FIXME") == "  // FIXME: crash"

    def test_unresolve_only_first(self) -> None:
        line = "// @DONE-TODO: a // @DONE-TODO: b"
        assert unresolve_line(line, "TODO") == "// TODO: a // @DONE-TODO: b"

    def test_round_trip_restores_line(self) -> None:
        original = "\t// HACK: temporary workaround"
        assert unresolve_line(resolve_line(original, "HACK"), "HACK") == original

    def test_round_trip_canonicalises_lower_case_tag(self) -> None:
        resolved = resolve_line("// todo: lower", "TODO")

        assert resolved == "// @DONE-TODO: lower"
        assert unresolve_line(resolved, "TODO") == "// TODO: lower"


@pytest.mark.asyncio
async def test_toggle_rewrites_only_target_line(tmp_path: Path) -> None:
    path = write_source(tmp_path, "a.ts", "a\n// TODO: one\n// TODO: two\n")

    assert await toggle_occurrence(_occ(path, 2)) is True

    assert read_source(path) == "a\n// @DONE-TODO: one\n// TODO: two\n"


@pytest.mark.asyncio
async def test_toggle_twice_is_identity(tmp_path: Path) -> None:
    original = "header\n  // NOTE: remember\nfooter"
    path = write_source(tmp_path, "n.go", original)

    await toggle_occurrence(_occ(path, 2, "NOTE"))
    await toggle_occurrence(_occ(path, 2, "NOTE", resolved=True))

    assert read_source(path) == original


@pytest.mark.asyncio
async def test_toggle_preserves_crlf(tmp_path: Path) -> None:
    path = write_source(tmp_path, "w.cs", "a\r\n// TODO: x\r\nb\r\n")

    await toggle_occurrence(_occ(path, 2))

    assert path.read_bytes() == b"a\r\n// @DONE-TODO: x\r\nb\r\n"


@pytest.mark.asyncio
async def test_out_of_range_line_is_noop(tmp_path: Path) -> None:
    path = write_source(tmp_path, "short.ts", "// TODO: only\n")
    before = path.stat().st_mtime_ns

    assert await toggle_occurrence(_occ(path, 99)) is False
    assert await toggle_occurrence(_occ(path, 0)) is False

    assert read_source(path) == "// TODO: only\n"
    assert path.stat().st_mtime_ns == before


@pytest.mark.asyncio
async def test_stale_line_is_noop(tmp_path: Path) -> None:
    path = write_source(tmp_path, "edited.ts", "// TODO: first\n")
    write_source(tmp_path, "edited.ts", "no marker here\n")

    assert await toggle_occurrence(_occ(path, 1)) is False
    assert read_source(path) == "no marker here\n"


@pytest.mark.asyncio
async def test_unknown_tag_raises(tmp_path: Path) -> None:
    path = write_source(tmp_path, "a.ts", "// XYZZY: hmm\n")

    with pytest.raises(MarkerError):
        await toggle_occurrence(_occ(path, 1, "XYZZY"))


@pytest.mark.asyncio
async def test_missing_file_raises_toggle_error(tmp_path: Path) -> None:
    with pytest.raises(MarkerToggleError) as excinfo:
        await toggle_occurrence(_occ(tmp_path / "gone.ts", 1))

    assert excinfo.value.context["line"] == 1
