"""Tests for workspace roots and project root resolution."""
from __future__ import annotations

from pathlib import Path

import pytest

from coolplay.core.exceptions import WorkspaceError
from coolplay.core.utils.paths import resolve_project_root
from coolplay.core.workspace import Workspace


class TestWorkspace:
    def test_roots_are_canonical_and_unique(self, tmp_path: Path) -> None:
        ws = Workspace([tmp_path, tmp_path / ".", tmp_path / "other"])

        assert ws.roots == (tmp_path.resolve(), (tmp_path / "other").resolve())
        assert ws.root == tmp_path.resolve()

    def test_relative_path(self, tmp_path: Path) -> None:
        ws = Workspace([tmp_path / "a", tmp_path / "b"])

        assert ws.relative_path(tmp_path / "b" / "x" / "y.ts") == "x/y.ts"
        assert ws.relative_path(tmp_path / "elsewhere" / "z.ts") == "z.ts"

    def test_absolute_path(self, tmp_path: Path) -> None:
        ws = Workspace([tmp_path])

        assert ws.absolute_path("src/a.ts") == (tmp_path / "src" / "a.ts").resolve()

    def test_store_dir(self, tmp_path: Path) -> None:
        ws = Workspace([tmp_path])

        assert ws.store_dir(create=False) == tmp_path.resolve() / ".coolplay"
        assert not (tmp_path / ".coolplay").exists()
        assert ws.store_dir().is_dir()
        assert Workspace(()).store_dir() is None

    def test_load_uses_project_config(self, isolated_project_env: Path) -> None:
        cfg_dir = isolated_project_env / ".coolplay" / "config"
        cfg_dir.mkdir(parents=True)
        (cfg_dir / "store.yaml").write_text("store:\n  file_statuses: statuses.json\n", encoding="utf-8")

        ws = Workspace.load(isolated_project_env)

        assert ws.store_config.file_statuses == "statuses.json"


class TestResolveProjectRoot:
    def test_env_override(self, isolated_project_env: Path) -> None:
        assert resolve_project_root() == isolated_project_env
        assert Workspace.from_cwd().root == isolated_project_env

    def test_env_override_must_exist(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COOLPLAY_PROJECT_ROOT", str(tmp_path / "missing"))

        with pytest.raises(WorkspaceError):
            resolve_project_root()

    def test_env_override_rejects_metadata_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        meta = tmp_path / ".coolplay"
        meta.mkdir()
        monkeypatch.setenv("COOLPLAY_PROJECT_ROOT", str(meta))

        with pytest.raises(WorkspaceError):
            resolve_project_root()

    def test_nearest_metadata_ancestor(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".coolplay").mkdir()
        nested = tmp_path / "src" / "deep"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert resolve_project_root() == tmp_path.resolve()
