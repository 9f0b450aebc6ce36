"""Tests for layered configuration and typed domain accessors."""
from __future__ import annotations

from pathlib import Path

import pytest

from coolplay.core.config import (
    ConfigManager,
    LoggingConfig,
    MarkersConfig,
    StoreConfig,
    clear_all_caches,
    get_cached_config,
)
from coolplay.core.exceptions import ConfigError


def _project_yaml(root: Path, name: str, body: str) -> None:
    cfg_dir = root / ".coolplay" / "config"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    (cfg_dir / name).write_text(body, encoding="utf-8")


class TestConfigManager:
    def test_bundled_defaults(self, isolated_project_env: Path) -> None:
        cfg = ConfigManager(isolated_project_env).load_config()

        assert cfg["markers"]["debounce_ms"] == 500
        assert cfg["store"]["dir"] == ".coolplay"
        assert cfg["logging"]["level"] == "INFO"

    def test_project_layer_overrides_defaults(self, isolated_project_env: Path) -> None:
        _project_yaml(isolated_project_env, "markers.yaml", "markers:\n  debounce_ms: 50\n")

        cfg = MarkersConfig(isolated_project_env)

        assert cfg.debounce_seconds == pytest.approx(0.05)
        # Untouched keys keep their bundled values.
        assert cfg.toggle_rescan_delay_seconds == pytest.approx(0.1)

    def test_env_override_is_coerced(self, isolated_project_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COOLPLAY_MARKERS__WATCH_INTERVAL_MS", "250")
        monkeypatch.setenv("COOLPLAY_LOGGING__LEVEL", "debug")

        cfg = ConfigManager(isolated_project_env).load_config(validate=False)

        assert cfg["markers"]["watch_interval_ms"] == 250
        assert cfg["logging"]["level"] == "debug"

    def test_env_json_override(self, isolated_project_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COOLPLAY_MARKERS__EXCLUDED_DIRS", '["build", "vendor"]')

        assert MarkersConfig(isolated_project_env).excluded_dirs == frozenset({"build", "vendor"})

    def test_malformed_env_key(self, isolated_project_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COOLPLAY_MARKERS____X", "1")

        with pytest.raises(ConfigError):
            ConfigManager(isolated_project_env).load_config()

    def test_invalid_yaml(self, isolated_project_env: Path) -> None:
        _project_yaml(isolated_project_env, "broken.yaml", "markers: [unclosed\n")

        with pytest.raises(ConfigError):
            ConfigManager(isolated_project_env).load_config()

    def test_schema_violation(self, isolated_project_env: Path) -> None:
        _project_yaml(isolated_project_env, "markers.yaml", "markers:\n  debounce_ms: soon\n")

        with pytest.raises(ConfigError):
            ConfigManager(isolated_project_env).load_config()

    def test_get_dotted(self, isolated_project_env: Path) -> None:
        mgr = ConfigManager(isolated_project_env)

        assert mgr.get("store.local_rules") == "local-rules.json"
        assert mgr.get("store.nope", "fallback") == "fallback"


class TestCachedConfig:
    def test_cache_sees_project_edits(self, isolated_project_env: Path) -> None:
        first = get_cached_config(isolated_project_env)
        assert get_cached_config(isolated_project_env) is first

        _project_yaml(isolated_project_env, "store.yaml", "store:\n  default_rule_description: Untitled\n")

        assert StoreConfig(isolated_project_env).default_rule_description == "Untitled"
        clear_all_caches()


class TestDomainConfigs:
    def test_markers_tags(self, isolated_project_env: Path) -> None:
        _project_yaml(
            isolated_project_env,
            "markers.yaml",
            "markers:\n  tags:\n    - {tag: todo, icon: checklist}\n    - {tag: Ticket}\n",
        )

        assert MarkersConfig(isolated_project_env).tags == [("TODO", "checklist"), ("TICKET", "comment")]

    def test_logging_defaults(self, isolated_project_env: Path) -> None:
        cfg = LoggingConfig(isolated_project_env)
        assert cfg.level == "INFO"
        assert cfg.file == "logs/coolplay.log"
