"""
coolplay configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from coolplay.core.exceptions import ConfigError
from coolplay.core.file_io import iter_yaml_files, read_yaml
from coolplay.core.schemas import SchemaValidationError, validate_payload
from coolplay.core.utils.merge import deep_merge
from coolplay.core.utils.paths import DEFAULT_PROJECT_CONFIG_DIR
from coolplay.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "COOLPLAY_"


class ConfigManager:
    """Load, merge, and validate coolplay configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: COOLPLAY_<section>__<key>
    2. Project config: <root>/.coolplay/config/*.yaml (alphabetical order)
    3. Bundled defaults: coolplay.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        if repo_root is None:
            from coolplay.core.utils.paths import resolve_project_root

            repo_root = resolve_project_root()
        self.repo_root = Path(repo_root)
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / DEFAULT_PROJECT_CONFIG_DIR / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            # Fail closed: configuration must never silently ignore invalid YAML.
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must parse to a mapping", context={"path": str(path)})
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ---------- environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == "COOLPLAY_PROJECT_ROOT":
                continue
            raw = key[len(ENV_PREFIX):]
            segs = raw.split("__")
            if not raw or any(seg == "" for seg in segs):
                raise ConfigError(f"Malformed {ENV_PREFIX}* key: {key}", context={"key": key})
            yield [seg.lower() for seg in segs], self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(f"Override path traverses non-mapping: {'.'.join(path)}")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(part, part)
            if key not in cur or not isinstance(cur[key], dict):
                cur[key] = {}
            cur = cur[key]
        if not isinstance(cur, dict):
            raise ConfigError(f"Override path traverses non-mapping: {'.'.join(path)}")
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(path[-1], path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying environment override %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ---------- public API ----------

    def validate_schema(self, config: Dict[str, Any]) -> None:
        try:
            validate_payload(config, "config")
        except SchemaValidationError as exc:
            raise ConfigError(str(exc), context={"repo_root": str(self.repo_root)}) from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge all configuration layers.

        Returned dict should be treated as immutable by callers.
        """
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key (e.g. ``markers.debounce_ms``)."""
        cur: Any = self.load_config(validate=False)
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX"]
