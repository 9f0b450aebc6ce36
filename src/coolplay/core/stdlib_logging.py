from __future__ import annotations

import logging
import sys
from pathlib import Path

from coolplay.core.file_io import ensure_directory

_CONFIGURED_LOG_PATH: str | None = None
_COOLPLAY_FILE_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Configure Python stdlib logging to write to `log_path` (no stderr handler).

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _COOLPLAY_FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _COOLPLAY_FILE_HANDLER is not None:
        return

    ensure_directory(Path(resolved).parent)

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    # FileHandler is also a StreamHandler, so only the stdout/stderr handlers are removed.
    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) in (sys.stdout, sys.stderr):
            root.removeHandler(h)
            h.close()

    if _COOLPLAY_FILE_HANDLER is not None:
        root.removeHandler(_COOLPLAY_FILE_HANDLER)
        _COOLPLAY_FILE_HANDLER.close()
        _COOLPLAY_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(fh)

    _COOLPLAY_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by :func:`configure_stdlib_logging`."""
    global _CONFIGURED_LOG_PATH, _COOLPLAY_FILE_HANDLER
    if _COOLPLAY_FILE_HANDLER is not None:
        logging.getLogger().removeHandler(_COOLPLAY_FILE_HANDLER)
        _COOLPLAY_FILE_HANDLER.close()
    _CONFIGURED_LOG_PATH = None
    _COOLPLAY_FILE_HANDLER = None


def suppress_lastresort_in_json_mode() -> None:
    """Prevent stdlib logging's lastResort handler from polluting JSON stdout/stderr.

    Python's logging module may emit WARNING+ messages to stderr via the
    implicit `lastResort` handler when no handlers are configured. Ensure the
    root logger has at least one handler (a NullHandler) when it otherwise
    has none.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests", "suppress_lastresort_in_json_mode"]
