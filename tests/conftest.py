import copy
import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'coolplay'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from coolplay.core.config import clear_all_caches, default_config
from coolplay.core.stdlib_logging import reset_stdlib_logging_for_tests
from coolplay.core.workspace import Workspace

# Fast timings so debounced rescans settle well inside a test.
FAST_DEBOUNCE_MS = 30
FAST_TOGGLE_DELAY_MS = 10


@pytest.fixture(autouse=True)
def _reset_coolplay_state(monkeypatch):
    """Isolate each test from leaked COOLPLAY_* env vars, cached config and log handlers."""
    for key in list(os.environ):
        if key.startswith("COOLPLAY_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()
    reset_stdlib_logging_for_tests()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated workspace root for tests.

    The root is resolved (tmp dirs may sit behind symlinks) and the process
    runs from inside it, so auto-detection lands on the same directory.
    """
    root = tmp_path.resolve()
    monkeypatch.setenv("COOLPLAY_PROJECT_ROOT", str(root))
    monkeypatch.chdir(root)
    return root


def fast_config():
    cfg = copy.deepcopy(default_config())
    cfg["markers"]["debounce_ms"] = FAST_DEBOUNCE_MS
    cfg["markers"]["toggle_rescan_delay_ms"] = FAST_TOGGLE_DELAY_MS
    return cfg


@pytest.fixture
def workspace(isolated_project_env) -> Workspace:
    """Workspace over the isolated root with short debounce timings."""
    return Workspace([isolated_project_env], config=fast_config())
