"""
Pytest configuration and shared fixtures for stowage tests
"""

import pytest

from stowage.core import env as env_module
from stowage.core.logger import set_logger

# ============================================
# AUTO-USE FIXTURES
# ============================================


@pytest.fixture(autouse=True)
def default_logger():
    """Make sure a custom logger set by one test doesn't leak into the next."""
    set_logger(None)
    yield
    set_logger(None)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """
    Give every test a fresh global EnvManager rooted in an empty directory.

    Keeps a developer's own .env and STOWAGE_* variables out of the tests.
    """
    for key in ("STOWAGE_RELOCATE_TO", "STOWAGE_DELETE_SOURCE_ON_FALLBACK", "STOWAGE_METRICS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(env_module, "_global_env", None)
