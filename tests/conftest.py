"""Pytest configuration for test isolation.

The package reads ``FINANCE_TRACKER_*`` environment variables (rules file,
vault location, log level). A developer's shell or a stray ``.env`` could leak
those into tests, so every test starts with them cleared and the vault pointed
at the test's own temporary directory.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("FINANCE_TRACKER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("FINANCE_TRACKER_VAULT_PATH", os.fspath(tmp_path / "vault" / "accounts.dat"))
