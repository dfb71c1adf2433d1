"""Pytest configuration for test isolation.

The CLI reads ``.env`` from the working directory and honors a couple of
environment variables (``PH_RANKING_SIZE``, ``PURCHASE_HISTORY_LOG_LEVEL``).
Each test runs from its own temporary directory with those variables unset so
a developer's local settings never leak into assertions.
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PH_RANKING_SIZE", raising=False)
    monkeypatch.delenv("PURCHASE_HISTORY_LOG_LEVEL", raising=False)
