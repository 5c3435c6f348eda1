"""Shared fixtures for claude-setup tests."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's EDITOR / NO_COLOR / CLAUDE_SETUP_* out of Settings."""
    for key in list(os.environ):
        if key.upper().startswith("CLAUDE_SETUP_") or key.upper() in ("EDITOR", "NO_COLOR"):
            monkeypatch.delenv(key, raising=False)
