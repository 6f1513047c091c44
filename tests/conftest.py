"""Shared fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_bldr_saucer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's BLDR_SAUCER_* settings out of the tests."""
    for key in list(os.environ):
        if key.startswith("BLDR_SAUCER_"):
            monkeypatch.delenv(key, raising=False)
