"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from fallible.config import FailureSettings, set_failure_settings

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def default_failure_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[FailureSettings]:
    """Install default failure settings, isolated from FALLIBLE__ env vars and local YAML."""
    for key in list(os.environ):
        if key.startswith("FALLIBLE__"):
            monkeypatch.delenv(key)
    settings = FailureSettings()
    set_failure_settings(settings)
    yield settings
    set_failure_settings(None)


@pytest.fixture
def capturing_settings() -> Generator[FailureSettings]:
    """Install settings that capture a stack snapshot on every new descriptor."""
    settings = FailureSettings(capture_stacktrace=True, stack_limit=8)
    set_failure_settings(settings)
    yield settings
    set_failure_settings(None)
