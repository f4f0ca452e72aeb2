"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from textvalue import TextValue

_ENV_VARS = (
    "TEXTVALUE_LOG_DIR",
    "TEXTVALUE_OUTPUT_FORMAT",
    "TEXTVALUE_DEBUG_LOGGING",
    "TEXTVALUE_CONSOLE_LOGGING",
    "TEXTVALUE_TRACE_CORE",
    "TEXTVALUE_SETTINGS_PATH",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def bengal() -> TextValue:
    return TextValue.from_text("lucky bengal cat")
