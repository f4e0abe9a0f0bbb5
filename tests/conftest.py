"""Configurazione pytest e fixtures condivise."""
from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixtures.engine_fakes import FakeTimers, RenderRecorder


@pytest.fixture
def fake_timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def render() -> RenderRecorder:
    return RenderRecorder()


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    return tmp_path / "prefs" / "preferences.json"
