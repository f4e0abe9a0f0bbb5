from pathlib import Path

import pytest

from livechart.errors import PreferenceError
from livechart.preferences import IntervalStore


def test_missing_file_means_disabled(prefs_path: Path):
    assert IntervalStore(prefs_path).load() == 0


def test_save_and_load(prefs_path: Path):
    store = IntervalStore(prefs_path)
    store.save(60)
    assert prefs_path.exists()
    assert store.load() == 60
    store.save(0)
    assert store.load() == 0


@pytest.mark.parametrize(
    "content",
    ["{non json", "[]", '{"version": "1.0"}', '{"temperatureUpdateInterval": "abc"}', '{"temperatureUpdateInterval": -5}'],
)
def test_corrupt_file_means_disabled(prefs_path: Path, content: str):
    prefs_path.parent.mkdir(parents=True, exist_ok=True)
    prefs_path.write_text(content, encoding="utf-8")
    assert IntervalStore(prefs_path).load() == 0


def test_numeric_string_is_accepted(prefs_path: Path):
    prefs_path.parent.mkdir(parents=True, exist_ok=True)
    prefs_path.write_text('{"temperatureUpdateInterval": "30"}', encoding="utf-8")
    assert IntervalStore(prefs_path).load() == 30


def test_save_failure_raises(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    store = IntervalStore(blocker / "preferences.json")
    with pytest.raises(PreferenceError):
        store.save(5)
