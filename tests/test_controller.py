import asyncio
import json

import pytest

from livechart.controller import RefreshController
from livechart.errors import InvalidInput, PreferenceError
from livechart.preferences import IntervalStore
from livechart.scheduler import RefreshScheduler
from tests.fixtures.engine_fakes import make_payload


def _controller(fake_timers, render, store=None, initial_interval=None, fetch=None):
    scheduler = RefreshScheduler(
        fetch or (lambda: make_payload([20.0, 21.0])),
        render,
        timer_factory=fake_timers,
    )
    return RefreshController(scheduler, store=store, initial_interval=initial_interval)


def test_configure_same_value_twice_arms_once(fake_timers, render):
    controller = _controller(fake_timers, render)
    assert controller.configure(5) is True
    assert controller.configure(5) is False
    assert fake_timers.arms == 1
    assert fake_timers.cancels == 0


def test_configure_new_value_leaves_exactly_one_timer(fake_timers, render):
    controller = _controller(fake_timers, render)
    controller.configure(5)
    controller.configure(10)
    assert fake_timers.arms == 2
    assert fake_timers.cancels == 1
    assert len(fake_timers.active) == 1
    assert controller.interval_seconds == 10


def test_configure_zero_disables(fake_timers, render):
    controller = _controller(fake_timers, render)
    controller.configure(5)
    controller.configure(0)
    assert fake_timers.active == []
    assert controller.status_text == "Auto-update: OFF"


@pytest.mark.parametrize("bad", [-1, 2.5, "5", True, None])
def test_configure_rejects_invalid_interval(fake_timers, render, bad):
    controller = _controller(fake_timers, render)
    with pytest.raises(InvalidInput):
        controller.configure(bad)
    assert fake_timers.arms == 0


def test_status_text(fake_timers, render):
    controller = _controller(fake_timers, render)
    assert controller.status_text == "Auto-update: OFF"
    controller.configure(30)
    assert controller.status_text == "Auto-update: 30s"


def test_configure_persists_changes_only(fake_timers, render, prefs_path):
    store = IntervalStore(prefs_path)
    controller = _controller(fake_timers, render, store=store)
    controller.configure(15)
    mtime = prefs_path.stat().st_mtime_ns
    controller.configure(15)
    assert prefs_path.stat().st_mtime_ns == mtime
    assert json.loads(prefs_path.read_text(encoding="utf-8"))["temperatureUpdateInterval"] == 15


def test_start_seeds_interval_from_store(fake_timers, render, prefs_path):
    IntervalStore(prefs_path).save(20)
    controller = _controller(fake_timers, render, store=IntervalStore(prefs_path))
    assert controller.start() == 20
    assert fake_timers.arms == 1
    assert fake_timers.timers[0].delay == 20


def test_start_without_stored_value_is_disabled(fake_timers, render, prefs_path):
    controller = _controller(fake_timers, render, store=IntervalStore(prefs_path))
    assert controller.start() == 0
    assert fake_timers.arms == 0
    assert not prefs_path.exists()


def test_start_with_explicit_initial_interval(fake_timers, render):
    controller = _controller(fake_timers, render, initial_interval=7)
    controller.start()
    assert controller.interval_seconds == 7
    assert fake_timers.arms == 1


def test_refresh_now_renders_without_timer(fake_timers, render):
    controller = _controller(fake_timers, render)
    assert asyncio.run(controller.refresh_now()) is True
    assert render.calls == [
        (["2024-01-01 00:00:00", "2024-01-01 00:01:00"], [20.0, 21.0]),
    ]
    assert fake_timers.arms == 0


def test_refresh_now_while_running_keeps_single_timer(fake_timers, render):
    controller = _controller(fake_timers, render)
    controller.configure(5)
    asyncio.run(controller.refresh_now())
    assert len(fake_timers.active) == 1
    assert fake_timers.arms == 1


def test_close_stops_timer(fake_timers, render):
    controller = _controller(fake_timers, render)
    controller.configure(5)
    controller.close()
    assert fake_timers.active == []


class _FailingStore(IntervalStore):
    def __init__(self, path):
        super().__init__(path)
        self.fail = True

    def save(self, interval_seconds):
        if self.fail:
            raise PreferenceError("disk full")
        super().save(interval_seconds)


def test_configure_save_failure_leaves_scheduler_untouched(fake_timers, render, prefs_path):
    store = _FailingStore(prefs_path)
    controller = _controller(fake_timers, render, store=store)
    with pytest.raises(PreferenceError):
        controller.configure(5)
    assert controller.interval_seconds == 0
    assert fake_timers.arms == 0

    # dopo il ripristino lo stesso valore viene applicato e salvato
    store.fail = False
    assert controller.configure(5) is True
    assert controller.interval_seconds == 5
    assert len(fake_timers.active) == 1
    assert IntervalStore(prefs_path).load() == 5
