"""Collaboratori finti per i test del motore di refresh."""
from __future__ import annotations

import asyncio
from typing import Callable, List

from livechart.scheduler import RefreshScheduler


class FakeTimer:
    def __init__(self, owner: "FakeTimers", delay: float, callback: Callable[[], None]) -> None:
        self.owner = owner
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self.owner.cancels += 1


class FakeTimers:
    """Timer factory finta: registra arm/cancel e scatta solo su richiesta."""

    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []
        self.cancels = 0

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self, delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def arms(self) -> int:
        return len(self.timers)

    @property
    def active(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire(self) -> None:
        (timer,) = self.active
        timer.fired = True
        timer.callback()


class RenderRecorder:
    def __init__(self) -> None:
        self.calls: list = []

    def __call__(self, labels, values) -> None:
        self.calls.append((list(labels), list(values)))


def make_payload(temperatures, start: int = 0) -> dict:
    readings = [
        {"timestamp": f"2024-01-01 00:{i + start:02d}:00", "temperature": t}
        for i, t in enumerate(temperatures)
    ]
    return {"readings": readings, "count": len(readings)}


async def settle(scheduler: RefreshScheduler, timeout: float = 2.0) -> None:
    """Attende la fine del ciclo in corso, se presente."""
    async def _wait() -> None:
        while scheduler.in_flight:
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_wait(), timeout)
