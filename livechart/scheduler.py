from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Optional, Protocol, Sequence

from .buffer import Reading, SeriesBuffer
from .downsampling import DEFAULT_MAX_POINTS, reduce_snapshot
from .errors import FetchFailure, InvalidInput
from .fetcher import FetchResult, parse_payload
from .logger import LogManager

log = LogManager("scheduler").get_logger()


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]
RenderCallback = Callable[[Sequence[Any], Sequence[float]], None]
TableCallback = Callable[[Sequence[Reading], int], None]
ErrorSink = Callable[[FetchFailure], None]


def _loop_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class RefreshScheduler:
    """
    Possiede al piu' un timer ricorrente e, a ogni tick, esegue il ciclo
    fetch -> buffer.replace -> reduce -> render.

    Stati: fermo (nessun timer) / attivo (timer armato ogni ``interval`` s,
    primo scatto solo allo scadere dell'intervallo). Ogni riconfigurazione
    cancella il timer corrente prima di armarne un altro e incrementa la
    generazione: un fetch avviato con una generazione precedente viene
    completato ma il suo risultato scartato.

    I cicli sono serializzati: un tick che scatta mentre il ciclo precedente
    e' ancora in attesa del fetch viene saltato, mai accodato.
    """

    def __init__(
        self,
        fetch: Callable[[], Any],
        render: RenderCallback,
        *,
        buffer: Optional[SeriesBuffer] = None,
        max_points: int = DEFAULT_MAX_POINTS,
        table: Optional[TableCallback] = None,
        on_error: Optional[ErrorSink] = None,
        newest_first: bool = False,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        if isinstance(max_points, bool) or not isinstance(max_points, int) or max_points < 2:
            raise InvalidInput(f"max_points deve essere un intero >= 2 (ricevuto {max_points!r}).")
        self.fetch = fetch
        self.render = render
        self.buffer = buffer if buffer is not None else SeriesBuffer()
        self.max_points = max_points
        self.table = table
        self.on_error = on_error
        self.newest_first = newest_first
        self._timer_factory = timer_factory or _loop_timer

        self._interval = 0
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None
        self._inflight_generation = 0

    # -------------------- stato -------------------- #
    @property
    def interval_seconds(self) -> int:
        return self._interval

    @property
    def running(self) -> bool:
        return self._timer is not None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    # -------------------- ciclo di vita timer -------------------- #
    def configure(self, interval_seconds: int) -> None:
        """(Ri)arma il timer con il nuovo intervallo; 0 = fermo."""
        if interval_seconds < 0:
            raise InvalidInput(f"Intervallo negativo: {interval_seconds}")
        self._cancel_timer()
        self._generation += 1
        self._interval = interval_seconds
        if interval_seconds > 0:
            self._arm()
            log.info("Auto-update attivo ogni %ds (generazione %d)", interval_seconds, self._generation)
        else:
            log.info("Auto-update disattivato (generazione %d)", self._generation)

    def stop(self) -> None:
        self.configure(0)

    def _arm(self) -> None:
        self._timer = self._timer_factory(self._interval, self._on_timer)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        if self._interval <= 0:
            return
        # ricorrente: il prossimo scatto e' armato prima di avviare il ciclo
        self._arm()
        if self.in_flight:
            log.info("Tick saltato: refresh precedente ancora in corso")
            return
        self._start_cycle().add_done_callback(self._log_task_error)

    def _start_cycle(self) -> asyncio.Task:
        self._inflight_generation = self._generation
        self._inflight = asyncio.get_running_loop().create_task(self._cycle(self._generation))
        return self._inflight

    @staticmethod
    def _log_task_error(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("Errore nel ciclo di refresh: %s", exc, exc_info=exc)

    # -------------------- ciclo di refresh -------------------- #
    async def refresh(self) -> bool:
        """
        Esegue subito un ciclo fuori dalla cadenza del timer.

        Se un ciclo della generazione corrente e' gia' in corso ne attende
        l'esito invece di sovrapporsi; se quello in corso e' obsoleto (sara'
        scartato) ne attende la fine e poi ne avvia uno nuovo.
        Ritorna True se il grafico e' stato aggiornato.
        """
        while self.in_flight:
            inflight = self._inflight
            if self._inflight_generation == self._generation:
                return await asyncio.shield(inflight)
            await asyncio.wait({inflight})
        return await self._start_cycle()

    async def _call_fetch(self) -> FetchResult:
        if inspect.iscoroutinefunction(self.fetch) or inspect.iscoroutinefunction(
            getattr(self.fetch, "__call__", None)
        ):
            result = await self.fetch()
        else:
            result = await asyncio.to_thread(self.fetch)
            if inspect.isawaitable(result):
                result = await result
        if not isinstance(result, FetchResult):
            result = parse_payload(result)
        return result

    def _report(self, error: FetchFailure) -> None:
        log.warning("Refresh fallito, dati precedenti mantenuti: %s", error)
        if self.on_error is not None:
            self.on_error(error)

    async def _cycle(self, generation: int) -> bool:
        try:
            result = await self._call_fetch()
        except FetchFailure as e:
            self._report(e)
            return False
        except Exception as e:
            failure = FetchFailure(f"{type(e).__name__}: {e}")
            failure.__cause__ = e
            self._report(failure)
            return False

        if generation != self._generation:
            log.debug("Risultato obsoleto scartato (generazione %d, attuale %d)", generation, self._generation)
            return False

        readings = list(result.readings)
        if not readings:
            log.info("Nessuna lettura ricevuta, grafico invariato")
            return False

        self.buffer.replace(reversed(readings) if self.newest_first else readings)
        reduced = reduce_snapshot(self.buffer.snapshot(), self.max_points)
        self.render(reduced.timestamps, reduced.values)
        if self.table is not None:
            self.table(readings, result.count)
        log.debug("Refresh completato: %s", reduced.summary())
        return True
