from __future__ import annotations

from typing import Optional

from .errors import InvalidInput
from .logger import LogManager
from .preferences import IntervalStore
from .scheduler import RefreshScheduler

log = LogManager("controller").get_logger()


class RefreshController:
    """Facciata pubblica: intervallo scelto dall'utente -> ciclo di vita dello scheduler."""

    def __init__(
        self,
        scheduler: RefreshScheduler,
        store: Optional[IntervalStore] = None,
        initial_interval: Optional[int] = None,
    ) -> None:
        self.scheduler = scheduler
        self.store = store
        self.initial_interval = initial_interval

    @property
    def interval_seconds(self) -> int:
        return self.scheduler.interval_seconds

    @property
    def status_text(self) -> str:
        if self.interval_seconds > 0:
            return f"Auto-update: {self.interval_seconds}s"
        return "Auto-update: OFF"

    @staticmethod
    def _validate(interval_seconds: int) -> int:
        if isinstance(interval_seconds, bool) or not isinstance(interval_seconds, int):
            raise InvalidInput(f"L'intervallo deve essere un intero (ricevuto {interval_seconds!r}).")
        if interval_seconds < 0:
            raise InvalidInput(f"L'intervallo deve essere >= 0 (ricevuto {interval_seconds}).")
        return interval_seconds

    def start(self) -> int:
        """Applica l'intervallo iniziale (esplicito, o salvato, o 0) senza riscriverlo."""
        if self.initial_interval is not None:
            interval = self._validate(self.initial_interval)
        elif self.store is not None:
            interval = self.store.load()
        else:
            interval = 0
        if interval != self.interval_seconds:
            self.scheduler.configure(interval)
        log.info("Controller avviato (%s)", self.status_text)
        return interval

    def configure(self, interval_seconds: int) -> bool:
        """
        Imposta l'intervallo di auto-aggiornamento (0 = disattivato).

        Idempotente: lo stesso valore non riarma il timer e non viene risalvato.
        Ritorna True se la configurazione e' cambiata.

        La preferenza viene salvata prima di toccare il timer: se il salvataggio
        fallisce lo scheduler resta com'era.

        Raises:
            InvalidInput: intervallo non intero o negativo
            PreferenceError: salvataggio della preferenza fallito
        """
        interval = self._validate(interval_seconds)
        if interval == self.interval_seconds:
            log.debug("Intervallo invariato (%ds), nessuna azione", interval)
            return False
        if self.store is not None:
            self.store.save(interval)
        self.scheduler.configure(interval)
        return True

    async def refresh_now(self) -> bool:
        """Un ciclo fetch-and-render immediato, indipendente dal timer."""
        return await self.scheduler.refresh()

    def close(self) -> None:
        self.scheduler.stop()
