from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple


@dataclass(frozen=True, slots=True)
class Reading:
    timestamp: Any
    value: float


@dataclass(frozen=True, slots=True)
class SeriesSnapshot:
    """Vista immutabile del buffer in un dato istante."""

    readings: Tuple[Reading, ...] = ()

    @property
    def timestamps(self) -> List[Any]:
        return [r.timestamp for r in self.readings]

    @property
    def values(self) -> List[float]:
        return [r.value for r in self.readings]

    def __len__(self) -> int:
        return len(self.readings)


class SeriesBuffer:
    """Contiene l'ultima finestra di letture ricevuta, in ordine cronologico.

    Il contenuto viene sostituito in blocco a ogni fetch riuscito; non esiste
    append/merge. ``snapshot()`` restituisce una vista che nessuna ``replace``
    successiva puo' alterare.
    """

    def __init__(self) -> None:
        self._snapshot = SeriesSnapshot()

    def replace(self, readings: Iterable[Reading]) -> None:
        # la tupla viene costruita per intero prima dello swap del riferimento
        self._snapshot = SeriesSnapshot(tuple(readings))

    def snapshot(self) -> SeriesSnapshot:
        return self._snapshot

    @property
    def is_empty(self) -> bool:
        return len(self._snapshot) == 0

    def __len__(self) -> int:
        return len(self._snapshot)
