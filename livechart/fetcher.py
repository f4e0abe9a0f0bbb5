from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

import requests

from .buffer import Reading
from .errors import FetchFailure
from .logger import LogManager

log = LogManager("fetcher").get_logger()


@dataclass(frozen=True, slots=True)
class FetchResult:
    readings: List[Reading] = field(default_factory=list)
    count: int = 0


def parse_payload(payload: Any) -> FetchResult:
    """
    Converte la risposta JSON del servizio in un FetchResult.

    Formato atteso: {"readings": [{"timestamp": str, "temperature": float}, ...], "count": int}.
    ``temperature`` diventa ``value``; ``count`` assente = numero di letture.

    Raises:
        FetchFailure: payload malformato (campi mancanti o non numerici)
    """
    if not isinstance(payload, Mapping):
        raise FetchFailure(f"Risposta non valida: atteso un oggetto JSON, ricevuto {type(payload).__name__}")
    raw = payload.get("readings")
    if not isinstance(raw, list):
        raise FetchFailure("Risposta non valida: campo 'readings' mancante o non lista")

    readings: List[Reading] = []
    for pos, item in enumerate(raw):
        if not isinstance(item, Mapping) or "timestamp" not in item or "temperature" not in item:
            raise FetchFailure(f"Lettura #{pos} malformata: {item!r}")
        temperature = item["temperature"]
        if isinstance(temperature, bool):
            raise FetchFailure(f"Lettura #{pos}: temperatura non numerica ({temperature!r})")
        try:
            value = float(temperature)
        except (TypeError, ValueError) as e:
            raise FetchFailure(f"Lettura #{pos}: temperatura non numerica ({temperature!r})") from e
        readings.append(Reading(timestamp=item["timestamp"], value=value))

    count = payload.get("count", len(readings))
    if isinstance(count, bool) or not isinstance(count, int):
        raise FetchFailure(f"Risposta non valida: 'count' non intero ({count!r})")
    return FetchResult(readings=readings, count=count)


class HttpFetcher:
    """Recupera l'ultima finestra di letture da un endpoint HTTP JSON."""

    def __init__(self, endpoint: str, timeout: float = 10.0) -> None:
        self.endpoint = endpoint
        self.timeout = timeout

    def __call__(self) -> FetchResult:
        return self.fetch()

    def fetch(self) -> FetchResult:
        try:
            response = requests.get(
                self.endpoint,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise FetchFailure(f"Errore di rete verso {self.endpoint}: {e}") from e
        except ValueError as e:
            raise FetchFailure(f"JSON non valido da {self.endpoint}: {e}") from e

        result = parse_payload(payload)
        log.debug("Fetch %s: %d letture (count=%d)", self.endpoint, len(result.readings), result.count)
        return result
