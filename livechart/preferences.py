"""
Persistenza dell'intervallo di auto-aggiornamento scelto dall'utente.

Un solo intero (secondi) in un file JSON; assenza del valore = disabilitato.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Union

from .errors import PreferenceError
from .logger import LogManager

log = LogManager("preferences").get_logger()

PREFERENCES_VERSION = "1.0"
INTERVAL_KEY = "temperatureUpdateInterval"


class IntervalStore:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> int:
        """Legge l'intervallo salvato. File assente o non valido -> 0."""
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = data[INTERVAL_KEY]
            interval = int(value)
        except (OSError, ValueError, TypeError, KeyError) as e:
            log.warning("Preferenze non leggibili (%s): %s. Auto-update disabilitato.", self.path, e)
            return 0
        if interval < 0:
            log.warning("Intervallo salvato negativo (%d). Auto-update disabilitato.", interval)
            return 0
        return interval

    def save(self, interval_seconds: int) -> None:
        """
        Salva l'intervallo.

        Raises:
            PreferenceError: se la scrittura fallisce
        """
        payload = {
            "version": PREFERENCES_VERSION,
            INTERVAL_KEY: int(interval_seconds),
            "updated_at": datetime.now().isoformat(),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise PreferenceError(f"Impossibile salvare le preferenze in '{self.path}': {e}") from e
        log.info("Intervallo salvato: %ds (%s)", interval_seconds, self.path)
