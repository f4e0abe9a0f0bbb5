from __future__ import annotations


class LivechartError(Exception):
    """Base per gli errori del motore livechart."""


class InvalidInput(LivechartError, ValueError):
    """Argomenti non validi (errore di programmazione, mai ritentato)."""


class FetchFailure(LivechartError):
    """Errore di rete o di parsing nel recupero delle letture. Recuperabile."""


class PreferenceError(LivechartError):
    """Impossibile salvare la preferenza dell'intervallo."""
