"""
Motore di downsampling e auto-aggiornamento per serie temporali di temperatura.

Componenti (dalle foglie): SeriesBuffer, reduce (decimazione min-max),
RefreshScheduler (timer unico + ciclo di refresh), RefreshController (facciata).
"""

from .buffer import Reading, SeriesBuffer, SeriesSnapshot
from .controller import RefreshController
from .downsampling import ReducedSeries, reduce
from .errors import FetchFailure, InvalidInput, LivechartError, PreferenceError
from .fetcher import FetchResult, HttpFetcher, parse_payload
from .scheduler import RefreshScheduler

__all__ = [
    "FetchFailure",
    "FetchResult",
    "HttpFetcher",
    "InvalidInput",
    "LivechartError",
    "PreferenceError",
    "Reading",
    "ReducedSeries",
    "RefreshController",
    "RefreshScheduler",
    "SeriesBuffer",
    "SeriesSnapshot",
    "parse_payload",
    "reduce",
]
