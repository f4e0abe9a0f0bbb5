from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from .buffer import Reading, SeriesBuffer
from .config import EngineConfig
from .controller import RefreshController
from .fetcher import HttpFetcher
from .preferences import IntervalStore
from .render import FigureRenderer
from .scheduler import RefreshScheduler
from .table import count_text, readings_table


class ConsoleTable:
    """Collaboratore tabellare: stampa le ultime letture grezze su console."""

    def __init__(self, console: Optional[Console] = None, max_rows: int = 10) -> None:
        self.console = console or Console()
        self.max_rows = max_rows

    def __call__(self, readings: Sequence[Reading], count: int) -> None:
        df = readings_table(readings).head(self.max_rows)
        table = Table(title=count_text(count))
        table.add_column("Timestamp")
        table.add_column("Temperature", justify="right")
        for timestamp, temperature in df.itertuples(index=False):
            table.add_row(str(timestamp), temperature)
        self.console.print(table)


def build_controller(
    cfg: EngineConfig,
    console: Optional[Console] = None,
) -> RefreshController:
    """Collega fetch HTTP, buffer, renderer Plotly, tabella e preferenze."""
    console = console or Console()
    scheduler = RefreshScheduler(
        HttpFetcher(cfg.endpoint, timeout=cfg.request_timeout),
        FigureRenderer(html_path=cfg.html_output),
        buffer=SeriesBuffer(),
        max_points=cfg.max_points,
        table=ConsoleTable(console),
        on_error=lambda err: console.print(f"[red]Errore aggiornamento dati:[/red] {err}"),
        newest_first=cfg.newest_first,
    )
    return RefreshController(
        scheduler,
        store=IntervalStore(cfg.preferences_path),
    )
