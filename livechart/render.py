from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence, Union

import plotly.graph_objects as go

from .logger import LogManager

__all__ = ["FigureRenderer"]

log = LogManager("render").get_logger()

SERIES_NAME = "Temperature (°C)"


def _temperature_figure(title: str) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=[],
            y=[],
            mode="lines",
            name=SERIES_NAME,
            line=dict(color="#007bff", width=2),
            fill="tozeroy",
            fillcolor="rgba(0, 123, 255, 0.1)",
            hovertemplate="Temperature: %{y:.2f}°C<extra></extra>",
        )
    )
    fig.update_xaxes(title="Time", tickangle=45)
    fig.update_yaxes(title=SERIES_NAME)
    fig.update_layout(title=title, margin=dict(l=40, r=20, t=30, b=40), height=520, hovermode="x")
    return fig


class FigureRenderer:
    """Callback di render: ogni chiamata sostituisce per intero i dati del grafico."""

    def __init__(self, title: str = "Temperature Readings", html_path: Optional[Union[str, Path]] = None) -> None:
        self.figure = _temperature_figure(title)
        self.html_path = Path(html_path) if html_path else None
        self.render_count = 0

    def __call__(self, labels: Sequence[Any], values: Sequence[float]) -> None:
        trace = self.figure.data[0]
        trace.x = list(labels)
        trace.y = list(values)
        self.render_count += 1
        if self.html_path is not None:
            self.html_path.parent.mkdir(parents=True, exist_ok=True)
            self.figure.write_html(str(self.html_path), include_plotlyjs="cdn", full_html=True)
            log.debug("Grafico salvato: %s (%d punti)", self.html_path, len(trace.x))
