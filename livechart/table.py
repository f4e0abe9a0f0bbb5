from __future__ import annotations

from typing import Sequence

import pandas as pd

from .buffer import Reading


def readings_table(readings: Sequence[Reading]) -> pd.DataFrame:
    """Vista tabellare delle letture grezze, nell'ordine ricevuto, temperatura formattata."""
    df = pd.DataFrame(
        {
            "timestamp": [r.timestamp for r in readings],
            "temperature": pd.Series([r.value for r in readings], dtype="float64"),
        }
    )
    df["temperature"] = df["temperature"].map(lambda v: f"{v:.2f}°C")
    return df


def count_text(count: int) -> str:
    return f"Showing {count} temperature readings."
