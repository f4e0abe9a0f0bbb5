from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Literal, Sequence, Tuple

import numpy as np

from .buffer import SeriesSnapshot
from .errors import InvalidInput
from .logger import LogManager

log = LogManager("downsampling").get_logger()

DownsampleMethod = Literal["minmax", "identity"]

DEFAULT_MAX_POINTS = 300


@dataclass(slots=True)
class ReducedSeries:
    timestamps: List[Any] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    method: DownsampleMethod = "identity"
    original_count: int = 0

    @property
    def sampled_count(self) -> int:
        return len(self.timestamps)

    @property
    def reduction_ratio(self) -> float:
        if self.sampled_count == 0:
            return np.inf
        return self.original_count / self.sampled_count

    def summary(self) -> str:
        return (
            f"{self.original_count:,} → {self.sampled_count:,} "
            f"({self.reduction_ratio:.1f}x, {self.method})"
        )


def _block_extrema(values: Sequence[float], start: int, skip: int, blocks: int) -> Tuple[np.ndarray, np.ndarray]:
    """Indici assoluti di minimo e massimo per ciascun blocco pieno di ``skip`` punti."""
    end = start + blocks * skip
    grid = np.asarray(values[start:end], dtype=np.float64).reshape(blocks, skip)
    offsets = start + np.arange(blocks) * skip
    # i NaN non vincono mai il confronto; un blocco tutto NaN si riduce al primo punto
    nan = np.isnan(grid)
    low = np.where(nan, np.inf, grid)
    high = np.where(nan, -np.inf, grid)
    # argmin/argmax restituiscono la prima occorrenza: pareggi risolti da sinistra
    return offsets + np.argmin(low, axis=1), offsets + np.argmax(high, axis=1)


def reduce(
    timestamps: Sequence[Any],
    values: Sequence[float],
    max_points: int = DEFAULT_MAX_POINTS,
) -> ReducedSeries:
    """
    Decimazione min-max a blocchi.

    - len <= max_points: input restituito invariato (metodo 'identity').
    - Altrimenti skip = ceil(len / max_points); il primo punto e' sempre
      emesso, l'interno [skip, len - skip) viene diviso in blocchi pieni da
      ``skip`` punti e di ognuno si emettono minimo e massimo in ordine di
      indice crescente (un solo punto se coincidono); l'ultimo punto chiude
      la serie se il suo timestamp non e' gia' l'ultimo emesso.

    Le etichette non vengono mai confrontate tra loro, solo per uguaglianza
    sull'ultimo punto: qualunque tipo va bene.

    Raises:
        InvalidInput: lunghezze diverse o max_points < 2.
    """
    if isinstance(max_points, bool) or not isinstance(max_points, int) or max_points < 2:
        raise InvalidInput(f"max_points deve essere un intero >= 2 (ricevuto {max_points!r}).")
    n = len(timestamps)
    if n != len(values):
        raise InvalidInput(
            f"timestamps e values devono avere la stessa lunghezza ({n} != {len(values)})."
        )

    if n <= max_points:
        return ReducedSeries(
            timestamps=list(timestamps),
            values=list(values),
            method="identity",
            original_count=n,
        )

    skip = math.ceil(n / max_points)
    out_ts: List[Any] = [timestamps[0]]
    out_vals: List[float] = [values[0]]

    blocks = max(0, (n - 2 * skip) // skip)
    if blocks:
        mins, maxs = _block_extrema(values, skip, skip, blocks)
        for lo, hi in zip(mins.tolist(), maxs.tolist()):
            if lo == hi:
                picks = (lo,)
            else:
                picks = (lo, hi) if lo < hi else (hi, lo)
            for idx in picks:
                out_ts.append(timestamps[idx])
                out_vals.append(values[idx])

    if out_ts[-1] != timestamps[n - 1]:
        out_ts.append(timestamps[n - 1])
        out_vals.append(values[n - 1])

    result = ReducedSeries(
        timestamps=out_ts,
        values=out_vals,
        method="minmax",
        original_count=n,
    )
    log.debug("Downsampling da %d a %d punti (skip=%d)", n, result.sampled_count, skip)
    return result


def reduce_snapshot(snapshot: SeriesSnapshot, max_points: int = DEFAULT_MAX_POINTS) -> ReducedSeries:
    return reduce(snapshot.timestamps, snapshot.values, max_points)
