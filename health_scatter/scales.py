"""
Linear scales from metric values to pixels.

A Scale is never mutated: every axis change builds a new one with
`recompute`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import pandas as pd

from .config import DEGENERATE_HALF_WIDTH, MIN_DOMAIN_WIDTH, PADDING_HIGH, PADDING_LOW, TICK_COUNT
from .errors import PreconditionError
from .metrics import Metric

logger = logging.getLogger(__name__)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


@dataclass(frozen=True)
class Scale:
    """Linear map from `domain` (data units) onto `range` (pixels)."""

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value):
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (np.asarray(value, dtype=float) - d0) / (d1 - d0)
        out = r0 + t * (r1 - r0)
        return float(out) if np.ndim(out) == 0 else out

    def ticks(self, count: int = TICK_COUNT) -> List[float]:
        """Round tick values inside the domain, d3 style."""
        lo, hi = sorted(self.domain)
        step = tick_step(lo, hi, count)
        if step <= 0:
            return [lo]
        # tolerance keeps ticks that sit on a domain end despite float error
        start = math.ceil(lo / step - 1e-9)
        stop = math.floor(hi / step + 1e-9)
        # integer multiples keep values free of accumulated float error
        return [float(round(i * step, 12)) for i in range(start, stop + 1)]


def tick_step(lo: float, hi: float, count: int) -> float:
    """Pick a 1/2/5 x 10^k step giving roughly `count` ticks."""
    span = hi - lo
    if span <= 0 or count <= 0:
        return 0.0
    raw = span / count
    power = math.floor(math.log10(raw))
    step = 10.0 ** power
    error = raw / step
    if error >= _E10:
        step *= 10
    elif error >= _E5:
        step *= 5
    elif error >= _E2:
        step *= 2
    return step


def padded_domain(values) -> Tuple[float, float]:
    """
    Pad the observed extent so extreme points sit inside the axis.

    The minimum is scaled by 0.9 and the maximum by 1.1 when positive; for
    negative values the multipliers swap so the domain always widens.
    """
    arr = np.asarray(values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        raise PreconditionError("Cannot compute a domain without finite values")

    vmin, vmax = float(arr.min()), float(arr.max())
    lo = vmin * (PADDING_LOW if vmin >= 0 else PADDING_HIGH)
    hi = vmax * (PADDING_HIGH if vmax >= 0 else PADDING_LOW)

    if hi - lo < MIN_DOMAIN_WIDTH:
        mid = (lo + hi) / 2
        logger.warning(
            "Domain [%s, %s] narrower than %s; widening around %s",
            lo, hi, MIN_DOMAIN_WIDTH, mid,
        )
        lo, hi = mid - DEGENERATE_HALF_WIDTH, mid + DEGENERATE_HALF_WIDTH
    return lo, hi


def recompute(table: pd.DataFrame, metric: Metric, pixel_range: Tuple[float, float]) -> Scale:
    """
    Build the scale for `metric` over every record in `table`.

    Raises:
        PreconditionError: if the table is empty or lacks the metric column.
    """
    column = Metric(metric).value
    if table is None or table.empty:
        raise PreconditionError("Cannot build a scale for an empty table")
    if column not in table.columns:
        raise PreconditionError(f"Table has no column {column!r}")

    domain = padded_domain(table[column].to_numpy())
    return Scale(domain=domain, range=(float(pixel_range[0]), float(pixel_range[1])))
