"""Hover tooltip text for a single mark."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .axis import AxisSelector
from .config import TOOLTIP_OFFSET
from .data import Record
from .metrics import Axis, Metric, metrics_config


def format_number(v: float) -> str:
    """Print integral values without a trailing '.0'."""
    v = float(v)
    if v.is_integer():
        return str(int(v))
    return repr(v)


def format_value(metric: Metric, v: float) -> str:
    _, metric_fmt = metrics_config()
    if metric_fmt.get(Metric(metric)) == "$":
        return f"${format_number(v)}"
    return f"{format_number(v)}%"


@dataclass(frozen=True)
class TooltipContent:
    region_code: str
    lines: Tuple[str, ...]
    offset: Tuple[int, int] = TOOLTIP_OFFSET

    @property
    def text(self) -> str:
        return " / ".join(self.lines)


class TooltipController:
    """Formats tooltip content against the selector's active metrics."""

    def __init__(self, selector: AxisSelector):
        self.selector = selector
        self.current: Optional[TooltipContent] = None

    def content_for(self, record: Record) -> TooltipContent:
        x_metric = self.selector.active(Axis.X)
        y_metric = self.selector.active(Axis.Y)
        lines = (
            record.region_name,
            f"{x_metric.value}: {format_value(x_metric, record.value(x_metric))}",
            # Y metrics are all percentages
            f"{y_metric.value}: {format_number(record.value(y_metric))}%",
        )
        return TooltipContent(record.region_code, lines)

    def show(self, record: Record) -> TooltipContent:
        self.current = self.content_for(record)
        return self.current

    def hide(self, record: Optional[Record] = None) -> None:
        self.current = None
