"""
Marks, layout and animation for the scatterplot.

Layout math is pure (`compute_layout`, `tween`); `PlotRenderer` keeps the
current marks and in-flight transition and turns axis changes into
transition calls; `make_scatter_figure` hands the result to Plotly.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd
import plotly.graph_objects as go

from .config import (
    LABEL_FONT_SIZE,
    LABEL_OFFSET,
    MARGIN,
    POINT_RADIUS,
    SVG_HEIGHT,
    SVG_WIDTH,
    TRANSITION_EASE,
    TRANSITION_MS,
)
from .data import REGION_CODE
from .metrics import Axis, Metric
from .scales import Scale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mark:
    """A circle and its region-code text, in pixel coordinates."""

    region_code: str
    cx: float
    cy: float

    # The text anchor tracks the circle centre; LABEL_OFFSET is applied on top.
    @property
    def x(self) -> float:
        return self.cx

    @property
    def y(self) -> float:
        return self.cy

    @property
    def text_position(self) -> Tuple[float, float]:
        return self.cx + LABEL_OFFSET[0], self.cy + LABEL_OFFSET[1]


@dataclass(frozen=True)
class TransitionCall:
    """One attribute animation: element kind, key, attribute, target, duration."""

    element: str
    key: str
    attribute: str
    value: object
    duration_ms: int


# ======================
# Pure layout
# ======================

def compute_layout(
    table: pd.DataFrame,
    x_metric: Metric,
    y_metric: Metric,
    x_scale: Scale,
    y_scale: Scale,
) -> Tuple[Mark, ...]:
    """Target pixel position of every record's mark."""
    xs = x_scale(table[Metric(x_metric).value].to_numpy())
    ys = y_scale(table[Metric(y_metric).value].to_numpy())
    codes = table[REGION_CODE].tolist()
    return tuple(Mark(code, float(cx), float(cy)) for code, cx, cy in zip(codes, xs, ys))


def ease_cubic_in_out(t: float) -> float:
    t = min(max(t, 0.0), 1.0)
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def _lerp(a: float, b: float, k: float) -> float:
    # exact endpoints, so finished transitions land on the target bit-for-bit
    if k <= 0.0:
        return a
    if k >= 1.0:
        return b
    return a + (b - a) * k


def tween(start: Sequence[Mark], end: Sequence[Mark], t: float) -> Tuple[Mark, ...]:
    """Positions `t` of the way (0..1, eased) from `start` to `end`."""
    if len(start) != len(end):
        raise ValueError("start and end layouts must hold the same marks")
    k = ease_cubic_in_out(t)
    out = []
    for a, b in zip(start, end):
        if a.region_code != b.region_code:
            raise ValueError(f"Mark order differs: {a.region_code} vs {b.region_code}")
        out.append(Mark(b.region_code, _lerp(a.cx, b.cx, k), _lerp(a.cy, b.cy, k)))
    return tuple(out)


# ======================
# Renderer
# ======================

class PlotRenderer:
    """
    Keeps one mark per record and the axis scales they were placed with.

    A new update issued while a transition is still running restarts from
    the positions shown at that instant and runs a full duration toward the
    new target.
    """

    def __init__(self, duration_ms: int = TRANSITION_MS,
                 clock: Optional[Callable[[], float]] = None):
        self.duration_ms = duration_ms
        self._clock = clock or (lambda: time.time() * 1000.0)
        self.table: Optional[pd.DataFrame] = None
        self.metrics = {}
        self.scales = {}
        self.target: Tuple[Mark, ...] = ()
        self._origin: Tuple[Mark, ...] = ()
        self._started_at: Optional[float] = None

    def render(self, table: pd.DataFrame, x_scale: Scale, y_scale: Scale,
               x_metric: Metric, y_metric: Metric) -> Tuple[Mark, ...]:
        """Initial bind: place every mark without animating."""
        self.table = table
        self.metrics = {Axis.X: Metric(x_metric), Axis.Y: Metric(y_metric)}
        self.scales = {Axis.X: x_scale, Axis.Y: y_scale}
        self.target = compute_layout(table, x_metric, y_metric, x_scale, y_scale)
        self._origin = self.target
        self._started_at = None
        return self.target

    def is_animating(self, now: Optional[float] = None) -> bool:
        if self._started_at is None:
            return False
        now = self._clock() if now is None else now
        return now - self._started_at < self.duration_ms

    def positions_at(self, now: Optional[float] = None) -> Tuple[Mark, ...]:
        """Where the marks are drawn at `now` (ms on the renderer's clock)."""
        if self._started_at is None:
            return self.target
        now = self._clock() if now is None else now
        t = (now - self._started_at) / self.duration_ms if self.duration_ms else 1.0
        return tween(self._origin, self.target, t)

    def snapshot(self) -> Optional[dict]:
        """JSON-friendly in-flight transition, or None once it has finished."""
        if not self.is_animating():
            return None
        return {
            "startedAt": self._started_at,
            "origin": [[m.region_code, m.cx, m.cy] for m in self._origin],
        }

    def restore(self, snapshot: Optional[Mapping]) -> None:
        """Resume a transition saved by `snapshot` against the rendered target."""
        if not snapshot:
            return
        origin = tuple(Mark(str(code), float(cx), float(cy)) for code, cx, cy in snapshot["origin"])
        if [m.region_code for m in origin] != [m.region_code for m in self.target]:
            logger.warning("Discarding saved transition for a different set of marks")
            return
        self._origin = origin
        self._started_at = float(snapshot["startedAt"])

    def update(self, x_scale: Scale, y_scale: Scale, axis, metric) -> List[TransitionCall]:
        """
        Move marks along `axis` only, to positions under `metric`.

        Returns the transition calls issued: cx/x (or cy/y) for every mark
        plus the redrawn axis, all with the same duration.
        """
        if self.table is None:
            raise RuntimeError("render() must run before update()")
        axis = Axis(axis)
        metric = Metric(metric)

        now = self._clock()
        interrupted = self.is_animating(now)
        origin = self.positions_at(now)

        self.metrics[axis] = metric
        self.scales = {Axis.X: x_scale, Axis.Y: y_scale}
        scale = self.scales[axis]
        values = scale(self.table[metric.value].to_numpy())

        if axis is Axis.X:
            target = tuple(replace(m, cx=float(v)) for m, v in zip(self.target, values))
            attrs = ("cx", "x")
        else:
            target = tuple(replace(m, cy=float(v)) for m, v in zip(self.target, values))
            attrs = ("cy", "y")

        calls = []
        for mark in target:
            pos = getattr(mark, attrs[0])
            calls.append(TransitionCall("circle", mark.region_code, attrs[0], pos, self.duration_ms))
            calls.append(TransitionCall("text", mark.region_code, attrs[1], pos, self.duration_ms))
            if interrupted:
                # finish the orthogonal move the restart would otherwise cut short
                other = "cy" if axis is Axis.X else "cx"
                opos = getattr(mark, other)
                calls.append(TransitionCall("circle", mark.region_code, other, opos, self.duration_ms))
                calls.append(TransitionCall("text", mark.region_code, other[1], opos, self.duration_ms))
        calls.append(TransitionCall("axis", axis.value, "ticks", tuple(scale.ticks()), self.duration_ms))

        self._origin = origin
        self.target = target
        self._started_at = now
        logger.debug("%d transition calls for %s axis", len(calls), axis.value)
        return calls


# ======================
# Figure Builders
# ======================


def plan_duration(transitions: Sequence[TransitionCall]) -> int:
    """Longest duration in a transition plan; 0 for an initial render."""
    return max((c.duration_ms for c in transitions), default=0)


def _axis_ticks(transitions: Sequence[TransitionCall], axis: Axis, scale: Scale) -> List[float]:
    for call in transitions:
        if call.element == "axis" and call.key == axis.value:
            return list(call.value)
    return scale.ticks()


def _axis_dict(scale: Scale, ticks: Sequence[float]) -> dict:
    # pixel axis: the marks are already scaled, ticks are placed through the scale
    return dict(
        range=list(scale.range),
        tickvals=[scale(t) for t in ticks],
        ticktext=[f"{t:g}" for t in ticks],
        showgrid=True,
        gridcolor="#f3f4f6",
        zeroline=False,
        fixedrange=True,
    )


def make_scatter_figure(
    marks: Sequence[Mark],
    x_scale: Scale,
    y_scale: Scale,
    transitions: Sequence[TransitionCall] = (),
) -> go.Figure:
    """
    Draw `marks` (pixel coordinates) on axes spanning the scales' pixel ranges.

    The transition plan sets the client tween duration and the redrawn axis
    ticks; without a plan the figure is drawn in place.
    """
    codes = [m.region_code for m in marks]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[m.cx for m in marks],
        y=[m.cy for m in marks],
        ids=codes,
        customdata=codes,
        mode="markers+text",
        text=codes,
        textposition="middle center",
        textfont=dict(size=LABEL_FONT_SIZE, color="#ffffff"),
        marker=dict(size=2 * POINT_RADIUS, color="#89bdd3", line=dict(width=1, color="#e3e3e3")),
        hoverinfo="none",
        name="regions",
    ))

    fig.update_layout(
        width=SVG_WIDTH,
        height=SVG_HEIGHT,
        margin={"t": MARGIN["top"], "r": MARGIN["right"], "b": MARGIN["bottom"], "l": MARGIN["left"]},
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        font=dict(family="Inter, system-ui, sans-serif", size=12),
        showlegend=False,
        uirevision="scatter",
        transition={"duration": plan_duration(transitions), "easing": TRANSITION_EASE},
        xaxis=_axis_dict(x_scale, _axis_ticks(transitions, Axis.X, x_scale)),
        yaxis=_axis_dict(y_scale, _axis_ticks(transitions, Axis.Y, y_scale)),
    )
    return fig
