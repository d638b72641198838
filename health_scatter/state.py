"""
Explicit application state and the single update path.

Label clicks become AxisChanged events; `update` is the only place an event
touches scales and marks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from . import scales
from .axis import AxisChanged, AxisSelector
from .config import X_RANGE, Y_RANGE
from .labels import LabelPanel
from .metrics import Axis
from .renderer import PlotRenderer, TransitionCall, make_scatter_figure
from .tooltip import TooltipController

logger = logging.getLogger(__name__)

PIXEL_RANGES = {Axis.X: X_RANGE, Axis.Y: Y_RANGE}
TRANSITION_KEY = "transition"


@dataclass
class ScatterState:
    table: pd.DataFrame
    selector: AxisSelector
    renderer: PlotRenderer
    labels: LabelPanel
    tooltip: TooltipController
    scales: Dict[Axis, scales.Scale] = field(default_factory=dict)

    @property
    def x_metric(self):
        return self.selector.active(Axis.X)

    @property
    def y_metric(self):
        return self.selector.active(Axis.Y)


def build_state(table: pd.DataFrame,
                active: Optional[Mapping[str, object]] = None,
                clock: Optional[Callable[[], float]] = None) -> ScatterState:
    """
    Create selector, scales and marks for `table`.

    `active` is the session store; a transition it carries is resumed so a
    click mid-flight restarts from the positions on screen.
    """
    selector = AxisSelector.from_dict(active)
    axis_scales = {
        axis: scales.recompute(table, selector.active(axis), PIXEL_RANGES[axis])
        for axis in Axis
    }
    renderer = PlotRenderer(clock=clock)
    renderer.render(
        table, axis_scales[Axis.X], axis_scales[Axis.Y],
        selector.active(Axis.X), selector.active(Axis.Y),
    )
    renderer.restore((active or {}).get(TRANSITION_KEY))
    return ScatterState(
        table=table,
        selector=selector,
        renderer=renderer,
        labels=LabelPanel(selector),
        tooltip=TooltipController(selector),
        scales=axis_scales,
    )


def update(state: ScatterState, event: Optional[AxisChanged]) -> List[TransitionCall]:
    """Apply one AxisChanged event; `None` means nothing changed."""
    if event is None:
        return []
    state.scales[event.axis] = scales.recompute(
        state.table, event.metric, PIXEL_RANGES[event.axis]
    )
    return state.renderer.update(
        state.scales[Axis.X], state.scales[Axis.Y], event.axis, event.metric
    )


def click_label(state: ScatterState, axis, metric) -> List[TransitionCall]:
    """A label click: LabelPanel decides, `update` applies."""
    return update(state, state.labels.on_click(axis, metric))


def make_figure(state: ScatterState, transitions: Sequence[TransitionCall] = ()) -> go.Figure:
    """Figure for the renderer's current target, tweened per `transitions`."""
    return make_scatter_figure(
        state.renderer.target, state.scales[Axis.X], state.scales[Axis.Y], transitions
    )


def store_data(state: ScatterState) -> Dict[str, object]:
    """Session store: active metrics plus any transition still in flight."""
    data: Dict[str, object] = dict(state.selector.as_dict())
    data[TRANSITION_KEY] = state.renderer.snapshot()
    return data
