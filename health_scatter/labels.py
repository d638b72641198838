"""Clickable axis labels with a single active flag per axis."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from dash import html

from .axis import AxisChanged, AxisSelector
from .metrics import (
    AXIS_METRICS,
    Axis,
    Metric,
    get_metric_descriptions,
    metrics_config,
    parse_axis,
    parse_metric,
)

logger = logging.getLogger(__name__)

ACTIVE = "active"
INACTIVE = "inactive"
LABEL_TYPE = "axis-label"


def label_id(axis: Axis, metric: Metric) -> Dict[str, str]:
    """Pattern-matching component id for one label."""
    return {"type": LABEL_TYPE, "axis": Axis(axis).value, "metric": Metric(metric).value}


class LabelPanel:
    """
    The label stacks under the X axis and beside the Y axis.

    Flags are derived from the selector, so exactly one label per axis is
    active whenever the selector is consistent.
    """

    def __init__(self, selector: AxisSelector):
        self.selector = selector

    def is_active(self, axis, metric) -> bool:
        axis = parse_axis(axis)
        return self.selector.active(axis) == parse_metric(axis, metric)

    def flags(self, axis) -> Dict[Metric, str]:
        axis = parse_axis(axis)
        active = self.selector.active(axis)
        return {m: ACTIVE if m == active else INACTIVE for m in AXIS_METRICS[axis]}

    def class_names(self, axis) -> List[str]:
        return [f"axis-label {flag}" for flag in self.flags(axis).values()]

    def on_click(self, axis, metric) -> Optional[AxisChanged]:
        """Activate `metric` on `axis`; clicks on the active label do nothing."""
        axis = parse_axis(axis)
        metric = parse_metric(axis, metric)
        if self.is_active(axis, metric):
            logger.debug("Click on active label %s ignored", metric.value)
            return None
        return self.selector.select(axis, metric)

    def build_label_group(self, axis) -> html.Div:
        """Render one axis's labels as clickable spans."""
        axis = parse_axis(axis)
        labels, _ = metrics_config()
        descriptions = get_metric_descriptions()
        children = [
            html.Span(
                labels[metric],
                id=label_id(axis, metric),
                n_clicks=0,
                title=descriptions[metric],
                className=cls,
            )
            for metric, cls in zip(AXIS_METRICS[axis], self.class_names(axis))
        ]
        return html.Div(children, className=f"{axis.value}AxisLabels")
