"""Active-metric selection for the two plot axes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .metrics import DEFAULT_METRICS, Axis, Metric, parse_axis, parse_metric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisState:
    axis: Axis
    active_metric: Metric


@dataclass(frozen=True)
class AxisChanged:
    """Event emitted when an axis switches to a different metric."""

    axis: Axis
    metric: Metric


class AxisSelector:
    """
    Holds one AxisState per axis.

    `select` returns an AxisChanged event when the active metric actually
    changes and None for a re-click of the current metric.
    """

    def __init__(self, active: Optional[Mapping[Axis, Metric]] = None):
        merged = dict(DEFAULT_METRICS)
        for axis, metric in (active or {}).items():
            axis = parse_axis(axis)
            merged[axis] = parse_metric(axis, metric)
        self._states: Dict[Axis, AxisState] = {
            axis: AxisState(axis, metric) for axis, metric in merged.items()
        }

    def state(self, axis) -> AxisState:
        return self._states[parse_axis(axis)]

    def active(self, axis) -> Metric:
        return self.state(axis).active_metric

    def select(self, axis, metric) -> Optional[AxisChanged]:
        axis = parse_axis(axis)
        metric = parse_metric(axis, metric)
        if self._states[axis].active_metric == metric:
            logger.debug("Ignoring re-select of %s on %s axis", metric.value, axis.value)
            return None
        self._states[axis] = AxisState(axis, metric)
        logger.info("%s axis now shows %s", axis.value.upper(), metric.value)
        return AxisChanged(axis, metric)

    def as_dict(self) -> Dict[str, str]:
        """JSON-friendly form for a dcc.Store."""
        return {axis.value: st.active_metric.value for axis, st in self._states.items()}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, str]]) -> "AxisSelector":
        # the store may carry other session keys besides the two axes
        data = data or {}
        return cls({axis: data[axis.value] for axis in Axis if axis.value in data})
