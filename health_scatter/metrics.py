"""
Metric and axis vocabularies.

Each axis draws from its own candidate set; the sets are disjoint and that
is checked at import time.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Dict, Tuple

from .errors import ProgrammingError


class Axis(str, Enum):
    X = "x"
    Y = "y"


class Metric(str, Enum):
    SMOKER = "smoker"
    PHYSICAL_ACTIVITY = "physicalActivity"
    INCOME = "income"
    DEPRESSION = "depression"
    DIABETES = "diabetes"
    HEART_ATTACK = "heartAttack"


# Display order matches the label stacks on the page.
AXIS_METRICS: Dict[Axis, Tuple[Metric, ...]] = {
    Axis.X: (Metric.SMOKER, Metric.PHYSICAL_ACTIVITY, Metric.INCOME),
    Axis.Y: (Metric.DEPRESSION, Metric.HEART_ATTACK, Metric.DIABETES),
}

DEFAULT_METRICS: Dict[Axis, Metric] = {
    Axis.X: Metric.SMOKER,
    Axis.Y: Metric.HEART_ATTACK,
}

if set(AXIS_METRICS[Axis.X]) & set(AXIS_METRICS[Axis.Y]):
    raise RuntimeError("X and Y metric sets must be disjoint")


@lru_cache(maxsize=1)
def metrics_config() -> Tuple[Dict[Metric, str], Dict[Metric, str]]:
    """
    Returns:
        METRIC_LABELS (metric->axis label), METRIC_FMT (metric->'%' or '$')
    """
    labels = {
        Metric.SMOKER: "Smoker (%)",
        Metric.PHYSICAL_ACTIVITY: "Physical Activity Last Month (%)",
        Metric.INCOME: "Household Income (Median)",
        Metric.DEPRESSION: "Depression (%)",
        Metric.HEART_ATTACK: "Heart Attack Ever (%)",
        Metric.DIABETES: "Diabetes Ever (%)",
    }
    metric_fmt = {m: "%" for m in Metric}
    metric_fmt[Metric.INCOME] = "$"
    return labels, metric_fmt


@lru_cache(maxsize=1)
def get_metric_descriptions() -> Dict[Metric, str]:
    """
    Returns short descriptions shown when hovering an axis label.
    """
    return {
        Metric.SMOKER: "Share of adults who currently smoke cigarettes.",
        Metric.PHYSICAL_ACTIVITY: "Share of adults who did any physical activity or exercise in the past month.",
        Metric.INCOME: "Median household income in US dollars.",
        Metric.DEPRESSION: "Share of adults ever told they have a depressive disorder.",
        Metric.HEART_ATTACK: "Share of adults ever told they had a heart attack.",
        Metric.DIABETES: "Share of adults ever told they have diabetes.",
    }


def parse_axis(value) -> Axis:
    """Coerce a raw axis value ('x'/'y' or Axis) into an Axis."""
    try:
        return Axis(value)
    except ValueError:
        raise ProgrammingError(f"Unknown axis: {value!r}") from None


def parse_metric(axis: Axis, value) -> Metric:
    """Coerce a raw metric value and check it belongs to the axis's set."""
    try:
        metric = Metric(value)
    except ValueError:
        raise ProgrammingError(f"Unknown metric: {value!r}") from None
    if metric not in AXIS_METRICS[axis]:
        raise ProgrammingError(f"Metric {metric.value!r} is not allowed on the {axis.value} axis")
    return metric
