"""Interactive scatterplot of state health metrics with switchable axes."""

from .axis import AxisChanged, AxisSelector, AxisState
from .errors import IngestionError, PreconditionError, ProgrammingError, ScatterError
from .metrics import Axis, Metric

__all__ = [
    "Axis",
    "AxisChanged",
    "AxisSelector",
    "AxisState",
    "IngestionError",
    "Metric",
    "PreconditionError",
    "ProgrammingError",
    "ScatterError",
]
