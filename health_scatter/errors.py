"""Exception types raised by the scatterplot core."""


class ScatterError(Exception):
    """Base class for all scatterplot errors."""


class IngestionError(ScatterError, ValueError):
    """The input table is missing required fields or holds malformed values."""


class PreconditionError(ScatterError, ValueError):
    """A scale was requested for data it cannot be computed from."""


class ProgrammingError(ScatterError, AssertionError):
    """An axis or metric outside the allowed sets reached the core."""
