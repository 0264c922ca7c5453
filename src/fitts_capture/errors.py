class FittsError(ValueError):
    """Base class for numeric and lifecycle errors raised by fitts_capture."""


class InsufficientDataError(FittsError):
    """Raised when a statistic is requested over too few values."""


class DegenerateGeometryError(FittsError):
    """
    Raised when a formula would divide by zero, e.g. a zero-length
    origin/target segment or an effective width of zero.
    """


class TrialStateError(FittsError):
    """Raised on an illegal trial lifecycle transition."""
