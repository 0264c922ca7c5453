from .errors import DegenerateGeometryError, FittsError, InsufficientDataError, TrialStateError
from .models import Sample, Sequence, Trial

__all__ = [
    "DegenerateGeometryError",
    "FittsError",
    "InsufficientDataError",
    "Sample",
    "Sequence",
    "Trial",
    "TrialStateError",
]
