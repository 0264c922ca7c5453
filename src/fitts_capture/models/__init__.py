from .sample import Sample
from .sequence import DeviationMode, Sequence
from .state import TrialState
from .trial import Trial

__all__ = ["DeviationMode", "Sample", "Sequence", "Trial", "TrialState"]
