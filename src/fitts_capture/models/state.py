from enum import Enum, auto


class TrialState(Enum):
    """Lifecycle of a single target-acquisition trial."""
    PENDING = auto()  # Created with its sequence, target not shown yet.
    RUNNING = auto()  # Target shown, samples are being recorded.
    FINALIZED = auto()  # Target activated; samples and results are frozen.
