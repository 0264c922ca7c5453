import logging
from datetime import datetime
from typing import Any, List, Optional

from ..errors import TrialStateError
from ..geometry import Vector2
from .sample import Sample
from .state import TrialState

logger = logging.getLogger(__name__)


class Trial:
    """
    One target-acquisition attempt.

    A trial is created together with its sequence, started when its target is
    shown and finalized when the target is activated. Samples can only be
    appended while the trial is running.
    """

    def __init__(self, trial_number: int, target_angle: float):
        self.trial_number = trial_number
        self.target_angle = target_angle

        self.state = TrialState.PENDING
        self.start_time: Optional[datetime] = None
        self.time_to_activate: Optional[float] = None  # ms
        self.target_center_error: Optional[Vector2] = None
        self.errors = 0
        self._samples: List[Sample] = []

    @property
    def samples(self) -> tuple[Sample, ...]:
        return tuple(self._samples)

    @property
    def is_finalized(self) -> bool:
        return self.state is TrialState.FINALIZED

    def start(self, now: Optional[datetime] = None) -> None:
        if self.state is not TrialState.PENDING:
            raise TrialStateError(f"Trial {self.trial_number} already started.")
        self.start_time = now or datetime.now()
        self.state = TrialState.RUNNING

    def add_sample(self, sample: Sample) -> None:
        self._require_running("add a sample to")
        self._samples.append(sample)

    def record_error(self) -> None:
        """Counts a selection that missed the target."""
        self._require_running("record an error on")
        self.errors += 1

    def finalize(self, time_to_activate: float, target_center_error: Vector2) -> None:
        """
        Freezes the trial at target activation.

        Args:
            time_to_activate: Movement time in milliseconds.
            target_center_error: Offset of the activation point from the target center.
        """
        self._require_running("finalize")
        if time_to_activate < 0:
            raise TrialStateError(f"time_to_activate must not be negative, got {time_to_activate}.")
        self.time_to_activate = time_to_activate
        self.target_center_error = target_center_error
        self.state = TrialState.FINALIZED
        logger.debug(
            "Trial %d finalized after %.1f ms with %d samples.",
            self.trial_number, time_to_activate, len(self._samples),
        )

    def _require_running(self, action: str) -> None:
        if self.state is not TrialState.RUNNING:
            raise TrialStateError(
                f"Cannot {action} trial {self.trial_number} in state {self.state.name}."
            )

    def to_row(self, test_sequence_id: int) -> dict[str, Any]:
        if not self.is_finalized:
            raise TrialStateError(f"Trial {self.trial_number} is not finalized.")
        error_x, error_y = self.target_center_error
        return {
            "test_sequence_id": test_sequence_id,
            "trial_number": self.trial_number,
            "start_time": self.start_time,
            "target_angle": self.target_angle,
            "time_to_activate": self.time_to_activate,
            "target_center_error_x": error_x,
            "target_center_error_y": error_y,
            "errors": self.errors,
        }
