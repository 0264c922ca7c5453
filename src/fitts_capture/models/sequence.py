import logging
from datetime import datetime
from typing import Any, List, Literal, Optional

from .. import stats
from ..errors import InsufficientDataError
from ..geometry import (
    ORIGIN,
    SPAWN_ANGLE_OFFSET_DEG,
    Vector2,
    add,
    alternating_ring_angles,
    ring_position,
)
from .trial import Trial

logger = logging.getLogger(__name__)

DeviationMode = Literal["projected", "magnitude"]


class Sequence:
    """
    One ring of targets sharing a fixed amplitude and width.

    The nominal index of difficulty is known up front; the effective metrics
    are filled by `compute_statistics` once every trial has been finalized.
    Effective metrics are rounded to single precision.
    """

    def __init__(
        self,
        sequence_number: int,
        target_amplitude: int,
        target_width: float,
        number_of_trials: int,
        sequence_of_repeats: int = 0,
    ):
        if number_of_trials < 2:
            raise InsufficientDataError("A sequence needs at least two trials.")

        self.sequence_number = sequence_number
        self.target_amplitude = target_amplitude
        self.target_width = target_width
        self.sequence_of_repeats = sequence_of_repeats
        self.start_time: Optional[datetime] = None

        self.index_of_difficulty = stats.index_of_difficulty(target_amplitude, target_width)
        self.trials: List[Trial] = [
            Trial(i, (angle + SPAWN_ANGLE_OFFSET_DEG) % 360.0)
            for i, angle in enumerate(alternating_ring_angles(number_of_trials))
        ]

        # Results
        self.effective_amplitude: Optional[float] = None
        self.effective_target_width: Optional[float] = None
        self.effective_index_of_difficulty: Optional[float] = None
        self.errors = 0
        self.movement_time: Optional[float] = None
        self.error_rate: Optional[float] = None
        self.throughput: Optional[float] = None

    def __repr__(self) -> str:
        return (
            f"<Sequence #{self.sequence_number} A={self.target_amplitude} "
            f"W={self.target_width} trials={len(self.trials)}>"
        )

    @property
    def is_complete(self) -> bool:
        return all(trial.is_finalized for trial in self.trials)

    def target_position(self, index: int) -> Vector2:
        """Center of the target for trial `index` on a ring of diameter `target_amplitude`."""
        return ring_position(self.target_amplitude / 2, self.trials[index].target_angle)

    def origin_position(self, index: int) -> Vector2:
        """Where the movement towards trial `index` starts: the previous target, or the ring center."""
        if index == 0:
            return ORIGIN
        return self.target_position(index - 1)

    def start(self, now: Optional[datetime] = None) -> None:
        self.start_time = now or datetime.now()

    # --- Per-trial collections ---

    def center_errors(self) -> List[Vector2]:
        return [trial.target_center_error for trial in self.trials]

    def movement_times(self) -> List[float]:
        return [trial.time_to_activate for trial in self.trials]

    def selection_offsets(self) -> List[float]:
        """Signed deviation of every selection along its movement axis."""
        offsets = []
        for i, trial in enumerate(self.trials):
            origin = self.origin_position(i)
            target = self.target_position(i)
            selection = add(target, trial.target_center_error)
            offsets.append(stats.projected_offset(origin, target, selection))
        return offsets

    def effective_amplitudes(self) -> List[float]:
        amplitudes = []
        for i, trial in enumerate(self.trials):
            origin = self.origin_position(i)
            target = self.target_position(i)
            selection = add(target, trial.target_center_error)
            amplitudes.append(stats.effective_amplitude(origin, target, selection))
        return amplitudes

    # --- Aggregation ---

    def compute_statistics(self, deviation_mode: DeviationMode = "projected") -> None:
        """
        Fills the summary metrics from the finalized trials.

        Args:
            deviation_mode: "projected" measures each endpoint deviation along
                the movement axis; "magnitude" uses the length of the raw
                center error vector.

        Raises:
            InsufficientDataError: A trial has not been finalized.
            DegenerateGeometryError: The endpoint deviations have no spread or
                the movement times average to zero.
        """
        if not self.is_complete:
            pending = [t.trial_number for t in self.trials if not t.is_finalized]
            raise InsufficientDataError(f"Sequence {self.sequence_number} has unfinished trials: {pending}")

        # Counts and means first so they are available even if the effective
        # metrics turn out to be degenerate.
        self.errors = sum(trial.errors for trial in self.trials)
        self.error_rate = stats.to_single(self.errors / len(self.trials) * 100)
        times = self.movement_times()
        self.movement_time = stats.to_single(stats.mean(times))

        if deviation_mode == "magnitude":
            deviations = stats.delta_magnitudes(self.center_errors())
        else:
            deviations = self.selection_offsets()

        effective_amplitude = stats.mean(self.effective_amplitudes())
        effective_width = stats.effective_width(deviations)
        effective_id = stats.effective_index_of_difficulty(effective_amplitude, effective_width)
        throughput = stats.throughput([self.target_amplitude] * len(self.trials), deviations, times)

        self.effective_amplitude = stats.to_single(effective_amplitude)
        self.effective_target_width = stats.to_single(effective_width)
        self.effective_index_of_difficulty = stats.to_single(effective_id)
        self.throughput = stats.to_single(throughput)
        logger.info(
            "Sequence %d: IDe=%.3f bits, MT=%.1f ms, TP=%.3f bits/s, errors=%.1f%%",
            self.sequence_number,
            self.effective_index_of_difficulty,
            self.movement_time,
            self.throughput,
            self.error_rate,
        )

    def to_row(self, test_block_id: int) -> dict[str, Any]:
        return {
            "sequence_number": self.sequence_number,
            "test_block_id": test_block_id,
            "start_time": self.start_time,
            "target_amplitude": self.target_amplitude,
            "target_width": self.target_width,
            "index_of_difficulty": self.index_of_difficulty,
            "effective_amplitude": self.effective_amplitude,
            "effective_target_width": self.effective_target_width,
            "effective_index_of_difficulty": self.effective_index_of_difficulty,
            "sequence_of_repeats": self.sequence_of_repeats,
            "errors": self.errors,
            "movement_time": self.movement_time,
            "error_rate": self.error_rate,
            "throughput": self.throughput,
        }
