import logging
import math
import random
from datetime import datetime, timedelta
from typing import Optional

from ..configs import SimulationSettings
from ..geometry import Vector2, distance
from ..models import Sample, Sequence, Trial
from ..stats import index_of_difficulty
from .base import SampleSource

logger = logging.getLogger(__name__)


def minimum_jerk(tau: float) -> float:
    """Normalized position along a point-to-point reach at normalized time `tau`."""
    tau = min(max(tau, 0.0), 1.0)
    return 10 * tau ** 3 - 15 * tau ** 4 + 6 * tau ** 5


def _lerp(a: Vector2, b: Vector2, s: float) -> Vector2:
    return (a[0] + (b[0] - a[0]) * s, a[1] + (b[1] - a[1]) * s)


class SimulatedSource(SampleSource):
    """
    A SampleSource that simulates a participant for development and testing.

    Movement times follow Fitts' Law (MT = a + b * ID) with Gaussian noise,
    endpoints scatter around the target center with a spread proportional to
    the target width, and the cursor follows a minimum-jerk path sampled at
    a fixed frame rate. Gaze runs slightly ahead of the cursor and the head
    (nose pointer) lags behind it.
    """

    def __init__(self, settings: SimulationSettings):
        self._settings = settings
        self._interval_ms = 1000.0 / settings.frame_rate_hz
        self._rng = random.Random(settings.seed)
        self._head_movement = 0.0

        logger.info(
            f"SimulatedSource initialized at {settings.frame_rate_hz} Hz "
            f"(a={settings.intercept_ms} ms, b={settings.slope_ms_per_bit} ms/bit)."
        )

    def run_trial(self, sequence: Sequence, index: int, now: Optional[datetime] = None) -> Trial:
        s = self._settings
        trial = sequence.trials[index]
        origin = sequence.origin_position(index)
        target = sequence.target_position(index)

        # --- Draw the outcome of this trial ---
        ide = index_of_difficulty(distance(origin, target), sequence.target_width)
        movement_time = s.intercept_ms + s.slope_ms_per_bit * ide + self._rng.gauss(0.0, s.movement_time_noise_ms)
        movement_time = max(movement_time, self._interval_ms)

        spread = s.endpoint_spread * sequence.target_width
        center_error = (self._rng.gauss(0.0, spread), self._rng.gauss(0.0, spread))
        selection = (target[0] + center_error[0], target[1] + center_error[1])

        # --- Play the movement frame by frame ---
        start = now or datetime.now()
        trial.start(start)

        frames = max(1, math.ceil(movement_time / self._interval_ms))
        previous_nose = origin
        for frame in range(frames + 1):
            elapsed = min(frame * self._interval_ms, movement_time)
            tau = elapsed / movement_time

            cursor = _lerp(origin, selection, minimum_jerk(tau))
            gaze = _lerp(origin, target, minimum_jerk((elapsed + s.gaze_lead_ms) / movement_time))
            nose = _lerp(origin, target, minimum_jerk(tau * 0.8))
            self._head_movement += distance(previous_nose, nose) * 0.01
            previous_nose = nose

            trial.add_sample(Sample.capture(
                ms_progress=elapsed,
                cursor_position=cursor,
                gaze_position=gaze,
                head_movement=self._head_movement,
                nose_position=nose,
                now=start + timedelta(milliseconds=elapsed),
                **self._pupil_fields(elapsed),
            ))

        if self._rng.random() < s.miss_probability:
            trial.record_error()

        trial.finalize(movement_time, center_error)
        return trial

    def _pupil_fields(self, elapsed_ms: float) -> dict[str, float]:
        if not self._settings.pupil_labs:
            return {}
        diameter = 3.5 + self._rng.gauss(0.0, 0.05)
        seconds = elapsed_ms / 1000.0
        return {
            "pupil_diameter_left": diameter,
            "pupil_diameter_right": diameter + 0.02,
            "pupil_diameter_3d_left": diameter * 1.1,
            "pupil_diameter_3d_right": (diameter + 0.02) * 1.1,
            "pupil_confidence_left": 0.95,
            "pupil_confidence_right": 0.95,
            "pupil_timestamp_left": seconds,
            "pupil_timestamp_right": seconds,
        }
