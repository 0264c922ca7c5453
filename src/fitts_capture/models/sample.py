from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..geometry import Vector2
from ..utils.clock import format_timestamp


@dataclass(slots=True, frozen=True)
class Sample:
    """
    A single per-frame observation recorded during a trial.

    Pupil fields are only filled by Pupil Labs trackers and HMD fields only
    when a headset is tracked; every other hardware setup leaves them as None.
    """
    timestamp: str
    ms_progress: float
    cursor_position: Vector2
    gaze_position: Vector2
    head_movement: float
    nose_position: Vector2
    pupil_diameter_left: Optional[float] = None
    pupil_diameter_right: Optional[float] = None
    pupil_diameter_3d_left: Optional[float] = None
    pupil_diameter_3d_right: Optional[float] = None
    pupil_confidence_left: Optional[float] = None
    pupil_confidence_right: Optional[float] = None
    pupil_timestamp_left: Optional[float] = None
    pupil_timestamp_right: Optional[float] = None
    hmd_position_x: Optional[float] = None
    hmd_position_y: Optional[float] = None
    hmd_position_z: Optional[float] = None
    hmd_rotation_x: Optional[float] = None
    hmd_rotation_y: Optional[float] = None
    hmd_rotation_z: Optional[float] = None

    @classmethod
    def capture(
        cls,
        ms_progress: float,
        cursor_position: Vector2,
        gaze_position: Vector2,
        head_movement: float,
        nose_position: Vector2,
        now: Optional[datetime] = None,
        **optional_fields: Optional[float],
    ) -> "Sample":
        """Builds a sample stamped with the current wall clock time."""
        return cls(
            timestamp=format_timestamp(now),
            ms_progress=ms_progress,
            cursor_position=cursor_position,
            gaze_position=gaze_position,
            head_movement=head_movement,
            nose_position=nose_position,
            **optional_fields,
        )

    def to_row(self, test_trial_id: int) -> dict[str, Any]:
        cursor_x, cursor_y = self.cursor_position
        gaze_x, gaze_y = self.gaze_position
        nose_x, nose_y = self.nose_position
        return {
            "test_trial_id": test_trial_id,
            "time_stamp": self.timestamp,
            "ms_progress": self.ms_progress,
            "cursor_position_x": cursor_x,
            "cursor_position_y": cursor_y,
            "gaze_position_x": gaze_x,
            "gaze_position_y": gaze_y,
            "pupil_diameter_left": self.pupil_diameter_left,
            "pupil_diameter_right": self.pupil_diameter_right,
            "pupil_diameter_3d_left": self.pupil_diameter_3d_left,
            "pupil_diameter_3d_right": self.pupil_diameter_3d_right,
            "pupil_confidence_left": self.pupil_confidence_left,
            "pupil_confidence_right": self.pupil_confidence_right,
            "pupil_timestamp_left": self.pupil_timestamp_left,
            "pupil_timestamp_right": self.pupil_timestamp_right,
            "head_movement": self.head_movement,
            "nose_position_x": nose_x,
            "nose_position_y": nose_y,
            "hmd_position_x": self.hmd_position_x,
            "hmd_position_y": self.hmd_position_y,
            "hmd_position_z": self.hmd_position_z,
            "hmd_rotation_x": self.hmd_rotation_x,
            "hmd_rotation_y": self.hmd_rotation_y,
            "hmd_rotation_z": self.hmd_rotation_z,
        }
