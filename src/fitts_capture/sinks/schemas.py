from typing import Final

import pyarrow as pa

# Table names follow the experiment database.
DATA_LOGS: Final[str] = "data_logs"
TEST_TRIALS: Final[str] = "test_trials"
TEST_SEQUENCES: Final[str] = "test_sequences"

_DATA_LOGS_SCHEMA: Final[pa.Schema] = pa.schema([
    pa.field("data_log_id", pa.int64(), nullable=False),
    pa.field("test_trial_id", pa.int64(), nullable=False),
    pa.field("time_stamp", pa.string(), nullable=False),
    pa.field("ms_progress", pa.float64(), nullable=False),

    # Screen space
    pa.field("cursor_position_x", pa.float32(), nullable=False),
    pa.field("cursor_position_y", pa.float32(), nullable=False),
    pa.field("gaze_position_x", pa.float32(), nullable=False),
    pa.field("gaze_position_y", pa.float32(), nullable=False),

    # Pupil Labs only
    pa.field("pupil_diameter_left", pa.float32()),
    pa.field("pupil_diameter_right", pa.float32()),
    pa.field("pupil_diameter_3d_left", pa.float32()),
    pa.field("pupil_diameter_3d_right", pa.float32()),
    pa.field("pupil_confidence_left", pa.float32()),
    pa.field("pupil_confidence_right", pa.float32()),
    pa.field("pupil_timestamp_left", pa.float32()),
    pa.field("pupil_timestamp_right", pa.float32()),

    # Head
    pa.field("head_movement", pa.float32(), nullable=False),
    pa.field("nose_position_x", pa.float32(), nullable=False),
    pa.field("nose_position_y", pa.float32(), nullable=False),

    # HMD pose, headset setups only
    pa.field("hmd_position_x", pa.float32()),
    pa.field("hmd_position_y", pa.float32()),
    pa.field("hmd_position_z", pa.float32()),
    pa.field("hmd_rotation_x", pa.float32()),
    pa.field("hmd_rotation_y", pa.float32()),
    pa.field("hmd_rotation_z", pa.float32()),
])

_TEST_TRIALS_SCHEMA: Final[pa.Schema] = pa.schema([
    pa.field("test_trial_id", pa.int64(), nullable=False),
    pa.field("test_sequence_id", pa.int64(), nullable=False),
    pa.field("trial_number", pa.int32(), nullable=False),
    pa.field("start_time", pa.timestamp("ms")),
    pa.field("target_angle", pa.float32(), nullable=False),
    pa.field("time_to_activate", pa.float64(), nullable=False),
    pa.field("target_center_error_x", pa.float32(), nullable=False),
    pa.field("target_center_error_y", pa.float32(), nullable=False),
    pa.field("errors", pa.int32(), nullable=False),
])

_TEST_SEQUENCES_SCHEMA: Final[pa.Schema] = pa.schema([
    pa.field("test_sequence_id", pa.int64(), nullable=False),
    pa.field("sequence_number", pa.int32(), nullable=False),
    pa.field("test_block_id", pa.int64(), nullable=False),
    pa.field("start_time", pa.timestamp("ms")),
    pa.field("target_amplitude", pa.int32(), nullable=False),
    pa.field("target_width", pa.float32(), nullable=False),
    pa.field("index_of_difficulty", pa.float64(), nullable=False),

    # Null when the endpoint spread is degenerate
    pa.field("effective_amplitude", pa.float32()),
    pa.field("effective_target_width", pa.float32()),
    pa.field("effective_index_of_difficulty", pa.float32()),

    pa.field("sequence_of_repeats", pa.int32(), nullable=False),
    pa.field("errors", pa.int32(), nullable=False),
    pa.field("movement_time", pa.float32()),
    pa.field("error_rate", pa.float32()),
    pa.field("throughput", pa.float32()),
])

TABLE_SCHEMAS: Final[dict[str, pa.Schema]] = {
    DATA_LOGS: _DATA_LOGS_SCHEMA,
    TEST_TRIALS: _TEST_TRIALS_SCHEMA,
    TEST_SEQUENCES: _TEST_SEQUENCES_SCHEMA,
}
