import unittest
from datetime import datetime

from fitts_capture.acquisition import SampleSource, SimulatedSource
from fitts_capture.configs import ExperimentSettings, SimulationSettings
from fitts_capture.core import BlockRunner, SessionRecorder, build_sequences
from fitts_capture.models import Sample, Sequence, Trial
from fitts_capture.sinks import DATA_LOGS, RowSink, TABLE_SCHEMAS, TEST_SEQUENCES, TEST_TRIALS


class MemorySink(RowSink):
    def __init__(self, table):
        super().__init__(table, TABLE_SCHEMAS[table])
        self.rows = []
        self.is_open = False
        self.was_closed = False

    def open(self):
        self.is_open = True

    def write(self, row):
        self._check_columns(row)
        self.rows.append(dict(row))

    def close(self):
        self.is_open = False
        self.was_closed = True


class BrokenSink(MemorySink):
    def open(self):
        raise OSError("disk unavailable")


class PerfectSource(SampleSource):
    """Hits every target center dead on, which leaves no endpoint spread."""

    def run_trial(self, sequence: Sequence, index: int) -> Trial:
        trial = sequence.trials[index]
        trial.start()
        trial.add_sample(Sample.capture(0.0, (0.0, 0.0), (0.0, 0.0), 0.0, (0.0, 0.0)))
        trial.finalize(400.0, (0.0, 0.0))
        return trial


def memory_sinks():
    return {table: [MemorySink(table)] for table in TABLE_SCHEMAS}


class TestSimulatedSource(unittest.TestCase):
    def setUp(self):
        self.settings = SimulationSettings(seed=7)
        self.sequence = Sequence(0, 300, 30.0, 5)

    def test_trial_is_finalized_with_frame_samples(self):
        source = SimulatedSource(self.settings)
        trial = source.run_trial(self.sequence, 0, now=datetime(2024, 1, 1, 10, 0))

        self.assertTrue(trial.is_finalized)
        progress = [s.ms_progress for s in trial.samples]
        self.assertEqual(progress, sorted(progress))
        self.assertEqual(progress[0], 0.0)
        self.assertAlmostEqual(progress[-1], trial.time_to_activate)
        self.assertGreaterEqual(len(trial.samples), 2)

    def test_cursor_ends_on_selection_point(self):
        source = SimulatedSource(self.settings)
        trial = source.run_trial(self.sequence, 0)
        target = self.sequence.target_position(0)
        last = trial.samples[-1].cursor_position
        self.assertAlmostEqual(last[0], target[0] + trial.target_center_error[0])
        self.assertAlmostEqual(last[1], target[1] + trial.target_center_error[1])

    def test_seed_makes_runs_reproducible(self):
        first = SimulatedSource(self.settings).run_trial(Sequence(0, 300, 30.0, 5), 1)
        second = SimulatedSource(self.settings).run_trial(Sequence(0, 300, 30.0, 5), 1)
        self.assertEqual(first.time_to_activate, second.time_to_activate)
        self.assertEqual(first.target_center_error, second.target_center_error)

    def test_pupil_fields_only_when_enabled(self):
        plain = SimulatedSource(self.settings).run_trial(Sequence(0, 300, 30.0, 5), 0)
        self.assertIsNone(plain.samples[0].pupil_diameter_left)

        settings = SimulationSettings(seed=7, pupil_labs=True)
        pupil = SimulatedSource(settings).run_trial(Sequence(0, 300, 30.0, 5), 0)
        self.assertIsNotNone(pupil.samples[0].pupil_diameter_left)
        self.assertIsNotNone(pupil.samples[0].pupil_confidence_right)
        self.assertIsNone(pupil.samples[0].hmd_position_x)

    def test_always_missing_participant_records_errors(self):
        source = SimulatedSource(SimulationSettings(seed=1, miss_probability=1.0))
        trial = source.run_trial(self.sequence, 0)
        self.assertEqual(trial.errors, 1)


class TestBuildSequences(unittest.TestCase):
    def test_every_condition_per_repeat(self):
        settings = ExperimentSettings(amplitudes=[100, 200], widths=[10.0, 20.0, 40.0], sequence_repeats=2, trials_per_sequence=5)
        sequences = build_sequences(settings)
        self.assertEqual(len(sequences), 12)
        self.assertEqual([s.sequence_number for s in sequences], list(range(12)))
        self.assertEqual({s.sequence_of_repeats for s in sequences}, {0, 1})
        self.assertTrue(all(len(s.trials) == 5 for s in sequences))


class TestRecorderAndRunner(unittest.TestCase):
    def setUp(self):
        self.experiment = ExperimentSettings(amplitudes=[200], widths=[20.0], trials_per_sequence=5)

    def test_block_is_recorded_with_linked_ids(self):
        sinks = memory_sinks()
        source = SimulatedSource(SimulationSettings(seed=3))
        with SessionRecorder(sinks, test_block_id=4) as recorder:
            sequences = BlockRunner(source, recorder, self.experiment).run()

        sequence_rows = sinks[TEST_SEQUENCES][0].rows
        trial_rows = sinks[TEST_TRIALS][0].rows
        log_rows = sinks[DATA_LOGS][0].rows

        self.assertEqual(len(sequences), 1)
        self.assertEqual(len(sequence_rows), 1)
        self.assertEqual(sequence_rows[0]["test_sequence_id"], 1)
        self.assertEqual(sequence_rows[0]["test_block_id"], 4)
        self.assertIsNotNone(sequence_rows[0]["throughput"])
        self.assertGreater(sequence_rows[0]["throughput"], 0)

        self.assertEqual([r["test_trial_id"] for r in trial_rows], [1, 2, 3, 4, 5])
        self.assertTrue(all(r["test_sequence_id"] == 1 for r in trial_rows))

        total_samples = sum(len(t.samples) for t in sequences[0].trials)
        self.assertEqual([r["data_log_id"] for r in log_rows], list(range(1, total_samples + 1)))
        self.assertEqual(log_rows[0]["test_trial_id"], 1)
        self.assertEqual(log_rows[-1]["test_trial_id"], 5)

        self.assertFalse(any(s.is_open for table_sinks in sinks.values() for s in table_sinks))

    def test_degenerate_sequence_is_logged_and_recorded(self):
        sinks = memory_sinks()
        with SessionRecorder(sinks, test_block_id=1) as recorder:
            with self.assertLogs("fitts_capture.core.runner", level="WARNING") as logs:
                BlockRunner(PerfectSource(), recorder, self.experiment).run()

        self.assertIn("no valid statistics", logs.output[0])
        row = sinks[TEST_SEQUENCES][0].rows[0]
        self.assertIsNone(row["throughput"])
        self.assertIsNone(row["effective_index_of_difficulty"])
        self.assertEqual(row["movement_time"], 400.0)

    def test_each_degenerate_sequence_is_named(self):
        experiment = ExperimentSettings(amplitudes=[200], widths=[20.0, 40.0, 80.0], trials_per_sequence=5)
        with SessionRecorder(memory_sinks(), test_block_id=1) as recorder:
            with self.assertLogs("fitts_capture.core.runner", level="WARNING") as logs:
                BlockRunner(PerfectSource(), recorder, experiment).run()

        warnings = [line for line in logs.output if "no valid statistics" in line]
        self.assertEqual(len(warnings), 3)
        for number, line in enumerate(warnings):
            self.assertIn(f"Sequence {number} ", line)

    def test_failed_open_closes_already_opened_sinks(self):
        sinks = memory_sinks()
        sinks[TEST_TRIALS] = [BrokenSink(TEST_TRIALS)]
        recorder = SessionRecorder(sinks, test_block_id=1)

        with self.assertRaises(OSError):
            with recorder:
                pass

        self.assertTrue(sinks[DATA_LOGS][0].was_closed)
        self.assertFalse(sinks[TEST_SEQUENCES][0].was_closed)
        self.assertFalse(any(s.is_open for table_sinks in sinks.values() for s in table_sinks))

    def test_recorder_must_be_open(self):
        recorder = SessionRecorder(memory_sinks(), test_block_id=1)
        with self.assertRaises(RuntimeError):
            recorder.record_sequence(Sequence(0, 200, 20.0, 3))


if __name__ == "__main__":
    unittest.main()
