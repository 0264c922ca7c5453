import os
import unittest
from unittest import mock

from pydantic import ValidationError

from fitts_capture.configs import AppSettings, ExperimentSettings


class TestAppSettings(unittest.TestCase):
    def test_defaults(self):
        settings = AppSettings()
        self.assertEqual(settings.experiment.deviation_mode, "projected")
        self.assertGreaterEqual(settings.experiment.trials_per_sequence, 2)
        self.assertTrue(settings.csv.enabled)
        self.assertTrue(settings.parquet.enabled)
        self.assertEqual(settings.logging.level, "INFO")

    def test_nested_environment_overrides(self):
        env = {
            "FITTS__EXPERIMENT__TRIALS_PER_SEQUENCE": "11",
            "FITTS__EXPERIMENT__AMPLITUDES": "[128, 384]",
            "FITTS__SIMULATION__SEED": "42",
            "FITTS__LOGGING__LEVEL": "DEBUG",
        }
        with mock.patch.dict(os.environ, env):
            settings = AppSettings()
        self.assertEqual(settings.experiment.trials_per_sequence, 11)
        self.assertEqual(settings.experiment.amplitudes, [128, 384])
        self.assertEqual(settings.simulation.seed, 42)
        self.assertEqual(settings.logging.level, "DEBUG")

    def test_rejects_single_trial_sequences(self):
        with self.assertRaises(ValidationError):
            ExperimentSettings(trials_per_sequence=1)

    def test_rejects_non_positive_conditions(self):
        with self.assertRaises(ValidationError):
            ExperimentSettings(widths=[0.0])
        with self.assertRaises(ValidationError):
            ExperimentSettings(amplitudes=[])

    def test_rejects_unknown_deviation_mode(self):
        with self.assertRaises(ValidationError):
            ExperimentSettings(deviation_mode="euclidean")


if __name__ == "__main__":
    unittest.main()
