import logging
from typing import List

from ..acquisition import SampleSource
from ..configs import ExperimentSettings
from ..errors import FittsError
from ..models import Sequence
from .recorder import SessionRecorder

logger = logging.getLogger(__name__)


def build_sequences(settings: ExperimentSettings) -> List[Sequence]:
    """One sequence per amplitude/width pair, repeated `sequence_repeats` times."""
    sequences = []
    for repeat in range(settings.sequence_repeats):
        for amplitude in settings.amplitudes:
            for width in settings.widths:
                sequences.append(Sequence(
                    sequence_number=len(sequences),
                    target_amplitude=amplitude,
                    target_width=width,
                    number_of_trials=settings.trials_per_sequence,
                    sequence_of_repeats=repeat,
                ))
    return sequences


class BlockRunner:
    """
    Orchestrates one block: Source -> Sequence statistics -> Recorder.
    Created fresh for every block.
    """
    def __init__(self, source: SampleSource, recorder: SessionRecorder, settings: ExperimentSettings):
        self.source = source
        self.recorder = recorder
        self.settings = settings

    def run(self) -> List[Sequence]:
        sequences = build_sequences(self.settings)
        logger.info(f"Starting block with {len(sequences)} sequences...")

        for sequence in sequences:
            self.run_sequence(sequence)

        logger.info("Block finished.")
        return sequences

    def run_sequence(self, sequence: Sequence) -> Sequence:
        sequence.start()
        for index in range(len(sequence.trials)):
            self.source.run_trial(sequence, index)

        try:
            sequence.compute_statistics(self.settings.deviation_mode)
        except FittsError as e:
            # The sequence is still recorded; its effective metrics stay null.
            logger.warning("Sequence %d has no valid statistics: %s", sequence.sequence_number, e)

        self.recorder.record_sequence(sequence)
        return sequence
