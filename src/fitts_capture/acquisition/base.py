from abc import ABC, abstractmethod

from ..models import Sequence, Trial


class SampleSource(ABC):
    """
    Abstract Base Class for all sample producers.

    A SampleSource drives one trial of a sequence from target onset to target
    activation: it starts the trial, appends one `Sample` per rendered frame,
    records missed selections and finalizes the trial with its movement time
    and center error.
    """

    @abstractmethod
    def run_trial(self, sequence: Sequence, index: int) -> Trial:
        """
        Runs trial `index` of `sequence` to completion.

        Returns:
            The finalized trial.
        """
        raise NotImplementedError
