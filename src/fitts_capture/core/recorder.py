import logging
from typing import Dict, List, Mapping

from ..models import Sequence
from ..sinks import DATA_LOGS, RowSink, TEST_SEQUENCES, TEST_TRIALS

logger = logging.getLogger(__name__)


class SessionRecorder:
    """
    Serializes finished sequences and routes their rows to the table sinks.

    Row ids are assigned here, auto-incrementing per table from 1, the way a
    database primary key would be.
    """

    def __init__(self, sinks: Mapping[str, List[RowSink]], test_block_id: int):
        self.sinks = sinks
        self.test_block_id = test_block_id

        self._next_ids: Dict[str, int] = {DATA_LOGS: 1, TEST_TRIALS: 1, TEST_SEQUENCES: 1}
        self._opened = False

    def open(self) -> None:
        if self._opened:
            return
        opened: List[RowSink] = []
        try:
            for table_sinks in self.sinks.values():
                for sink in table_sinks:
                    sink.open()
                    opened.append(sink)
        except Exception:
            logger.exception("Failed to open session sinks; closing the %d already opened.", len(opened))
            for sink in opened:
                sink.close()
            raise
        self._opened = True

    def close(self) -> None:
        if not self._opened:
            return
        for table_sinks in self.sinks.values():
            for sink in table_sinks:
                sink.close()
        self._opened = False
        logger.info(
            "Recorder closed. Sequences: %d, trials: %d, samples: %d",
            self._next_ids[TEST_SEQUENCES] - 1,
            self._next_ids[TEST_TRIALS] - 1,
            self._next_ids[DATA_LOGS] - 1,
        )

    def __enter__(self) -> "SessionRecorder":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _take_id(self, table: str) -> int:
        row_id = self._next_ids[table]
        self._next_ids[table] += 1
        return row_id

    def _write(self, table: str, row: dict) -> None:
        for sink in self.sinks.get(table, ()):
            sink.write(row)

    def record_sequence(self, sequence: Sequence) -> int:
        """
        Writes the sequence row followed by its trial and sample rows.

        Returns:
            The id assigned to the sequence row.
        """
        if not self._opened:
            raise RuntimeError("SessionRecorder is not open.")

        sequence_id = self._take_id(TEST_SEQUENCES)
        self._write(TEST_SEQUENCES, {"test_sequence_id": sequence_id, **sequence.to_row(self.test_block_id)})

        for trial in sequence.trials:
            trial_id = self._take_id(TEST_TRIALS)
            self._write(TEST_TRIALS, {"test_trial_id": trial_id, **trial.to_row(sequence_id)})

            for sample in trial.samples:
                self._write(DATA_LOGS, {"data_log_id": self._take_id(DATA_LOGS), **sample.to_row(trial_id)})

        logger.debug("Recorded sequence %d as id %d.", sequence.sequence_number, sequence_id)
        return sequence_id
