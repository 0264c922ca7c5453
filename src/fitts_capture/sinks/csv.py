# src/fitts_capture/sinks/csv.py

import csv
import logging
from pathlib import Path
from typing import TextIO

import pyarrow as pa

from .base import Row, RowSink

logger = logging.getLogger(__name__)


class CSVSink(RowSink):
    """
    A sink that writes the rows of one table to a CSV file.

    The header is the table schema's column order. Null values are written
    as empty cells so optional telemetry stays distinguishable from zero.
    """

    def __init__(self, table: str, schema: pa.Schema, output_filepath: Path):
        """
        Initializes the CSVSink.

        Args:
            table: Name of the table the rows belong to.
            schema: Column layout of the table.
            output_filepath: The path to the CSV file to be created.
        """
        super().__init__(table, schema)
        self.output_filepath = output_filepath
        self._csv_file: TextIO | None = None
        self._csv_writer = None
        self._rows_written = 0

    def open(self) -> None:
        """Opens the specified CSV file and writes the header row."""
        try:
            self.output_filepath.parent.mkdir(parents=True, exist_ok=True)
            # Use 'w' mode to create a new file, overwriting if it exists.
            self._csv_file = self.output_filepath.open("w", newline="", encoding="utf-8")
            self._csv_writer = csv.writer(self._csv_file)
            self._csv_writer.writerow(self.schema.names)
            logger.info(f"Opened CSV file for writing: {self.output_filepath}")
        except IOError:
            logger.exception(f"Failed to open file for writing: {self.output_filepath}")
            raise

    def write(self, row: Row) -> None:
        if self._csv_writer is None:
            raise RuntimeError(f"CSVSink for '{self.table}' is not open.")
        self._check_columns(row)
        self._csv_writer.writerow([
            "" if row.get(name) is None else row[name]
            for name in self.schema.names
        ])
        self._rows_written += 1

    def close(self) -> None:
        """Closes the CSV file if it is open."""
        if self._csv_file:
            self._csv_file.close()
            logger.info(f"Closed CSV file: {self.output_filepath} ({self._rows_written:,} rows)")
            self._csv_file = None
            self._csv_writer = None
