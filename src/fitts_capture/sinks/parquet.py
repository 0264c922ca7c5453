import logging
from pathlib import Path
from typing import Optional

import pyarrow as pa
import pyarrow.parquet as pq

from .base import Row, RowSink

logger = logging.getLogger(__name__)


class ParquetSink(RowSink):
    """
    Buffered Parquet sink for the rows of one table.
    Flushes to disk based on buffer size and on close.
    """

    def __init__(
        self,
        table: str,
        schema: pa.Schema,
        output_path: Path,
        max_buffer_size: int,
    ) -> None:
        if max_buffer_size <= 0:
            raise ValueError("max_buffer_size must be a positive integer.")

        super().__init__(table, schema)
        self.output_path = output_path
        self.max_buffer_size = max_buffer_size

        # Internal state
        self._buffer: list[Row] = []
        self._writer: Optional[pq.ParquetWriter] = None
        self._total_rows = 0

        logger.info(f"ParquetSink initialized. Writing '{table}' to: {self.output_path}")

    def open(self) -> None:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        if self._writer is None:
            self._writer = pq.ParquetWriter(
                self.output_path,
                schema=self.schema,
                compression="zstd",
                version="2.6",
            )

    def write(self, row: Row) -> None:
        if self._writer is None:
            raise RuntimeError(f"ParquetSink for '{self.table}' is not open.")
        self._check_columns(row)
        self._buffer.append(row)
        if len(self._buffer) >= self.max_buffer_size:
            self._flush()

    def _flush(self) -> None:
        """Columnar conversion of the buffered rows and a single row-group write."""
        if not self._buffer:
            return

        # Pre-allocate flat columns
        columns: dict[str, list] = {name: [None] * len(self._buffer) for name in self.schema.names}
        for i, row in enumerate(self._buffer):
            for name, value in row.items():
                columns[name][i] = value

        try:
            table = pa.Table.from_arrays(
                [pa.array(columns[field.name], type=field.type) for field in self.schema],
                schema=self.schema,
            )
            self._writer.write_table(table)
        except (pa.ArrowException, OSError):
            logger.exception(f"Parquet flush failed for '{self.table}' ({len(self._buffer)} rows).")
            raise

        self._total_rows += len(self._buffer)
        self._buffer.clear()

    def close(self) -> None:
        if self._writer:
            self._flush()
            self._writer.close()
            self._writer = None
            logger.info(f"Parquet closed for '{self.table}'. Written: {self._total_rows:,}")
