from abc import ABC, abstractmethod
from typing import Any, Mapping

import pyarrow as pa

Row = Mapping[str, Any]


class RowSink(ABC):
    """
    Abstract Base Class for all row sinks.

    A RowSink receives flat rows for exactly one table and persists them to
    a final destination. Rows are mappings whose keys are the column names of
    the table schema; missing optional columns are stored as nulls.
    """

    def __init__(self, table: str, schema: pa.Schema):
        self.table = table
        self.schema = schema

    @abstractmethod
    def open(self) -> None:
        """Acquires the underlying resource. Must be called before `write`."""
        ...

    @abstractmethod
    def write(self, row: Row) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        """Flushes pending rows and releases the underlying resource."""
        ...

    def _check_columns(self, row: Row) -> None:
        unknown = set(row) - set(self.schema.names)
        if unknown:
            raise KeyError(f"Unknown columns for table '{self.table}': {sorted(unknown)}")

    def __enter__(self) -> "RowSink":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
