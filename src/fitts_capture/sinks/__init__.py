from .base import Row, RowSink
from .csv import CSVSink
from .parquet import ParquetSink
from .schemas import DATA_LOGS, TABLE_SCHEMAS, TEST_SEQUENCES, TEST_TRIALS

__all__ = [
    "CSVSink",
    "DATA_LOGS",
    "ParquetSink",
    "Row",
    "RowSink",
    "TABLE_SCHEMAS",
    "TEST_SEQUENCES",
    "TEST_TRIALS",
]
