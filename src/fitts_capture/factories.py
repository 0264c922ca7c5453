from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from .configs import AppSettings
from .sinks import CSVSink, ParquetSink, RowSink, TABLE_SCHEMAS

def create_session_sinks(
    settings: AppSettings,
    participant_dir: Path
) -> Dict[str, List[RowSink]]:
    """
    Creates fresh sink instances for every table of a new recording session.
    """
    stamp = f"{datetime.now(timezone.utc):%Y%m%d_%H%M%S}"
    sinks: Dict[str, List[RowSink]] = {}

    for table, schema in TABLE_SCHEMAS.items():
        table_sinks: List[RowSink] = []

        # CSV
        if settings.csv.enabled:
            table_sinks.append(
                CSVSink(table, schema, participant_dir / f"{table}_{stamp}.csv")
            )

        # Parquet
        if settings.parquet.enabled:
            table_sinks.append(
                ParquetSink(
                    table,
                    schema,
                    output_path=participant_dir / f"{table}_{stamp}.parquet",
                    max_buffer_size=settings.parquet.max_buffer_size,
                )
            )

        sinks[table] = table_sinks

    return sinks
