from datetime import datetime
from typing import Optional


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Wall clock stamp in the `MM/dd/yyyy hh:mm:ss.fff AM` layout used by the
    data_logs table.
    """
    moment = moment or datetime.now()
    millis = moment.microsecond // 1_000
    return f"{moment:%m/%d/%Y %I:%M:%S}.{millis:03d} {moment:%p}"
