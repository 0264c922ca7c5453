from .clock import format_timestamp

__all__ = ["format_timestamp"]
