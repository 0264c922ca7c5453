from .recorder import SessionRecorder
from .runner import BlockRunner, build_sequences

__all__ = ["BlockRunner", "SessionRecorder", "build_sequences"]
