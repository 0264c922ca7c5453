from .base import SampleSource
from .simulated import SimulatedSource

__all__ = ["SampleSource", "SimulatedSource"]
