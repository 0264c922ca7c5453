from .app import (
    AppSettings,
    CSVSinkConfig,
    ExperimentSettings,
    ParquetSinkConfig,
    SimulationSettings,
    package_version,
)
from .utils import LoggingConfig

__all__ = [
    "AppSettings",
    "CSVSinkConfig",
    "ExperimentSettings",
    "LoggingConfig",
    "ParquetSinkConfig",
    "SimulationSettings",
    "package_version",
]
