from pathlib import Path
from importlib.metadata import version
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, PositiveFloat, PositiveInt, NonNegativeInt, Field, model_validator

from .utils import LoggingConfig


class ExperimentSettings(BaseModel):
    """
    Layout of one block of sequences.
    Amplitudes and widths are in canvas units.
    """
    amplitudes: list[PositiveInt] = Field(default=[256, 512], description="Ring diameters to test.")
    widths: list[PositiveFloat] = Field(default=[32.0, 64.0], description="Target widths to test.")
    trials_per_sequence: int = Field(9, ge=2, description="Targets per ring. Odd counts give the ISO alternating order.")
    sequence_repeats: PositiveInt = Field(1, description="How often each amplitude/width pair is run.")
    deviation_mode: Literal["projected", "magnitude"] = Field(
        "projected",
        description="How endpoint deviations feed the effective width.",
    )

    @model_validator(mode='after')
    def validate_conditions(self) -> "ExperimentSettings":
        if not self.amplitudes or not self.widths:
            raise ValueError('At least one amplitude and one width are required.')
        return self

class SimulationSettings(BaseModel):
    """Parameters of the simulated participant used without a host application."""
    frame_rate_hz: PositiveInt = 90
    intercept_ms: float = Field(150.0, ge=0, description="Fitts' Law intercept a in MT = a + b * ID.")
    slope_ms_per_bit: PositiveFloat = Field(180.0, description="Fitts' Law slope b in MT = a + b * ID.")
    movement_time_noise_ms: float = Field(40.0, ge=0)
    endpoint_spread: float = Field(0.25, ge=0, description="Endpoint standard deviation as a fraction of target width.")
    miss_probability: float = Field(0.04, ge=0, le=1)
    gaze_lead_ms: float = Field(80.0, ge=0, description="How far gaze runs ahead of the cursor.")
    pupil_labs: bool = Field(False, description="Also emit the Pupil Labs pupil metrics.")
    seed: int | None = None

class CSVSinkConfig(BaseModel):
    enabled: bool = True

class ParquetSinkConfig(BaseModel):
    enabled: bool = True
    max_buffer_size: PositiveInt = 90 * 5 # Flushes every 5 seconds of samples at 90 Hz

class AppSettings(BaseSettings):
    """
    Main application settings, loaded from environment variables and defaults.
    """
    # Data
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / "recordings", description="Path to directory where local data is stored.")
    block_id: NonNegativeInt = 1

    # Experiment
    experiment: ExperimentSettings = Field(default_factory=ExperimentSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    # Sinks
    csv: CSVSinkConfig = Field(default_factory=CSVSinkConfig)
    parquet: ParquetSinkConfig = Field(default_factory=ParquetSinkConfig)

    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="FITTS__",
        env_file=".env",
        env_nested_delimiter='__',
        case_sensitive=False
    )

def package_version() -> str:
    return version("fitts-capture")
