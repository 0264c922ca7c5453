"""
Closed-form Fitts' Law statistics.

All functions are pure and operate on fully collected sequences. Intermediate
values are Python floats (double precision); callers that expose results
externally round them with `to_single`.
"""

import math
import statistics
import struct
from typing import Iterable, List, Sequence

from .errors import DegenerateGeometryError, InsufficientDataError
from .geometry import Vector2, distance, magnitude

# sqrt(2 * pi * e): the effective width covers ~96% of a normal endpoint spread.
SQRT_2_PI_E = 4.132731354

# Lengths below this fraction of the geometry's scale are round-off, not data.
RELATIVE_TOLERANCE = 1e-9


def to_single(value: float) -> float:
    """Round a double to the nearest IEEE-754 single precision value."""
    return struct.unpack("f", struct.pack("f", value))[0]


def mean(values: Iterable[float]) -> float:
    data = [float(v) for v in values]
    if not data:
        raise InsufficientDataError("mean requires at least one value.")
    return math.fsum(data) / len(data)


def standard_deviation(values: Iterable[float]) -> float:
    """Sample standard deviation with the unbiased (n - 1) divisor."""
    data = [float(v) for v in values]
    if len(data) < 2:
        raise InsufficientDataError(
            f"standard deviation requires at least two values, got {len(data)}."
        )
    # Exact summation, so a constant sequence yields exactly 0.
    return statistics.stdev(data)


def hypotenuse(a: float, b: float) -> float:
    return math.sqrt(a ** 2 + b ** 2)


def delta_magnitudes(deltas: Iterable[Vector2]) -> List[float]:
    """Magnitude of each 2D center error."""
    return [magnitude(d) for d in deltas]


def effective_width(deviations: Sequence[float]) -> float:
    return SQRT_2_PI_E * standard_deviation(deviations)


def index_of_difficulty(amplitude: float, width: float) -> float:
    """Shannon formulation, in bits."""
    if width <= 0:
        raise DegenerateGeometryError(f"width must be positive, got {width}.")
    return math.log2(amplitude / width + 1)


def effective_index_of_difficulty(mean_amplitude: float, effective_width: float) -> float:
    if effective_width <= RELATIVE_TOLERANCE * max(abs(mean_amplitude), 1.0):
        raise DegenerateGeometryError(
            "effective width is negligible; endpoint deviations have no spread."
        )
    return math.log2(mean_amplitude / effective_width + 1)


def throughput(
    amplitudes: Sequence[float],
    deviations: Sequence[float],
    times: Sequence[float],
) -> float:
    """
    Throughput in bits per second.

    Args:
        amplitudes: Movement amplitude of each trial.
        deviations: Endpoint deviation of each trial.
        times: Movement time of each trial in milliseconds.
    """
    ide = effective_index_of_difficulty(mean(amplitudes), effective_width(deviations))
    mt_mean_s = mean(times) / 1000.0
    if mt_mean_s <= 0:
        raise DegenerateGeometryError("mean movement time must be positive.")
    return ide / mt_mean_s


def projected_offset(origin: Vector2, target: Vector2, selection: Vector2) -> float:
    """
    Signed deviation of `selection` along the origin -> target line.

    Uses the law of cosines on the three pairwise distances. Positive values
    overshoot the target, negative values undershoot it.
    """
    a = distance(origin, target)
    scale = max(magnitude(origin), magnitude(target), 1.0)
    if a <= RELATIVE_TOLERANCE * scale:
        raise DegenerateGeometryError("origin and target coincide; the movement line has no direction.")
    b = distance(target, selection)
    c = distance(origin, selection)
    return (c * c - b * b - a * a) / (2.0 * a)


def effective_amplitude(origin: Vector2, target: Vector2, selection: Vector2) -> float:
    """Distance actually travelled along the movement axis."""
    return distance(origin, target) + projected_offset(origin, target, selection)
