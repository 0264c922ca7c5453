import math
from typing import List, Tuple

Vector2 = Tuple[float, float]

ORIGIN: Vector2 = (0.0, 0.0)

# Targets start spawning straight up from the ring centre.
SPAWN_ANGLE_OFFSET_DEG = 90.0


def add(a: Vector2, b: Vector2) -> Vector2:
    return (a[0] + b[0], a[1] + b[1])


def distance(a: Vector2, b: Vector2) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def magnitude(v: Vector2) -> float:
    return math.hypot(v[0], v[1])


def ring_position(radius: float, angle_deg: float, center: Vector2 = ORIGIN) -> Vector2:
    """Point on a circle of `radius` around `center`, angle counter-clockwise from +x."""
    rad = math.radians(angle_deg)
    return (center[0] + radius * math.cos(rad), center[1] + radius * math.sin(rad))


def alternating_ring_angles(count: int) -> List[float]:
    """
    Target angles in the ISO 9241-9 multi-directional order.

    Consecutive targets sit on roughly opposite sides of the ring, so every
    movement crosses the full amplitude:

        even i -> (i // 2) * step
        odd i  -> ((count + 1) // 2 + i // 2) * step
    """
    if count <= 0:
        raise ValueError("count must be a positive integer.")

    step = 360.0 / count
    angles = []
    for i in range(count):
        if i % 2 == 0:
            angles.append((i // 2) * step)
        else:
            angles.append(((count + 1) // 2 + i // 2) * step)
    return angles
