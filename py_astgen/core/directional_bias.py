"""
Acceptance factors for queueing neighbour pixels during growth.

A neighbour is queued when a uniform draw in [0, 1) is below the factor
returned here, so any factor above 1 means "always accept". With an axis
the factor depends on how well the parent pixel's direction from the
canvas centre lines up with that axis, which stretches the silhouette
along it.
"""

import math
from typing import Callable, Optional, Tuple

Vector = Tuple[float, float]
BiasFunction = Callable[[Vector, Vector], float]

UNCONDITIONAL_ACCEPT = 1.1
CENTER_EPSILON = 0.001
MIN_ACCEPTANCE = 0.45


def dot(v1: Vector, v2: Vector) -> float:
    return v1[0] * v2[0] + v1[1] * v2[1]


def magnitude(v: Vector) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: Vector) -> Vector:
    """Scale a vector to unit length."""
    if not (math.isfinite(v[0]) and math.isfinite(v[1])):
        raise ValueError(f"Cannot normalize a non-finite vector {v}")
    mag = magnitude(v)
    if mag == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    if not math.isfinite(mag):
        raise ValueError(f"Vector {v} is too long to normalize")
    return (v[0] / mag, v[1] / mag)


def isotropic_bias(radial: Vector, axis: Vector) -> float:
    """Bias used when no growth axis is given."""
    return UNCONDITIONAL_ACCEPT


def axial_bias(radial: Vector, axis: Vector) -> float:
    """
    Acceptance factor for growth along a (unit) axis.

    Args:
        radial: Vector from canvas centre to the parent pixel
        axis: Pre-normalized growth axis

    Returns:
        UNCONDITIONAL_ACCEPT at the centre, otherwise |cos| of the angle
        between radial and axis, floored at MIN_ACCEPTANCE
    """
    if magnitude(radial) < CENTER_EPSILON:
        return UNCONDITIONAL_ACCEPT
    return max(abs(dot(normalize(radial), axis)), MIN_ACCEPTANCE)


def select_bias(axis: Optional[Vector]) -> Tuple[BiasFunction, Vector]:
    """
    Pick the bias function for a run.

    Returns:
        (bias function, normalized axis). Without an axis the isotropic
        function is returned together with a zero vector it ignores.
    """
    if axis is None:
        return isotropic_bias, (0.0, 0.0)
    return axial_bias, normalize((float(axis[0]), float(axis[1])))
