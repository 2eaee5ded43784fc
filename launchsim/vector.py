"""Planar vector primitives shared by the force, torque and outcome models.

All vectors are numpy arrays of shape (2,) in the world frame:
origin at the launch pad, +x downrange, +y up.

Every place that derives a direction from a vector goes through
``safe_normalize`` so the divide-by-zero thresholds stay in one spot.
"""

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

# =============================================================================
# Thresholds
# =============================================================================

# Below this magnitude a force or velocity has no usable direction
EPSILON: float = 1e-5

# Below this |dx| the body axis is treated as vertical
ANGLE_EPSILON: float = 1e-8

# Squared-cosine band inside which two vectors count as parallel
PARALLEL_TOLERANCE: float = 1e-5


# =============================================================================
# Primitives
# =============================================================================


@beartype
def magnitude(v: NDArray[np.float64]) -> float:
    """Euclidean length of a 2-D vector."""
    return float(np.hypot(v[0], v[1]))


@beartype
def safe_normalize(
    v: NDArray[np.float64],
    eps: float = EPSILON,
) -> NDArray[np.float64]:
    """Unit vector along ``v``, or the zero vector when ``|v| <= eps``."""
    norm = magnitude(v)
    if norm <= eps:
        return np.zeros(2)
    return v / norm


@beartype
def projected_magnitude(
    v: NDArray[np.float64],
    direction: NDArray[np.float64],
    eps: float = EPSILON,
) -> float:
    """Magnitude of ``v`` projected onto the normal of ``direction``.

    This is |v| * |sin(angle between v and direction)|, the part of a force
    that can produce torque about a point on the ``direction`` axis.

    Returns 0.0 when either vector is degenerate or the two are parallel
    to within ``PARALLEL_TOLERANCE``.

    Args:
        v: Vector to project [any units]
        direction: Reference direction (need not be unit length)
        eps: Magnitude below which either vector is treated as zero

    Returns:
        Non-negative perpendicular magnitude, same units as ``v``
    """
    v_mag = magnitude(v)
    d_mag = magnitude(direction)
    if v_mag <= eps or d_mag <= eps:
        return 0.0

    cos_sq = (float(np.dot(v, direction)) / (v_mag * d_mag)) ** 2
    if abs(cos_sq - 1.0) < PARALLEL_TOLERANCE:
        return 0.0
    return v_mag * float(np.sqrt(abs(1.0 - cos_sq)))


@beartype
def left_normal(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rotate ``v`` by +90 degrees (counter-clockwise)."""
    return np.array([-v[1], v[0]])


@beartype
def unit_vector(angle: float) -> NDArray[np.float64]:
    """Unit vector at ``angle`` radians from +x."""
    return np.array([np.cos(angle), np.sin(angle)])
