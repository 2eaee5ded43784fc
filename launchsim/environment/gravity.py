"""Point-mass gravity in the planar launch frame.

The launch frame puts the pad at the origin with +y up, so Earth's
center sits at (0, -EARTH_RADIUS). Gravity always points from the
body toward that center with magnitude GM / r^2.

Example:
    >>> from launchsim.environment import Gravity
    >>>
    >>> grav = Gravity()
    >>> g = grav.acceleration(np.array([0.0, 10000.0]))  # [gx, gy] m/s^2
    >>> f = grav.force(np.array([0.0, 10000.0]), mass=25000.0)  # [N]
"""

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

GM_EARTH: float = 3.98588e14  # Gravitational parameter [m^3/s^2]
EARTH_RADIUS: float = 6371000.0  # Mean radius [m]


# =============================================================================
# Numba Kernel
# =============================================================================


@njit(cache=True, fastmath=True)
def _point_mass_gravity(
    x: float, y: float,
    gm: float = GM_EARTH,
    radius: float = EARTH_RADIUS,
) -> tuple[float, float]:
    """Numba-optimized planar point-mass gravity.

    g = -gm/r^2 * r_hat, with r measured from (0, -radius).
    """
    dy = y + radius
    r_sq = x*x + dy*dy
    r = np.sqrt(r_sq)

    if r < 1e3:  # Avoid singularity near center
        r = 1e3
        r_sq = r * r

    g_over_r = gm / (r_sq * r)

    return (-g_over_r * x, -g_over_r * dy)


# =============================================================================
# Gravity Model
# =============================================================================


@beartype
class Gravity:
    """Spherical Earth gravity for the planar launch frame.

    Example:
        >>> grav = Gravity()
        >>> grav.altitude(np.array([0.0, 100.0]))
        100.0
    """

    def __init__(
        self,
        gm: float = GM_EARTH,
        radius: float = EARTH_RADIUS,
    ) -> None:
        """Set up the central body.

        Args:
            gm: Gravitational parameter [m^3/s^2]
            radius: Earth radius, also the pad's distance from center [m]
        """
        if gm <= 0:
            raise ValueError(f"gm must be positive, got {gm}")
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        self.gm = gm
        self.radius = radius

    @property
    def center(self) -> NDArray[np.float64]:
        """Earth center in the launch frame [m]."""
        return np.array([0.0, -self.radius])

    @beartype
    def distance_to_center(self, position: NDArray[np.float64]) -> float:
        """Distance from Earth center to position [m]."""
        return float(np.hypot(position[0], position[1] + self.radius))

    @beartype
    def altitude(self, position: NDArray[np.float64]) -> float:
        """Height of position above the reference sphere [m].

        Negative below the surface, which the outcome checks rely on.
        """
        return self.distance_to_center(position) - self.radius

    @beartype
    def acceleration(
        self,
        position: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Acceleration toward Earth's center.

        Args:
            position: Position in the launch frame [x, y] [m]

        Returns:
            Acceleration vector [gx, gy] [m/s^2]
        """
        gx, gy = _point_mass_gravity(
            float(position[0]), float(position[1]), self.gm, self.radius
        )
        return np.array([gx, gy])

    @beartype
    def force(
        self,
        position: NDArray[np.float64],
        mass: float,
    ) -> NDArray[np.float64]:
        """Gravitational force on a body of given mass [N]."""
        return mass * self.acceleration(position)

    @beartype
    def magnitude(self, position: NDArray[np.float64]) -> float:
        """Get gravity magnitude at position [m/s^2]."""
        g = self.acceleration(position)
        return float(np.hypot(g[0], g[1]))
