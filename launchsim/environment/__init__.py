"""Environment models for the planar launch simulation.

Provides the troposphere atmosphere and point-mass gravity used by
the force model.

Example:
    >>> from launchsim.environment import Atmosphere, Gravity
    >>>
    >>> atm = Atmosphere()
    >>> rho = atm.density(10000.0)  # kg/m^3
    >>>
    >>> grav = Gravity()
    >>> g = grav.acceleration(position)  # m/s^2
"""

from launchsim.environment.atmosphere import (
    Atmosphere,
    AtmosphereResult,
    density_at_altitude,
    get_atmosphere,
)
from launchsim.environment.gravity import (
    EARTH_RADIUS,
    GM_EARTH,
    Gravity,
)

__all__ = [
    # Atmosphere
    "Atmosphere",
    "AtmosphereResult",
    "density_at_altitude",
    "get_atmosphere",
    # Gravity
    "EARTH_RADIUS",
    "GM_EARTH",
    "Gravity",
]
