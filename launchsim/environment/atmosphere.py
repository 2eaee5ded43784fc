"""Troposphere approximation of Earth's atmosphere.

Gives temperature, pressure and density as functions of altitude
using a single linear lapse-rate layer extended up to 43 km. Outside
the band 0 < h < 43 km every property is reported as zero, which the
drag model treats as vacuum.

    T   = T0 - L * h                              [K]
    p   = P0 * (1 - L * h / T0) ** (g0 * M / (R * L))   [kPa]
    rho = 1000 * p * M / (T * R)                  [kg/m^3]

Reference: International Standard Atmosphere, troposphere layer.

Example:
    >>> from launchsim.environment import Atmosphere
    >>>
    >>> atm = Atmosphere()
    >>> result = atm.at_altitude(10000.0)
    >>> print(f"Density: {result.density:.4f} kg/m^3")
    >>> print(f"Pressure: {result.pressure:.2f} kPa")
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

# Sea level conditions
T0 = 288.15  # Temperature [K]
P0 = 101.325  # Pressure [kPa]

# Physical constants
LAPSE_RATE = 0.0065  # Temperature lapse rate [K/m]
G0 = 9.80665  # Standard gravity [m/s^2]
M_AIR = 0.0289644  # Molar mass of dry air [kg/mol]
R_UNIVERSAL = 8.31447  # Universal gas constant [J/(mol·K)]

# Model validity band
CEILING = 43000.0  # Altitude above which air is neglected [m]


# =============================================================================
# Numba-Optimized Core
# =============================================================================


@njit(cache=True, fastmath=True)
def _troposphere(altitude: float, ceiling: float = CEILING) -> tuple[float, float, float]:
    """Numba-optimized (temperature, pressure, density) at altitude."""
    if altitude <= 0.0 or altitude >= ceiling:
        return (0.0, 0.0, 0.0)

    temperature = T0 - LAPSE_RATE * altitude
    exponent = G0 * M_AIR / (R_UNIVERSAL * LAPSE_RATE)
    pressure = P0 * (1.0 - LAPSE_RATE * altitude / T0) ** exponent
    density = 1000.0 * pressure * M_AIR / (temperature * R_UNIVERSAL)

    return (temperature, pressure, density)


# =============================================================================
# Results
# =============================================================================


@beartype
@dataclass(frozen=True)
class AtmosphereResult:
    """Temperature, pressure and density at one altitude.

    Attributes:
        altitude: Altitude above the reference sphere [m]
        temperature: Static temperature [K] (0 outside the model band)
        pressure: Static pressure [kPa] (0 outside the model band)
        density: Air density [kg/m^3] (0 outside the model band)
    """
    altitude: float
    temperature: float
    pressure: float
    density: float

    @property
    def is_vacuum(self) -> bool:
        """True when the drag model sees no air at this altitude."""
        return self.density == 0.0


# =============================================================================
# Atmosphere Model
# =============================================================================


@beartype
class Atmosphere:
    """Single-layer troposphere model.

    Example:
        >>> atm = Atmosphere()
        >>> rho = atm.density(5000.0)
        >>> atm.density(50000.0)
        0.0
    """

    def __init__(self, ceiling: float = CEILING) -> None:
        """Initialize atmosphere model.

        Args:
            ceiling: Altitude at and above which density is zero [m]
        """
        if ceiling <= 0:
            raise ValueError(f"ceiling must be positive, got {ceiling}")
        self.ceiling = ceiling

    @beartype
    def temperature(self, altitude: float) -> float:
        """Get temperature at altitude [K]."""
        return float(_troposphere(altitude, self.ceiling)[0])

    @beartype
    def pressure(self, altitude: float) -> float:
        """Get pressure at altitude [kPa]."""
        return float(_troposphere(altitude, self.ceiling)[1])

    @beartype
    def density(self, altitude: float) -> float:
        """Get density at altitude [kg/m^3]."""
        return float(_troposphere(altitude, self.ceiling)[2])

    @beartype
    def at_altitude(self, altitude: float) -> AtmosphereResult:
        """Evaluate the troposphere once at ``altitude``.

        Args:
            altitude: Altitude above the reference sphere [m]

        Returns:
            AtmosphereResult, zeroed outside the model band
        """
        T, p, rho = _troposphere(altitude, self.ceiling)
        return AtmosphereResult(
            altitude=altitude,
            temperature=float(T),
            pressure=float(p),
            density=float(rho),
        )

    @beartype
    def profile(
        self,
        altitudes: NDArray[np.float64] | list[float],
    ) -> dict[str, NDArray[np.float64]]:
        """Evaluate the model over an array of altitudes.

        Args:
            altitudes: Array of altitudes [m]

        Returns:
            Dictionary with arrays of altitude, temperature, pressure, density
        """
        altitudes = np.asarray(altitudes, dtype=np.float64)
        rows = np.array([_troposphere(float(h), self.ceiling) for h in altitudes])
        rows = rows.reshape(-1, 3)

        return {
            "altitude": altitudes,
            "temperature": rows[:, 0],
            "pressure": rows[:, 1],
            "density": rows[:, 2],
        }


# =============================================================================
# Module-Level Model
# =============================================================================


_default_atmosphere = Atmosphere()


@beartype
def get_atmosphere() -> Atmosphere:
    """Shared troposphere with the standard 43 km ceiling."""
    return _default_atmosphere


@beartype
def density_at_altitude(altitude: float) -> float:
    """Density from the shared troposphere [kg/m^3]."""
    return _default_atmosphere.density(altitude)
