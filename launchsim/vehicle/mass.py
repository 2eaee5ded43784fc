"""Mass properties along the vehicle axis.

Each stage is modelled as a stack of slender sub-assemblies (rods and
point masses) lying on the body axis. Their centers of mass and pitch
inertias are combined with the parallel axis theorem, so the stack's
center of mass and moment of inertia track the propellant load.

The booster propellant is treated as a column that starts at the
booster base and shrinks with the remaining fraction: at fraction f it
is a rod of length f * L_booster holding f * m_propellant.

Example:
    >>> from launchsim.vehicle import VehicleConfig, combined_vehicle_properties
    >>>
    >>> falcon = VehicleConfig()
    >>> props = combined_vehicle_properties(falcon, fuel_fraction=0.5)
    >>> print(f"Mass: {props.mass:.0f} kg, CM at {props.cm_height:.1f} m")
"""

from dataclasses import dataclass
from functools import reduce

from beartype import beartype

from launchsim.vehicle.falcon import VehicleConfig

# =============================================================================
# Mass Properties
# =============================================================================


@beartype
@dataclass(frozen=True)
class MassProperties:
    """Mass properties of a body lying on the vehicle axis.

    Attributes:
        mass: Total mass [kg]
        cg: Center of gravity, measured up the axis from the vehicle base [m]
        inertia: Pitch moment of inertia about the CG [kg*m^2]
    """
    mass: float
    cg: float
    inertia: float = 0.0

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.inertia < 0:
            raise ValueError(f"Inertia must be non-negative, got {self.inertia}")

    @classmethod
    def from_rod(cls, mass: float, length: float, base: float = 0.0) -> "MassProperties":
        """Create a uniform slender rod starting at ``base``.

        Args:
            mass: Rod mass [kg]
            length: Rod length [m]
            base: Height of the rod's lower end above the vehicle base [m]
        """
        return cls(
            mass=mass,
            cg=base + length / 2.0,
            inertia=compute_inertia_rod(mass, length),
        )

    @classmethod
    def point(cls, mass: float, height: float) -> "MassProperties":
        """Create a point mass at ``height`` above the vehicle base."""
        return cls(mass=mass, cg=height, inertia=0.0)

    def translate_inertia(self, offset: float) -> float:
        """Translate inertia to a point ``offset`` metres along the axis.

        Uses parallel axis theorem: I_new = I_cg + m * d^2
        """
        return self.inertia + self.mass * offset * offset

    def __add__(self, other: "MassProperties") -> "MassProperties":
        """Combine two bodies into one."""
        total_mass = self.mass + other.mass
        combined_cg = (self.mass * self.cg + other.mass * other.cg) / total_mass

        combined_inertia = (
            self.translate_inertia(combined_cg - self.cg)
            + other.translate_inertia(combined_cg - other.cg)
        )

        return MassProperties(
            mass=total_mass,
            cg=combined_cg,
            inertia=combined_inertia,
        )


@beartype
def compute_inertia_rod(mass: float, length: float) -> float:
    """Pitch inertia of a uniform slender rod about its center [kg*m^2]."""
    return mass * length * length / 12.0


# =============================================================================
# Stage Properties
# =============================================================================


@beartype
@dataclass(frozen=True)
class StackProperties:
    """Mass properties of a flying configuration.

    Attributes:
        mass: Total mass [kg]
        cm_fraction: CM position along the body, 0 = bottom, 1 = top
        moment_of_inertia: Pitch inertia about the CM [kg*m^2]
        length: Physical length of the configuration [m]
    """
    mass: float
    cm_fraction: float
    moment_of_inertia: float
    length: float

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.moment_of_inertia <= 0:
            raise ValueError(
                f"Moment of inertia must be positive, got {self.moment_of_inertia}"
            )
        if self.length <= 0:
            raise ValueError(f"Length must be positive, got {self.length}")
        if not 0.0 <= self.cm_fraction <= 1.0:
            raise ValueError(f"cm_fraction must be in [0, 1], got {self.cm_fraction}")

    @property
    def cm_height(self) -> float:
        """CM height above the bottom of the configuration [m]."""
        return self.cm_fraction * self.length

    @classmethod
    def from_mass_properties(cls, body: MassProperties, length: float) -> "StackProperties":
        """Express combined mass properties relative to a body of given length."""
        return cls(
            mass=body.mass,
            cm_fraction=body.cg / length,
            moment_of_inertia=body.inertia,
            length=length,
        )


def _booster_assemblies(
    vehicle: VehicleConfig,
    fuel_fraction: float,
) -> list[MassProperties]:
    """Octaweb, booster structure and the remaining propellant column."""
    parts = [
        MassProperties.point(vehicle.octaweb_mass, 0.0),
        MassProperties.from_rod(vehicle.booster_mass, vehicle.booster_length),
    ]

    propellant = vehicle.booster_propellant_mass * fuel_fraction
    if propellant > 0:
        parts.append(
            MassProperties.from_rod(propellant, vehicle.booster_length * fuel_fraction)
        )

    return parts


@beartype
def combined_vehicle_properties(
    vehicle: VehicleConfig,
    fuel_fraction: float,
) -> StackProperties:
    """Mass properties of the full stack before separation.

    The second stage is always fully fuelled here; only the booster
    propellant is drawn down.

    Args:
        vehicle: Vehicle definition
        fuel_fraction: Booster propellant remaining (0-1)

    Returns:
        StackProperties for the combined vehicle
    """
    fuel_fraction = max(0.0, min(1.0, fuel_fraction))
    upper_base = vehicle.upper_stage_base

    parts = _booster_assemblies(vehicle, fuel_fraction)
    parts.append(
        MassProperties.from_rod(
            vehicle.upper_stage_mass + vehicle.upper_stage_propellant_mass,
            vehicle.second_stage_length,
            base=upper_base,
        )
    )
    parts.append(
        MassProperties.from_rod(
            vehicle.fairing_mass,
            vehicle.fairing_length,
            base=upper_base + vehicle.second_stage_length,
        )
    )

    total = reduce(lambda a, b: a + b, parts)
    return StackProperties.from_mass_properties(total, vehicle.total_length)


@beartype
def booster_properties(
    vehicle: VehicleConfig,
    fuel_fraction: float,
) -> StackProperties:
    """Mass properties of the booster alone, after separation.

    Args:
        vehicle: Vehicle definition
        fuel_fraction: Booster propellant remaining (0-1)

    Returns:
        StackProperties for the booster
    """
    fuel_fraction = max(0.0, min(1.0, fuel_fraction))
    total = reduce(lambda a, b: a + b, _booster_assemblies(vehicle, fuel_fraction))
    return StackProperties.from_mass_properties(total, vehicle.booster_length)


@beartype
def upper_stage_properties(
    vehicle: VehicleConfig,
    fuel_fraction: float,
) -> StackProperties:
    """Mass properties of the free-flying upper stage.

    The upper stage has no rotational model, so it is reported as a
    uniform rod centred on its midpoint.
    """
    fuel_fraction = max(0.0, min(1.0, fuel_fraction))
    mass = (
        vehicle.upper_stage_mass
        + vehicle.upper_stage_propellant_mass * fuel_fraction
        + vehicle.fairing_mass
    )
    length = vehicle.upper_stage_length
    return StackProperties(
        mass=mass,
        cm_fraction=0.5,
        moment_of_inertia=compute_inertia_rod(mass, length),
        length=length,
    )
