"""Planar rigid-body state of a single vehicle stage.

A stage is a slender cylinder flying in the vertical plane. Its state
holds:
- Translation: center-of-mass position and velocity (world frame)
- Rotation: orientation theta (radians from +x, pi/2 = upright) and
  angular velocity omega (positive counter-clockwise)
- Geometry: top and bottom endpoints, length, width
- Mass: total mass, CM fraction along the body, pitch inertia,
  remaining propellant fraction
- Forces: the most recent gravity, drag, main and lateral thrust vectors

World frame: origin at the launch pad, +x downrange, +y up. Earth's
center lies at (0, -R_earth).
"""

from dataclasses import dataclass, field, fields, replace

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from launchsim.environment.gravity import EARTH_RADIUS
from launchsim.vector import magnitude, safe_normalize
from launchsim.vehicle.falcon import VehicleConfig
from launchsim.vehicle.mass import combined_vehicle_properties


def _zeros() -> NDArray[np.float64]:
    return np.zeros(2)


# =============================================================================
# Stage State
# =============================================================================


@beartype
@dataclass
class StageState:
    """State of one independently tracked stage.

    Attributes:
        position: [x, y] center-of-mass position [m]
        velocity: [vx, vy] center-of-mass velocity [m/s]
        top: [x, y] top endpoint of the body [m]
        bottom: [x, y] bottom endpoint of the body [m]
        mass: Current total mass [kg]
        moment_of_inertia: Pitch inertia about the CM [kg*m^2]
        cm_fraction: CM position along the body, 0 = bottom, 1 = top
        length: Current physical length [m]
        width: Body diameter [m]
        fuel_fraction: Propellant remaining (0-1)
        theta: Orientation of the bottom-to-top axis [rad]
        omega: Angular velocity [rad/s]
        gimbal_angle: Main engine deflection from the body axis [rad]
        torque: Net torque from the last step [N*m]
        distance_to_earth: Distance from CM to Earth's center [m]
        gravity: Gravity force [N]
        air_resistance: Drag force [N]
        main_thrust: Main engine force [N]
        main_thrust_magnitude: Rated thrust while propellant remains [N]
        lateral_left: Left-flank nitrogen thruster force [N]
        lateral_right: Right-flank nitrogen thruster force [N]
        lateral_thrust_magnitude: Force of each nitrogen thruster [N]
    """
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    top: NDArray[np.float64]
    bottom: NDArray[np.float64]
    mass: float
    moment_of_inertia: float
    cm_fraction: float
    length: float
    width: float
    fuel_fraction: float = 1.0
    theta: float = np.pi / 2
    omega: float = 0.0
    gimbal_angle: float = 0.0
    torque: float = 0.0
    distance_to_earth: float = EARTH_RADIUS
    gravity: NDArray[np.float64] = field(default_factory=_zeros)
    air_resistance: NDArray[np.float64] = field(default_factory=_zeros)
    main_thrust: NDArray[np.float64] = field(default_factory=_zeros)
    main_thrust_magnitude: float = 0.0
    lateral_left: NDArray[np.float64] = field(default_factory=_zeros)
    lateral_right: NDArray[np.float64] = field(default_factory=_zeros)
    lateral_thrust_magnitude: float = 0.0

    def __post_init__(self) -> None:
        """Validate state."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, np.ndarray):
                value = np.asarray(value, dtype=np.float64)
                if value.shape != (2,):
                    raise ValueError(f"{f.name} must be shape (2,), got {value.shape}")
                setattr(self, f.name, value)

        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.moment_of_inertia <= 0:
            raise ValueError(
                f"Moment of inertia must be positive, got {self.moment_of_inertia}"
            )
        if self.length <= 0:
            raise ValueError(f"Length must be positive, got {self.length}")
        if not 0.0 <= self.fuel_fraction <= 1.0:
            raise ValueError(f"fuel_fraction must be in [0, 1], got {self.fuel_fraction}")
        if not 0.0 <= self.cm_fraction <= 1.0:
            raise ValueError(f"cm_fraction must be in [0, 1], got {self.cm_fraction}")

    @classmethod
    def on_pad(
        cls,
        vehicle: VehicleConfig,
        earth_radius: float = EARTH_RADIUS,
    ) -> "StageState":
        """Create the fully fuelled, upright stack standing on the pad.

        Args:
            vehicle: Vehicle definition
            earth_radius: Radius used for the initial Earth distance [m]

        Returns:
            Liftoff-ready combined vehicle with the main engine armed
        """
        props = combined_vehicle_properties(vehicle, 1.0)
        length = vehicle.total_length
        position = np.array([0.0, props.cm_height])

        return cls(
            position=position,
            velocity=np.zeros(2),
            top=np.array([0.0, length]),
            bottom=np.zeros(2),
            mass=props.mass,
            moment_of_inertia=props.moment_of_inertia,
            cm_fraction=props.cm_fraction,
            length=length,
            width=vehicle.width,
            fuel_fraction=1.0,
            theta=np.pi / 2,
            distance_to_earth=earth_radius + props.cm_height,
            main_thrust_magnitude=vehicle.thrust_sea_level,
            lateral_thrust_magnitude=vehicle.nitrogen_thrust,
        )

    def copy(self) -> "StageState":
        """Create a copy of this state."""
        arrays = {
            f.name: getattr(self, f.name).copy()
            for f in fields(self)
            if isinstance(getattr(self, f.name), np.ndarray)
        }
        return replace(self, **arrays)

    @property
    def body_vector(self) -> NDArray[np.float64]:
        """Bottom-to-top vector [m]."""
        return self.top - self.bottom

    @property
    def axis(self) -> NDArray[np.float64]:
        """Unit vector from bottom to top."""
        return safe_normalize(self.body_vector)

    @property
    def speed(self) -> float:
        """Center-of-mass speed [m/s]."""
        return magnitude(self.velocity)

    @property
    def cm_height(self) -> float:
        """Distance from the bottom endpoint to the CM along the body [m]."""
        return self.cm_fraction * self.length

    @property
    def engine_firing(self) -> bool:
        """True when the last integrated step produced main thrust.

        A stage fresh on the pad reports False until a step runs with the
        throttle held.
        """
        return magnitude(self.main_thrust) > 0.0

    @property
    def net_force(self) -> NDArray[np.float64]:
        """Sum of every force acting on the stage [N]."""
        return (
            self.gravity
            + self.air_resistance
            + self.main_thrust
            + self.lateral_left
            + self.lateral_right
        )

    def thruster_mount(self, height: float) -> NDArray[np.float64]:
        """World position of a point ``height`` metres above the bottom [m]."""
        return self.bottom + height * self.axis

    def altitude(self, earth_radius: float = EARTH_RADIUS) -> float:
        """CM height above the reference sphere [m]."""
        return self.distance_to_earth - earth_radius
