"""Planar rigid-body integration for launch vehicle stages.

Advances a stage by one step with semi-implicit Euler:

1. position += velocity * dt (previous step's velocity)
2. endpoints from position, orientation and CM fraction
3. mass, CM fraction and inertia for the current configuration
4. torque from drag, gimbaled thrust and the nitrogen thrusters
5. omega += dt * torque / I
6. orientation re-derived from the endpoints, then advanced by omega * dt
7. forces from the updated geometry
8. velocity += dt * F / m (only after liftoff)

Orientation is re-anchored to the endpoint geometry every step before
omega is applied, so it is not a pure integral of omega. At high
angular rates this drifts from the analytic rotation.

The upper stage has no rotational model: it coasts and then burns
along its separation orientation.

Example:
    >>> from launchsim.dynamics import ControlInputs, RigidBodyDynamics, StageState
    >>> from launchsim.vehicle import VehicleConfig
    >>>
    >>> falcon = VehicleConfig()
    >>> dynamics = RigidBodyDynamics(falcon)
    >>> stage = StageState.on_pad(falcon)
    >>> dynamics.integrate_booster(stage, ControlInputs(throttle=True), dt=0.03, liftoff=True)
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from launchsim.dynamics.forces import (
    ControlInputs,
    gravity_force,
    update_forces,
    update_main_thrust,
)
from launchsim.dynamics.state import StageState
from launchsim.environment.atmosphere import CEILING, Atmosphere
from launchsim.environment.gravity import EARTH_RADIUS, GM_EARTH, Gravity
from launchsim.vector import (
    ANGLE_EPSILON,
    EPSILON,
    magnitude,
    projected_magnitude,
    unit_vector,
)
from launchsim.vehicle.falcon import VehicleConfig
from launchsim.vehicle.mass import (
    booster_properties,
    combined_vehicle_properties,
    upper_stage_properties,
)

# Main thrust below this magnitude produces no gimbal torque [N]
THRUST_EPSILON: float = 1e-4

# Gimbal deflection above this angle flips the gimbal torque sign [rad]
GIMBAL_EPSILON: float = 1e-4


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class DynamicsConfig:
    """Environment and force-model parameters.

    Attributes:
        gm: Earth gravitational parameter [m^3/s^2]
        earth_radius: Earth radius, pad at its surface [m]
        drag_coefficient: Cd applied to the projected area [-]
        atmosphere_ceiling: Altitude above which air is neglected [m]
        flow_gravity: Gravity constant in the propellant flow equation [m/s^2]
    """
    gm: float = GM_EARTH
    earth_radius: float = EARTH_RADIUS
    drag_coefficient: float = 0.6
    atmosphere_ceiling: float = CEILING
    flow_gravity: float = 9.8

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.gm <= 0:
            raise ValueError(f"gm must be positive, got {self.gm}")
        if self.earth_radius <= 0:
            raise ValueError(f"earth_radius must be positive, got {self.earth_radius}")
        if self.drag_coefficient < 0:
            raise ValueError(
                f"drag_coefficient must be non-negative, got {self.drag_coefficient}"
            )
        if self.atmosphere_ceiling <= 0:
            raise ValueError(
                f"atmosphere_ceiling must be positive, got {self.atmosphere_ceiling}"
            )
        if self.flow_gravity <= 0:
            raise ValueError(f"flow_gravity must be positive, got {self.flow_gravity}")

    def create_gravity(self) -> Gravity:
        """Create gravity model from config."""
        return Gravity(gm=self.gm, radius=self.earth_radius)

    def create_atmosphere(self) -> Atmosphere:
        """Create atmosphere model from config."""
        return Atmosphere(ceiling=self.atmosphere_ceiling)


# =============================================================================
# Geometry
# =============================================================================


@beartype
def update_endpoints(stage: StageState) -> None:
    """Place the top and bottom endpoints around the CM in place."""
    axis = unit_vector(stage.theta)
    to_bottom = stage.cm_height
    to_top = stage.length - to_bottom

    stage.top = stage.position + to_top * axis
    stage.bottom = stage.position - to_bottom * axis


@beartype
def orientation_from_endpoints(
    top: NDArray[np.float64],
    bottom: NDArray[np.float64],
) -> float:
    """Angle of the bottom-to-top vector in [0, 2*pi) [rad].

    A near-vertical body (|dx| < ANGLE_EPSILON) is snapped to pi/2 or
    3*pi/2 instead of dividing by dx.
    """
    dx = float(top[0] - bottom[0])
    dy = float(top[1] - bottom[1])

    if abs(dx) < ANGLE_EPSILON:
        return np.pi / 2 if dy >= 0.0 else 3 * np.pi / 2

    angle = float(np.arctan(dy / dx))
    if dx < 0.0:
        angle += np.pi
    elif dy < 0.0:
        angle += 2 * np.pi
    return angle


@beartype
def update_orientation(stage: StageState, dt: float) -> None:
    """Re-anchor theta to the endpoints, then advance it by omega * dt."""
    stage.theta = orientation_from_endpoints(stage.top, stage.bottom) + dt * stage.omega


# =============================================================================
# Mass and Torque
# =============================================================================


@beartype
def update_mass_properties(
    stage: StageState,
    vehicle: VehicleConfig,
    separated: bool,
) -> None:
    """Refresh mass, CM fraction and inertia for the current configuration."""
    if separated:
        props = booster_properties(vehicle, stage.fuel_fraction)
    else:
        props = combined_vehicle_properties(vehicle, stage.fuel_fraction)

    stage.mass = props.mass
    stage.cm_fraction = props.cm_fraction
    stage.moment_of_inertia = props.moment_of_inertia


@beartype
def compute_torque(stage: StageState, nitrogen_height: float) -> float:
    """Net torque about the CM, positive counter-clockwise [N*m].

    Sums three contributions:
    - Drag acting at the body midpoint
    - Main thrust acting at the nozzle (the bottom endpoint)
    - The nitrogen thrusters acting at their mount height

    Args:
        stage: Stage with current endpoints and forces
        nitrogen_height: Thruster mount height above the bottom [m]

    Returns:
        Net torque [N*m]
    """
    body = stage.body_vector
    cm_height = stage.cm_height

    torque_air = 0.0
    drag = magnitude(stage.air_resistance)
    if drag > EPSILON:
        arm = stage.length / 2.0 - cm_height
        torque_air = arm * projected_magnitude(stage.air_resistance, body)

        # sin(theta - alpha) with alpha the drag direction
        dx, dy = stage.air_resistance / drag
        if np.sin(stage.theta) * dx - dy * np.cos(stage.theta) > EPSILON:
            torque_air = -torque_air

    torque_gimbal = 0.0
    if magnitude(stage.main_thrust) > THRUST_EPSILON:
        torque_gimbal = cm_height * projected_magnitude(stage.main_thrust, body)
        if stage.gimbal_angle > GIMBAL_EPSILON:
            torque_gimbal = -torque_gimbal

    torque_lateral = (nitrogen_height - cm_height) * (
        magnitude(stage.lateral_right) - magnitude(stage.lateral_left)
    )

    return float(torque_air + torque_gimbal + torque_lateral)


# =============================================================================
# Stage Integrators
# =============================================================================


@beartype
class RigidBodyDynamics:
    """Per-step integrators for the booster and the upper stage.

    Example:
        >>> dynamics = RigidBodyDynamics(VehicleConfig(), DynamicsConfig())
        >>> dynamics.integrate_upper_stage(upper, dt=0.03, ignited=False)
    """

    def __init__(
        self,
        vehicle: VehicleConfig,
        config: DynamicsConfig | None = None,
    ) -> None:
        """Initialize dynamics model.

        Args:
            vehicle: Vehicle definition
            config: Environment and force-model parameters
        """
        self.vehicle = vehicle
        self.config = config or DynamicsConfig()

        self.gravity = self.config.create_gravity()
        self.atmosphere = self.config.create_atmosphere()

    @beartype
    def altitude(self, point: NDArray[np.float64]) -> float:
        """Height of a world point above the reference sphere [m]."""
        return self.gravity.altitude(point)

    @beartype
    def integrate_booster(
        self,
        stage: StageState,
        controls: ControlInputs,
        dt: float,
        liftoff: bool,
        separated: bool = False,
    ) -> None:
        """Advance the booster (or the combined stack) one step in place.

        Args:
            stage: Booster state, updated in place
            controls: Held inputs for this step
            dt: Step size [s]
            liftoff: Whether liftoff has been registered
            separated: Whether the upper stage has gone
        """
        stage.position = stage.position + stage.velocity * dt
        update_endpoints(stage)
        update_mass_properties(stage, self.vehicle, separated)

        stage.torque = compute_torque(stage, self.vehicle.nitrogen_height)
        stage.omega = stage.omega + dt * stage.torque / stage.moment_of_inertia
        update_orientation(stage, dt)

        update_forces(
            stage,
            controls,
            self.vehicle,
            dt,
            liftoff,
            self.gravity,
            self.atmosphere,
            self.config.drag_coefficient,
            self.config.flow_gravity,
        )

        if liftoff:
            stage.velocity = stage.velocity + dt * stage.net_force / stage.mass

    @beartype
    def integrate_upper_stage(
        self,
        stage: StageState,
        dt: float,
        ignited: bool,
    ) -> None:
        """Advance the upper stage one step in place.

        Orientation stays at its separation value. The engine fires along
        the body axis once ``ignited`` and until the propellant is gone.

        Args:
            stage: Upper stage state, updated in place
            dt: Step size [s]
            ignited: Whether the post-separation coast has elapsed
        """
        props = upper_stage_properties(self.vehicle, stage.fuel_fraction)
        stage.mass = props.mass
        stage.moment_of_inertia = props.moment_of_inertia

        stage.distance_to_earth = self.gravity.distance_to_center(stage.position)
        stage.gravity = gravity_force(stage.position, stage.mass, self.gravity)

        update_main_thrust(
            stage,
            ignited,
            self.vehicle.specific_impulse,
            self.vehicle.upper_stage_propellant_mass,
            dt,
            self.config.flow_gravity,
        )

        stage.velocity = stage.velocity + dt * (stage.gravity + stage.main_thrust) / stage.mass
        stage.position = stage.position + stage.velocity * dt
        update_endpoints(stage)
