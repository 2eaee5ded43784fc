"""Force model for a stage in planar flight.

Composes the forces acting on a stage each step:
- Gravity: point-mass pull toward Earth's center
- Air resistance: quadratic drag on a projected cylinder area,
  opposing the velocity
- Main thrust: rated thrust along the body axis, deflected by the
  engine gimbal, drawing down propellant
- Lateral thrust: two fixed-magnitude nitrogen thrusters firing
  perpendicular to the body axis

Example:
    >>> from launchsim.dynamics import ControlInputs, StageState, update_forces
    >>>
    >>> stage = StageState.on_pad(vehicle)
    >>> controls = ControlInputs(throttle=True, gimbal_right=True)
    >>> update_forces(stage, controls, vehicle, config, dt=0.03, liftoff=True)
    >>> print(stage.main_thrust, stage.fuel_fraction)
"""

import logging
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from launchsim.dynamics.state import StageState
from launchsim.environment.atmosphere import Atmosphere
from launchsim.environment.gravity import Gravity
from launchsim.vector import EPSILON, left_normal, magnitude, safe_normalize
from launchsim.vehicle.falcon import VehicleConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Command Inputs
# =============================================================================


@beartype
@dataclass(frozen=True)
class ControlInputs:
    """Held control inputs sampled once per step.

    Attributes:
        throttle: Main engine commanded on
        rotate_left: Left-flank nitrogen thruster held
        rotate_right: Right-flank nitrogen thruster held
        gimbal_left: Slew the engine toward negative deflection
        gimbal_right: Slew the engine toward positive deflection
    """
    throttle: bool = False
    rotate_left: bool = False
    rotate_right: bool = False
    gimbal_left: bool = False
    gimbal_right: bool = False


# =============================================================================
# Gravity
# =============================================================================


@beartype
def gravity_force(
    position: NDArray[np.float64],
    mass: float,
    gravity: Gravity,
) -> NDArray[np.float64]:
    """Gravitational force on a body at position [N]."""
    return gravity.force(position, mass)


# =============================================================================
# Air Resistance
# =============================================================================


@beartype
def projected_area(
    theta: float,
    velocity: NDArray[np.float64],
    length: float,
    width: float,
) -> float:
    """Area of the body presented to the oncoming flow [m^2].

    The side of the cylinder contributes w * L * |sin(theta - alpha)| and
    the end cap w^2 * |cos(theta - alpha)|, where alpha is the flight path
    angle. Zero for a body at rest, since alpha is undefined.
    """
    cos_alpha, sin_alpha = safe_normalize(velocity)
    sin_t, cos_t = np.sin(theta), np.cos(theta)

    side = abs(width * length * (sin_t * cos_alpha - sin_alpha * cos_t))
    cap = abs(width * width * (cos_t * cos_alpha + sin_t * sin_alpha))
    return float(side + cap)


@beartype
def drag_force(
    velocity: NDArray[np.float64],
    theta: float,
    length: float,
    width: float,
    density: float,
    mass: float,
    dt: float,
    drag_coefficient: float = 0.6,
) -> NDArray[np.float64]:
    """Quadratic air resistance opposing the velocity.

    D = Cd * 0.5 * rho * |v|^2 * A

    Zero when the body is at rest. Also zero when one step of drag would
    change the velocity by more than twice its magnitude: the step is too
    coarse for the drag to be integrated explicitly, so it is dropped
    rather than allowed to reverse the flow.

    Args:
        velocity: CM velocity [m/s]
        theta: Body orientation [rad]
        length: Body length [m]
        width: Body diameter [m]
        density: Air density [kg/m^3]
        mass: Stage mass [kg]
        dt: Step size [s]
        drag_coefficient: Cd [-]

    Returns:
        Drag force [N]
    """
    speed = magnitude(velocity)
    if speed <= EPSILON or density <= 0.0:
        return np.zeros(2)

    area = projected_area(theta, velocity, length, width)
    drag = drag_coefficient * 0.5 * density * speed * speed * area

    if drag * dt / mass > 2.0 * speed:
        return np.zeros(2)

    return -drag * velocity / speed


# =============================================================================
# Main Engine
# =============================================================================


@beartype
def update_gimbal(
    angle: float,
    left: bool,
    right: bool,
    rate: float,
    limit: float,
    dt: float,
) -> float:
    """Slew the gimbal for one step and clamp it to +/- limit [rad]."""
    if right and angle < limit:
        angle += rate * dt
    if left and angle > -limit:
        angle -= rate * dt
    return float(np.clip(angle, -limit, limit))


@beartype
def thrust_vector(
    thrust: float,
    gimbal_angle: float,
    axis: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Main engine force deflected off the body axis by the gimbal [N].

    T = |T| * (cos(b) * axis + sin(b) * axis_perp)
    """
    return thrust * (
        np.cos(gimbal_angle) * axis + np.sin(gimbal_angle) * left_normal(axis)
    )


@beartype
def burn_propellant(
    fuel_fraction: float,
    thrust: float,
    specific_impulse: float,
    propellant_mass: float,
    dt: float,
    flow_gravity: float = 9.8,
) -> float:
    """Propellant fraction remaining after one step at rated thrust.

    mdot = T / (Isp * g), so the fraction drops by dt * mdot / m_propellant.
    The result may be zero or negative; callers clamp it.
    """
    if propellant_mass <= 0.0:
        return 0.0
    mdot = thrust / (specific_impulse * flow_gravity)
    return fuel_fraction - dt * mdot / propellant_mass


@beartype
def update_main_thrust(
    stage: StageState,
    firing: bool,
    specific_impulse: float,
    propellant_mass: float,
    dt: float,
    flow_gravity: float = 9.8,
) -> None:
    """Burn propellant and set the main thrust vector in place.

    While firing with thrust available, propellant is drawn down first.
    If the tank runs dry this step, the fraction is clamped to zero and
    the rated thrust is cut for good, so the vector is zero from then on.
    """
    if firing and stage.main_thrust_magnitude > 0.0:
        remaining = burn_propellant(
            stage.fuel_fraction,
            stage.main_thrust_magnitude,
            specific_impulse,
            propellant_mass,
            dt,
            flow_gravity,
        )
        if remaining <= 0.0:
            stage.fuel_fraction = 0.0
            stage.main_thrust_magnitude = 0.0
            logger.info("Main engine cutoff: propellant depleted")
        else:
            stage.fuel_fraction = remaining

    if firing:
        stage.main_thrust = thrust_vector(
            stage.main_thrust_magnitude, stage.gimbal_angle, stage.axis
        )
    else:
        stage.main_thrust = np.zeros(2)


# =============================================================================
# Lateral Thrusters
# =============================================================================


@beartype
def lateral_thrust(
    axis: NDArray[np.float64],
    thrust: float,
    left: bool,
    right: bool,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Nitrogen thruster forces (left, right) [N].

    The left-flank thruster pushes toward the body's right, (ay, -ax),
    and the right-flank thruster toward its left, (-ay, ax).
    """
    normal = left_normal(axis)
    left_force = -thrust * normal if left else np.zeros(2)
    right_force = thrust * normal if right else np.zeros(2)
    return left_force, right_force


# =============================================================================
# Composition
# =============================================================================


@beartype
def update_forces(
    stage: StageState,
    controls: ControlInputs,
    vehicle: VehicleConfig,
    dt: float,
    liftoff: bool,
    gravity: Gravity,
    atmosphere: Atmosphere,
    drag_coefficient: float = 0.6,
    flow_gravity: float = 9.8,
) -> None:
    """Recompute every booster force from the current geometry in place.

    Args:
        stage: Booster state, updated in place
        controls: Held inputs for this step
        vehicle: Vehicle definition
        dt: Step size [s]
        liftoff: Whether liftoff has been registered
        gravity: Gravity model
        atmosphere: Atmosphere model
        drag_coefficient: Cd [-]
        flow_gravity: Gravity constant in the propellant flow equation [m/s^2]
    """
    stage.distance_to_earth = gravity.distance_to_center(stage.position)
    stage.gravity = gravity_force(stage.position, stage.mass, gravity)

    density = atmosphere.density(stage.distance_to_earth - gravity.radius)
    stage.air_resistance = drag_force(
        stage.velocity,
        stage.theta,
        stage.length,
        stage.width,
        density,
        stage.mass,
        dt,
        drag_coefficient,
    )

    stage.gimbal_angle = update_gimbal(
        stage.gimbal_angle,
        controls.gimbal_left,
        controls.gimbal_right,
        vehicle.gimbal_rate,
        vehicle.gimbal_limit,
        dt,
    )
    update_main_thrust(
        stage,
        controls.throttle and liftoff,
        vehicle.specific_impulse,
        vehicle.booster_propellant_mass,
        dt,
        flow_gravity,
    )

    stage.lateral_left, stage.lateral_right = lateral_thrust(
        stage.axis,
        stage.lateral_thrust_magnitude,
        controls.rotate_left and liftoff,
        controls.rotate_right and liftoff,
    )
