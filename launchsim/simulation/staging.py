"""Stage separation.

Separation is a one-shot event that splits the combined stack into two
bodies sharing the stack's orientation at that instant:

- The booster keeps its base point, velocity and angular state. Its
  length drops to the booster length and its CM moves to the
  booster-only mass distribution.
- The upper stage starts with its base on the booster top, moving at
  the booster velocity plus a push-off impulse along the shared axis,
  fully fuelled, with its engine armed but silent until the coast ends.

Example:
    >>> from launchsim.simulation.staging import separate_stages
    >>>
    >>> booster, upper = separate_stages(stack, vehicle, separation_impulse=7.0)
    >>> booster.length < stack.length
    True
"""

import numpy as np
from beartype import beartype

from launchsim.dynamics.state import StageState
from launchsim.environment.gravity import EARTH_RADIUS
from launchsim.simulation.phase import FlightPhase, MissionPhase
from launchsim.vector import magnitude, unit_vector
from launchsim.vehicle.falcon import VehicleConfig
from launchsim.vehicle.mass import booster_properties, upper_stage_properties


@beartype
def can_separate(phase: FlightPhase, paused: bool) -> bool:
    """Whether a separation command would be honoured.

    Requires a running simulation, a registered liftoff, an intact stack
    and a booster that has neither landed nor exploded.
    """
    return (
        not paused
        and phase.mission == MissionPhase.POWERED_ASCENT
        and phase.booster_flying
    )


@beartype
def separate_stages(
    stack: StageState,
    vehicle: VehicleConfig,
    separation_impulse: float = 7.0,
    earth_radius: float = EARTH_RADIUS,
) -> tuple[StageState, StageState]:
    """Split the combined stack into booster and upper stage.

    The input state is left untouched.

    Args:
        stack: Combined vehicle state at the moment of separation
        vehicle: Vehicle definition
        separation_impulse: Push-off speed added to the upper stage [m/s]
        earth_radius: Radius used for the upper stage's Earth distance [m]

    Returns:
        Tuple of (booster, upper_stage)
    """
    axis = unit_vector(stack.theta)

    props = booster_properties(vehicle, stack.fuel_fraction)
    booster = stack.copy()
    booster.length = props.length
    booster.mass = props.mass
    booster.cm_fraction = props.cm_fraction
    booster.moment_of_inertia = props.moment_of_inertia
    booster.position = stack.bottom + props.cm_height * axis
    booster.top = stack.bottom + props.length * axis

    upper_props = upper_stage_properties(vehicle, 1.0)
    upper_length = upper_props.length
    position = booster.top + (upper_length / 2.0) * axis

    upper = StageState(
        position=position,
        velocity=stack.velocity + separation_impulse * axis,
        top=booster.top + upper_length * axis,
        bottom=booster.top.copy(),
        mass=upper_props.mass,
        moment_of_inertia=upper_props.moment_of_inertia,
        cm_fraction=upper_props.cm_fraction,
        length=upper_length,
        width=stack.width,
        fuel_fraction=1.0,
        theta=stack.theta,
        distance_to_earth=magnitude(position + np.array([0.0, earth_radius])),
        main_thrust_magnitude=vehicle.upper_stage_thrust,
    )

    return booster, upper
