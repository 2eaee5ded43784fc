"""Planar rigid-body dynamics for launch vehicle stages.

Provides the stage state, the force model, and the per-step
integrators for the booster and the upper stage.

Example:
    >>> from launchsim.dynamics import ControlInputs, RigidBodyDynamics, StageState
    >>>
    >>> stage = StageState.on_pad(vehicle)
    >>> dynamics = RigidBodyDynamics(vehicle)
    >>> dynamics.integrate_booster(stage, ControlInputs(throttle=True), dt=0.03, liftoff=True)
"""

from launchsim.dynamics.forces import (
    ControlInputs,
    burn_propellant,
    drag_force,
    gravity_force,
    lateral_thrust,
    projected_area,
    thrust_vector,
    update_forces,
    update_gimbal,
    update_main_thrust,
)
from launchsim.dynamics.rigid_body import (
    DynamicsConfig,
    RigidBodyDynamics,
    compute_torque,
    orientation_from_endpoints,
    update_endpoints,
    update_mass_properties,
    update_orientation,
)
from launchsim.dynamics.state import StageState

__all__ = [
    # State
    "StageState",
    # Forces
    "ControlInputs",
    "burn_propellant",
    "drag_force",
    "gravity_force",
    "lateral_thrust",
    "projected_area",
    "thrust_vector",
    "update_forces",
    "update_gimbal",
    "update_main_thrust",
    # Integration
    "DynamicsConfig",
    "RigidBodyDynamics",
    "compute_torque",
    "orientation_from_endpoints",
    "update_endpoints",
    "update_mass_properties",
    "update_orientation",
]
