"""launchsim - Planar flight dynamics of a two-stage launch vehicle.

This package simulates a two-stage rocket in the vertical plane from
liftoff through stage separation to a powered booster landing or a
crash. It is the physics and mission-state core behind an interactive
front end: the front end sends discrete commands and reads state back
once per frame.

Example:
    >>> from launchsim import Simulator
    >>>
    >>> sim = Simulator()
    >>> sim.set_throttle(True)
    >>> sim.run(3000)
    >>> sim.trigger_separation()
    >>> print(sim.telemetry().format())
"""

__version__ = "0.1.0"

# Dynamics
from launchsim.dynamics import (
    ControlInputs,
    DynamicsConfig,
    RigidBodyDynamics,
    StageState,
)

# Environment
from launchsim.environment import (
    Atmosphere,
    AtmosphereResult,
    Gravity,
    density_at_altitude,
)

# Simulation
from launchsim.simulation import (
    FlightPhase,
    MissionClock,
    MissionPhase,
    SimConfig,
    SimulationResult,
    SimulationState,
    Simulator,
    StageStatus,
    Telemetry,
    step_state,
)

# Vector math
from launchsim.vector import (
    magnitude,
    projected_magnitude,
    safe_normalize,
)

# Vehicle
from launchsim.vehicle import (
    FALCON_9_V1_1,
    MassProperties,
    StackProperties,
    VehicleConfig,
    booster_properties,
    combined_vehicle_properties,
    upper_stage_properties,
)

__all__ = [
    "__version__",
    # Dynamics
    "ControlInputs",
    "DynamicsConfig",
    "RigidBodyDynamics",
    "StageState",
    # Environment
    "Atmosphere",
    "AtmosphereResult",
    "Gravity",
    "density_at_altitude",
    # Simulation
    "FlightPhase",
    "MissionClock",
    "MissionPhase",
    "SimConfig",
    "SimulationResult",
    "SimulationState",
    "Simulator",
    "StageStatus",
    "Telemetry",
    "step_state",
    # Vector math
    "magnitude",
    "projected_magnitude",
    "safe_normalize",
    # Vehicle
    "FALCON_9_V1_1",
    "MassProperties",
    "StackProperties",
    "VehicleConfig",
    "booster_properties",
    "combined_vehicle_properties",
    "upper_stage_properties",
]
