"""Mission simulation for the two-stage launch vehicle.

Provides the mission state, the single-step advance function, and the
interactive ``Simulator`` that a rendering front end drives with
discrete commands.

Example:
    >>> from launchsim.simulation import Simulator
    >>>
    >>> sim = Simulator()
    >>> sim.set_throttle(True)
    >>> while sim.time < 150.0:
    ...     sim.step()
    >>> sim.trigger_separation()
    >>> sim.set_throttle(False)
"""

from launchsim.simulation.clock import MissionClock
from launchsim.simulation.config import SimConfig
from launchsim.simulation.outcome import (
    evaluate_booster,
    evaluate_upper_stage,
    point_altitude,
    settle_upright,
    touchdown_speed,
)
from launchsim.simulation.phase import (
    FlightPhase,
    MissionPhase,
    StageStatus,
)
from launchsim.simulation.simulator import (
    SimulationResult,
    SimulationState,
    Simulator,
    Telemetry,
    step_state,
)
from launchsim.simulation.staging import (
    can_separate,
    separate_stages,
)

__all__ = [
    # Configuration
    "SimConfig",
    # Clock and phase
    "FlightPhase",
    "MissionClock",
    "MissionPhase",
    "StageStatus",
    # Events
    "can_separate",
    "evaluate_booster",
    "evaluate_upper_stage",
    "point_altitude",
    "separate_stages",
    "settle_upright",
    "touchdown_speed",
    # Simulation
    "SimulationResult",
    "SimulationState",
    "Simulator",
    "Telemetry",
    "step_state",
]
