"""Step-driven two-stage launch simulation.

The whole mission lives in one ``SimulationState`` value: both stages,
the mission clock, the flight phase, and the leg and pause switches.
``step_state`` advances it by one step from a set of held control
inputs and returns a new state, leaving the input untouched.

``Simulator`` wraps that function for an interactive front end: it
holds the current state and the held inputs, turns discrete commands
into state changes, and answers read-only queries with copies.

Architecture:
    The front end owns the loop and calls, once per frame:
    - sim.<command>(...) for any input events
    - sim.step() -> advance physics by one step
    - sim.booster / sim.upper_stage / sim.telemetry() -> read state

Example:
    >>> from launchsim.simulation import Simulator
    >>>
    >>> sim = Simulator()
    >>> sim.set_throttle(True)  # also registers liftoff
    >>> for _ in range(2000):
    ...     sim.step()
    >>> sim.trigger_separation()
    >>> print(sim.telemetry().format())
"""

import logging
from dataclasses import dataclass, field, replace

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from launchsim.dynamics.forces import ControlInputs
from launchsim.dynamics.rigid_body import RigidBodyDynamics
from launchsim.dynamics.state import StageState
from launchsim.environment.gravity import EARTH_RADIUS
from launchsim.simulation.clock import MissionClock
from launchsim.simulation.config import SimConfig
from launchsim.simulation.outcome import (
    evaluate_booster,
    evaluate_upper_stage,
    point_altitude,
)
from launchsim.simulation.phase import FlightPhase
from launchsim.simulation.staging import can_separate, separate_stages

logger = logging.getLogger(__name__)


# =============================================================================
# Simulation State
# =============================================================================


@beartype
@dataclass
class SimulationState:
    """Complete mission state.

    Attributes:
        booster: Combined stack before separation, booster after it
        clock: Mission clock and step size
        phase: Mission phase and per-stage status
        upper_stage: Upper stage, None before separation
        legs_deployed: Landing legs out
        paused: Advancement suspended
    """
    booster: StageState
    clock: MissionClock
    phase: FlightPhase = field(default_factory=FlightPhase)
    upper_stage: StageState | None = None
    legs_deployed: bool = False
    paused: bool = False

    @classmethod
    def initial(cls, config: SimConfig) -> "SimulationState":
        """Liftoff-ready state: full stack upright on the pad, clock at zero."""
        return cls(
            booster=StageState.on_pad(config.vehicle, config.dynamics.earth_radius),
            clock=MissionClock(
                step_size=config.initial_step,
                min_step=config.min_step,
                max_step=config.max_step,
            ),
        )

    def copy(self) -> "SimulationState":
        """Create a deep copy of this state."""
        return replace(
            self,
            booster=self.booster.copy(),
            clock=self.clock.copy(),
            upper_stage=self.upper_stage.copy() if self.upper_stage is not None else None,
        )


@beartype
def step_state(
    state: SimulationState,
    controls: ControlInputs,
    config: SimConfig,
    dynamics: RigidBodyDynamics | None = None,
) -> SimulationState:
    """Advance the mission by one step.

    A paused state is returned unchanged (as a copy). Otherwise the clock
    advances (after liftoff, while a stage still flies), each flying stage
    is integrated, and the outcome checks run on the result.

    Args:
        state: Current mission state (not modified)
        controls: Held inputs for this step
        config: Simulation configuration
        dynamics: Integrators to reuse, built from config if omitted

    Returns:
        New mission state
    """
    new = state.copy()
    if new.paused:
        return new

    if dynamics is None:
        dynamics = RigidBodyDynamics(config.vehicle, config.dynamics)

    phase = new.phase
    if phase.liftoff and phase.any_flying:
        new.clock.advance()
    dt = new.clock.step_size

    if phase.booster_flying:
        dynamics.integrate_booster(
            new.booster,
            controls,
            dt,
            phase.liftoff,
            phase.separated,
        )

    if new.upper_stage is not None and phase.upper_stage_flying:
        ignited = new.clock.upper_stage_ignited(config.upper_stage_coast)
        if ignited and not state.clock.upper_stage_ignited(config.upper_stage_coast):
            logger.info("Upper stage ignition at T+%.2f s", new.clock.elapsed)
        dynamics.integrate_upper_stage(new.upper_stage, dt, ignited)

    if phase.liftoff:
        booster_status = evaluate_booster(
            new.booster, phase.booster, new.legs_deployed, config, dt
        )
        phase = phase.with_booster(booster_status)

        if new.upper_stage is not None and phase.upper_stage is not None:
            upper_status = evaluate_upper_stage(
                new.upper_stage, phase.upper_stage, config.dynamics.earth_radius
            )
            phase = phase.with_upper_stage(upper_status)

    new.phase = phase
    return new


# =============================================================================
# Telemetry
# =============================================================================


@beartype
@dataclass(frozen=True)
class Telemetry:
    """Flight readout for a heads-up display.

    Attributes:
        time: Time since launch [s]
        altitude: Height of the booster base above ground [m]
        x_location: Horizontal position of the booster base [m]
        fuel_percent: Booster propellant remaining [%]
        velocity_x: Booster horizontal velocity [m/s]
        velocity_y: Booster vertical velocity [m/s]
        step_size: Current integration step [s]
        phase: Mission phase and stage status
    """
    time: float
    altitude: float
    x_location: float
    fuel_percent: float
    velocity_x: float
    velocity_y: float
    step_size: float
    phase: FlightPhase

    @classmethod
    def from_state(cls, state: SimulationState, earth_radius: float) -> "Telemetry":
        """Build the readout from a mission state."""
        booster = state.booster
        return cls(
            time=state.clock.elapsed,
            altitude=point_altitude(booster.bottom, earth_radius),
            x_location=float(booster.bottom[0]),
            fuel_percent=100.0 * booster.fuel_fraction,
            velocity_x=float(booster.velocity[0]),
            velocity_y=float(booster.velocity[1]),
            step_size=state.clock.step_size,
            phase=state.phase,
        )

    def format(self) -> str:
        """Two-line text readout."""
        return (
            f"Altitude = {self.altitude:.1f} m | x-location = {self.x_location:.1f} m | "
            f"Fuel = {self.fuel_percent:.2f} %\n"
            f"Time Since Launch = {self.time:.2f} s | Velocity y = {self.velocity_y:.1f} m/s, "
            f"Velocity x = {self.velocity_x:.1f} m/s"
        )


# =============================================================================
# Simulator
# =============================================================================


@beartype
@dataclass
class Simulator:
    """Interactive mission simulator.

    Commands mirror a keyboard front end. Held inputs (throttle, rotate,
    gimbal) stay set until released. Every command except ``resume``,
    ``toggle_pause`` and ``reset_mission`` is ignored while paused.

    Example:
        >>> sim = Simulator(record_history=True)
        >>> sim.set_throttle(True)
        >>> sim.rotate_right(True)
        >>> for _ in range(100):
        ...     sim.step()
        >>> result = SimulationResult.from_simulator(sim)
    """
    config: SimConfig = field(default_factory=SimConfig)
    record_history: bool = False

    # Internal
    _state: SimulationState = field(init=False, repr=False)
    _controls: ControlInputs = field(default_factory=ControlInputs, init=False, repr=False)
    _dynamics: RigidBodyDynamics = field(init=False, repr=False)
    _history: list[SimulationState] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Build the integrators and the liftoff-ready state."""
        self._dynamics = RigidBodyDynamics(self.config.vehicle, self.config.dynamics)
        self._state = SimulationState.initial(self.config)
        if self.record_history:
            self._history = [self._state.copy()]

    def _ignored(self, command: str) -> bool:
        if self._state.paused:
            logger.debug("Ignoring %s while paused", command)
            return True
        return False

    def _hold(self, **inputs: bool) -> None:
        self._controls = replace(self._controls, **inputs)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def set_throttle(self, on: bool) -> None:
        """Hold or release the main engine. Opening it registers liftoff."""
        if self._ignored("throttle"):
            return
        self._hold(throttle=on)
        if on:
            self.trigger_liftoff()

    def rotate_left(self, on: bool) -> None:
        """Hold or release the left-flank nitrogen thruster."""
        if not self._ignored("rotate_left"):
            self._hold(rotate_left=on)

    def rotate_right(self, on: bool) -> None:
        """Hold or release the right-flank nitrogen thruster."""
        if not self._ignored("rotate_right"):
            self._hold(rotate_right=on)

    def gimbal_left(self, on: bool) -> None:
        """Hold or release the gimbal slew toward negative deflection."""
        if not self._ignored("gimbal_left"):
            self._hold(gimbal_left=on)

    def gimbal_right(self, on: bool) -> None:
        """Hold or release the gimbal slew toward positive deflection."""
        if not self._ignored("gimbal_right"):
            self._hold(gimbal_right=on)

    def center_gimbal(self) -> None:
        """Snap the main engine back onto the body axis."""
        if not self._ignored("center_gimbal"):
            self._state.booster.gimbal_angle = 0.0

    def deploy_legs(self) -> None:
        if not self._ignored("deploy_legs"):
            self._state.legs_deployed = True

    def retract_legs(self) -> None:
        if not self._ignored("retract_legs"):
            self._state.legs_deployed = False

    def toggle_legs(self) -> None:
        if not self._ignored("toggle_legs"):
            self._state.legs_deployed = not self._state.legs_deployed

    def trigger_liftoff(self) -> None:
        """Register liftoff. Later calls have no effect."""
        if self._ignored("liftoff") or self._state.phase.liftoff:
            return
        self._state.phase = self._state.phase.with_liftoff()
        logger.info("Liftoff")

    def trigger_separation(self) -> bool:
        """Separate the stages if allowed.

        Returns:
            True if separation happened
        """
        state = self._state
        if not can_separate(state.phase, state.paused):
            logger.debug("Ignoring separation in phase %s", state.phase)
            return False

        state.booster, state.upper_stage = separate_stages(
            state.booster,
            self.config.vehicle,
            self.config.separation_impulse,
            self.config.dynamics.earth_radius,
        )
        state.clock.mark_separation()
        state.phase = state.phase.with_separation()
        logger.info("Stage separation at T+%.2f s", state.clock.elapsed)
        return True

    def pause(self) -> None:
        """Suspend advancement. Pausing twice equals pausing once."""
        if not self._state.paused:
            logger.debug("Paused at T+%.2f s", self._state.clock.elapsed)
        self._state.paused = True

    def resume(self) -> None:
        """Resume advancement."""
        if self._state.paused:
            logger.debug("Resumed at T+%.2f s", self._state.clock.elapsed)
        self._state.paused = False

    def toggle_pause(self) -> None:
        if self._state.paused:
            self.resume()
        else:
            self.pause()

    def set_step_scale(self, factor: float) -> bool:
        """Scale the step size, typically by 2.0 or 0.5.

        Returns:
            True if the step size changed
        """
        if self._ignored("step scale"):
            return False
        if factor <= 0.0:
            logger.debug("Ignoring non-positive step scale %g", factor)
            return False
        return self._state.clock.scale_step(factor)

    def reset_mission(self) -> None:
        """Return everything to the liftoff-ready baseline."""
        self._state = SimulationState.initial(self.config)
        self._controls = ControlInputs()
        if self.record_history:
            self._history = [self._state.copy()]
        logger.info("Mission reset")

    def step(self) -> bool:
        """Advance the mission by one step.

        Returns:
            False if paused (nothing advanced), True otherwise
        """
        if self._state.paused:
            return False

        self._state = step_state(self._state, self._controls, self.config, self._dynamics)

        if self.record_history:
            self._history.append(self._state.copy())
        return True

    def run(self, steps: int) -> int:
        """Advance up to ``steps`` steps and return how many ran."""
        count = 0
        for _ in range(steps):
            if not self.step():
                break
            count += 1
        return count

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_state(self) -> SimulationState:
        """Get the current mission state.

        Returns a copy to prevent external modification.
        """
        return self._state.copy()

    @property
    def booster(self) -> StageState:
        """Snapshot of the booster (or combined stack)."""
        return self._state.booster.copy()

    @property
    def upper_stage(self) -> StageState | None:
        """Snapshot of the upper stage, None before separation."""
        if self._state.upper_stage is None:
            return None
        return self._state.upper_stage.copy()

    @property
    def clock(self) -> MissionClock:
        """Snapshot of the mission clock."""
        return self._state.clock.copy()

    @property
    def phase(self) -> FlightPhase:
        return self._state.phase

    @property
    def controls(self) -> ControlInputs:
        return self._controls

    @property
    def paused(self) -> bool:
        return self._state.paused

    @property
    def legs_deployed(self) -> bool:
        return self._state.legs_deployed

    @property
    def liftoff(self) -> bool:
        return self._state.phase.liftoff

    @property
    def separated(self) -> bool:
        return self._state.phase.separated

    @property
    def booster_exploded(self) -> bool:
        return self._state.phase.booster_exploded

    @property
    def upper_stage_exploded(self) -> bool:
        return self._state.phase.upper_stage_exploded

    @property
    def landed(self) -> bool:
        return self._state.phase.landed

    @property
    def time(self) -> float:
        """Time since liftoff [s]."""
        return self._state.clock.elapsed

    @property
    def step_size(self) -> float:
        """Current integration step [s]."""
        return self._state.clock.step_size

    def telemetry(self) -> Telemetry:
        """Current heads-up readout."""
        return Telemetry.from_state(self._state, self.config.dynamics.earth_radius)

    def get_history(self) -> list[SimulationState]:
        """Get recorded state history."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear recorded state history."""
        self._history = [self._state.copy()]


# =============================================================================
# Results and Analysis
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Recorded mission history.

    Provides per-step arrays for both stages. Upper stage columns are NaN
    before separation.
    """
    states: list[SimulationState]
    earth_radius: float = EARTH_RADIUS

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return np.array([s.clock.elapsed for s in self.states], dtype=np.float64)

    @property
    def booster_position(self) -> NDArray[np.float64]:
        """Booster CM history [m], shape (N, 2)."""
        return np.array([s.booster.position for s in self.states]).reshape(-1, 2)

    @property
    def booster_velocity(self) -> NDArray[np.float64]:
        """Booster velocity history [m/s], shape (N, 2)."""
        return np.array([s.booster.velocity for s in self.states]).reshape(-1, 2)

    @property
    def booster_altitude(self) -> NDArray[np.float64]:
        """Booster base altitude history [m]."""
        return np.array(
            [point_altitude(s.booster.bottom, self.earth_radius) for s in self.states],
            dtype=np.float64,
        )

    @property
    def booster_speed(self) -> NDArray[np.float64]:
        """Booster speed history [m/s]."""
        return np.array([s.booster.speed for s in self.states], dtype=np.float64)

    @property
    def booster_mass(self) -> NDArray[np.float64]:
        """Booster (or stack) mass history [kg]."""
        return np.array([s.booster.mass for s in self.states], dtype=np.float64)

    @property
    def booster_fuel_fraction(self) -> NDArray[np.float64]:
        """Booster propellant fraction history."""
        return np.array([s.booster.fuel_fraction for s in self.states], dtype=np.float64)

    @property
    def booster_theta(self) -> NDArray[np.float64]:
        """Booster orientation history [rad]."""
        return np.array([s.booster.theta for s in self.states], dtype=np.float64)

    @property
    def upper_stage_position(self) -> NDArray[np.float64]:
        """Upper stage CM history [m], shape (N, 2), NaN before separation."""
        nan = np.array([np.nan, np.nan])
        return np.array(
            [s.upper_stage.position if s.upper_stage is not None else nan for s in self.states]
        ).reshape(-1, 2)

    @property
    def upper_stage_altitude(self) -> NDArray[np.float64]:
        """Upper stage CM altitude history [m], NaN before separation."""
        return np.array(
            [
                point_altitude(s.upper_stage.position, self.earth_radius)
                if s.upper_stage is not None
                else np.nan
                for s in self.states
            ],
            dtype=np.float64,
        )

    @classmethod
    def from_simulator(cls, sim: Simulator) -> "SimulationResult":
        """Create result from simulator history."""
        return cls(
            states=sim.get_history(),
            earth_radius=sim.config.dynamics.earth_radius,
        )

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        booster_position = self.booster_position
        booster_velocity = self.booster_velocity
        upper_position = self.upper_stage_position

        return pl.DataFrame({
            "time": self.time,
            "altitude": self.booster_altitude,
            "speed": self.booster_speed,
            "mass": self.booster_mass,
            "fuel_fraction": self.booster_fuel_fraction,
            "theta": self.booster_theta,
            "x": booster_position[:, 0],
            "y": booster_position[:, 1],
            "vx": booster_velocity[:, 0],
            "vy": booster_velocity[:, 1],
            "upper_x": upper_position[:, 0],
            "upper_y": upper_position[:, 1],
            "upper_altitude": self.upper_stage_altitude,
        })
