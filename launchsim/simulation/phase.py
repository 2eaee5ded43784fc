"""Mission phase as a tagged variant.

The mission moves PRELAUNCH -> POWERED_ASCENT -> STAGE_SEPARATED. Each
stage independently carries a status of FLYING, LANDED or EXPLODED.
Combinations that cannot occur (an upper stage before separation, a
landed upper stage, a crashed stack still on the pad) are rejected at
construction.

Example:
    >>> from launchsim.simulation.phase import FlightPhase, StageStatus
    >>>
    >>> phase = FlightPhase().with_liftoff().with_separation()
    >>> phase = phase.with_booster(StageStatus.LANDED)
    >>> phase.landed, phase.upper_stage_exploded
    (True, False)
"""

from dataclasses import dataclass, replace
from enum import Enum, auto

from beartype import beartype


class MissionPhase(Enum):
    """Mission-level progress."""

    PRELAUNCH = auto()        # On the pad
    POWERED_ASCENT = auto()   # Liftoff registered, stack intact
    STAGE_SEPARATED = auto()  # Booster and upper stage flying apart


class StageStatus(Enum):
    """Outcome state of one stage."""

    FLYING = auto()
    LANDED = auto()
    EXPLODED = auto()


@beartype
@dataclass(frozen=True)
class FlightPhase:
    """Mission phase plus the status of each stage.

    Attributes:
        mission: Mission-level phase
        booster: Booster (or combined stack) status
        upper_stage: Upper stage status, None until separation
    """
    mission: MissionPhase = MissionPhase.PRELAUNCH
    booster: StageStatus = StageStatus.FLYING
    upper_stage: StageStatus | None = None

    def __post_init__(self) -> None:
        """Reject impossible combinations."""
        separated = self.mission == MissionPhase.STAGE_SEPARATED
        if separated and self.upper_stage is None:
            raise ValueError("Separated mission needs an upper stage status")
        if not separated and self.upper_stage is not None:
            raise ValueError(f"Upper stage status set before separation: {self.upper_stage}")
        if self.upper_stage == StageStatus.LANDED:
            raise ValueError("Upper stage has no landing outcome")
        if self.mission == MissionPhase.PRELAUNCH and self.booster != StageStatus.FLYING:
            raise ValueError(f"Vehicle on the pad cannot be {self.booster.name}")

    def with_liftoff(self) -> "FlightPhase":
        """Phase after liftoff. Unchanged once already off the pad."""
        if self.mission != MissionPhase.PRELAUNCH:
            return self
        return replace(self, mission=MissionPhase.POWERED_ASCENT)

    def with_separation(self) -> "FlightPhase":
        """Phase after stage separation."""
        return replace(
            self,
            mission=MissionPhase.STAGE_SEPARATED,
            upper_stage=StageStatus.FLYING,
        )

    def with_booster(self, status: StageStatus) -> "FlightPhase":
        """Phase with a new booster status."""
        return replace(self, booster=status)

    def with_upper_stage(self, status: StageStatus) -> "FlightPhase":
        """Phase with a new upper stage status."""
        return replace(self, upper_stage=status)

    @property
    def liftoff(self) -> bool:
        """True once liftoff has been registered."""
        return self.mission != MissionPhase.PRELAUNCH

    @property
    def separated(self) -> bool:
        """True after stage separation."""
        return self.mission == MissionPhase.STAGE_SEPARATED

    @property
    def booster_flying(self) -> bool:
        return self.booster == StageStatus.FLYING

    @property
    def upper_stage_flying(self) -> bool:
        return self.upper_stage == StageStatus.FLYING

    @property
    def landed(self) -> bool:
        return self.booster == StageStatus.LANDED

    @property
    def booster_exploded(self) -> bool:
        return self.booster == StageStatus.EXPLODED

    @property
    def upper_stage_exploded(self) -> bool:
        return self.upper_stage == StageStatus.EXPLODED

    @property
    def any_flying(self) -> bool:
        """True while at least one stage is still integrating."""
        return self.booster_flying or self.upper_stage_flying
