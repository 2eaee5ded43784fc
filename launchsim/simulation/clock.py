"""Mission clock and integration step size."""

import logging
from dataclasses import dataclass, replace

from beartype import beartype

logger = logging.getLogger(__name__)


@beartype
@dataclass
class MissionClock:
    """Elapsed mission time, separation time and the current step size.

    Attributes:
        step_size: Integration step [s]
        min_step: Step size at or below which halving is refused [s]
        max_step: Step size at or above which doubling is refused [s]
        elapsed: Time since liftoff [s]
        separation_time: Elapsed time at stage separation, None before it [s]
    """
    step_size: float = 0.03
    min_step: float = 1e-5
    max_step: float = 40.0
    elapsed: float = 0.0
    separation_time: float | None = None

    def __post_init__(self) -> None:
        """Validate clock."""
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.elapsed < 0:
            raise ValueError(f"elapsed must be non-negative, got {self.elapsed}")

    def advance(self) -> float:
        """Advance elapsed time by one step and return the new time [s]."""
        self.elapsed += self.step_size
        return self.elapsed

    def scale_step(self, factor: float) -> bool:
        """Grow or shrink the step size by ``factor``.

        Growth is allowed only while the step is below ``max_step`` and
        shrinking only while it is above ``min_step``. The bound is checked
        before scaling, so one doubling may carry the step past the bound.

        Args:
            factor: Multiplier, > 1 to grow and in (0, 1) to shrink

        Returns:
            True if the step size changed
        """
        if factor > 1.0 and self.step_size < self.max_step:
            self.step_size *= factor
        elif 0.0 < factor < 1.0 and self.step_size > self.min_step:
            self.step_size *= factor
        else:
            logger.debug(
                "Step scale %g refused at step size %g s", factor, self.step_size
            )
            return False

        logger.debug("Step size now %g s", self.step_size)
        return True

    def mark_separation(self) -> None:
        """Record the current elapsed time as the separation time."""
        self.separation_time = self.elapsed

    @property
    def separated(self) -> bool:
        """True once a separation time has been recorded."""
        return self.separation_time is not None

    @property
    def time_since_separation(self) -> float | None:
        """Time since stage separation, None before it [s]."""
        if self.separation_time is None:
            return None
        return self.elapsed - self.separation_time

    def upper_stage_ignited(self, coast: float) -> bool:
        """True once more than ``coast`` seconds have passed since separation."""
        since = self.time_since_separation
        return since is not None and since > coast

    def copy(self) -> "MissionClock":
        """Create a copy of this clock."""
        return replace(self)
