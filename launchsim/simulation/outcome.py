"""Landing and explosion checks for each stage.

Run once per step per stage, after integration. The booster is checked
in order:

1. Top below ground: exploded.
2. Base below ground:
   a. Too fast at the base, legs stowed, or off the pad: exploded.
   b. Tilted outside the upright band: past horizontal it explodes
      where it lies, otherwise it is held on the ground and nudged
      back toward the band.
   c. Otherwise: landed, then settled toward vertical.

The upper stage only explodes, when either end goes below ground.
Exploded and landed are terminal: an exploded stage is never touched
again and a landed booster only straightens up.

Example:
    >>> from launchsim.simulation.outcome import evaluate_booster
    >>>
    >>> status = evaluate_booster(stage, StageStatus.FLYING, legs_deployed=True,
    ...                           config=config, dt=0.03)
"""

import logging

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from launchsim.dynamics.state import StageState
from launchsim.environment.gravity import EARTH_RADIUS
from launchsim.simulation.config import SimConfig
from launchsim.simulation.phase import StageStatus
from launchsim.vector import magnitude, unit_vector

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================


@beartype
def point_altitude(
    point: NDArray[np.float64],
    earth_radius: float = EARTH_RADIUS,
) -> float:
    """Height of a world point above the reference sphere [m]."""
    return float(np.hypot(point[0], point[1] + earth_radius)) - earth_radius


@beartype
def touchdown_speed(stage: StageState) -> float:
    """Speed of the base point, CM motion plus rotation about the CM [m/s]."""
    ax, ay = stage.axis
    arm = stage.omega * stage.cm_height
    return magnitude(
        np.array([
            stage.velocity[0] + arm * ay,
            stage.velocity[1] - arm * ax,
        ])
    )


def _halt(stage: StageState) -> None:
    stage.velocity = np.zeros(2)
    stage.omega = 0.0


def _stand_on_base(stage: StageState) -> None:
    """Rebuild the top and CM from the base point and theta."""
    stage.top = stage.bottom + stage.length * unit_vector(stage.theta)
    stage.position = stage.bottom + stage.cm_fraction * (stage.top - stage.bottom)


# =============================================================================
# Booster
# =============================================================================


@beartype
def settle_upright(
    stage: StageState,
    rate: float,
    tolerance: float,
    dt: float,
) -> None:
    """Turn a grounded stage toward vertical until within ``tolerance``."""
    if stage.theta < np.pi / 2 - tolerance:
        stage.theta += rate * dt
    elif stage.theta > np.pi / 2 + tolerance:
        stage.theta -= rate * dt
    _stand_on_base(stage)


@beartype
def evaluate_booster(
    stage: StageState,
    status: StageStatus,
    legs_deployed: bool,
    config: SimConfig,
    dt: float,
) -> StageStatus:
    """Classify the booster after a step and apply the ground response.

    Args:
        stage: Booster state, modified in place on contact
        status: Status before this check
        legs_deployed: Whether the landing legs are out
        config: Simulation configuration
        dt: Step size [s]

    Returns:
        Booster status after this check
    """
    if status == StageStatus.EXPLODED:
        return status

    if status == StageStatus.LANDED:
        settle_upright(stage, config.settle_rate, config.settle_tolerance, dt)
        return status

    radius = config.dynamics.earth_radius

    if point_altitude(stage.top, radius) < 0.0:
        _halt(stage)
        logger.info("Booster exploded: nose below ground")
        return StageStatus.EXPLODED

    if point_altitude(stage.bottom, radius) >= 0.0:
        return StageStatus.FLYING

    speed = touchdown_speed(stage)
    if speed > config.max_touchdown_speed:
        _halt(stage)
        logger.info("Booster exploded: touchdown at %.1f m/s", speed)
        return StageStatus.EXPLODED
    if not legs_deployed:
        _halt(stage)
        logger.info("Booster exploded: touchdown with legs stowed")
        return StageStatus.EXPLODED
    if abs(stage.bottom[0]) > config.pad_half_width:
        _halt(stage)
        logger.info("Booster exploded: touchdown %.1f m from pad center", stage.bottom[0])
        return StageStatus.EXPLODED

    theta = stage.theta
    if theta < config.upright_min or theta > config.upright_max:
        if theta < 0.0 or theta > np.pi:
            stage.position = np.array([(stage.top[0] + stage.bottom[0]) / 2.0, 0.0])
            _halt(stage)
            logger.info("Booster exploded: toppled past horizontal")
            return StageStatus.EXPLODED

        if theta > config.upright_max:
            stage.theta = theta - config.topple_rate * dt
        else:
            stage.theta = theta + config.topple_rate * dt
        _stand_on_base(stage)
        _halt(stage)
        return StageStatus.FLYING

    _halt(stage)
    settle_upright(stage, config.settle_rate, config.settle_tolerance, dt)
    logger.info("Booster landed at x = %.1f m, touchdown %.1f m/s", stage.bottom[0], speed)
    return StageStatus.LANDED


# =============================================================================
# Upper Stage
# =============================================================================


@beartype
def evaluate_upper_stage(
    stage: StageState,
    status: StageStatus,
    earth_radius: float = EARTH_RADIUS,
) -> StageStatus:
    """Explode the upper stage if either end has gone below ground."""
    if status == StageStatus.EXPLODED:
        return status

    if (
        point_altitude(stage.top, earth_radius) < 0.0
        or point_altitude(stage.bottom, earth_radius) < 0.0
    ):
        _halt(stage)
        logger.info("Upper stage exploded")
        return StageStatus.EXPLODED

    return status
