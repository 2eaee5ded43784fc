"""Simulation configuration.

Example:
    >>> from launchsim.simulation import SimConfig
    >>> from launchsim.vehicle import VehicleConfig
    >>>
    >>> config = SimConfig()  # Falcon 9 v1.1 on a 200 m pad
    >>> coarse = SimConfig(initial_step=0.12, max_touchdown_speed=30.0)
    >>> custom = SimConfig(vehicle=VehicleConfig(booster_propellant_mass=200000.0))
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype

from launchsim.dynamics.rigid_body import DynamicsConfig
from launchsim.vehicle.falcon import VehicleConfig


@beartype
@dataclass(frozen=True)
class SimConfig:
    """Simulation configuration.

    Attributes:
        vehicle: Vehicle definition
        dynamics: Environment and force-model parameters
        pad_diameter: Landing pad diameter, centred on x = 0 [m]
        max_touchdown_speed: Fastest survivable touchdown at the base [m/s]
        upright_min: Lowest orientation counted as upright [rad]
        upright_max: Highest orientation counted as upright [rad]
        topple_rate: Correction rate applied to a tilted grounded booster [rad/s]
        settle_rate: Rate at which a landed booster straightens [rad/s]
        settle_tolerance: Band around vertical where settling stops [rad]
        separation_impulse: Upper stage push-off speed along the axis [m/s]
        upper_stage_coast: Delay between separation and ignition [s]
        initial_step: Step size after a reset [s]
        max_step: Step size at or above which doubling is refused [s]
        min_step: Step size at or below which halving is refused [s]
    """
    vehicle: VehicleConfig = field(default_factory=VehicleConfig)
    dynamics: DynamicsConfig = field(default_factory=DynamicsConfig)
    pad_diameter: float = 200.0
    max_touchdown_speed: float = 60.0
    upright_min: float = np.pi / 3
    upright_max: float = 2 * np.pi / 3
    topple_rate: float = 0.3
    settle_rate: float = 0.2
    settle_tolerance: float = 0.01
    separation_impulse: float = 7.0
    upper_stage_coast: float = 4.0
    initial_step: float = 0.03
    max_step: float = 40.0
    min_step: float = 1e-5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.pad_diameter <= 0:
            raise ValueError(f"pad_diameter must be positive, got {self.pad_diameter}")
        if self.max_touchdown_speed <= 0:
            raise ValueError(
                f"max_touchdown_speed must be positive, got {self.max_touchdown_speed}"
            )
        if not 0.0 <= self.upright_min < np.pi / 2 < self.upright_max <= np.pi:
            raise ValueError(
                f"upright band must bracket pi/2 within [0, pi], "
                f"got [{self.upright_min}, {self.upright_max}]"
            )
        if self.topple_rate < 0 or self.settle_rate < 0:
            raise ValueError("topple_rate and settle_rate must be non-negative")
        if self.settle_tolerance <= 0:
            raise ValueError(
                f"settle_tolerance must be positive, got {self.settle_tolerance}"
            )
        if self.separation_impulse < 0:
            raise ValueError(
                f"separation_impulse must be non-negative, got {self.separation_impulse}"
            )
        if self.upper_stage_coast < 0:
            raise ValueError(
                f"upper_stage_coast must be non-negative, got {self.upper_stage_coast}"
            )
        if self.min_step <= 0:
            raise ValueError(f"min_step must be positive, got {self.min_step}")
        if not self.min_step <= self.initial_step <= self.max_step:
            raise ValueError(
                f"initial_step must be within [{self.min_step}, {self.max_step}], "
                f"got {self.initial_step}"
            )

    @property
    def pad_half_width(self) -> float:
        """Largest |x| of the booster base that still counts as on the pad [m]."""
        return self.pad_diameter / 2.0
