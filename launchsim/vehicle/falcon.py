"""Two-stage vehicle definition.

Defaults describe a Falcon 9 v1.1: a nine-engine booster topped by a
single-engine second stage and payload fairing. Every length is
measured along the body axis and every mass excludes propellant unless
the name says otherwise.

Example:
    >>> from launchsim.vehicle import VehicleConfig
    >>>
    >>> falcon = VehicleConfig()
    >>> print(f"Stack: {falcon.total_length:.1f} m, {falcon.liftoff_mass/1e3:.0f} t")
    >>>
    >>> # Lighter demonstrator with a shorter booster
    >>> demo = VehicleConfig(booster_length=30.0, booster_propellant_mass=150000.0)
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype


@beartype
@dataclass(frozen=True)
class VehicleConfig:
    """Geometry, mass and propulsion data for the two-stage stack.

    Attributes:
        octaweb_mass: Engine section mass, concentrated at the booster base [kg]
        booster_mass: Booster structure without propellant or engines [kg]
        booster_length: Booster length [m]
        booster_propellant_mass: Full booster propellant load [kg]
        interstage_length: Gap between booster top and second stage [m]
        upper_stage_mass: Second stage structure without propellant [kg]
        upper_stage_propellant_mass: Full second stage propellant load [kg]
        second_stage_length: Second stage length without fairing [m]
        fairing_mass: Payload fairing mass [kg]
        fairing_length: Payload fairing length [m]
        width: Body diameter [m]
        specific_impulse: Engine Isp used for propellant flow [s]
        thrust_sea_level: Booster rated thrust [N]
        thrust_vacuum: Rated vacuum thrust of the full engine cluster [N]
        upper_stage_engines: Cluster size the vacuum rating is divided among
        nitrogen_thrust: Force of each cold-gas attitude thruster [N]
        nitrogen_height: Thruster mount height above the booster base [m]
        gimbal_rate: Main engine slew rate [rad/s]
        gimbal_limit: Main engine deflection limit [rad]
    """
    octaweb_mass: float = 4200.0
    booster_mass: float = 19800.0
    booster_length: float = 41.2
    booster_propellant_mass: float = 395700.0
    interstage_length: float = 1.9
    upper_stage_mass: float = 3900.0
    upper_stage_propellant_mass: float = 92670.0
    second_stage_length: float = 13.8
    fairing_mass: float = 1750.0
    fairing_length: float = 13.1
    width: float = 3.66
    specific_impulse: float = 282.0
    thrust_sea_level: float = 5885000.0
    thrust_vacuum: float = 6444000.0
    upper_stage_engines: int = 9
    nitrogen_thrust: float = 10000.0
    nitrogen_height: float = 38.0
    gimbal_rate: float = 0.5
    gimbal_limit: float = np.pi / 4

    def __post_init__(self) -> None:
        """Validate configuration."""
        positive = {
            "octaweb_mass": self.octaweb_mass,
            "booster_mass": self.booster_mass,
            "booster_length": self.booster_length,
            "upper_stage_mass": self.upper_stage_mass,
            "second_stage_length": self.second_stage_length,
            "fairing_mass": self.fairing_mass,
            "width": self.width,
            "specific_impulse": self.specific_impulse,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        non_negative = {
            "booster_propellant_mass": self.booster_propellant_mass,
            "upper_stage_propellant_mass": self.upper_stage_propellant_mass,
            "interstage_length": self.interstage_length,
            "fairing_length": self.fairing_length,
            "thrust_sea_level": self.thrust_sea_level,
            "thrust_vacuum": self.thrust_vacuum,
            "nitrogen_thrust": self.nitrogen_thrust,
            "gimbal_rate": self.gimbal_rate,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        if self.upper_stage_engines < 1:
            raise ValueError(f"upper_stage_engines must be >= 1, got {self.upper_stage_engines}")
        if not 0 < self.gimbal_limit < np.pi / 2:
            raise ValueError(f"gimbal_limit must be in (0, pi/2), got {self.gimbal_limit}")
        if not 0 <= self.nitrogen_height <= self.booster_length:
            raise ValueError(
                f"nitrogen_height must lie on the booster (0 to {self.booster_length} m), "
                f"got {self.nitrogen_height}"
            )

    @property
    def upper_stage_length(self) -> float:
        """Second stage plus fairing [m]."""
        return self.second_stage_length + self.fairing_length

    @property
    def total_length(self) -> float:
        """Full stack from booster base to fairing tip [m]."""
        return self.booster_length + self.interstage_length + self.upper_stage_length

    @property
    def upper_stage_thrust(self) -> float:
        """Rated thrust of the single upper-stage engine [N]."""
        return self.thrust_vacuum / self.upper_stage_engines

    @property
    def booster_dry_mass(self) -> float:
        """Booster structure plus engines [kg]."""
        return self.octaweb_mass + self.booster_mass

    @property
    def upper_stage_dry_mass(self) -> float:
        """Upper stage structure plus fairing [kg]."""
        return self.upper_stage_mass + self.fairing_mass

    @property
    def liftoff_mass(self) -> float:
        """Fully fuelled stack [kg]."""
        return (
            self.booster_dry_mass
            + self.booster_propellant_mass
            + self.upper_stage_dry_mass
            + self.upper_stage_propellant_mass
        )

    @property
    def upper_stage_base(self) -> float:
        """Height of the second stage base above the booster base [m]."""
        return self.booster_length + self.interstage_length


FALCON_9_V1_1 = VehicleConfig()
