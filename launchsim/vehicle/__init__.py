"""Vehicle modeling for the two-stage launch simulation.

Provides the vehicle definition and along-axis mass properties for
the combined stack, the returning booster and the upper stage.

Example:
    >>> from launchsim.vehicle import VehicleConfig, booster_properties
    >>>
    >>> falcon = VehicleConfig()
    >>> props = booster_properties(falcon, fuel_fraction=0.1)
    >>> print(f"Booster CM at {props.cm_height:.1f} m above its base")
"""

from launchsim.vehicle.falcon import (
    FALCON_9_V1_1,
    VehicleConfig,
)
from launchsim.vehicle.mass import (
    MassProperties,
    StackProperties,
    booster_properties,
    combined_vehicle_properties,
    compute_inertia_rod,
    upper_stage_properties,
)

__all__ = [
    # Definition
    "FALCON_9_V1_1",
    "VehicleConfig",
    # Mass properties
    "MassProperties",
    "StackProperties",
    "booster_properties",
    "combined_vehicle_properties",
    "compute_inertia_rod",
    "upper_stage_properties",
]
