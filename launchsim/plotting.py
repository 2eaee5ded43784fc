"""Visualization module for launchsim.

Provides offline plotting functions for:
- Flight trajectories of both stages
- A flight dashboard (altitude, speed, mass, orientation vs time)
- The atmosphere profile used by the drag model

Figures are returned, never shown, so scripts decide where they go.
"""

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure

from launchsim.environment.atmosphere import Atmosphere
from launchsim.simulation.simulator import SimulationResult

# =============================================================================
# Figure Styling
# =============================================================================

# Line and marker colors by role
COLORS = {
    "booster": "#1F5F8B",  # Deep blue
    "upper_stage": "#D1495B",  # Rose
    "fuel": "#EDAE49",  # Amber
    "reference": "#66A182",  # Sage, for bands and limits
    "ground": "#4A4A4A",  # Surface line
    "pad": "#B33F00",  # Landing pad
    "ink": "#2B2B2B",  # Axes and labels
}

# Landscape figure for single-panel plots
DEFAULT_FIGSIZE = (12.0, 6.0)

def _setup_style() -> None:
    """Apply the shared rcParams used by every figure in this module."""
    plt.rcParams.update(
        {
            "font.size": 10,
            "axes.titlesize": 13,
            "axes.labelsize": 11,
            "axes.edgecolor": COLORS["ink"],
            "axes.labelcolor": COLORS["ink"],
            "axes.spines.top": False,
            "axes.spines.right": False,
            "xtick.color": COLORS["ink"],
            "ytick.color": COLORS["ink"],
            "legend.frameon": False,
            "lines.linewidth": 2.0,
        }
    )



# =============================================================================
# Trajectory Plot
# =============================================================================


@beartype
def plot_trajectory(
    result: SimulationResult,
    pad_diameter: float = 200.0,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot downrange position vs altitude for both stages.

    Args:
        result: Recorded mission history
        pad_diameter: Landing pad width to mark on the ground [m]
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()

    fig, ax = plt.subplots(figsize=figsize)

    booster_x_km = result.booster_position[:, 0] / 1000
    ax.plot(booster_x_km, result.booster_altitude / 1000, color=COLORS["booster"], label="Booster")

    upper_x_km = result.upper_stage_position[:, 0] / 1000
    if np.any(np.isfinite(upper_x_km)):
        ax.plot(
            upper_x_km,
            result.upper_stage_altitude / 1000,
            color=COLORS["upper_stage"],
            label="Upper stage",
        )

    pad_half_km = pad_diameter / 2000
    ax.axhline(y=0, color=COLORS["ground"], linewidth=1)
    ax.plot([-pad_half_km, pad_half_km], [0, 0], color=COLORS["pad"], linewidth=5, label="Pad")

    ax.set_xlabel("Downrange (km)")
    ax.set_ylabel("Altitude (km)")
    ax.set_title("Flight Path")
    ax.legend(loc="upper left")

    fig.tight_layout()
    return fig


# =============================================================================
# Flight Dashboard
# =============================================================================


@beartype
def plot_flight_dashboard(
    result: SimulationResult,
    figsize: tuple[float, float] = (14.0, 9.0),
) -> Figure:
    """Four-panel booster history: altitude, speed, mass and orientation.

    Args:
        result: Recorded mission history
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()

    t = result.time
    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    (ax_alt, ax_speed), (ax_mass, ax_theta) = axes

    ax_alt.plot(t, result.booster_altitude / 1000, color=COLORS["booster"])
    ax_alt.set_ylabel("Base altitude (km)")

    ax_speed.plot(t, result.booster_speed, color=COLORS["booster"])
    ax_speed.set_ylabel("CM speed (m/s)")

    ax_mass.plot(t, result.booster_mass / 1000, color=COLORS["booster"])
    ax_mass.set_ylabel("Mass (t)")
    ax_fuel = ax_mass.twinx()
    ax_fuel.plot(t, 100 * result.booster_fuel_fraction, color=COLORS["fuel"], linestyle="--")
    ax_fuel.set_ylabel("Propellant (%)", color=COLORS["fuel"])

    ax_theta.plot(t, np.degrees(result.booster_theta), color=COLORS["booster"])
    ax_theta.axhspan(60, 120, color=COLORS["reference"], alpha=0.15, label="Upright band")
    ax_theta.set_ylabel("Orientation (deg)")
    ax_theta.legend(loc="lower left")

    ax_mass.set_xlabel("Time (s)")
    ax_theta.set_xlabel("Time (s)")

    fig.suptitle("Booster")
    fig.tight_layout()
    return fig


# =============================================================================
# Atmosphere Profile
# =============================================================================


@beartype
def plot_atmosphere_profile(
    atmosphere: Atmosphere | None = None,
    max_altitude_km: float = 50.0,
    num_points: int = 200,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Temperature and density against altitude, with the drag ceiling marked."""
    _setup_style()

    atmosphere = atmosphere or Atmosphere()
    profile = atmosphere.profile(np.linspace(0.0, max_altitude_km * 1000, num_points))
    altitude_km = profile["altitude"] / 1000
    ceiling_km = atmosphere.ceiling / 1000

    fig, (ax_temp, ax_rho) = plt.subplots(1, 2, figsize=figsize, sharey=True)

    ax_temp.plot(profile["temperature"], altitude_km, color=COLORS["fuel"])
    ax_temp.set_xlabel("Temperature (K)")
    ax_temp.set_ylabel("Altitude (km)")

    ax_rho.plot(profile["density"], altitude_km, color=COLORS["booster"])
    ax_rho.set_xlabel("Density (kg/m³)")

    for ax in (ax_temp, ax_rho):
        ax.axhline(y=ceiling_km, color=COLORS["reference"], linestyle=":", label="Drag ceiling")
    ax_rho.legend()

    fig.tight_layout()
    return fig
