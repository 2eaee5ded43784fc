#!/usr/bin/env python
"""Vertical hop: launch, separate, and land the booster back on the pad.

Simulates a scripted mission with the interactive simulator:
- Full-thrust vertical ascent from the pad
- Stage separation after a fixed burn
- Booster free fall, then a velocity-scheduled landing burn
- Legs out below 2 km, touchdown on the 200 m pad

The upper stage coasts for 4 s after separation and then burns on its
own. Only throttle and leg commands are used; the stack stays vertical
so the booster comes straight back down onto the pad.

Usage:
    uv run python scripts/launch_and_land.py
"""

import logging
from pathlib import Path

import numpy as np

from launchsim.simulation import SimConfig, SimulationResult, Simulator

# =============================================================================
# Mission Configuration
# =============================================================================
ASCENT_BURN = 60.0           # Stack burn before separation [s]
LEGS_ALTITUDE = 2000.0       # Deploy legs below this base altitude [m]
MIN_DESCENT_RATE = 4.0       # Target descent rate at touchdown [m/s]
DESCENT_GAIN = 0.08          # Target descent rate per metre of altitude [1/s]
MAX_MISSION_TIME = 900.0     # Give up after this long [s]


def target_descent_rate(altitude: float) -> float:
    """Descent speed the landing burn tries to hold at a given altitude [m/s]."""
    return MIN_DESCENT_RATE + DESCENT_GAIN * max(altitude, 0.0)


def run_mission():
    """Run the scripted launch and landing."""
    print("=" * 70)
    print("VERTICAL HOP WITH BOOSTER RETURN TO PAD")
    print("=" * 70)

    config = SimConfig()
    vehicle = config.vehicle
    sim = Simulator(config=config, record_history=True)

    print("\n" + "-" * 70)
    print("VEHICLE")
    print("-" * 70)
    print(f"  Stack length: {vehicle.total_length:.1f} m")
    print(f"  Liftoff mass: {vehicle.liftoff_mass/1000:.0f} t")
    print(f"  Booster thrust: {vehicle.thrust_sea_level/1e6:.2f} MN")
    print(f"  Upper stage thrust: {vehicle.upper_stage_thrust/1e3:.0f} kN")
    print(f"  Thrust/weight at liftoff: "
          f"{vehicle.thrust_sea_level / (vehicle.liftoff_mass * 9.80665):.2f}")

    # =========================================================================
    # Phase 1: Ascent
    # =========================================================================
    print("\n" + "=" * 70)
    print("PHASE 1: ASCENT")
    print("=" * 70)

    sim.set_throttle(True)
    last_print_time = -10.0
    while sim.time < ASCENT_BURN and not sim.booster_exploded:
        sim.step()
        if sim.time - last_print_time >= 10.0:
            t = sim.telemetry()
            print(
                f"  T+{t.time:5.1f}s | Alt: {t.altitude/1000:6.2f} km | "
                f"Vy: {t.velocity_y:7.1f} m/s | Fuel: {t.fuel_percent:5.1f} %"
            )
            last_print_time = sim.time

    sim.set_throttle(False)
    sim.trigger_separation()
    staging = sim.telemetry()

    print(f"\n{'=' * 70}")
    print(f"STAGE SEPARATION at T+{staging.time:.1f}s")
    print(f"{'=' * 70}")
    print(f"  Altitude: {staging.altitude/1000:.1f} km")
    print(f"  Vertical speed: {staging.velocity_y:.0f} m/s")
    print(f"  Booster propellant: {staging.fuel_percent:.1f} %")

    # =========================================================================
    # Phase 2: Booster return
    # =========================================================================
    print("\n" + "=" * 70)
    print("PHASE 2: BOOSTER RETURN")
    print("=" * 70)

    peak_altitude = staging.altitude
    while (
        not sim.landed
        and not sim.booster_exploded
        and sim.time < MAX_MISSION_TIME
    ):
        t = sim.telemetry()
        peak_altitude = max(peak_altitude, t.altitude)

        falling = t.velocity_y < 0.0
        sim.set_throttle(falling and -t.velocity_y > target_descent_rate(t.altitude))
        if falling and t.altitude < LEGS_ALTITUDE and not sim.legs_deployed:
            sim.deploy_legs()
            print(f"  Legs deployed at T+{t.time:.1f}s, {t.altitude:.0f} m")

        sim.step()
        if sim.time - last_print_time >= 20.0:
            t = sim.telemetry()
            print(
                f"  T+{t.time:5.1f}s | Alt: {t.altitude/1000:6.2f} km | "
                f"Vy: {t.velocity_y:7.1f} m/s | Fuel: {t.fuel_percent:5.1f} %"
            )
            last_print_time = sim.time

    final = sim.telemetry()
    upper = sim.upper_stage

    print("\n" + "=" * 70)
    print("MISSION SUMMARY")
    print("=" * 70)
    print(f"  Peak booster altitude: {peak_altitude/1000:.1f} km")
    if sim.landed:
        print(f"  ✓ Booster LANDED at T+{final.time:.1f}s, x = {final.x_location:.1f} m")
    elif sim.booster_exploded:
        print(f"  ✗ Booster LOST at T+{final.time:.1f}s, x = {final.x_location:.1f} m")
    else:
        print(f"  ⚠ Booster still flying at T+{final.time:.1f}s")
    print(f"  Booster propellant left: {final.fuel_percent:.1f} %")
    if upper is not None:
        print(f"  Upper stage altitude: {upper.altitude(config.dynamics.earth_radius)/1000:.1f} km")
        print(f"  Upper stage speed: {upper.speed:.0f} m/s")

    return sim


if __name__ == "__main__":
    from launchsim.plotting import plot_flight_dashboard, plot_trajectory

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    sim = run_mission()
    result = SimulationResult.from_simulator(sim)

    print("\n" + "=" * 60)
    print("GENERATING PLOTS")
    print("=" * 60)

    output_dir = Path("outputs")
    output_dir.mkdir(exist_ok=True)

    fig_trajectory = plot_trajectory(result, pad_diameter=sim.config.pad_diameter)
    output_trajectory = output_dir / "hop_trajectory.png"
    fig_trajectory.savefig(output_trajectory, dpi=150)
    print(f"  Saved to: {output_trajectory}")

    fig_dashboard = plot_flight_dashboard(result)
    output_dashboard = output_dir / "hop_dashboard.png"
    fig_dashboard.savefig(output_dashboard, dpi=150)
    print(f"  Saved to: {output_dashboard}")

    df = result.to_dataframe()
    print(f"\n  Recorded {len(df)} steps, max speed {np.max(result.booster_speed):.0f} m/s")
