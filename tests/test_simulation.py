"""Tests for the mission clock, flight phase, staging and outcome checks."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from launchsim.dynamics import StageState, update_endpoints, update_mass_properties
from launchsim.simulation import (
    FlightPhase,
    MissionClock,
    MissionPhase,
    SimConfig,
    StageStatus,
    can_separate,
    evaluate_booster,
    evaluate_upper_stage,
    point_altitude,
    separate_stages,
    touchdown_speed,
)
from launchsim.vector import unit_vector
from launchsim.vehicle import FALCON_9_V1_1, booster_properties

# =============================================================================
# Mission Clock Tests
# =============================================================================


class TestMissionClock:
    """Test time keeping and step-size scaling."""

    def test_advance(self):
        clock = MissionClock(step_size=0.5)
        clock.advance()
        clock.advance()
        assert clock.elapsed == pytest.approx(1.0)

    def test_double_and_halve(self):
        clock = MissionClock()
        assert clock.scale_step(2.0)
        assert clock.step_size == pytest.approx(0.06)
        assert clock.scale_step(0.5)
        assert clock.step_size == pytest.approx(0.03)

    def test_doubling_refused_at_max(self):
        clock = MissionClock(step_size=40.0)
        assert not clock.scale_step(2.0)
        assert clock.step_size == 40.0

    def test_bound_checked_before_scaling(self):
        """A step just under the cap may still double past it."""
        clock = MissionClock(step_size=30.0)
        assert clock.scale_step(2.0)
        assert clock.step_size == pytest.approx(60.0)
        assert not clock.scale_step(2.0)

    def test_halving_refused_at_min(self):
        clock = MissionClock(step_size=1e-5)
        assert not clock.scale_step(0.5)
        assert clock.step_size == 1e-5

    def test_unit_factor_is_refused(self):
        clock = MissionClock()
        assert not clock.scale_step(1.0)

    def test_upper_stage_coast(self):
        """Ignition strictly after the coast has elapsed."""
        clock = MissionClock(step_size=1.0, elapsed=10.0)
        assert clock.time_since_separation is None
        assert not clock.upper_stage_ignited(4.0)

        clock.mark_separation()
        assert clock.separated
        for _ in range(4):
            clock.advance()
        assert clock.time_since_separation == pytest.approx(4.0)
        assert not clock.upper_stage_ignited(4.0)

        clock.advance()
        assert clock.upper_stage_ignited(4.0)

    def test_copy_is_independent(self):
        clock = MissionClock()
        clone = clock.copy()
        clone.advance()
        assert clock.elapsed == 0.0

    def test_rejects_non_positive_step(self):
        with pytest.raises(ValueError, match="step_size must be positive"):
            MissionClock(step_size=0.0)


# =============================================================================
# Flight Phase Tests
# =============================================================================


class TestFlightPhase:
    """Test the mission phase variant."""

    def test_initial(self):
        phase = FlightPhase()
        assert phase.mission == MissionPhase.PRELAUNCH
        assert not phase.liftoff
        assert not phase.separated
        assert phase.booster_flying
        assert phase.upper_stage is None

    def test_liftoff_is_idempotent(self):
        once = FlightPhase().with_liftoff()
        twice = once.with_liftoff()
        assert once == twice
        assert once.mission == MissionPhase.POWERED_ASCENT

    def test_separation(self):
        phase = FlightPhase().with_liftoff().with_separation()
        assert phase.separated
        assert phase.upper_stage_flying
        assert phase.any_flying

    def test_outcomes(self):
        phase = FlightPhase().with_liftoff().with_separation()
        phase = phase.with_booster(StageStatus.LANDED)
        phase = phase.with_upper_stage(StageStatus.EXPLODED)
        assert phase.landed
        assert phase.upper_stage_exploded
        assert not phase.any_flying

    def test_rejects_upper_stage_before_separation(self):
        with pytest.raises(ValueError, match="before separation"):
            FlightPhase(mission=MissionPhase.POWERED_ASCENT, upper_stage=StageStatus.FLYING)

    def test_rejects_landed_upper_stage(self):
        with pytest.raises(ValueError, match="no landing outcome"):
            FlightPhase(
                mission=MissionPhase.STAGE_SEPARATED,
                upper_stage=StageStatus.LANDED,
            )

    def test_rejects_crash_on_pad(self):
        with pytest.raises(ValueError, match="on the pad"):
            FlightPhase(booster=StageStatus.EXPLODED)


# =============================================================================
# Staging Tests
# =============================================================================


class TestCanSeparate:
    """Test when a separation command is honoured."""

    def test_not_before_liftoff(self):
        assert not can_separate(FlightPhase(), False)

    def test_during_ascent(self):
        assert can_separate(FlightPhase().with_liftoff(), False)

    def test_not_while_paused(self):
        assert not can_separate(FlightPhase().with_liftoff(), True)

    def test_only_once(self):
        assert not can_separate(FlightPhase().with_liftoff().with_separation(), False)

    def test_not_after_crash(self):
        phase = FlightPhase().with_liftoff().with_booster(StageStatus.EXPLODED)
        assert not can_separate(phase, False)


class TestSeparateStages:
    """Test the split of the stack into two bodies."""

    @pytest.fixture
    def stack(self):
        """Stack climbing at 500 m/s, tilted downrange."""
        stack = StageState.on_pad(FALCON_9_V1_1)
        stack.position = np.array([2000.0, 20000.0])
        stack.velocity = np.array([150.0, 500.0])
        stack.theta = 1.3
        stack.fuel_fraction = 0.4
        update_mass_properties(stack, FALCON_9_V1_1, False)
        update_endpoints(stack)
        return stack

    def test_input_untouched(self, stack):
        before = stack.copy()
        separate_stages(stack, FALCON_9_V1_1)
        assert stack.length == before.length
        assert_allclose(stack.position, before.position)
        assert_allclose(stack.top, before.top)

    def test_booster_keeps_base_and_motion(self, stack):
        booster, _ = separate_stages(stack, FALCON_9_V1_1)
        assert_allclose(booster.bottom, stack.bottom)
        assert_allclose(booster.velocity, stack.velocity)
        assert booster.theta == stack.theta
        assert booster.omega == stack.omega
        assert booster.fuel_fraction == stack.fuel_fraction

    def test_booster_geometry(self, stack):
        booster, _ = separate_stages(stack, FALCON_9_V1_1)
        props = booster_properties(FALCON_9_V1_1, 0.4)
        axis = unit_vector(1.3)
        assert booster.length == pytest.approx(41.2)
        assert booster.mass == pytest.approx(props.mass)
        assert_allclose(booster.top, stack.bottom + 41.2 * axis)
        assert_allclose(booster.position, stack.bottom + props.cm_height * axis)

    def test_upper_stage_placement(self, stack):
        booster, upper = separate_stages(stack, FALCON_9_V1_1)
        axis = unit_vector(1.3)
        assert_allclose(upper.bottom, booster.top)
        assert_allclose(upper.top, booster.top + 26.9 * axis)
        assert_allclose(upper.position, booster.top + 13.45 * axis)
        assert upper.theta == stack.theta

    def test_upper_stage_push_off(self, stack):
        """Velocity is the stack's plus the impulse along the shared axis."""
        _, upper = separate_stages(stack, FALCON_9_V1_1, separation_impulse=7.0)
        assert_allclose(upper.velocity, stack.velocity + 7.0 * unit_vector(1.3))

    def test_upper_stage_fuelled_but_silent(self, stack):
        _, upper = separate_stages(stack, FALCON_9_V1_1)
        assert upper.fuel_fraction == 1.0
        assert_allclose(upper.main_thrust, [0.0, 0.0])
        assert upper.main_thrust_magnitude == pytest.approx(6444000.0 / 9)
        assert upper.mass == pytest.approx(3900.0 + 92670.0 + 1750.0)

    def test_mass_accounted(self, stack):
        """Booster plus full upper stage equals the stack at separation."""
        booster, upper = separate_stages(stack, FALCON_9_V1_1)
        assert booster.mass + upper.mass == pytest.approx(stack.mass)


# =============================================================================
# Outcome Tests
# =============================================================================


def grounded_booster(
    speed: float,
    theta: float = np.pi / 2,
    x: float = 0.0,
    depth: float = 0.5,
) -> StageState:
    """Separated booster whose base has just gone ``depth`` below the pad."""
    props = booster_properties(FALCON_9_V1_1, 0.1)
    axis = unit_vector(theta)
    bottom = np.array([x, -depth])
    return StageState(
        position=bottom + props.cm_height * axis,
        velocity=np.array([0.0, -speed]),
        top=bottom + props.length * axis,
        bottom=bottom,
        mass=props.mass,
        moment_of_inertia=props.moment_of_inertia,
        cm_fraction=props.cm_fraction,
        length=props.length,
        width=FALCON_9_V1_1.width,
        fuel_fraction=0.1,
        theta=theta,
    )


@pytest.fixture
def config():
    return SimConfig()


class TestBoosterOutcome:
    """Test landing and explosion classification."""

    def test_gentle_touchdown_lands(self, config):
        stage = grounded_booster(10.0)
        status = evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)
        assert status == StageStatus.LANDED
        assert_allclose(stage.velocity, [0.0, 0.0])
        assert stage.omega == 0.0

    def test_hard_touchdown_explodes(self, config):
        stage = grounded_booster(80.0)
        status = evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)
        assert status == StageStatus.EXPLODED

    def test_legs_stowed_explodes(self, config):
        stage = grounded_booster(10.0)
        status = evaluate_booster(stage, StageStatus.FLYING, False, config, 0.03)
        assert status == StageStatus.EXPLODED

    def test_off_pad_explodes(self, config):
        stage = grounded_booster(10.0, x=150.0)
        status = evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)
        assert status == StageStatus.EXPLODED

    def test_pad_edge_lands(self, config):
        stage = grounded_booster(10.0, x=99.0)
        status = evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)
        assert status == StageStatus.LANDED

    def test_airborne_keeps_flying(self, config):
        stage = grounded_booster(10.0, depth=-100.0)
        status = evaluate_booster(stage, StageStatus.FLYING, False, config, 0.03)
        assert status == StageStatus.FLYING
        assert stage.velocity[1] == -10.0

    def test_tilted_is_nudged_upright(self, config):
        """Outside the upright band but above horizontal: held and corrected."""
        stage = grounded_booster(10.0, theta=0.9)
        status = evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)
        assert status == StageStatus.FLYING
        assert stage.theta == pytest.approx(0.9 + 0.3 * 0.03)
        assert_allclose(stage.velocity, [0.0, 0.0])
        assert_allclose(stage.top, stage.bottom + stage.length * unit_vector(stage.theta))

    def test_tilted_the_other_way(self, config):
        stage = grounded_booster(10.0, theta=2.3)
        evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)
        assert stage.theta == pytest.approx(2.3 - 0.3 * 0.03)

    def test_nose_below_ground_explodes(self, config):
        stage = grounded_booster(5.0, theta=-0.1)
        status = evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)
        assert status == StageStatus.EXPLODED

    def test_toppled_past_horizontal_explodes(self, config):
        """Nose above ground but rotated below horizontal: lost at its midpoint."""
        stage = grounded_booster(10.0, theta=2 * np.pi + 0.05)
        assert point_altitude(stage.top) > 0.0
        midpoint = (stage.top[0] + stage.bottom[0]) / 2.0

        status = evaluate_booster(stage, StageStatus.FLYING, True, config, 0.03)

        assert status == StageStatus.EXPLODED
        assert_allclose(stage.position, [midpoint, 0.0])
        assert_allclose(stage.velocity, [0.0, 0.0])

    def test_exploded_is_terminal(self, config):
        stage = grounded_booster(10.0)
        before = stage.copy()
        status = evaluate_booster(stage, StageStatus.EXPLODED, True, config, 0.03)
        assert status == StageStatus.EXPLODED
        assert_allclose(stage.velocity, before.velocity)

    def test_landed_settles_toward_vertical(self, config):
        stage = grounded_booster(0.0, theta=np.pi / 2 + 0.1)
        status = evaluate_booster(stage, StageStatus.LANDED, False, config, 0.03)
        assert status == StageStatus.LANDED
        assert stage.theta == pytest.approx(np.pi / 2 + 0.1 - 0.2 * 0.03)

    def test_settled_within_tolerance_stays(self, config):
        stage = grounded_booster(0.0, theta=np.pi / 2 + 0.005)
        evaluate_booster(stage, StageStatus.LANDED, True, config, 0.03)
        assert stage.theta == pytest.approx(np.pi / 2 + 0.005)

    def test_touchdown_speed_includes_rotation(self):
        stage = grounded_booster(0.0)
        stage.omega = 1.0
        assert touchdown_speed(stage) == pytest.approx(stage.cm_height)

    def test_point_altitude(self):
        assert point_altitude(np.array([0.0, 12.0])) == pytest.approx(12.0)


class TestUpperStageOutcome:
    """Test upper stage loss."""

    def test_below_ground_explodes(self):
        stage = grounded_booster(50.0)
        assert evaluate_upper_stage(stage, StageStatus.FLYING) == StageStatus.EXPLODED
        assert_allclose(stage.velocity, [0.0, 0.0])

    def test_airborne_keeps_flying(self):
        stage = grounded_booster(50.0, depth=-5000.0)
        assert evaluate_upper_stage(stage, StageStatus.FLYING) == StageStatus.FLYING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
