"""Tests for the proportional controller, schedules and setpoint search."""

from dataclasses import dataclass

import pytest
import sys, os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from heatcompare.controllers.proportional import ProportionalController, RampLimiter
from heatcompare.controllers.schedule import HeatingSchedule
from heatcompare.controllers.target_average import (
    clamp_setpoint, solve_brentq, solve_fixed_point, solve_target_average
)
from heatcompare.models.categories import StrategyType
from heatcompare.models.config import StrategyConfig


@dataclass(frozen=True)
class FakeResult:
    avg_temp: float
    setpoint: float
    solver_iterations: int = 0


class LinearHouse:
    """Daily average as an affine function of the setpoint, recording calls."""

    def __init__(self, slope, offset):
        self.slope = slope
        self.offset = offset
        self.setpoints = []

    def __call__(self, setpoint):
        self.setpoints.append(setpoint)
        return FakeResult(self.slope * setpoint + self.offset, setpoint)


# ===================== Proportional Tests =====================

class TestProportional:
    def test_demand_proportional_to_error(self):
        ctrl = ProportionalController(Kp=5.0)
        assert ctrl.get_u(18.0, 21.0, 24.0) == pytest.approx(15.0)

    def test_no_demand_at_or_above_target(self):
        ctrl = ProportionalController(Kp=5.0)
        assert ctrl.get_u(21.0, 21.0, 24.0) == 0.0
        assert ctrl.get_u(23.0, 21.0, 24.0) == 0.0

    def test_demand_clamped_to_capacity(self):
        ctrl = ProportionalController(Kp=5.0)
        assert ctrl.get_u(10.0, 21.0, 24.0) == 24.0

    def test_off_sentinel_gives_no_demand(self):
        ctrl = ProportionalController()
        assert ctrl.get_u(2.0, -10.0, 24.0) == 0.0


class TestRampLimiter:
    def test_ramp_up_bounded(self):
        limiter = RampLimiter(rate=0.8, step_minutes=5)
        outputs = [limiter.update(15.0) for _ in range(5)]
        assert outputs == pytest.approx([4.0, 8.0, 12.0, 15.0, 15.0])

    def test_ramp_down_bounded(self):
        limiter = RampLimiter(rate=0.8, step_minutes=5, initial=10.0)
        assert limiter.update(0.0) == pytest.approx(6.0)
        assert limiter.update(0.0) == pytest.approx(2.0)
        assert limiter.update(0.0) == 0.0

    def test_small_change_reached_exactly(self):
        limiter = RampLimiter(rate=2.0, step_minutes=5, initial=3.0)
        assert limiter.update(5.5) == 5.5

    def test_reset(self):
        limiter = RampLimiter(rate=0.25)
        limiter.update(8.0)
        assert limiter.output > 0
        limiter.reset()
        assert limiter.output == 0.0


# ===================== Schedule Tests =====================

class TestSchedule:
    def strategy(self, strategy_type):
        return StrategyConfig(strategy_type=strategy_type, comfort_temp=21.0,
                              setback_temp=16.0,
                              active_hours=[(6, 9), (16, 22.5)])

    def test_always_on_ignores_windows(self):
        schedule = HeatingSchedule(self.strategy(StrategyType.ALWAYS_ON))
        assert schedule.get_target(3.0) == (21.0, True)
        assert schedule.get_target(23.5) == (21.0, True)

    def test_setback_outside_windows(self):
        schedule = HeatingSchedule(self.strategy(StrategyType.SETBACK))
        assert schedule.get_target(3.0) == (16.0, False)
        assert schedule.get_target(7.0) == (21.0, True)
        assert schedule.get_target(22.5) == (16.0, False)

    def test_timed_off_outside_windows(self):
        schedule = HeatingSchedule(self.strategy(StrategyType.TIMED))
        assert schedule.get_target(12.0) == (-10.0, False)
        assert schedule.get_target(16.0) == (21.0, True)

    def test_override_replaces_comfort_only(self):
        schedule = HeatingSchedule(self.strategy(StrategyType.SETBACK),
                                   comfort_override=23.5)
        assert schedule.get_target(7.0) == (23.5, True)
        assert schedule.get_target(3.0) == (16.0, False)

    def test_display_target(self):
        assert HeatingSchedule.display_target(-10.0) == 0.0
        assert HeatingSchedule.display_target(-5.0) == 0.0
        assert HeatingSchedule.display_target(16.0) == 16.0


# ===================== Target Average Tests =====================

class TestTargetAverage:
    def test_clamp(self):
        assert clamp_setpoint(50.0, 19.0) == 45.0
        assert clamp_setpoint(10.0, 19.0) == 19.0
        assert clamp_setpoint(30.0, 19.0) == 30.0

    def test_fixed_point_converges(self):
        house = LinearHouse(slope=0.5, offset=8.0)     # avg = 19 at S = 22
        result = solve_fixed_point(house, 19.0)
        assert abs(result.avg_temp - 19.0) < 0.1
        assert result.solver_iterations == 2
        assert house.setpoints == pytest.approx([19.0, 21.25, 21.8125])

    def test_stops_when_first_run_within_tolerance(self):
        house = LinearHouse(slope=1.0, offset=0.05)
        result = solve_fixed_point(house, 19.0)
        assert house.setpoints == [19.0]
        assert result.solver_iterations == 0

    def test_setpoint_never_below_target(self):
        house = LinearHouse(slope=1.0, offset=5.0)     # always too warm
        result = solve_fixed_point(house, 19.0)
        assert min(house.setpoints) == 19.0
        assert result.setpoint == 19.0

    def test_unreachable_target_hits_ceiling(self):
        house = LinearHouse(slope=0.1, offset=0.0)
        result = solve_fixed_point(house, 19.0)
        assert max(house.setpoints) == 45.0
        assert len(house.setpoints) == 13              # first run + 12 adjustments
        assert result.solver_iterations == 12
        assert result.setpoint == 45.0

    def test_plain_result_objects_supported(self):
        from types import SimpleNamespace
        result = solve_fixed_point(lambda s: SimpleNamespace(avg_temp=s), 19.0)
        assert result.avg_temp == 19.0

    def test_brentq_converges(self):
        house = LinearHouse(slope=0.5, offset=8.0)
        result = solve_brentq(house, 19.0)
        assert abs(result.avg_temp - 19.0) < 0.1
        assert all(19.0 <= s <= 45.0 for s in house.setpoints)
        assert result.solver_iterations > 0

    def test_brentq_too_warm_returns_target(self):
        house = LinearHouse(slope=1.0, offset=5.0)
        result = solve_brentq(house, 19.0)
        assert result.setpoint == 19.0

    def test_brentq_unreachable_returns_ceiling(self):
        house = LinearHouse(slope=0.1, offset=0.0)
        result = solve_brentq(house, 19.0)
        assert result.setpoint == 45.0

    def test_dispatch(self):
        house = LinearHouse(slope=0.5, offset=8.0)
        result = solve_target_average(house, 19.0, method='brentq')
        assert abs(result.avg_temp - 19.0) < 0.1

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="method"):
            solve_target_average(LinearHouse(1.0, 0.0), 19.0, method='newton')
