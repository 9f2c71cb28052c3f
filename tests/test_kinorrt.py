import math

import numpy as np
import pytest

from motionkit.kinorrt import (
    DynamicsModel,
    KinoRRT,
    car_dynamics,
    dopri5_step,
    quadrotor_dynamics,
)
from motionkit.solids import is_point_inside_region

CAR_LIMITS = [
    (-3.0, 3.0),
    (-3.0, 3.0),
    (0.0, 2 * math.pi),
    (-1 / 6, 1 / 2),
    (-math.pi / 6, math.pi / 6),
]
CAR_CONTROLS = [(-0.5, 0.5), (-math.pi / 3, math.pi / 3)]


class FreeChecker:
    def __init__(self, limits, valid=True):
        self._limits = limits
        self._valid = valid
        self.calls = 0

    def limits(self):
        return self._limits

    def is_valid(self, state, control_dim):
        self.calls += 1
        return self._valid


def make_planner(n=2000, p=0.5, seed=7, model=DynamicsModel.CAR, controls=CAR_CONTROLS):
    return KinoRRT(n, 0.5, p, controls, model, np.random.default_rng(seed))


def test_dopri5_matches_exponential_growth():
    result = dopri5_step(lambda x: x, [1.0, 2.0], 0.1)
    np.testing.assert_allclose(result, np.array([1.0, 2.0]) * math.exp(0.1), rtol=1e-8)


def test_dopri5_constant_derivative_is_exact():
    result = dopri5_step(lambda x: np.array([3.0, -1.0]), [0.0, 0.0], 0.5)
    np.testing.assert_allclose(result, [1.5, -0.5])


def test_car_dynamics_passes_controls_through():
    state = [1.0, 2.0, 0.3, 0.0, 0.1, 0.25, -0.4]
    derivative = car_dynamics(state)
    np.testing.assert_allclose(derivative[:3], [0.0, 0.0, 0.0])
    assert derivative[3] == 0.25
    assert derivative[4] == -0.4
    np.testing.assert_allclose(derivative[5:], [0.0, 0.0])


def test_car_dynamics_moves_along_heading():
    derivative = car_dynamics([0.0, 0.0, math.pi / 2, 0.5, 0.0, 0.0, 0.0])
    assert derivative[0] == pytest.approx(0.0, abs=1e-12)
    assert derivative[1] == pytest.approx(0.5)


def test_quadrotor_dynamics_velocity_feeds_position():
    state = [0.0, 0.2, 0.0, -0.3, 0.0, 0.1, 0.0, 0.0, 0.0, 0.0]
    derivative = quadrotor_dynamics(state)
    assert derivative[0] == 0.2
    assert derivative[2] == -0.3
    assert derivative[4] == 0.1
    np.testing.assert_allclose(derivative[6:], np.zeros(4))


def test_distance_uses_two_or_three_dimensions():
    planner = make_planner()
    assert planner.distance([0.0, 0.0], [3.0, 4.0]) == pytest.approx(5.0)
    assert planner.distance([0.0, 0.0, 0.0, 9.0], [3.0, 4.0, 0.0, -9.0]) == pytest.approx(5.0)


def test_random_point_within_limits():
    planner = make_planner()
    for _ in range(50):
        point = planner.random_point(CAR_LIMITS)
        assert point.shape == (5,)
        assert all(lo <= v <= hi for v, (lo, hi) in zip(point, CAR_LIMITS))


def test_nearest_picks_closest_node():
    planner = make_planner()
    planner.points[0] = np.array([0.0, 0.0])
    planner.points[1] = np.array([5.0, 5.0])
    planner.points[2] = np.array([1.0, 1.0])
    index, point = planner.nearest([1.2, 0.9])
    assert index == 2
    np.testing.assert_allclose(point, [1.0, 1.0])


def test_clear_empties_tree():
    planner = make_planner()
    planner.points[0] = np.zeros(2)
    planner.clear()
    with pytest.raises(ValueError):
        planner.nearest([0.0, 0.0])


def test_propagate_invalid_returns_start():
    planner = make_planner()
    start = np.array([1.0, 1.0, 0.0, 0.2, 0.0])
    end, duration = planner.propagate(start, [0.1, 0.1], FreeChecker(CAR_LIMITS, valid=False))
    np.testing.assert_allclose(end, start)
    assert duration == 0.0


def test_propagate_zero_control_at_rest_stays_put():
    planner = make_planner()
    start = np.array([1.0, -1.0, 0.5, 0.0, 0.0])
    end, duration = planner.propagate(start, [0.0, 0.0], FreeChecker(CAR_LIMITS))
    np.testing.assert_allclose(end, start)
    assert end.shape == start.shape
    assert duration > 0.0


def test_plan_reaches_goal():
    planner = make_planner(n=3000, p=0.5)
    init = np.zeros(5)
    goal = np.array([1.0, 0.0, 0.0, 0.0, 0.0])
    path = planner.plan(init, goal, FreeChecker(CAR_LIMITS))
    assert path.valid
    np.testing.assert_allclose(path.waypoints[0], init)
    assert all(w.size == 8 for w in path.waypoints[1:])
    assert planner.distance(path.waypoints[-1][:5], goal) < planner.eps


def test_plan_with_single_node_budget_fails():
    planner = make_planner(n=1)
    path = planner.plan(np.zeros(5), np.ones(5), FreeChecker(CAR_LIMITS))
    assert not path.valid
    assert path.waypoints == []


def test_plan_to_region_invalid_checker_uses_all_samples():
    planner = make_planner(p=0.5)
    region = [[1.0, -0.5], [2.0, -0.5], [2.0, 0.5], [1.0, 0.5]]
    path, samples = planner.plan_to_region(
        np.zeros(5), region, FreeChecker(CAR_LIMITS, valid=False), 5, [0, 1]
    )
    assert samples == 5
    assert not path.valid


def test_plan_to_region_ends_inside_region():
    planner = make_planner(p=0.5, seed=3)
    region = [[0.5, -0.5], [1.5, -0.5], [1.5, 0.5], [0.5, 0.5]]
    init = np.zeros(5)
    path, samples = planner.plan_to_region(init, region, FreeChecker(CAR_LIMITS), 5000, [0, 1])
    assert path.valid
    assert 1 <= samples <= 5000
    np.testing.assert_allclose(path.waypoints[0], init)
    assert is_point_inside_region(path.waypoints[-1][:2], region)