"""Kinodynamic RRT over car and quadrotor dynamics, integrated with Dormand-Prince steps."""

from __future__ import annotations

import enum
import logging
import math
from typing import Callable, Protocol, Sequence

import numpy as np

from motionkit.path import Path
from motionkit.solids import is_point_inside_region, sample_from_region

logger = logging.getLogger(__name__)

_TIME_STEP = 0.05
_MIN_DURATION = 0.05
_MAX_DURATION = 1.5
_CONTROL_TRIES = 5
_GOAL_EPSILON = 0.5
_WHEELBASE = 0.5


class DynamicsModel(enum.Enum):
    CAR = "car"
    QUADROTOR = "quadrotor"


class KinoChecker(Protocol):
    """What the planner needs from a collision checker."""

    def limits(self) -> Sequence[tuple[float, float]]:
        """Sampling bounds for every state dimension."""

    def is_valid(self, state: np.ndarray, control_dim: int) -> bool:
        """Whether a state, with ``control_dim`` controls appended, is admissible."""


def car_dynamics(state: Sequence[float]) -> np.ndarray:
    """Derivative of (x, y, theta, v, phi, a, omega) for a second-order car."""
    s = np.asarray(state, dtype=float)
    theta, v, phi = s[2], s[3], s[4]
    return np.array([
        v * math.cos(theta),
        v * math.sin(theta),
        (v / _WHEELBASE) * math.tan(phi),
        s[5],
        s[6],
        0.0,
        0.0,
    ])


def quadrotor_dynamics(state: Sequence[float]) -> np.ndarray:
    """Derivative of a linearised quadrotor state (x, vx, y, vy, z, vz) plus four rotor inputs."""
    s = np.asarray(state, dtype=float)
    k1 = -0.0104
    k2 = 0.04167
    return np.array([
        s[1],
        k1 * s[1] - k2 * s[6] + k2 * s[8],
        s[3],
        k1 * s[3] - k2 * s[7] + k2 * s[9],
        s[5],
        2 * k1 * s[5] + 0.4 * (s[6] + s[7] + s[8] + s[9]),
        0.0,
        0.0,
        0.0,
        0.0,
    ])


_A = (
    (),
    (1 / 5,),
    (3 / 40, 9 / 40),
    (44 / 45, -56 / 15, 32 / 9),
    (19372 / 6561, -25360 / 2187, 64448 / 6561, -212 / 729),
    (9017 / 3168, -355 / 33, 46732 / 5247, 49 / 176, -5103 / 18656),
)
_B = (35 / 384, 0.0, 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84)


def dopri5_step(
    func: Callable[[np.ndarray], np.ndarray], state: Sequence[float], dt: float
) -> np.ndarray:
    """One fifth-order Dormand-Prince step of the autonomous system ``x' = func(x)``."""
    x = np.asarray(state, dtype=float)
    stages: list[np.ndarray] = []
    for row in _A:
        increment = sum((a * k for a, k in zip(row, stages)), np.zeros_like(x))
        stages.append(np.asarray(func(x + dt * increment), dtype=float))
    return x + dt * sum((b * k for b, k in zip(_B, stages)), np.zeros_like(x))


class KinoRRT:
    """Goal-biased RRT that grows by simulating randomly sampled controls."""

    def __init__(
        self,
        n: int,
        r: float,
        p: float,
        control_limits: Sequence[tuple[float, float]],
        dynamics_model: DynamicsModel = DynamicsModel.CAR,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.n = n
        self.r = r
        self.p = p
        self.eps = _GOAL_EPSILON
        self.control_limits = [tuple(map(float, limit)) for limit in control_limits]
        self.dynamics_model = dynamics_model
        self.rng = np.random.default_rng() if rng is None else rng
        self.points: dict[int, np.ndarray] = {}
        self.parents: dict[int, int] = {}
        self.controls: dict[int, np.ndarray] = {}

    def clear(self) -> None:
        self.points.clear()
        self.parents.clear()
        self.controls.clear()

    def random_point(self, limits: Sequence[tuple[float, float]]) -> np.ndarray:
        """A point drawn uniformly from the box given by per-dimension limits."""
        lows = np.array([lo for lo, _ in limits], dtype=float)
        highs = np.array([hi for _, hi in limits], dtype=float)
        return self.rng.uniform(lows, highs)

    def distance(self, state1: Sequence[float], state2: Sequence[float]) -> float:
        """Euclidean distance over the first two dimensions, or the first three if longer."""
        a = np.asarray(state1, dtype=float)
        b = np.asarray(state2, dtype=float)
        dims = 2 if a.size == 2 else 3
        return float(np.linalg.norm(a[:dims] - b[:dims]))

    def nearest(self, point: Sequence[float]) -> tuple[int, np.ndarray]:
        """The tree node closest to ``point``; the earliest one wins ties."""
        if not self.points:
            raise ValueError("the tree is empty")
        best_index = min(self.points, key=lambda k: (self.distance(point, self.points[k]), k))
        return best_index, self.points[best_index]

    def _dynamics(self) -> Callable[[np.ndarray], np.ndarray]:
        if self.dynamics_model is DynamicsModel.QUADROTOR:
            return quadrotor_dynamics
        return car_dynamics

    def propagate(
        self, x_start: Sequence[float], control: Sequence[float], checker: KinoChecker
    ) -> tuple[np.ndarray, float]:
        """Simulate a control from a state; return the end state and the time simulated.

        If an intermediate state is invalid the start state is returned unchanged.
        """
        start = np.asarray(x_start, dtype=float)
        u = np.asarray(control, dtype=float)
        control_dim = u.size
        state = np.concatenate([start, u])
        func = self._dynamics()
        duration = 0.0
        while duration < self.rng.uniform(_MIN_DURATION, _MAX_DURATION):
            state = dopri5_step(func, state, _TIME_STEP)
            if not checker.is_valid(state, control_dim):
                return start.copy(), duration
            duration += _TIME_STEP
        return state[: state.size - control_dim], duration

    def _extend(
        self, target: np.ndarray, checker: KinoChecker
    ) -> tuple[int, np.ndarray, np.ndarray] | None:
        parent, x_near = self.nearest(target)
        x_best = x_near
        u_best: np.ndarray | None = None
        for _ in range(_CONTROL_TRIES):
            u_rand = self.random_point(self.control_limits)
            x_new, duration = self.propagate(x_near, u_rand, checker)
            if self.distance(target, x_new) < self.distance(target, x_best):
                x_best = x_new
                u_best = np.append(u_rand, duration)
        if u_best is None:
            return None
        return parent, x_best, u_best

    def _build_path(self, init_state: np.ndarray, last: int, valid: bool) -> Path:
        if not valid:
            return Path([], valid=False)
        waypoints: list[np.ndarray] = []
        node = last
        while node != 0:
            waypoints.append(np.concatenate([self.points[node], self.controls[node]]))
            node = self.parents[node]
        waypoints.append(init_state)
        waypoints.reverse()
        return Path(waypoints, valid=True)

    def plan(
        self, init_state: Sequence[float], goal_state: Sequence[float], checker: KinoChecker
    ) -> Path:
        """Grow the tree towards ``goal_state`` until a node comes within ``eps`` of it."""
        init = np.asarray(init_state, dtype=float)
        goal = np.asarray(goal_state, dtype=float)
        self.points[0] = init
        index = 1
        valid = False
        while len(self.points) < self.n:
            if self.rng.uniform(0.0, 1.0) > 1 - self.p:
                target = goal
            else:
                target = self.random_point(checker.limits())
            extension = self._extend(target, checker)
            if extension is None:
                continue
            parent, x_best, u_best = extension
            self.parents[index] = parent
            self.points[index] = x_best
            self.controls[index] = u_best
            index += 1
            if self.distance(x_best, goal) < self.eps:
                logger.info("Goal found in %d steps", index)
                valid = True
                break
        if not valid:
            logger.info("Failed to find path")
        return self._build_path(init, index - 1, valid)

    def plan_to_region(
        self,
        init_state: Sequence[float],
        goal_region: Sequence[Sequence[float]],
        checker: KinoChecker,
        max_samples: int,
        workspace_indices: Sequence[int],
    ) -> tuple[Path, int]:
        """Grow the tree until a node's workspace projection enters ``goal_region``.

        Returns the path and the number of samples drawn.
        """
        init = np.asarray(init_state, dtype=float)
        indices = list(workspace_indices)
        self.points[0] = init
        index = 1
        samples = 0
        valid = False
        while samples < max_samples:
            samples += 1
            goal_bias = self.rng.uniform(0.0, 1.0)
            target = self.random_point(checker.limits())
            if goal_bias > 1 - self.p:
                workspace_sample = sample_from_region(goal_region, self.rng)
                for position, dim in enumerate(indices):
                    target[dim] = workspace_sample[position]
            extension = self._extend(target, checker)
            if extension is None:
                continue
            parent, x_best, u_best = extension
            self.parents[index] = parent
            self.points[index] = x_best
            self.controls[index] = u_best
            index += 1
            if is_point_inside_region(x_best[indices], goal_region):
                logger.info("Goal found in %d samples", samples)
                valid = True
                break
        if not valid:
            logger.info("Failed to find path in %d samples", samples)
        return self._build_path(init, index - 1, valid), samples