"""Planar geometry helpers: polygons, lines, C-space obstacles and path smoothing."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from itertools import pairwise
from typing import Iterable, Sequence

import numpy as np

logger = logging.getLogger(__name__)

PointLike = Sequence[float]


def _vec(point: PointLike) -> np.ndarray:
    return np.asarray(point, dtype=float)


@dataclass(frozen=True)
class Coefficients:
    """Line ``a*x + b*y + c = 0``."""

    a: float
    b: float
    c: float


@dataclass(frozen=True)
class Edge:
    """A line through two points, with its implicit-form coefficients."""

    coeff: Coefficients
    points: tuple[np.ndarray, np.ndarray]

    @property
    def first(self) -> np.ndarray:
        return self.points[0]

    @property
    def second(self) -> np.ndarray:
        return self.points[1]


def _is_lower(a: np.ndarray, b: np.ndarray) -> bool:
    if a[1] != b[1]:
        return bool(a[1] < b[1])
    return bool(a[0] < b[0])


def find_lower_left(vertices: Sequence[PointLike]) -> int:
    """Index of the vertex with the smallest y, ties broken by the smallest x."""
    if not vertices:
        raise ValueError("no vertices given")
    points = [_vec(v) for v in vertices]
    best = 0
    for index, point in enumerate(points[1:], start=1):
        if _is_lower(point, points[best]):
            best = index
    return best


def find_angle(point1: PointLike, point2: PointLike) -> float:
    """Direction of the vector from ``point1`` to ``point2``, in [0, 2*pi)."""
    dx, dy = _vec(point2) - _vec(point1)
    angle = math.atan2(dy, dx)
    if angle < 0:
        angle += 2 * math.pi
    return angle


def rotate_vertices(vertices: Iterable[PointLike], angle: float) -> list[np.ndarray]:
    """Rotate every vertex about the origin by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    rotation = np.array([[c, -s], [s, c]])
    return [rotation @ _vec(v) for v in vertices]


def _reflect_from_lower_left(vertices: Sequence[PointLike]) -> list[np.ndarray]:
    flipped = [-_vec(v) for v in vertices]
    start = find_lower_left(flipped)
    return flipped[start:] + flipped[:start]


def minkowski_sum(
    obstacle_vertices: Sequence[PointLike], robot_vertices: Sequence[PointLike]
) -> list[np.ndarray]:
    """C-space obstacle: the obstacle (CCW) summed with the reflected robot polygon."""
    if not obstacle_vertices or not robot_vertices:
        raise ValueError("both polygons need at least one vertex")
    obstacle = [_vec(v) for v in obstacle_vertices]
    obstacle.append(obstacle[0])
    robot = _reflect_from_lower_left(robot_vertices)
    robot.append(robot[0])

    n, m = len(obstacle), len(robot)
    result: list[np.ndarray] = []
    i = j = 0
    while i < n - 1 or j < m - 1:
        result.append(obstacle[i] + robot[j])
        obstacle_angle = find_angle(obstacle[i], obstacle[i + 1]) if i < n - 1 else math.inf
        robot_angle = find_angle(robot[j], robot[j + 1]) if j < m - 1 else math.inf
        if obstacle_angle < robot_angle:
            i += 1
        elif obstacle_angle > robot_angle:
            j += 1
        else:
            i += 1
            j += 1
    return result


def cspace_obstacles(
    obstacle_vertices: Sequence[PointLike], robot_vertices: Sequence[PointLike]
) -> list[list[np.ndarray]]:
    """C-space obstacle slices for twelve evenly spaced robot orientations."""
    return [
        minkowski_sum(obstacle_vertices, rotate_vertices(robot_vertices, 2 * math.pi / 12 * k))
        for k in range(12)
    ]


def is_point_inside_polygon(point: PointLike, polygon: Sequence[PointLike]) -> bool:
    """Even-odd ray casting test."""
    px, py = _vec(point)[:2]
    vertices = [_vec(v) for v in polygon]
    if not vertices:
        return False
    inside = False
    previous = vertices[-1]
    for current in vertices:
        x1, y1 = current[0], current[1]
        x2, y2 = previous[0], previous[1]
        if (y1 > py) != (y2 > py) and px < (x2 - x1) * (py - y1) / (y2 - y1) + x1:
            inside = not inside
        previous = current
    return inside


def is_point_in_collision(point: PointLike, obstacles: Iterable[Sequence[PointLike]]) -> bool:
    """Whether the point lies inside any obstacle polygon."""
    return any(is_point_inside_polygon(point, obstacle) for obstacle in obstacles)


def distance_between_points(point1: PointLike, point2: PointLike) -> float:
    return float(np.linalg.norm(_vec(point2) - _vec(point1)))


def line_equation(point1: PointLike, point2: PointLike) -> Edge:
    """The line through two points."""
    p1, p2 = _vec(point1), _vec(point2)
    a = p2[1] - p1[1]
    b = p1[0] - p2[0]
    c = p2[0] * p1[1] - p2[1] * p1[0]
    return Edge(Coefficients(float(a), float(b), float(c)), (p1, p2))


def find_edges(obstacles: Iterable[Sequence[PointLike]]) -> list[list[Edge]]:
    """The closed boundary edges of every obstacle polygon."""
    edges: list[list[Edge]] = []
    for obstacle in obstacles:
        vertices = [_vec(v) for v in obstacle]
        if not vertices:
            raise ValueError("obstacle has no vertices")
        vertices.append(vertices[0])
        edges.append([line_equation(a, b) for a, b in pairwise(vertices)])
    return edges


def _line_value(point: PointLike, edge: Edge) -> float:
    x, y = _vec(point)[:2]
    return edge.coeff.a * x + edge.coeff.b * y + edge.coeff.c


def check_line(point: PointLike, edge: Edge, left: bool) -> bool:
    """Whether the point lies strictly on the left of the edge (or not, if ``left`` is false)."""
    is_left = _line_value(point, edge) < 0
    return is_left if left else not is_left


def distance_to_line(point: PointLike, edge: Edge) -> float:
    return abs(_line_value(point, edge)) / math.hypot(edge.coeff.a, edge.coeff.b)


def closest_point_on_line(point: PointLike, edge: Edge) -> np.ndarray:
    """Orthogonal projection of the point onto the (infinite) line."""
    x, y = _vec(point)[:2]
    a, b, c = edge.coeff.a, edge.coeff.b, edge.coeff.c
    denominator = a * a + b * b
    x_pos = (b * (b * x - a * y) - a * c) / denominator
    y_pos = (a * (-b * x + a * y) - b * c) / denominator
    return np.array([x_pos, y_pos])


def _cross(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[1] - a[1] * b[0])


def _orient(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    return _cross(b - a, c - a)


def _proper_intersection(a: np.ndarray, b: np.ndarray, c: np.ndarray, d: np.ndarray) -> bool:
    oa, ob = _orient(c, d, a), _orient(c, d, b)
    oc, od = _orient(a, b, c), _orient(a, b, d)
    return oa * ob < 0 and oc * od < 0


def does_line_intersect_polygon(a: PointLike, b: PointLike, polygon: Sequence[PointLike]) -> bool:
    """Whether segment ``a``-``b`` has an endpoint inside or properly crosses an edge."""
    if is_point_inside_polygon(a, polygon) or is_point_inside_polygon(b, polygon):
        return True
    start, end = _vec(a)[:2], _vec(b)[:2]
    vertices = [_vec(v)[:2] for v in polygon]
    return any(
        _proper_intersection(start, end, c, d)
        for c, d in zip(vertices, vertices[1:] + vertices[:1])
    )


def is_line_in_collision(
    point1: PointLike, point2: PointLike, obstacles: Iterable[Sequence[PointLike]]
) -> bool:
    return any(does_line_intersect_polygon(point1, point2, obstacle) for obstacle in obstacles)


def smooth_path(
    waypoints: Sequence[PointLike],
    obstacles: Sequence[Sequence[PointLike]],
    rng: np.random.Generator | None = None,
) -> list[np.ndarray]:
    """Randomly shortcut a path: 100 attempts to bridge two waypoints with a free segment."""
    rng = np.random.default_rng() if rng is None else rng
    path = [_vec(w) for w in waypoints]
    for _ in range(100):
        size = len(path)
        if size < 3:
            break
        i = int(rng.integers(0, size - 1))
        j = int(rng.integers(i + 1, size))
        if j - i > 1 and not is_line_in_collision(path[i], path[j], obstacles):
            del path[i + 1 : j]
    return path


def find_regions(all_edges: Sequence[Sequence[Edge]]) -> list[list[list[Edge]]]:
    """Voronoi-like regions around each polygon: edge strips and vertex wedges."""
    regions: list[list[list[Edge]]] = []
    for poly_edges in all_edges:
        if not poly_edges:
            raise ValueError("polygon has no edges")
        poly_regions: list[list[Edge]] = []
        first_line: Edge | None = None
        line3: Edge | None = None
        for edge in poly_edges:
            p1, p2 = edge.first, edge.second
            normal_a = np.array([p2[1] - p1[1], p1[0] - p2[0]])
            normal_b = np.array([p1[1] - p2[1], p2[0] - p1[0]])
            line1 = line_equation(p1, normal_a + p1)
            if line3 is None:
                first_line = line1
            else:
                poly_regions.append([line3, line1])
            line2 = line_equation(p2, p1)
            line3 = line_equation(p2, normal_b + p2)
            poly_regions.append([line1, line2, line3])
        poly_regions.append([line3, first_line])
        regions.append(poly_regions)
    return regions


def find_closest_distance(state: PointLike, poly_regions: Sequence[Sequence[Edge]]) -> float:
    """Distance from ``state`` to a polygon, using its regions; 0.0 when inside it."""
    point = _vec(state)[:2]
    for region in poly_regions:
        left = len(region) != 2
        if all(check_line(point, edge, left) for edge in region):
            if len(region) == 2:
                closest = region[0].first
            else:
                closest = closest_point_on_line(point, region[1])
            return float(np.linalg.norm(point - closest))
    logger.warning("point %s lies in no region of the polygon", point)
    return 0.0


def check_robot_overlap(state: Sequence[float], radii: Sequence[float]) -> bool:
    """Whether any two disc robots, centres packed as (x0, y0, x1, y1, ...), overlap."""
    values = _vec(state)
    centres = [values[2 * k : 2 * k + 2] for k in range(len(radii))]
    for i, (centre_i, radius_i) in enumerate(zip(centres, radii)):
        for centre_j, radius_j in zip(centres[i + 1 :], radii[i + 1 :]):
            if np.linalg.norm(centre_i - centre_j) < radius_i + radius_j:
                return True
    return False