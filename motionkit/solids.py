"""Rectangles, triangles, tetrahedra and boxes: areas, volumes, membership and sampling."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from motionkit.geometry import is_point_inside_polygon

PointLike = Sequence[float]


def _vec(point: PointLike) -> np.ndarray:
    return np.asarray(point, dtype=float)


def rectangle_vertices(
    state: Sequence[float], width: float, length: float
) -> list[tuple[float, float]]:
    """Corners of a rectangle at (x, y, theta): BR, BL, TL, TR and BR again to close it."""
    cx, cy, theta = float(state[0]), float(state[1]), float(state[2])
    hw_c, hw_s = width / 2 * math.cos(theta), width / 2 * math.sin(theta)
    hl_c, hl_s = length / 2 * math.cos(theta), length / 2 * math.sin(theta)
    top_right = (cx + hw_c - hl_s, cy + hw_s + hl_c)
    top_left = (cx - hw_c - hl_s, cy - hw_s + hl_c)
    bottom_left = (cx - hw_c + hl_s, cy - hw_s - hl_c)
    bottom_right = (cx + hw_c + hl_s, cy + hw_s - hl_c)
    return [bottom_right, bottom_left, top_left, top_right, bottom_right]


def sample_from_region(
    polytope: Sequence[PointLike], rng: np.random.Generator | None = None
) -> np.ndarray:
    """Uniform rejection sample inside a tetrahedron (3-D vertices) or a polygon (2-D)."""
    if not polytope:
        raise ValueError("region has no vertices")
    rng = np.random.default_rng() if rng is None else rng
    vertices = np.array([_vec(v) for v in polytope])
    dim = vertices.shape[1]
    if dim == 3:
        lower, upper = vertices.min(axis=0), vertices.max(axis=0)
        while True:
            candidate = rng.uniform(lower, upper)
            if is_inside_tetrahedron(vertices[:4], candidate):
                return candidate
    planar = vertices[:, :2]
    lower, upper = planar.min(axis=0), planar.max(axis=0)
    point = np.zeros(dim)
    while True:
        point[:2] = rng.uniform(lower, upper)
        if is_point_inside_polygon(point, planar):
            return point.copy()


def triangle_area(vertices: Sequence[PointLike]) -> float:
    """Area from the side lengths (Heron's formula)."""
    v1, v2, v3 = (_vec(v) for v in vertices[:3])
    a = np.linalg.norm(v1 - v2)
    b = np.linalg.norm(v2 - v3)
    c = np.linalg.norm(v3 - v1)
    s = (a + b + c) / 2.0
    return math.sqrt(max(0.0, s * (s - a) * (s - b) * (s - c)))


def _same_side(v1, v2, v3, v4, p) -> bool:
    normal = np.cross(v2 - v1, v3 - v1)
    return float(np.dot(normal, v4 - v1)) * float(np.dot(normal, p - v1)) >= 0.0


def is_inside_tetrahedron(vertices: Sequence[PointLike], point: PointLike) -> bool:
    """Whether the point lies inside (or on) the tetrahedron of the first four vertices."""
    if len(vertices) < 4:
        raise ValueError("a tetrahedron needs four vertices")
    v1, v2, v3, v4 = (_vec(v)[:3] for v in vertices[:4])
    p = _vec(point)[:3]
    return (
        _same_side(v1, v2, v3, v4, p)
        and _same_side(v2, v3, v4, v1, p)
        and _same_side(v3, v4, v1, v2, p)
        and _same_side(v4, v1, v2, v3, p)
    )


def is_point_inside_region(point: PointLike, polytope: Sequence[PointLike]) -> bool:
    """Tetrahedron test for 3-D points, polygon test for 2-D points, false otherwise."""
    p = _vec(point)
    if p.size == 3:
        return is_inside_tetrahedron(polytope, p)
    if p.size == 2:
        return is_point_inside_polygon(p, [_vec(v)[:2] for v in polytope])
    return False


def tetrahedron_volume(vertices: Sequence[PointLike]) -> float:
    a, b, c, d = (_vec(v) for v in vertices[:4])
    return abs(float(np.dot(b - a, np.cross(c - a, d - a)))) / 6.0


def tetrahedron_centroid(vertices: Sequence[PointLike]) -> np.ndarray:
    return np.mean([_vec(v) for v in vertices[:4]], axis=0)


def is_point_inside_cube(point: PointLike, cube_vertices: Sequence[PointLike]) -> bool:
    """Whether the point lies within the axis-aligned bounding box of the vertices."""
    vertices = np.array([_vec(v)[:3] for v in cube_vertices])
    p = _vec(point)[:3]
    return bool(np.all(p >= vertices.min(axis=0)) and np.all(p <= vertices.max(axis=0)))