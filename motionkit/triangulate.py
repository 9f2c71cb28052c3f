"""Tetrahedral decomposition of a 3-D workspace into labelled, connected cells."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Sequence

import numpy as np
from scipy.spatial import Delaunay, QhullError

from motionkit.solids import (
    is_point_inside_cube,
    tetrahedron_centroid,
    tetrahedron_volume,
)

logger = logging.getLogger(__name__)

PointLike = Sequence[float]

EMPTY_LABEL = "e"


@dataclass
class Node3D:
    """One tetrahedron of the decomposition: its label, neighbours, corners and volume."""

    label: str
    neighbors: list[int] = field(default_factory=list)
    vertices: np.ndarray = field(default_factory=lambda: np.zeros((4, 3)))
    volume: float = 0.0


def serialize_node3d(node: Node3D, index: int) -> dict:
    """A JSON-ready description of a node; the label is stored as its character code."""
    return {
        "index": int(index),
        "label": ord(node.label),
        "vertices": [[float(c) for c in vertex[:3]] for vertex in node.vertices],
    }


def triangle_centroid(vertices: Sequence[PointLike]) -> np.ndarray:
    """The centroid of the triangle given by the first three planar vertices."""
    if len(vertices) < 3:
        raise ValueError("a triangle needs three vertices")
    points = np.array([np.asarray(v, dtype=float)[:2] for v in vertices[:3]])
    return points.sum(axis=0) / 3.0


def _label_for(centroid: np.ndarray, polytopes: Sequence[tuple[Sequence[PointLike], str]]) -> str:
    for vertices, label in polytopes:
        if is_point_inside_cube(centroid, vertices):
            return label
    return EMPTY_LABEL


def triangulate_3d(
    workspace: Sequence[PointLike],
    polytopes: Sequence[tuple[Sequence[PointLike], str]],
) -> dict[int, Node3D]:
    """Delaunay-tetrahedralise the workspace and polytope corners.

    Each tetrahedron is labelled by the first polytope whose bounding box contains
    its centroid, or ``"e"`` when none does. Neighbours are the adjacent finite cells.
    """
    points = [np.asarray(v, dtype=float)[:3] for v in workspace]
    for vertices, _label in polytopes:
        points.extend(np.asarray(v, dtype=float)[:3] for v in vertices)
    if len(points) < 4:
        raise ValueError("at least four points are needed for a tetrahedralisation")
    try:
        triangulation = Delaunay(np.array(points))
    except QhullError as exc:
        raise ValueError(f"points do not span three dimensions: {exc}") from exc

    graph: dict[int, Node3D] = {}
    for index, simplex in enumerate(triangulation.simplices):
        corners = triangulation.points[simplex]
        centroid = tetrahedron_centroid(corners)
        label = _label_for(centroid, polytopes)
        logger.debug("tetrahedron %d centroid %s labelled %s", index, centroid, label)
        neighbors = [int(n) for n in triangulation.neighbors[index] if n >= 0]
        graph[index] = Node3D(
            label=label,
            neighbors=neighbors,
            vertices=np.array(corners),
            volume=tetrahedron_volume(corners),
        )
    logger.info("There are %d tetrahedra in the domain.", len(graph))
    return graph


def write_tetrahedra_json(graph: Mapping[int, Node3D], filename: str | os.PathLike) -> None:
    """Write every node, serialised, as a pretty-printed JSON array."""
    nodes = [serialize_node3d(node, index) for index, node in graph.items()]
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(json.dumps(nodes, indent=4))
    logger.info("Tetrahedra saved to %s", filename)