"""Motion planning building blocks: graphs, grids, geometry, A* search, kinodynamic RRT and 3D decomposition."""

__version__ = "0.1.0"

__all__ = [
    "astar",
    "cspace",
    "geometry",
    "graph",
    "grid",
    "kinorrt",
    "path",
    "solids",
    "triangulate",
]