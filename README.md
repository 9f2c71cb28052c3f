# motionkit

Building blocks for search- and sampling-based robot motion planning in the plane and in 3D.
Everything is a library; there is no command-line program.

## Modules

- `motionkit.graph`: `Graph`, a directed multigraph over integer nodes. It grows as nodes are connected. A reversible graph also tracks parents and incoming edges and can be `reverse()`d. `AdjacencyList` holds parallel node and edge lists. `Graph.format(heading)` returns a text description of every connection.
- `motionkit.grid`: `DenseArray2D`, a fixed-size grid indexed as `grid[i, j]`. Out-of-range cells raise `IndexError`.
- `motionkit.path`: `Path` holds waypoints as numpy arrays, has a `valid` flag, and has `length()`. It also has these functions:
  - `unwrap_waypoints` / `unwrap_path` shift each waypoint by whole periods of the given bounds so that it lies closest to the waypoint before it.
  - `write_waypoints_csv` writes one comma-separated waypoint per line.
- `motionkit.geometry`: planar helpers.
  - Point tests: `is_point_inside_polygon` (even-odd rule) and `is_point_in_collision`.
  - Lines: `line_equation` returns an `Edge` with its `Coefficients`. Related helpers are `find_edges`, `check_line`, `distance_to_line` and `closest_point_on_line`.
  - Segments against polygons: `does_line_intersect_polygon` and `is_line_in_collision`.
  - C-space obstacles: `minkowski_sum`, plus `cspace_obstacles`, which covers twelve robot orientations.
  - `smooth_path` makes 100 random shortcut attempts.
  - Distance regions: `find_regions` and `find_closest_distance`.
  - `check_robot_overlap` checks circular robots for overlap.
- `motionkit.solids`:
  - Shapes: `rectangle_vertices`, `triangle_area`, `tetrahedron_volume` and `tetrahedron_centroid`.
  - Containment tests: `is_inside_tetrahedron`, `is_point_inside_region` and `is_point_inside_cube` (the box test uses the axis-aligned bounding box).
  - Sampling: `sample_from_region` draws rejection samples inside a triangle/polygon or a tetrahedron.
- `motionkit.cspace`: `GridCSpace`, a boolean occupancy grid over two bounded axes.
  - `populate(obstacles)` marks the cells whose corner point lies inside an obstacle.
  - `point_from_cell` and `cell_from_point` convert between cells and configuration coordinates.
  - `segment_in_collision` samples a segment at 50 points.
- `motionkit.astar`: `AStar` performs best-first search and returns a `GraphSearchResult`.
  - `search(graph, init, goal, heuristic)` runs over a `Graph`. With `dijkstra=True`, or with no heuristic, it runs as Dijkstra's algorithm.
  - `search_goals(init, goals, neighbors, weights)` runs over mappings of neighbour and weight lists and stops at the first goal reached.
  - Both stop after 10000 expansions.
- `motionkit.kinorrt`: `KinoRRT`, a goal-biased kinodynamic RRT over car or quadrotor dynamics (`DynamicsModel`).
  - Integration uses fixed 0.05 s Dormand–Prince steps (`dopri5_step`).
  - `plan` grows the tree towards a goal state.
  - `plan_to_region` grows it towards a goal polygon or tetrahedron and returns the path together with the number of samples drawn.
  - Pass an `rng` (a `numpy.random.Generator`) for reproducible runs.
- `motionkit.triangulate`: `triangulate_3d` builds a Delaunay tetrahedralisation (scipy) of workspace and polytope corners.
  - The result is a dict of `Node3D`, each with a label, neighbours, vertices and volume. The label is that of the first polytope whose bounding box holds the cell's centroid, or `"e"` if none does.
  - `write_tetrahedra_json` and `serialize_node3d` export the nodes.
  - `triangle_centroid` is also provided.

## Collision checkers for KinoRRT

`KinoRRT` needs an object that provides two methods:

- `limits()` returns the `(low, high)` sampling bounds of each state dimension.
- `is_valid(state, control_dim)` receives a state with `control_dim` control values appended and says whether it is admissible.

The package does not include such a checker; you supply it.

## Example

```python
from motionkit.graph import Graph
from motionkit.astar import AStar

graph = Graph(reversible=True)
graph.connect(0, 1, 1.0)
graph.connect(1, 2, 2.0)
graph.connect(0, 2, 5.0)

result = AStar(dijkstra=True).search(graph, 0, 2, lambda node: 0.0)
print(result.success, result.node_path, result.path_cost)  # True [0, 1, 2] 3.0
```

```python
from motionkit.geometry import is_point_inside_polygon

square = [(0, 0), (1, 0), (1, 1), (0, 1)]
print(is_point_inside_polygon((0.5, 0.5), square))  # True
```

## What it does not do

- It draws no figures and has no plotting or visualisation.
- It has no geometric PRM or RRT planners and no multi-agent planners.
- It has no link-manipulator model.
- It has no constrained 2D triangulation of polygonal workspaces.
- It has no command-line program.
- Progress messages go through the standard `logging` module rather than being printed.

## Installation and tests

```
pip install .
pip install .[test]
pytest
```