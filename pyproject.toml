[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motionkit"
version = "0.1.0"
description = "Motion planning building blocks: graphs, grid configuration spaces, A*, kinodynamic RRT, geometry and 3D decomposition"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["motion planning", "robotics", "rrt", "a-star", "configuration space", "geometry", "delaunay"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["motionkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
