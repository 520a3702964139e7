[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parosol"
version = "1.0.0"
description = "Voxel-based finite element building blocks for trabecular bone modeling: hexahedral element stiffness, octree keys and preconditioned iterative solvers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "finite element",
    "bone",
    "micro-FE",
    "hexahedron",
    "conjugate gradient",
    "preconditioner",
    "octree",
    "elasticity",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["parosol"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
