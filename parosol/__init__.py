"""Voxel-based finite element tools, octree keys and iterative solvers for bone modeling."""

__version__ = "1.0.0"