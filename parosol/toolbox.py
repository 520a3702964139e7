"""Helpers for voxel element geometry."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def element_coords(a: float, b: float, c: float) -> np.ndarray:
    """Return the (8, 3) nodal coordinates of an ``a`` x ``b`` x ``c`` box
    with one corner at the origin, in hexahedron node order."""
    return np.array(
        [
            [0.0, 0.0, 0.0],
            [a, 0.0, 0.0],
            [a, b, 0.0],
            [0.0, b, 0.0],
            [0.0, 0.0, c],
            [a, 0.0, c],
            [a, b, c],
            [0.0, b, c],
        ],
        dtype=float,
    )


def element_coords_from_resolution(res: Sequence[float]) -> np.ndarray:
    """Return element coordinates for a voxel with resolution ``(x, y, z)``."""
    values = [float(r) for r in res]
    if len(values) != 3:
        raise ValueError(f"resolution needs three values, got {len(values)}")
    return element_coords(*values)