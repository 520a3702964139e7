"""Boundary conditions and the voxel image a grid is built from."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np


@dataclass(frozen=True, order=True)
class BoundaryDisp:
    """Direction (0, 1 or 2) and prescribed value of a boundary condition.

    Ordering and equality look at the direction only.
    """

    dir: int = 0
    disp: float = field(default=0.0, compare=False)


BoundaryNode = tuple[int, BoundaryDisp]
"""A node's octree key together with its boundary condition."""


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class BCItem:
    """A boundary condition entry read from an image: voxel coordinates and
    direction."""

    x: int = 0
    y: int = 0
    z: int = 0
    d: int = 0

    def sort_key(self) -> tuple[int, int, int, int]:
        """Key that orders items z first, then y, x and direction."""
        return (self.z, self.y, self.x, self.d)

    def __lt__(self, other: "BCItem") -> bool:
        if not isinstance(other, BCItem):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass
class BaseGrid:
    """A voxel image of a bone together with its boundary data.

    Boundary coordinates hold four values per node: x, y, z and direction.
    """

    grid: Optional[np.ndarray] = None
    gdim: tuple[int, int, int] = (0, 0, 0)
    ldim: tuple[int, int, int] = (0, 0, 0)
    corner: tuple[int, int, int] = (0, 0, 0)
    res: tuple[float, float, float] = (0.0, 0.0, 0.0)
    poisson_ratio: float = 0.0
    emod_map: dict[int, float] = field(default_factory=dict)
    nu_map: dict[int, float] = field(default_factory=dict)
    inv_emod_map: dict[float, int] = field(default_factory=dict)
    fixed_nodes_coordinates: list[int] = field(default_factory=list)
    fixed_nodes_values: list[float] = field(default_factory=list)
    loaded_nodes_coordinates: list[int] = field(default_factory=list)
    loaded_nodes_values: list[float] = field(default_factory=list)


@dataclass
class BoundaryCondition:
    """Indices into the displacement vector and values of the boundary nodes.

    An index is ``node * 3 + direction``.
    """

    fixed_nodes_ind: list[int] = field(default_factory=list)
    fixed_nodes: list[float] = field(default_factory=list)
    loaded_nodes_ind: list[int] = field(default_factory=list)
    loaded_nodes: list[float] = field(default_factory=list)

    def generate(
        self,
        fixed_list: Iterable[BoundaryNode],
        loaded_list: Iterable[BoundaryNode],
    ) -> None:
        """Append the fixed and loaded nodes given as ``(node, BoundaryDisp)``."""
        for node, bc in fixed_list:
            self.fixed_nodes_ind.append(node * 3 + bc.dir)
            self.fixed_nodes.append(float(bc.disp))
        for node, bc in loaded_list:
            self.loaded_nodes_ind.append(node * 3 + bc.dir)
            self.loaded_nodes.append(float(bc.disp))

    def __str__(self) -> str:
        return (
            "Boundarycondition:\n"
            f"   length of the fixed nodes: {len(self.fixed_nodes_ind)}\n"
        )