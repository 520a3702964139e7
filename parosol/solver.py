"""Interfaces for linear operators and solvers working on numpy vectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class Solver(ABC):
    """Something that approximately solves ``A x = b``."""

    @abstractmethod
    def solve(self, b: np.ndarray, x: Optional[np.ndarray] = None) -> np.ndarray:
        """Return an approximate solution of ``A x = b``.

        ``x`` is an initial guess for solvers that use one.
        """

    @abstractmethod
    def label(self) -> str:
        """Return the name of the solver."""


class StiffnessMatrix(ABC):
    """A matrix that is only available through its action on vectors."""

    @abstractmethod
    def apply(self, x: np.ndarray) -> np.ndarray:
        """Return the matrix-vector product ``A x``."""

    @abstractmethod
    def label(self) -> str:
        """Return the name of the operator."""

    @abstractmethod
    def diagonal(self) -> np.ndarray:
        """Return the pseudo-inverse of the operator's diagonal.

        Entries where the diagonal is zero are zero.
        """

    @abstractmethod
    def nr_dofs(self) -> int:
        """Return the number of degrees of freedom."""

    def dot(self, a: np.ndarray, b: np.ndarray) -> float:
        """Return the dot product of two vectors of this operator's space."""
        return float(np.dot(a, b))

    def set_vector_random(self) -> np.ndarray:
        """Return a vector of random values in [-1, 1] of this operator's size."""
        rng = np.random.default_rng()
        return rng.uniform(-1.0, 1.0, self.nr_dofs())