"""Iterative solvers and preconditioners for stiffness matrices."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from parosol.solver import Solver, StiffnessMatrix


def _initial(x: Optional[np.ndarray], matrix: StiffnessMatrix) -> np.ndarray:
    if x is None:
        return np.zeros(matrix.nr_dofs())
    return np.array(x, dtype=float)


def _root(value: float) -> float:
    return math.sqrt(value) if value >= 0.0 else math.nan


def _ratio(value: float, reference: float) -> float:
    return value / reference if reference else math.nan


class PCGSolver(Solver):
    """Preconditioned conjugate gradient method for symmetric positive
    definite systems.

    After ``solve`` the number of iterations done is in ``iterations``.
    """

    def __init__(
        self,
        matrix: StiffnessMatrix,
        preconditioner: Solver,
        tol: float = 1e-10,
        max_iter: int = 500,
        verbose: bool = True,
        freq: int = 4,
    ) -> None:
        if freq < 1:
            raise ValueError(f"output frequency must be positive, got {freq}")
        self.matrix = matrix
        self.preconditioner = preconditioner
        self.tol = tol
        self.max_iter = max_iter
        self.verbose = verbose
        self.freq = freq
        self.iterations = 0

    def solve(self, b: np.ndarray, x: Optional[np.ndarray] = None) -> np.ndarray:
        """Solve ``A x = b`` starting from the guess ``x`` (zero if omitted)."""
        mat = self.matrix
        prec = self.preconditioner
        x = _initial(x, mat)

        ax = mat.apply(x)
        r = np.asarray(b, dtype=float) - ax
        d = prec.solve(r, ax)
        delta_new = mat.dot(r, d)
        res0 = _root(delta_new)
        resreal0 = math.sqrt(mat.dot(r, r))
        norm = resreal0
        if self.verbose:
            print(f"Initial Residuum: {resreal0:e}")

        i = 0
        while i < self.max_iter and resreal0 > 0.0 and norm / resreal0 > self.tol:
            if self.verbose and i % self.freq == 0:
                print(
                    f"Iteration: {i}\t Residuum preconditioned: "
                    f"{_ratio(_root(delta_new), res0):e}"
                    f"\t Residuum: {norm / resreal0:e}"
                )
            s = mat.apply(d)
            alpha = delta_new / mat.dot(d, s)
            x = x + alpha * d
            r = r - alpha * s
            s = prec.solve(r, s)
            delta_old = delta_new
            delta_new = mat.dot(r, s)
            beta = delta_new / delta_old
            d = s + beta * d
            i += 1
            norm = math.sqrt(mat.dot(r, r))

        if self.verbose:
            print(
                f"Total iterations: {i}\t Residuum preconditioned: "
                f"{_ratio(_root(delta_new), res0):e}"
            )
            print(f"Total iterations: {i}\t Residuum:                {_ratio(norm, resreal0):e}")
        self.iterations = i
        return x

    def label(self) -> str:
        return "Preconditioned CG-Solver\n"


class Jacobi(Solver):
    """Jacobi preconditioner: scales by the inverse diagonal."""

    def __init__(self, matrix: StiffnessMatrix) -> None:
        self.inverse_diagonal = matrix.diagonal()

    def solve(self, b: np.ndarray, x: Optional[np.ndarray] = None) -> np.ndarray:
        """Return the inverse diagonal times ``b``; ``x`` is not used."""
        return self.inverse_diagonal * np.asarray(b, dtype=float)

    def label(self) -> str:
        return "Jacobi Preconditioner"


class JacobiSmoother(Solver):
    """Damped Jacobi iteration, usable as smoother or as solver.

    ``steps`` iterations with damping ``w`` are done.  With ``zero_start``
    the initial guess is taken to be zero, which saves one product.
    """

    def __init__(
        self, matrix: StiffnessMatrix, steps: int, w: float, zero_start: bool
    ) -> None:
        self.matrix = matrix
        self.inverse_diagonal = matrix.diagonal()
        self.steps = steps
        self.w = w
        self.zero_start = zero_start

    def with_zero_start(self, zero_start: bool) -> "JacobiSmoother":
        """Return a smoother with the same setup but another ``zero_start``."""
        clone = JacobiSmoother.__new__(JacobiSmoother)
        clone.matrix = self.matrix
        clone.inverse_diagonal = self.inverse_diagonal
        clone.steps = self.steps
        clone.w = self.w
        clone.zero_start = zero_start
        return clone

    def solve(self, b: np.ndarray, x: Optional[np.ndarray] = None) -> np.ndarray:
        """Smooth ``A x = b``; ``x`` is the initial guess unless starting at zero."""
        b = np.asarray(b, dtype=float)
        first = 0
        if self.zero_start:
            x = self.w * self.inverse_diagonal * b
            first = 1
        else:
            x = _initial(x, self.matrix)
        for _ in range(first, self.steps):
            r = self.matrix.apply(x)
            x = x + self.w * self.inverse_diagonal * (b - r)
        return x

    def label(self) -> str:
        return "Jacobi Smoother"


class MlLevelCG(Solver):
    """Jacobi preconditioned CG as coarse level solver of a multigrid cycle."""

    def __init__(self, matrix: StiffnessMatrix) -> None:
        self.preconditioner = Jacobi(matrix)
        self.solver = PCGSolver(matrix, self.preconditioner, 1e-7, 20, False)

    def solve(self, b: np.ndarray, x: Optional[np.ndarray] = None) -> np.ndarray:
        return self.solver.solve(b, x)

    def label(self) -> str:
        return "Coarsegrid PCG solver\n"