"""Estimation of the extreme eigenvalues of a preconditioned operator."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from parosol.solver import Solver, StiffnessMatrix
from parosol.tri_eig import _ql

_TOL = 1e-7
_QL_ITERATIONS = 30


@dataclass(frozen=True)
class EigenBounds:
    """Estimated largest and smallest eigenvalue."""

    large: float
    small: float


def estimate_eigenvalues(
    matrix: StiffnessMatrix, preconditioner: Solver, max_iter: int
) -> EigenBounds:
    """Estimate the extreme eigenvalues of the preconditioned ``matrix``.

    Up to ``max_iter`` preconditioned CG steps are run from a right-hand
    side of ones; the eigenvalues of the resulting Lanczos tridiagonal
    matrix give the estimate.
    """
    if max_iter < 1:
        raise ValueError(f"at least one iteration is needed, got {max_iter}")

    r = np.ones(matrix.nr_dofs())
    d = preconditioner.solve(r, np.zeros_like(r))
    delta_new = matrix.dot(r, d)
    res0 = math.sqrt(delta_new) if delta_new > 0.0 else 0.0

    dia: list[float] = []
    off: list[float] = []
    alpha = 0.0
    beta = 0.0
    i = 0
    while i < max_iter and delta_new > 0.0 and math.sqrt(delta_new) / res0 > _TOL:
        s = matrix.apply(d)
        alpha_old = alpha
        alpha = delta_new / matrix.dot(d, s)
        dia.append(1.0 / alpha)
        if i > 0:
            dia[i] += beta / alpha_old
            off.append(math.sqrt(beta) / alpha_old)
        r = r - alpha * s
        s = preconditioner.solve(r, s)
        delta_old = delta_new
        delta_new = matrix.dot(r, s)
        beta = delta_new / delta_old
        d = s + beta * d
        i += 1

    if i == 0:
        raise ValueError("the initial residual gives no eigenvalue information")
    off.append(0.0)
    values, _converged = _ql(dia, off, i, _QL_ITERATIONS)
    return EigenBounds(large=float(values.max()), small=float(values.min()))