"""Eigenvalues of a symmetric tridiagonal matrix by the implicit QL method."""

from __future__ import annotations

import math
import sys

import numpy as np

_EPSILON = sys.float_info.epsilon


def calculate_shift(d2: float, d1: float, off: float) -> float:
    """Return the eigenvalue of the 2x2 block ``[[d1, off], [off, d2]]``
    that is closer to ``d1``, used as shift for a QL step."""
    h = (d2 - d1) / (off + off)
    r = math.sqrt(h * h + 1.0)
    denom = h - r if h < 0.0 else h + r
    return d1 - off / denom


def _ql(diagonal, off, n: int, max_iteration_count: int) -> tuple[np.ndarray, bool]:
    """Run the QL iteration; return the eigenvalues and whether it converged."""
    d = [float(v) for v in np.asarray(diagonal, dtype=float).ravel()]
    e = [float(v) for v in np.asarray(off, dtype=float).ravel()]
    if n < 0 or n > len(d) or n > len(e):
        raise ValueError(
            f"size {n} does not fit diagonal of {len(d)} and off-diagonal of {len(e)}"
        )
    if n == 0:
        return np.empty(0), True
    d = d[:n]
    e = e[:n]
    e[n - 1] = 0.0

    iteration = 0
    for i in range(n):
        for iteration in range(max_iteration_count):
            k = i
            while k < n - 1:
                eps = _EPSILON * (abs(d[k]) + abs(d[k + 1]))
                if abs(e[k]) <= eps:
                    break
                k += 1
            if k == i:
                break
            shift = calculate_shift(d[i + 1], d[i], e[i])
            q = d[k] - shift
            c = 1.0
            s = 1.0
            shift = 0.0
            for j in range(k - 1, i - 1, -1):
                h = c * e[j]
                g = s * e[j]
                if abs(g) >= abs(q):
                    c = q / g
                    dum = math.sqrt(c * c + 1.0)
                    e[j + 1] = g * dum
                    s = 1.0 / dum
                    c *= s
                else:
                    s = g / q
                    dum = math.sqrt(s * s + 1.0)
                    e[j + 1] = q * dum
                    c = 1.0 / dum
                    s *= c
                q = d[j + 1] - shift
                dum = s * (d[j] - q) + 2.0 * c * h
                shift = s * dum
                d[j + 1] = q + shift
                q = c * dum - h
            d[i] -= shift
            e[i] = q
            e[k] = 0.0
        else:
            iteration = max_iteration_count
    return np.array(d), iteration < max_iteration_count


def ql_tridiagonal_symmetric(diagonal, off, n: int, max_iteration_count: int) -> np.ndarray:
    """Return the eigenvalues of the ``n`` x ``n`` symmetric tridiagonal matrix.

    ``diagonal`` holds the diagonal and ``off`` the sub-diagonal; only their
    first ``n`` entries are used and the inputs are left unchanged.
    Raises ArithmeticError when the iteration limit is reached.
    """
    values, converged = _ql(diagonal, off, n, max_iteration_count)
    if not converged:
        raise ArithmeticError(
            f"QL iteration did not converge within {max_iteration_count} iterations"
        )
    return values