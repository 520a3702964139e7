"""Building blocks for 8-node hexahedral finite elements.

Matrices are plain ``numpy`` arrays indexed ``[row, column]``.
"""

from __future__ import annotations

import math

import numpy as np

ROOT3 = 0.57735026918962576452
R15 = 0.77459666924148337704

_NODES = 8
_DIM = 3


def d_mat(e: float, v: float, nst: int = 6) -> np.ndarray:
    """Return the isotropic stress-strain matrix for Young's modulus ``e``
    and Poisson's ratio ``v``.

    The matrix is ``nst`` x ``nst``; only the leading 6x6 block is filled.
    """
    if nst < 6:
        raise ValueError(f"stress-strain matrix needs at least 6 rows, got {nst}")
    v2 = v / (1.0 - v)
    vv = (1.0 - 2.0 * v) / (1.0 - v) * 0.5
    d = np.zeros((nst, nst))
    d[0:3, 0:3] = v2
    d[[0, 1, 2], [0, 1, 2]] = 1.0
    d[[3, 4, 5], [3, 4, 5]] = vv
    c = e / (2.0 * (1.0 + v) * vv)
    return d * c


def _sample_8() -> tuple[np.ndarray, np.ndarray]:
    r = ROOT3
    points = np.array(
        [
            [r, r, r],
            [r, r, -r],
            [r, -r, r],
            [r, -r, -r],
            [-r, r, r],
            [-r, -r, r],
            [-r, r, -r],
            [-r, -r, -r],
        ]
    )
    return points, np.ones(8)


def _corner_block(points: np.ndarray, first: int, c: float) -> None:
    """Fill the eight corner points starting at row ``first``."""
    points[first:first + 8, :] = c
    negatives = [
        (0, (0, 1, 2)),
        (1, (1, 2)),
        (2, (0, 2)),
        (3, (2,)),
        (4, (0, 1)),
        (5, (1,)),
        (6, (0,)),
    ]
    for offset, columns in negatives:
        for col in columns:
            points[first + offset, col] = -c


def _sample_14() -> tuple[np.ndarray, np.ndarray]:
    b = 0.795822426
    c = 0.758786911
    weights = np.array([0.886426593 if i < 7 else 0.335180055 for i in range(14)])
    points = np.zeros((14, 3))
    for row, (col, sign) in enumerate(
        [(0, -1), (0, 1), (1, -1), (1, 1), (2, -1), (2, 1)]
    ):
        points[row, col] = sign * b
    _corner_block(points, 6, c)
    return points, weights


def _sample_15() -> tuple[np.ndarray, np.ndarray]:
    b = 1.0
    c = 0.674199862
    weights = np.array(
        [1.564444444] + [0.355555556 if i < 8 else 0.537777778 for i in range(1, 15)]
    )
    points = np.zeros((15, 3))
    for row, (col, sign) in enumerate(
        [(0, -1), (0, 1), (1, -1), (1, 1), (2, -1), (2, 1)], start=1
    ):
        points[row, col] = sign * b
    _corner_block(points, 7, c)
    return points, weights


def _sample_27() -> tuple[np.ndarray, np.ndarray]:
    w = np.array([5.0 / 9.0, 8.0 / 9.0, 5.0 / 9.0])
    v = np.outer(w, w).ravel()
    weights = np.outer(w, v).ravel()
    levels = np.array([-R15, 0.0, R15])
    rows = np.arange(27)
    points = np.empty((27, 3))
    points[:, 0] = levels[rows % 3]
    points[:, 2] = levels[::-1][(rows % 9) // 3]
    points[:, 1] = levels[rows // 9]
    return points, weights


_RULES = {
    8: _sample_8,
    14: _sample_14,
    15: _sample_15,
    27: _sample_27,
}


def sample(nip: int) -> tuple[np.ndarray, np.ndarray]:
    """Return Gauss points (``nip`` x 3) and weights for a hexahedron."""
    if nip == 1:
        return np.zeros((1, 3)), np.array([8.0])
    try:
        rule = _RULES[nip]
    except KeyError:
        raise ValueError(
            f"wrong number of integration points for a hexahedron: {nip}"
        ) from None
    return rule()


def shape_der(points: np.ndarray, ipoint: int) -> np.ndarray:
    """Return the 3 x 8 local shape-function derivatives at integration point
    ``ipoint`` of ``points``."""
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != _DIM:
        raise ValueError("points must be an array of shape (nip, 3)")
    xi, eta, zeta = pts[ipoint]
    etam, xim, zetam = 1.0 - eta, 1.0 - xi, 1.0 - zeta
    etap, xip, zetap = eta + 1.0, xi + 1.0, zeta + 1.0
    q = 0.125
    return np.array(
        [
            [
                -q * etam * zetam, -q * etam * zetap, q * etam * zetap, q * etam * zetam,
                -q * etap * zetam, -q * etap * zetap, q * etap * zetap, q * etap * zetam,
            ],
            [
                -q * xim * zetam, -q * xim * zetap, -q * xip * zetap, -q * xip * zetam,
                q * xim * zetam, q * xim * zetap, q * xip * zetap, q * xip * zetam,
            ],
            [
                -q * xim * etam, q * xim * etam, q * xip * etam, -q * xip * etam,
                -q * xim * etap, q * xim * etap, q * xip * etap, -q * xip * etap,
            ],
        ]
    )


def _square(a) -> np.ndarray:
    m = np.asarray(a, dtype=float)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError("a square matrix is required")
    if m.shape[0] not in (1, 2, 3):
        raise ValueError(f"matrices of size {m.shape[0]} are not supported")
    return m


def determinant(a) -> float:
    """Determinant of a 1x1, 2x2 or 3x3 matrix."""
    m = _square(a)
    n = m.shape[0]
    if n == 1:
        return float(m[0, 0])
    if n == 2:
        return float(m[0, 0] * m[1, 1] - m[1, 0] * m[0, 1])
    return float(
        m[0, 0] * m[1, 1] * m[2, 2]
        + m[0, 1] * m[1, 2] * m[2, 0]
        + m[0, 2] * m[1, 0] * m[2, 1]
        - m[0, 2] * m[1, 1] * m[2, 0]
        - m[0, 0] * m[1, 2] * m[2, 1]
        - m[0, 1] * m[1, 0] * m[2, 2]
    )


def invert(a) -> np.ndarray:
    """Inverse of a 1x1, 2x2 or 3x3 matrix.

    Raises ZeroDivisionError for a singular matrix.
    """
    m = _square(a)
    idet = 1.0 / determinant(m)
    n = m.shape[0]
    if n == 1:
        return np.array([[idet]])
    if n == 2:
        return idet * np.array([[m[1, 1], -m[0, 1]], [-m[1, 0], m[0, 0]]])
    b = np.empty((3, 3))
    b[0, 0] = m[1, 1] * m[2, 2] - m[2, 1] * m[1, 2]
    b[1, 0] = m[2, 0] * m[1, 2] - m[1, 0] * m[2, 2]
    b[2, 0] = m[1, 0] * m[2, 1] - m[2, 0] * m[1, 1]
    b[0, 1] = m[2, 1] * m[0, 2] - m[0, 1] * m[2, 2]
    b[1, 1] = m[0, 0] * m[2, 2] - m[2, 0] * m[0, 2]
    b[2, 1] = m[2, 0] * m[0, 1] - m[0, 0] * m[2, 1]
    b[0, 2] = m[0, 1] * m[1, 2] - m[1, 1] * m[0, 2]
    b[1, 2] = m[1, 0] * m[0, 2] - m[0, 0] * m[1, 2]
    b[2, 2] = m[0, 0] * m[1, 1] - m[1, 0] * m[0, 1]
    return idet * b


def b_mat(deriv) -> np.ndarray:
    """Strain-displacement matrix (6 x 3*nod) from global derivatives (3 x nod)."""
    dv = np.asarray(deriv, dtype=float)
    if dv.ndim != 2 or dv.shape[0] != _DIM:
        raise ValueError("deriv must be an array of shape (3, nod)")
    nod = dv.shape[1]
    b = np.zeros((6, 3 * nod))
    l = np.arange(nod) * 3
    k, n = l + 1, l + 2
    x, y, z = dv
    b[0, l] = x
    b[3, k] = x
    b[5, n] = x
    b[1, k] = y
    b[3, l] = y
    b[4, n] = y
    b[2, n] = z
    b[4, k] = z
    b[5, l] = z
    return b


def invar(stress) -> tuple[float, float, float]:
    """Return ``(sigma, dsbar, theta)``: mean stress, von Mises equivalent
    stress and Lode angle of a 4- or 6-component stress vector."""
    s = [float(value) for value in np.asarray(stress, dtype=float).ravel()]
    if len(s) == 4:
        sx, sy, txy, sz = s
        sigma = (sx + sy + sz) / 3.0
        dsbar = math.sqrt(
            (sx - sy) ** 2 + (sy - sz) ** 2 + (sz - sx) ** 2 + 6.0 * txy * txy
        ) / math.sqrt(2.0)
        if dsbar < 1.0e-10:
            return sigma, dsbar, 0.0
        dx = (2.0 * sx - sy - sz) / 3.0
        dy = (2.0 * sy - sz - sx) / 3.0
        dz = (2.0 * sz - sx - sy) / 3.0
        xj3 = dx * dy * dz - dz * txy * txy
        sine = -13.5 * xj3 / (dsbar ** 3)
        return sigma, dsbar, math.asin(min(1.0, max(-1.0, sine))) / 3.0
    if len(s) == 6:
        sq3 = math.sqrt(3.0)
        s1, s2, s3, s4, s5, s6 = s
        sigma = (s1 + s2 + s3) / 3.0
        d2 = (
            ((s1 - s2) ** 2 + (s2 - s3) ** 2 + (s3 - s1) ** 2) / 6.0
            + s4 * s4 + s5 * s5 + s6 * s6
        )
        ds1, ds2, ds3 = s1 - sigma, s2 - sigma, s3 - sigma
        d3 = (
            ds1 * ds2 * ds3 - ds1 * s5 * s5 - ds2 * s6 * s6 - ds3 * s4 * s4
            + 2.0 * s4 * s5 * s6
        )
        dsbar = sq3 * math.sqrt(d2)
        if dsbar == 0.0:
            return sigma, dsbar, 0.0
        sine = -3.0 * sq3 * d3 / (2.0 * d2 * math.sqrt(d2))
        return sigma, dsbar, math.asin(min(1.0, max(-1.0, sine))) / 3.0
    raise ValueError(f"stress vector must have 4 or 6 components, got {len(s)}")