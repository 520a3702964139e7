"""Element stiffness matrix and element stresses for 8-node hexahedra.

Nodal coordinates are given as an array of shape (8, 3), one row per node.
Displacements are ordered node by node: ``(u0, v0, w0, u1, v1, w1, ...)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from parosol.fem_basics import b_mat, d_mat, determinant, invar, invert, sample, shape_der

NODES = 8
DIM = 3
DOFS = NODES * DIM
NST = 6


@dataclass(frozen=True)
class ElementStress:
    """Stresses and strains at the Gauss points of one element.

    ``strain`` and ``stress`` have one row per Gauss point and ``NST + 1``
    columns.  The first six columns hold the strain and stress components.
    The last column of ``stress`` holds the von Mises equivalent stress and
    the last column of ``strain`` the strain energy density.
    ``sigma`` is the mean stress and ``theta`` the Lode angle per point.
    """

    strain: np.ndarray
    stress: np.ndarray
    sigma: np.ndarray
    theta: np.ndarray


def _coords(coord) -> np.ndarray:
    c = np.asarray(coord, dtype=float)
    if c.size != DOFS:
        raise ValueError(f"element coordinates need {DOFS} values, got {c.size}")
    return c.reshape(NODES, DIM)


def _material(mat_prop: Sequence[float]) -> tuple[float, float]:
    props = [float(p) for p in mat_prop]
    if len(props) < 2:
        raise ValueError("material properties need Young's modulus and Poisson's ratio")
    return props[0], props[1]


def _gauss_data(coord, nip: int):
    """Yield ``(weight, det(J), B)`` for each integration point."""
    g = _coords(coord)
    points, weights = sample(nip)
    for i, weight in enumerate(weights):
        der = shape_der(points, i)
        jac = der @ g
        det = determinant(jac)
        deriv = invert(jac) @ der
        yield float(weight), det, b_mat(deriv)


def stiffness_matrix(mat_prop: Sequence[float], coord, nip: int = 8) -> np.ndarray:
    """Return the 24 x 24 element stiffness matrix by Gauss integration.

    ``mat_prop`` holds Young's modulus and Poisson's ratio.
    """
    e, v = _material(mat_prop)
    d = d_mat(e, v, NST)
    km = np.zeros((DOFS, DOFS))
    for weight, det, b in _gauss_data(coord, nip):
        km += det * weight * (b.T @ d @ b)
    return km


def element_stress(mat_prop: Sequence[float], coord, eld, nip: int = 8) -> ElementStress:
    """Compute strains and stresses at the Gauss points for displacements ``eld``."""
    e, v = _material(mat_prop)
    disp = np.asarray(eld, dtype=float).ravel()
    if disp.size != DOFS:
        raise ValueError(f"element displacements need {DOFS} values, got {disp.size}")
    d = d_mat(e, v, NST)

    strains, stresses, sigmas, thetas = [], [], [], []
    for _weight, _det, b in _gauss_data(coord, nip):
        bld = b @ disp
        deeld = d @ bld
        sigma, dsbar, theta = invar(deeld)
        energy = 0.5 * float(bld @ deeld)
        strains.append(np.append(bld, energy))
        stresses.append(np.append(deeld, dsbar))
        sigmas.append(sigma)
        thetas.append(theta)

    return ElementStress(
        strain=np.array(strains),
        stress=np.array(stresses),
        sigma=np.array(sigmas),
        theta=np.array(thetas),
    )