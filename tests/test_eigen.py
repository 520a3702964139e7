import numpy as np
import pytest

from parosol.eigen import EigenBounds, estimate_eigenvalues
from parosol.iterative import Jacobi
from parosol.solver import Solver, StiffnessMatrix


class _Dense(StiffnessMatrix):
    def __init__(self, a):
        self.a = np.asarray(a, dtype=float)

    def apply(self, x):
        return self.a @ np.asarray(x, dtype=float)

    def label(self):
        return "dense"

    def diagonal(self):
        return 1.0 / np.diag(self.a)

    def nr_dofs(self):
        return self.a.shape[0]


class _Identity(Solver):
    def solve(self, b, x=None):
        return np.array(b, dtype=float)

    def label(self):
        return "identity"


@pytest.fixture
def spd():
    rng = np.random.default_rng(5)
    m = rng.normal(size=(6, 6))
    return m @ m.T + 0.5 * np.eye(6)


def test_full_run_finds_extreme_eigenvalues(spd):
    bounds = estimate_eigenvalues(_Dense(spd), _Identity(), 50)
    eigs = np.linalg.eigvalsh(spd)
    assert bounds.large == pytest.approx(eigs[-1], rel=1e-4)
    assert bounds.small == pytest.approx(eigs[0], rel=1e-4)


def test_few_iterations_stay_inside_spectrum(spd):
    bounds = estimate_eigenvalues(_Dense(spd), _Identity(), 2)
    eigs = np.linalg.eigvalsh(spd)
    assert bounds.small <= bounds.large
    assert bounds.small >= eigs[0] - 1e-9
    assert bounds.large <= eigs[-1] + 1e-9


def test_jacobi_on_diagonal_matrix_is_identity():
    m = _Dense(np.diag([2.0, 5.0, 9.0, 0.5]))
    bounds = estimate_eigenvalues(m, Jacobi(m), 10)
    assert isinstance(bounds, EigenBounds)
    assert bounds.large == pytest.approx(1.0)
    assert bounds.small == pytest.approx(1.0)


def test_zero_iterations_rejected(spd):
    with pytest.raises(ValueError):
        estimate_eigenvalues(_Dense(spd), _Identity(), 0)