import numpy as np
import pytest

from parosol.solver import Solver, StiffnessMatrix


class _Diag(StiffnessMatrix):
    def __init__(self, values):
        self.values = np.asarray(values, dtype=float)

    def apply(self, x):
        return self.values * np.asarray(x, dtype=float)

    def label(self):
        return "diag"

    def diagonal(self):
        return 1.0 / self.values

    def nr_dofs(self):
        return self.values.size


def test_solver_is_abstract():
    with pytest.raises(TypeError):
        Solver()


def test_stiffness_matrix_is_abstract():
    with pytest.raises(TypeError):
        StiffnessMatrix()


def test_dot_product():
    m = _Diag([1.0, 1.0, 1.0])
    result = StiffnessMatrix.dot(m, np.array([1.0, 2.0, 3.0]), np.array([4.0, 5.0, 6.0]))
    assert result == pytest.approx(32.0)


def test_dot_is_symmetric():
    m = _Diag([1.0, 2.0, 3.0, 4.0])
    a = np.array([0.5, -1.0, 2.0, 3.5])
    b = np.array([1.5, 2.0, -0.5, 1.0])
    assert StiffnessMatrix.dot(m, a, b) == pytest.approx(StiffnessMatrix.dot(m, b, a))


def test_set_vector_random_size_and_range():
    m = _Diag(np.ones(7))
    v = StiffnessMatrix.set_vector_random(m)
    assert v.shape == (7,)
    assert np.all(np.abs(v) <= 1.0)