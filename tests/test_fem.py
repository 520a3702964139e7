import numpy as np
import pytest

from parosol.fem import ElementStress, element_stress, stiffness_matrix
from parosol.fem_basics import d_mat, invar
from parosol.toolbox import element_coords

E = 1.0
NU = 0.3


@pytest.fixture
def cube():
    return element_coords(1.0, 1.0, 1.0)


def test_stiffness_is_symmetric(cube):
    km = stiffness_matrix([E, NU], cube)
    assert km.shape == (24, 24)
    np.testing.assert_allclose(km, km.T, atol=1e-12)


@pytest.mark.parametrize("direction", [0, 1, 2])
def test_rigid_translation_gives_no_force(cube, direction):
    km = stiffness_matrix([E, NU], cube)
    u = np.zeros(24)
    u[direction::3] = 1.0
    np.testing.assert_allclose(km @ u, 0.0, atol=1e-12)


def test_rigid_rotation_gives_no_force(cube):
    km = stiffness_matrix([E, NU], cube)
    # small rotation around z: u = -y, v = x
    u = np.zeros(24)
    u[0::3] = -cube[:, 1]
    u[1::3] = cube[:, 0]
    np.testing.assert_allclose(km @ u, 0.0, atol=1e-12)


def test_positive_semidefinite_with_six_rigid_modes(cube):
    km = stiffness_matrix([E, NU], cube)
    eig = np.linalg.eigvalsh(km)
    assert eig.min() > -1e-10
    assert int(np.sum(np.abs(eig) < 1e-10)) == 6


def test_linear_in_youngs_modulus(cube):
    k1 = stiffness_matrix([1.0, NU], cube)
    k5 = stiffness_matrix([5.0, NU], cube)
    np.testing.assert_allclose(k5, 5.0 * k1, rtol=1e-12)


def test_scales_with_element_size(cube):
    k1 = stiffness_matrix([E, NU], cube)
    k2 = stiffness_matrix([E, NU], element_coords(2.0, 2.0, 2.0))
    np.testing.assert_allclose(k2, 2.0 * k1, rtol=1e-12, atol=1e-14)


def test_higher_rule_agrees_on_box():
    coords = element_coords(1.0, 2.0, 0.5)
    np.testing.assert_allclose(
        stiffness_matrix([E, NU], coords, 27),
        stiffness_matrix([E, NU], coords, 8),
        rtol=1e-10,
        atol=1e-12,
    )


def test_flat_coordinates_accepted(cube):
    np.testing.assert_allclose(
        stiffness_matrix([E, NU], cube.ravel()), stiffness_matrix([E, NU], cube)
    )


def test_invalid_rule_raises(cube):
    with pytest.raises(ValueError):
        stiffness_matrix([E, NU], cube, 5)


def test_wrong_coordinate_count_raises():
    with pytest.raises(ValueError):
        stiffness_matrix([E, NU], np.zeros(12))


def test_missing_material_raises(cube):
    with pytest.raises(ValueError):
        stiffness_matrix([E], cube)


def test_zero_displacement_zero_stress(cube):
    result = element_stress([E, NU], cube, np.zeros(24))
    assert isinstance(result, ElementStress)
    assert result.strain.shape == (8, 7)
    assert result.stress.shape == (8, 7)
    np.testing.assert_allclose(result.strain, 0.0)
    np.testing.assert_allclose(result.stress, 0.0)
    np.testing.assert_allclose(result.theta, 0.0)


def test_uniform_stretch(cube):
    eps = 0.01
    eld = np.zeros(24)
    eld[0::3] = eps * cube[:, 0]
    result = element_stress([E, NU], cube, eld)
    expected_strain = np.array([eps, 0, 0, 0, 0, 0])
    expected_stress = d_mat(E, NU) @ expected_strain
    for row_strain, row_stress in zip(result.strain, result.stress):
        np.testing.assert_allclose(row_strain[:6], expected_strain, atol=1e-14)
        np.testing.assert_allclose(row_stress[:6], expected_stress, atol=1e-14)
        sigma, dsbar, _theta = invar(expected_stress)
        assert row_stress[6] == pytest.approx(dsbar)
        assert row_strain[6] == pytest.approx(0.5 * expected_strain @ expected_stress)
    sigma, _dsbar, theta = invar(expected_stress)
    np.testing.assert_allclose(result.sigma, sigma)
    np.testing.assert_allclose(result.theta, theta)


def test_shear_strain_component(cube):
    g = 0.02
    eld = np.zeros(24)
    eld[0::3] = g * cube[:, 1]
    result = element_stress([E, NU], cube, eld)
    np.testing.assert_allclose(result.strain[:, 3], g, atol=1e-14)
    np.testing.assert_allclose(result.strain[:, [0, 1, 2, 4, 5]], 0.0, atol=1e-14)


def test_energy_matches_stiffness(cube):
    rng = np.random.default_rng(1)
    eld = rng.normal(size=24)
    km = stiffness_matrix([E, NU], cube)
    result = element_stress([E, NU], cube, eld)
    # 8-point rule with unit weights on a unit cube: each point weighs 1/8 of volume
    energy = result.strain[:, 6].sum() / 8.0
    assert energy == pytest.approx(0.5 * eld @ km @ eld, rel=1e-10)


def test_wrong_displacement_count_raises(cube):
    with pytest.raises(ValueError):
        element_stress([E, NU], cube, np.zeros(10))