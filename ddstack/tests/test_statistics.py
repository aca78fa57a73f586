# ddstack/tests/test_statistics.py
"""
Boltzmann equilibrium densities: closed form, monotonicity, input guards.
"""
import math

import numpy as np
import pytest

from ddstack.errors import DomainError
from ddstack.physics.statistics import (
    equilibrium_electron_density,
    equilibrium_hole_density,
    thermal_voltage,
)
from ddstack.physics.intrinsic import intrinsic_density, intrinsic_level
from ddstack.utils.constants import K_B_EV


def test_thermal_voltage_300K():
    assert math.isclose(thermal_voltage(300.0), 0.025852, rel_tol=1e-4)


def test_density_equals_dos_at_band_edge():
    assert math.isclose(equilibrium_electron_density(1e19, -3.9, -3.9, 300.0), 1e19)
    assert math.isclose(equilibrium_hole_density(1e19, -5.4, -5.4, 300.0), 1e19)


def test_closed_form():
    kT = K_B_EV * 300.0
    n = equilibrium_electron_density(2e19, -3.9, -4.2, 300.0)
    p = equilibrium_hole_density(2e19, -5.4, -5.0, 300.0)
    assert math.isclose(n, 2e19 * math.exp(-0.3 / kT), rel_tol=1e-12)
    assert math.isclose(p, 2e19 * math.exp(-0.4 / kT), rel_tol=1e-12)


def test_monotone_towards_band_edge():
    Ef = np.linspace(-5.0, -3.95, 50)
    n = equilibrium_electron_density(1e19, -3.9, Ef, 300.0)
    p = equilibrium_hole_density(1e19, -5.4, Ef, 300.0)
    assert np.all(np.diff(n) > 0)
    assert np.all(np.diff(p) < 0)


def test_vectorized_shapes():
    N0 = np.array([1e19, 2e19, 3e19])
    n = equilibrium_electron_density(N0, np.array([-3.9, -3.8, -4.1]), -4.5, 300.0)
    assert n.shape == (3,)
    assert np.all(np.isfinite(n))


def test_far_from_edge_stays_finite():
    n = equilibrium_electron_density(1e19, -1.0, -7.0, 300.0)
    assert n >= 0.0 and math.isfinite(n)


@pytest.mark.parametrize("N0,T", [(0.0, 300.0), (-1e19, 300.0), (1e19, 0.0), (1e19, -10.0)])
def test_domain_errors(N0, T):
    with pytest.raises(DomainError):
        equilibrium_electron_density(N0, -3.9, -4.2, T)
    with pytest.raises(DomainError):
        equilibrium_hole_density(N0, -5.4, -5.0, T)


def test_non_finite_energy_rejected():
    with pytest.raises(DomainError):
        equilibrium_electron_density(1e19, float("nan"), -4.2, 300.0)


def test_intrinsic_references():
    Ei = intrinsic_level(-3.8, -5.4, 300.0, Nc=1e19, Nv=1e19)
    assert math.isclose(float(Ei), -4.6, rel_tol=1e-12)
    ni = intrinsic_density(1.6, 1e19, 300.0)
    assert math.isclose(float(ni), 1e19 * math.exp(-1.6 / (2 * K_B_EV * 300.0)), rel_tol=1e-12)


def test_scalar_inputs_return_python_floats():
    assert type(thermal_voltage(300.0)) is float
    assert type(equilibrium_electron_density(1e19, -3.9, -3.9, 300.0)) is float
    assert type(equilibrium_hole_density(1e19, -5.4, -5.0, 300.0)) is float
    assert type(intrinsic_level(-3.8, -5.4, 300.0)) is float
    assert type(intrinsic_density(1.6, 1e19, 300.0)) is float


def test_array_inputs_keep_shape():
    ni = intrinsic_density(np.array([1.6, 2.0]), np.array([1e19, 1e20]), 300.0)
    Ei = intrinsic_level(np.array([-3.8, -4.0]), np.array([-5.4, -6.0]), 300.0)
    assert ni.shape == (2,) and Ei.shape == (2,)
    out = np.zeros(2)
    out[0] = equilibrium_hole_density(1e19, -5.4, -5.0, 300.0)
    assert out[0] > 0.0
