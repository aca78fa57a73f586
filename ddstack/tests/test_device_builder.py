# ddstack/tests/test_device_builder.py
"""
Device arrays: bulk copies, linear interface grading, trap densities, immutability.
"""
import numpy as np
import pytest

from ddstack.device.builder import GRADED_QUANTITIES, QUANTITIES, build_device, build_device_arrays
from ddstack.errors import ConfigError
from ddstack.geometry.mesh import Mesh1D, MeshSpec
from ddstack.geometry.regions import BULK, INTERFACE
from ddstack.materials.library import default_parameters
from ddstack.physics.statistics import equilibrium_electron_density, equilibrium_hole_density

from .conftest import two_layer


@pytest.mark.parametrize("xmesh_type", [1, 2, 3, 4, 5])
def test_arrays_aligned_with_mesh(xmesh_type):
    dev = build_device(default_parameters(mesh=MeshSpec(xmesh_type=xmesh_type)))
    n = len(dev.mesh)
    for name in QUANTITIES:
        assert getattr(dev.arrays, name).shape == (n,)
        assert np.all(np.isfinite(getattr(dev.arrays, name)))


def test_dos_at_bulk_and_interface_midpoints():
    dev = build_device(two_layer())
    assert dev.sample("N0", 49e-7) == 1e19
    assert dev.sample("N0", 100e-7) == pytest.approx(1e19, rel=1e-12)

    dev = build_device(two_layer(N0=(1e19, 3e19)))
    assert dev.sample("N0", 49e-7) == 1e19
    assert dev.sample("N0", 100e-7) == pytest.approx(2e19, rel=1e-9)


def test_deep_bulk_equals_layer_constants():
    p = two_layer(N0=(1e19, 3e19))
    dev = build_device(p)
    x, dint = dev.x, p.dint
    for i, layer in enumerate(p.layers):
        lo, hi = p.dcum0[i], p.dcum0[i + 1]
        deep = (x > lo + dint) & (x < hi - dint)
        assert np.any(deep)
        for name in ("EA", "IP", "N0", "mue", "muh", "epp", "krad", "G0", "E0"):
            assert np.all(getattr(dev.arrays, name)[deep] == getattr(layer, name))
        assert np.all(dev.arrays.n0[deep] == p.n0[i])
        assert np.all(dev.arrays.Et[deep] == layer.Et)
        assert np.all(dev.arrays.taun[deep] == layer.taun)
        for g in ("gradEA", "gradIP", "gradN0"):
            assert np.all(getattr(dev.arrays, g)[deep] == 0.0)


def test_interface_grading_is_linear_and_continuous():
    p = two_layer(N0=(1e19, 3e19))
    dev = build_device(p)
    kind, x = dev.regions.kind, dev.x
    b0, a1 = dev.regions.b[0], dev.regions.a[1]
    iface = kind == INTERFACE
    assert np.all((x[iface] > b0) & (x[iface] < a1))

    per_layer = {"IP": p.IP, "N0": p.N0, "mue": p.column("mue"), "epp": p.epp, "ND": p.ND}
    for name, vals in per_layer.items():
        v = getattr(dev.arrays, name)
        left, right = float(vals[0]), float(vals[1])
        slope = (right - left) / (2 * p.dint)
        np.testing.assert_allclose(v[iface], left + (x[iface] - b0) * slope, rtol=1e-12)
        # region edges are bulk nodes carrying the adjoining layer values
        assert v[x == b0][0] == left
        assert v[x == a1][0] == right
        # the graded line meets both bulk values
        assert left + (a1 - b0) * slope == pytest.approx(right, rel=1e-9, abs=1e-12)


def test_gradient_arrays_record_slopes():
    p = two_layer(N0=(1e19, 3e19))
    dev = build_device(p)
    iface = dev.regions.kind == INTERFACE
    np.testing.assert_allclose(dev.arrays.gradN0[iface], 2e19 / (2 * p.dint))
    np.testing.assert_allclose(dev.arrays.gradIP[iface], (-5.9 + 5.4) / (2 * p.dint))
    assert np.all(dev.arrays.gradEA == 0.0)


def test_interface_uses_own_trap_constants():
    p = two_layer()
    dev = build_device(p)
    iface = dev.regions.kind == INTERFACE
    assert np.all(dev.arrays.Et[iface] == -4.7)
    assert np.all(dev.arrays.taun[iface] == 1e-12)
    assert np.all(dev.arrays.taup[iface] == 5e-12)


def test_trap_densities_from_local_values():
    p = two_layer(N0=(1e19, 3e19))
    a = build_device(p).arrays
    np.testing.assert_allclose(a.nt, equilibrium_electron_density(a.N0, a.EA, a.Et, p.T))
    np.testing.assert_allclose(a.pt, equilibrium_hole_density(a.N0, a.IP, a.Et, p.T))


def test_build_is_idempotent():
    p = default_parameters()
    first = build_device_arrays(p)
    second = build_device_arrays(p)
    for name in QUANTITIES:
        assert np.array_equal(getattr(first, name), getattr(second, name))


def test_arrays_are_read_only():
    a = build_device(default_parameters()).arrays
    with pytest.raises(ValueError):
        a.EA[0] = 0.0


def test_zero_half_width_has_no_interfaces():
    dev = build_device(two_layer(dint=0.0))
    assert np.all(dev.regions.kind == BULK)
    assert np.all(dev.arrays.gradEA == 0.0)


def test_inconsistent_mesh_is_config_error():
    p = two_layer()
    x = np.array([0.0, 50e-7, 160e-7])
    bad = Mesh1D(x=x, dx=np.diff(x), dcum0=p.dcum0, xmesh_type=3)
    with pytest.raises(ConfigError):
        build_device_arrays(p, bad)


def test_graded_set_covers_non_trap_quantities():
    trap = {"taun", "taup", "Et", "nt", "pt", "gradEA", "gradIP", "gradN0"}
    assert set(GRADED_QUANTITIES) == set(QUANTITIES) - trap


def test_debug_build_prints_summaries(capsys):
    build_device(default_parameters(), debug=True)
    out = capsys.readouterr().out
    assert "[diag] params" in out
    assert "[diag] mesh" in out
    assert "[diag] device" in out


def test_sample_unknown_quantity():
    dev = build_device(two_layer())
    with pytest.raises(KeyError):
        dev.sample("mobility", 1e-6)
