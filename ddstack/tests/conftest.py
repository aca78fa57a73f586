# ddstack/tests/conftest.py
"""Shared stacks for the test modules."""
from __future__ import annotations

import pytest

from ddstack.geometry.mesh import MeshSpec
from ddstack.models.layer import InterfaceSpec, LayerSpec
from ddstack.models.parameters import build_parameters


def two_layer(N0=(1e19, 1e19), *, xmesh_type=3, dint=2e-7, **kw):
    """100 nm | 50 nm stack with equal electron affinities."""
    layers = (
        LayerSpec(name="A", thickness=100e-7, EA=-3.9, IP=-5.4, E0=-5.0, N0=N0[0],
                  mue=1.0, muh=2.0, epp=10.0, krad=1e-11, Et=-4.6, taun=1e-6, taup=2e-6, points=60),
        LayerSpec(name="B", thickness=50e-7, EA=-3.9, IP=-5.9, E0=-4.2, N0=N0[1],
                  mue=3.0, muh=4.0, epp=20.0, krad=3e-11, G0=1e21, Et=-4.9, taun=1e-7, taup=3e-7,
                  points=30),
    )
    interfaces = (InterfaceSpec(Et=-4.7, taun=1e-12, taup=5e-12),)
    return build_parameters(layers, interfaces, mesh=MeshSpec(xmesh_type=xmesh_type, dint=dint), **kw)


@pytest.fixture
def stack2():
    return two_layer()
