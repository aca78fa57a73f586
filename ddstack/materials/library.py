# ddstack/materials/library.py
"""
Layer preset library (organic / perovskite solar-cell stack).

- Model units: eV, cm, cm^-3.
- Presets carry the electronic, transport and recombination constants of a
  layer; thickness and mesh points are per-device and set on use.
- Trap energies are absolute and placed near mid-gap of each layer.

Public API (stable):
    get_layer(preset, thickness, points=100, /, **overrides) -> LayerSpec
    list_layers() -> list[str]
    default_parameters(**overrides) -> ParameterSet

Sources (as quoted for the reference device):
- PEDOT eDOS, mue: https://aip.scitation.org/doi/10.1063/1.4824104
- MAPI eDOS: Brivio et al., Phys. Rev. B 89, 155204 (2014)
- MAPI ion density: Walsh et al., Angew. Chem. 127, 1811 (2015)
"""

from __future__ import annotations
from dataclasses import replace
from typing import Dict

from ..geometry.mesh import MeshSpec
from ..models.layer import ControlSpec, ElectrodeSpec, InterfaceSpec, LayerSpec
from ..models.parameters import ParameterSet, build_parameters

__all__ = ["get_layer", "list_layers", "default_parameters"]


# Thickness / points are placeholders, replaced in get_layer()
_REGISTRY: Dict[str, LayerSpec] = {
    "PEDOT": LayerSpec(
        name="PEDOT", thickness=1.0, EA=-1.9, IP=-4.9, E0=-4.8, N0=1e19,
        mue=0.02, muh=0.02, muion=0.0, epp=4.0, Nion=0.0, DOSion=0.0,
        krad=3.18e-11, G0=0.0, Et=-3.4, taun=1e6, taup=1e6,
    ),
    "MAPICl": LayerSpec(
        name="MAPICl", thickness=1.0, EA=-3.8, IP=-5.4, E0=-4.6, N0=1e19,
        mue=20.0, muh=20.0, muion=1e-10, epp=23.0, Nion=1e18, DOSion=1.21e22,
        krad=3.6e-12, G0=2.6409e21, Et=-4.6, taun=1e-6, taup=1e-6,
    ),
    "PCBM": LayerSpec(
        name="PCBM", thickness=1.0, EA=-4.1, IP=-7.4, E0=-4.3, N0=1e19,
        mue=0.09, muh=0.09, muion=0.0, epp=12.0, Nion=0.0, DOSion=0.0,
        krad=1.54e-10, G0=0.0, Et=-5.75, taun=1e6, taup=1e6,
    ),
}


def get_layer(preset: str, thickness: float, points: int = 100, /, **overrides) -> LayerSpec:
    """
    Preset layer with thickness [cm] and bulk mesh points set.
    Overrides may include `name=` to rename the layer.

    Raises
    ------
    KeyError
        If `preset` is not a known preset.
    """
    base = _REGISTRY.get(preset)
    if base is None:
        raise KeyError(f"layer preset '{preset}' not found")
    return replace(base, thickness=float(thickness), points=int(points), **overrides)


def list_layers() -> list[str]:
    return sorted(_REGISTRY.keys())


def default_parameters(**overrides) -> ParameterSet:
    """
    Reference PEDOT | MAPICl | PCBM device (200 / 400 / 50 nm).

    Keyword overrides are passed to build_parameters().
    """
    kwargs = dict(
        layers=(
            get_layer("PEDOT", 200e-7, 100),
            get_layer("MAPICl", 400e-7, 200),
            get_layer("PCBM", 50e-7, 20),
        ),
        interfaces=(
            InterfaceSpec(Et=-4.0, taun=1e-12, taup=1e-12),
            InterfaceSpec(Et=-5.0, taun=1e-9, taup=1e-9),
        ),
        electrodes=ElectrodeSpec(PhiA=-4.8, PhiC=-4.2),
        mesh=MeshSpec(),
        controls=ControlSpec(),
        T=300.0,
        active_layer=1,
    )
    kwargs.update(overrides)
    return build_parameters(**kwargs)
