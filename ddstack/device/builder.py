# ddstack/device/builder.py
"""
Device array builder: ParameterSet + mesh -> per-node property arrays.

- Model units: eV, cm, cm^-3, s.
- One array per quantity, index-aligned with the mesh (struct-of-arrays).
- Bulk nodes of layer i copy layer i's constants; gradient arrays are 0.
- Interface nodes between layer i and i+1 are graded linearly:
      v(x) = v_i + (x - b_i) * (v_{i+1} - v_i) / (2 dint)
  and the slope is written to gradEA / gradIP / gradN0.
- Et, taun, taup inside an interface use the interface's own constants.
- Trap-level densities nt, pt are evaluated once over the whole mesh from
  the local N0, EA/IP and Et.

Public API (stable):
    GRADED_QUANTITIES, QUANTITIES
    DeviceArrays
    Device
    build_device_arrays(params, mesh=None) -> DeviceArrays
    build_device(params, *, debug=False) -> Device

Notes
-----
- Arrays are returned read-only; any parameter change means a rebuild.
- Nothing is returned unless every node was classified (ConfigError otherwise).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Optional

import numpy as np

from ..geometry.mesh import Mesh1D
from ..geometry.regions import Bulk, Interface, RegionMap, classify_mesh
from ..models.parameters import ParameterSet
from ..physics.statistics import equilibrium_electron_density, equilibrium_hole_density
from ..utils import diagnostics as diag
from ..utils import logger

__all__ = [
    "GRADED_QUANTITIES",
    "QUANTITIES",
    "DeviceArrays",
    "Device",
    "build_device_arrays",
    "build_device",
]

# Quantities graded linearly across interface regions
GRADED_QUANTITIES = (
    "EA", "IP", "mue", "muh", "muion", "N0", "NA", "ND", "epp", "ni",
    "n0", "p0", "E0", "G0", "Nion", "DOSion", "krad",
)

# Gradient arrays filled with the interface slope, keyed by source quantity
_GRADIENTS = {"gradEA": "EA", "gradIP": "IP", "gradN0": "N0"}


# ---------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DeviceArrays:
    """
    Per-node device properties, all shape (N,), float64, read-only.
    """
    EA: np.ndarray        # electron affinity [eV]
    IP: np.ndarray        # ionization potential [eV]
    mue: np.ndarray       # electron mobility [cm^2/Vs]
    muh: np.ndarray       # hole mobility [cm^2/Vs]
    muion: np.ndarray     # ion mobility [cm^2/Vs]
    N0: np.ndarray        # effective DOS [cm^-3]
    NA: np.ndarray        # acceptor density [cm^-3]
    ND: np.ndarray        # donor density [cm^-3]
    epp: np.ndarray       # relative permittivity
    ni: np.ndarray        # intrinsic density [cm^-3]
    n0: np.ndarray        # equilibrium electron density [cm^-3]
    p0: np.ndarray        # equilibrium hole density [cm^-3]
    E0: np.ndarray        # equilibrium Fermi level [eV]
    G0: np.ndarray        # uniform generation rate at 1 sun [cm^-3 s^-1]
    Nion: np.ndarray      # mobile ion density [cm^-3]
    DOSion: np.ndarray    # ion site density [cm^-3]
    krad: np.ndarray      # radiative recombination coefficient [cm^3/s]
    gradEA: np.ndarray    # dEA/dx [eV/cm]
    gradIP: np.ndarray    # dIP/dx [eV/cm]
    gradN0: np.ndarray    # dN0/dx [cm^-4]
    taun: np.ndarray      # SRH electron lifetime [s]
    taup: np.ndarray      # SRH hole lifetime [s]
    Et: np.ndarray        # SRH trap energy [eV]
    nt: np.ndarray        # CB electron density with E_F at Et [cm^-3]
    pt: np.ndarray        # VB hole density with E_F at Et [cm^-3]

    def __len__(self) -> int:
        return int(self.EA.size)

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


QUANTITIES = tuple(f.name for f in fields(DeviceArrays))


@dataclass(frozen=True, slots=True)
class Device:
    """The published triple consumed by the solver (plus region tags)."""
    params: ParameterSet
    mesh: Mesh1D
    regions: RegionMap
    arrays: DeviceArrays

    @property
    def x(self) -> np.ndarray:
        return self.mesh.x

    def sample(self, name: str, x: float | np.ndarray) -> float | np.ndarray:
        """Quantity `name` at position(s) x, linear between mesh nodes."""
        if name not in QUANTITIES:
            raise KeyError(f"unknown device quantity {name!r}")
        out = np.interp(x, self.mesh.x, getattr(self.arrays, name))
        return float(out) if np.ndim(out) == 0 else out


# ---------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------


def _layer_values(params: ParameterSet) -> Dict[str, np.ndarray]:
    """Per-layer values of every graded quantity (derived ones evaluated once)."""
    vals = {name: params.column(name) for name in
            ("EA", "IP", "mue", "muh", "muion", "N0", "epp", "E0", "G0", "Nion", "DOSion", "krad")}
    vals["NA"] = params.NA
    vals["ND"] = params.ND
    vals["ni"] = params.ni
    vals["n0"] = params.n0
    vals["p0"] = params.p0
    return vals


def _fill_bulk(out: Dict[str, np.ndarray], idx: np.ndarray, i: int,
               vals: Dict[str, np.ndarray], params: ParameterSet) -> None:
    for name in GRADED_QUANTITIES:
        out[name][idx] = vals[name][i]
    for g in _GRADIENTS:
        out[g][idx] = 0.0
    layer = params.layers[i]
    out["taun"][idx] = layer.taun
    out["taup"][idx] = layer.taup
    out["Et"][idx] = layer.Et


def _fill_interface(out: Dict[str, np.ndarray], idx: np.ndarray, i: int, xprime: np.ndarray,
                    vals: Dict[str, np.ndarray], params: ParameterSet) -> None:
    width = 2.0 * params.dint
    for name in GRADED_QUANTITIES:
        slope = (vals[name][i + 1] - vals[name][i]) / width
        out[name][idx] = vals[name][i] + xprime * slope
    for g, src in _GRADIENTS.items():
        out[g][idx] = (vals[src][i + 1] - vals[src][i]) / width
    inter = params.interfaces[i]
    out["taun"][idx] = inter.taun
    out["taup"][idx] = inter.taup
    out["Et"][idx] = inter.Et


def build_device_arrays(
    params: ParameterSet,
    mesh: Optional[Mesh1D] = None,
    *,
    regions: Optional[RegionMap] = None,
) -> DeviceArrays:
    """Populate every per-node array from the parameter set."""
    mesh = params.mesh if mesh is None else mesh
    x = mesh.x
    if regions is None:
        regions = classify_mesh(x, params.dcum0, params.dint)

    N = x.size
    out = {name: np.zeros(N, dtype=np.float64) for name in QUANTITIES}
    vals = _layer_values(params)

    for region in regions.regions():
        idx = np.where(regions.mask(region))[0]
        if isinstance(region, Bulk):
            _fill_bulk(out, idx, region.layer, vals, params)
        elif isinstance(region, Interface):
            xprime = x[idx] - regions.b[region.left]
            _fill_interface(out, idx, region.left, xprime, vals, params)
        else:
            raise TypeError(f"unknown region tag: {region!r}")

    out["nt"] = np.asarray(equilibrium_electron_density(out["N0"], out["EA"], out["Et"], params.T))
    out["pt"] = np.asarray(equilibrium_hole_density(out["N0"], out["IP"], out["Et"], params.T))

    for a in out.values():
        a.setflags(write=False)
    return DeviceArrays(**out)


def build_device(params: ParameterSet, *, debug: bool = False) -> Device:
    """Mesh, classify and populate: the complete device for the solver."""
    mesh = params.mesh
    regions = classify_mesh(mesh.x, params.dcum0, params.dint)
    arrays = build_device_arrays(params, mesh, regions=regions)
    if debug:
        diag.log_parameter_summary(params)
        diag.log_mesh_summary(mesh, regions)
        diag.log_device_summary(arrays)
    logger.debug(f"device: {len(arrays)} nodes, {len(regions.regions())} regions")
    return Device(params=params, mesh=mesh, regions=regions, arrays=arrays)
