# -*- coding: utf-8 -*-
"""
Per-layer, per-interface, electrode and control records for a layer stack.

Units: energies [eV] (vacuum-referenced, negative), thickness [cm],
densities [cm^-3], mobilities [cm^2 V^-1 s^-1], krad [cm^3 s^-1],
lifetimes [s], G0 [cm^-3 s^-1], surface velocities [cm s^-1].

LayerSpec fields:
  - EA / IP: electron affinity and ionization potential (EA > IP)
  - E0: equilibrium Fermi level; sets the doping of the contact layers
  - N0: effective density of states (both bands)
  - Nion / DOSion: mobile-ion density and ion-site density
  - Et, taun, taup: bulk SRH trap energy and lifetimes
  - points: requested mesh points in the layer bulk
"""
from __future__ import annotations
from dataclasses import dataclass

from ..errors import ConfigError

__all__ = ["LayerSpec", "InterfaceSpec", "ElectrodeSpec", "ControlSpec"]

SUPPORTED_TMESH = (1, 2, 3, 4)
SUPPORTED_OM = (0,)


@dataclass(frozen=True, slots=True)
class LayerSpec:
    name: str
    thickness: float
    EA: float
    IP: float
    E0: float
    N0: float
    mue: float = 0.0
    muh: float = 0.0
    muion: float = 0.0
    epp: float = 1.0
    Nion: float = 0.0
    DOSion: float = 0.0
    krad: float = 0.0
    G0: float = 0.0
    Et: float = 0.0
    taun: float = 1e6
    taup: float = 1e6
    points: int = 100

    def __post_init__(self) -> None:
        if not self.thickness > 0.0:
            raise ConfigError(f"layer {self.name!r}: thickness must be > 0 (got {self.thickness})")
        if int(self.points) != self.points or self.points < 2:
            raise ConfigError(f"layer {self.name!r}: points must be an integer >= 2 (got {self.points})")
        if self.taun <= 0.0 or self.taup <= 0.0:
            raise ConfigError(f"layer {self.name!r}: SRH lifetimes must be > 0")

    @property
    def Eg(self) -> float:
        return self.EA - self.IP


@dataclass(frozen=True, slots=True)
class InterfaceSpec:
    """Interfacial SRH constants between layer i and i+1."""
    Et: float
    taun: float
    taup: float

    def __post_init__(self) -> None:
        if self.taun <= 0.0 or self.taup <= 0.0:
            raise ConfigError("interface SRH lifetimes must be > 0")


@dataclass(frozen=True, slots=True)
class ElectrodeSpec:
    """
    Contact workfunctions and surface recombination velocities.

    PhiA is the anode (left, x = 0), PhiC the cathode (right, x = L).
    """
    PhiA: float = -4.8
    PhiC: float = -4.2
    sn_l: float = 1e8
    sn_r: float = 1e8
    sp_l: float = 1e8
    sp_r: float = 1e8


@dataclass(frozen=True, slots=True)
class ControlSpec:
    """
    Solver-facing switches carried with the parameters.

    OC: 0 closed circuit, 1 open circuit.  side: 1 electrode-side, 2 substrate-side
    illumination.  OM: optical model, only 0 (uniform generation) exists.
    tmesh_type selects the time-mesh strategy of the external solver.
    """
    Vapp: float = 0.0
    Int: float = 0.0
    OC: int = 0
    BC: int = 3
    mobset: int = 1
    mobseti: int = 1
    SRHset: int = 1
    side: int = 1
    OM: int = 0
    tmesh_type: int = 2
    tmax: float = 1e-12
    t0: float = 1e-16
    tpoints: int = 100
    RelTol: float = 1e-3
    AbsTol: float = 1e-6

    def __post_init__(self) -> None:
        if self.OM not in SUPPORTED_OM:
            raise ConfigError(f"optical model OM={self.OM!r} unsupported; only uniform generation (0)")
        if self.tmesh_type not in SUPPORTED_TMESH:
            raise ConfigError(
                f"tmesh_type should be an integer from 1 to 4 inclusive (got {self.tmesh_type!r})"
            )
        if self.OC not in (0, 1):
            raise ConfigError(f"OC must be 0 (closed) or 1 (open), got {self.OC!r}")
        if self.side not in (1, 2):
            raise ConfigError(f"side must be 1 or 2, got {self.side!r}")
        if self.BC not in (0, 1, 2, 3):
            raise ConfigError(f"BC must be one of 0..3, got {self.BC!r}")
        if int(self.tpoints) != self.tpoints or self.tpoints < 2:
            raise ConfigError(f"tpoints must be an integer >= 2, got {self.tpoints!r}")
        if self.tmax <= 0.0:
            raise ConfigError("tmax must be > 0")
        if self.tmesh_type != 1 and not (0.0 < self.t0 < self.tmax):
            raise ConfigError("log time meshes need 0 < t0 < tmax")
        if self.Int < 0.0:
            raise ConfigError("bias light intensity Int must be >= 0")
