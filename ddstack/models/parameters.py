# ddstack/models/parameters.py
"""
ParameterSet: validated, immutable constants of a layer stack.

- Model units: eV, cm, cm^-3, K.
- Owns the per-layer (LayerSpec) and per-interface (InterfaceSpec) constants,
  electrode workfunctions, mesh controls and solver switches.
- Every derived quantity is a property recomputed from the constants on
  each access (band gaps, doping, equilibrium and contact densities,
  built-in voltage, depletion widths, trap-level densities).
- Validation runs in __post_init__, so no instance exists unless it is
  consistent. replace() / replace_layer() return new, re-validated
  instances; the source instance is never touched.

Validation
----------
ValidationError
    * derived donor or acceptor density >= N0 in any layer
    * bulk trap energy of the active layer not strictly inside (IP, EA)
    * EA <= IP in any layer
ConfigError
    * wrong number of interfaces, active_layer out of range, T <= 0,
      mesh controls that do not fit the stack

Public API (stable):
    ParameterSet
    build_parameters(layers, interfaces, *, electrodes, mesh, controls, T, active_layer)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

import numpy as np

from ..errors import ConfigError, ValidationError
from ..geometry.mesh import Mesh1D, MeshSpec, generate_mesh
from ..physics.intrinsic import intrinsic_density, intrinsic_level
from ..physics.statistics import equilibrium_electron_density, equilibrium_hole_density
from ..utils import logger
from ..utils.constants import EPP0, Q
from .layer import ControlSpec, ElectrodeSpec, InterfaceSpec, LayerSpec

__all__ = ["ParameterSet", "build_parameters", "COMMON_TMESH"]

COMMON_TMESH = (1, 2)

_DOPING_MSG = (
    "Doping density must be less than eDOS. For consistent values ensure electrode "
    "workfunctions are within the band gap and check the equilibrium Fermi levels E0."
)

# LayerSpec fields that feed the statistics and the device arrays
_FINITE_FIELDS = (
    "EA", "IP", "E0", "N0", "Et", "mue", "muh", "muion", "epp", "Nion", "DOSion", "krad", "G0",
)


@dataclass(frozen=True, slots=True)
class ParameterSet:
    layers: tuple[LayerSpec, ...]
    interfaces: tuple[InterfaceSpec, ...] = ()
    electrodes: ElectrodeSpec = field(default_factory=ElectrodeSpec)
    mesh_spec: MeshSpec = field(default_factory=MeshSpec)
    controls: ControlSpec = field(default_factory=ControlSpec)
    T: float = 300.0
    active_layer: Optional[int] = None

    _mesh: Optional[Mesh1D] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(self.layers))
        object.__setattr__(self, "interfaces", tuple(self.interfaces))
        n = len(self.layers)
        if n < 1:
            raise ConfigError("stack must contain at least one LayerSpec")
        if len(self.interfaces) != n - 1:
            raise ConfigError(
                f"{n} layers need {n - 1} InterfaceSpec entries (got {len(self.interfaces)})"
            )
        if not 0.0 < self.T < np.inf:
            raise ConfigError(f"T must be > 0 K (got {self.T})")
        if self.active_layer is None:
            object.__setattr__(self, "active_layer", n // 2)
        if not 0 <= self.active_layer < n:
            raise ConfigError(f"active_layer {self.active_layer} out of range for {n} layers")

        self._validate()

        if self.controls.tmesh_type not in COMMON_TMESH:
            logger.warn(f"tmesh_type={self.controls.tmesh_type} is supported but rarely used")

        mesh = generate_mesh(self.d, self.parr, self.mesh_spec, active_layer=self.active_layer)
        object.__setattr__(self, "_mesh", mesh)

    # -----------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------

    def _validate(self) -> None:
        for name in _FINITE_FIELDS:
            vals = self.column(name)
            bad = np.where(~np.isfinite(vals))[0]
            if bad.size:
                i = int(bad[0])
                raise ValidationError(
                    f"layer {i} ({self.layers[i].name!r}): {name}={vals[i]} is not finite"
                )
        bad = np.where(self.N0 <= 0.0)[0]
        if bad.size:
            i = int(bad[0])
            raise ValidationError(
                f"layer {i} ({self.layers[i].name!r}): density of states N0={self.N0[i]} must be > 0"
            )
        for j, inter in enumerate(self.interfaces):
            if not np.isfinite(inter.Et):
                raise ValidationError(f"interface {j}: trap energy Et={inter.Et} is not finite")
        e = self.electrodes
        if not (np.isfinite(e.PhiA) and np.isfinite(e.PhiC)):
            raise ValidationError(f"electrode workfunctions must be finite (PhiA={e.PhiA}, PhiC={e.PhiC})")

        Eg = self.Eg
        bad = np.where(Eg <= 0.0)[0]
        if bad.size:
            i = int(bad[0])
            raise ValidationError(
                f"layer {i} ({self.layers[i].name!r}): electron affinity EA={self.EA[i]} eV "
                f"must lie above ionization potential IP={self.IP[i]} eV"
            )

        ND, NA, N0 = self.ND, self.NA, self.N0
        for i in range(len(self.layers)):
            if ND[i] >= N0[i] or NA[i] >= N0[i]:
                raise ValidationError(
                    f"layer {i} ({self.layers[i].name!r}): ND={ND[i]:.3e}, NA={NA[i]:.3e} "
                    f"vs N0={N0[i]:.3e} cm^-3. {_DOPING_MSG}"
                )

        k = self.active_layer
        lay = self.layers[k]
        if not (lay.IP < lay.Et < lay.EA):
            raise ValidationError(
                f"Trap energies must exist within the active layer band gap: "
                f"Et={lay.Et} eV not in ({lay.IP}, {lay.EA}) eV for layer {k} ({lay.name!r})"
            )

    # -----------------------------------------------------------------
    # Mutators (return new validated instances)
    # -----------------------------------------------------------------

    def replace(self, **changes) -> "ParameterSet":
        """New ParameterSet with top-level fields replaced; re-validated."""
        return replace(self, **changes)

    def replace_layer(self, index: int, **changes) -> "ParameterSet":
        """New ParameterSet with fields of layer `index` replaced; re-validated."""
        layers = list(self.layers)
        layers[index] = replace(layers[index], **changes)
        return replace(self, layers=tuple(layers))

    def replace_interface(self, index: int, **changes) -> "ParameterSet":
        interfaces = list(self.interfaces)
        interfaces[index] = replace(interfaces[index], **changes)
        return replace(self, interfaces=tuple(interfaces))

    # -----------------------------------------------------------------
    # Per-layer columns
    # -----------------------------------------------------------------

    def column(self, name: str) -> np.ndarray:
        """Per-layer array of a LayerSpec field."""
        return np.array([getattr(ly, name) for ly in self.layers], dtype=np.float64)

    @property
    def n_layers(self) -> int:
        return len(self.layers)

    @property
    def d(self) -> np.ndarray:
        return self.column("thickness")

    @property
    def parr(self) -> np.ndarray:
        return np.array([ly.points for ly in self.layers], dtype=int)

    @property
    def EA(self) -> np.ndarray:
        return self.column("EA")

    @property
    def IP(self) -> np.ndarray:
        return self.column("IP")

    @property
    def E0(self) -> np.ndarray:
        return self.column("E0")

    @property
    def N0(self) -> np.ndarray:
        return self.column("N0")

    @property
    def epp(self) -> np.ndarray:
        return self.column("epp")

    @property
    def Et_bulk(self) -> np.ndarray:
        return self.column("Et")

    @property
    def Et_inter(self) -> np.ndarray:
        return np.array([it.Et for it in self.interfaces], dtype=np.float64)

    @property
    def taun_inter(self) -> np.ndarray:
        return np.array([it.taun for it in self.interfaces], dtype=np.float64)

    @property
    def taup_inter(self) -> np.ndarray:
        return np.array([it.taup for it in self.interfaces], dtype=np.float64)

    # -----------------------------------------------------------------
    # Geometry
    # -----------------------------------------------------------------

    @property
    def dcum(self) -> np.ndarray:
        """Cumulative thickness [cm]."""
        return np.cumsum(self.d)

    @property
    def dcum0(self) -> np.ndarray:
        """Layer boundaries [cm] including x = 0."""
        return np.concatenate(([0.0], self.dcum))

    @property
    def total_thickness(self) -> float:
        return float(np.sum(self.d))

    @property
    def dint(self) -> float:
        return float(self.mesh_spec.dint)

    @property
    def mesh(self) -> Mesh1D:
        """Spatial mesh generated once at construction."""
        return self._mesh

    # -----------------------------------------------------------------
    # Energetics
    # -----------------------------------------------------------------

    @property
    def Eg(self) -> np.ndarray:
        """Band gap per layer [eV]."""
        return self.EA - self.IP

    @property
    def Vbi(self) -> float:
        """Built-in voltage from the electrode workfunction difference [V]."""
        return float(self.electrodes.PhiC - self.electrodes.PhiA)

    @property
    def Eif(self) -> np.ndarray:
        """Intrinsic Fermi level per layer [eV]."""
        return intrinsic_level(self.EA, self.IP, self.T, Nc=self.N0, Nv=self.N0)

    def _grad(self, v: np.ndarray) -> np.ndarray:
        if self.dint == 0.0:
            return np.zeros(v.size - 1)
        return np.diff(v) / (2.0 * self.dint)

    @property
    def dEAdx(self) -> np.ndarray:
        """EA gradient in each interface region [eV/cm]."""
        return self._grad(self.EA)

    @property
    def dIPdx(self) -> np.ndarray:
        return self._grad(self.IP)

    @property
    def dN0dx(self) -> np.ndarray:
        return self._grad(self.N0)

    # -----------------------------------------------------------------
    # Densities
    # -----------------------------------------------------------------

    @property
    def NA(self) -> np.ndarray:
        """Acceptor density per layer: first layer only, set by its E0 [cm^-3]."""
        out = np.zeros(self.n_layers)
        out[0] = equilibrium_hole_density(self.N0[0], self.IP[0], self.E0[0], self.T)
        return out

    @property
    def ND(self) -> np.ndarray:
        """Donor density per layer: last layer only, set by its E0 [cm^-3]."""
        out = np.zeros(self.n_layers)
        out[-1] = equilibrium_electron_density(self.N0[-1], self.EA[-1], self.E0[-1], self.T)
        return out

    @property
    def ni(self) -> np.ndarray:
        return intrinsic_density(self.Eg, self.N0, self.T)

    @property
    def n0(self) -> np.ndarray:
        """Equilibrium electron density per layer at its own E0 [cm^-3]."""
        return np.asarray(equilibrium_electron_density(self.N0, self.EA, self.E0, self.T))

    @property
    def p0(self) -> np.ndarray:
        return np.asarray(equilibrium_hole_density(self.N0, self.IP, self.E0, self.T))

    # Contact densities: the electrode workfunction pins the Fermi level
    @property
    def nleft(self) -> float:
        return equilibrium_electron_density(self.N0[0], self.EA[0], self.electrodes.PhiA, self.T)

    @property
    def nright(self) -> float:
        return equilibrium_electron_density(self.N0[-1], self.EA[-1], self.electrodes.PhiC, self.T)

    @property
    def pleft(self) -> float:
        return equilibrium_hole_density(self.N0[0], self.IP[0], self.electrodes.PhiA, self.T)

    @property
    def pright(self) -> float:
        return equilibrium_hole_density(self.N0[-1], self.IP[-1], self.electrodes.PhiC, self.T)

    @property
    def nt_bulk(self) -> np.ndarray:
        """CB electron density with the Fermi level at the bulk trap energy."""
        return np.asarray(equilibrium_electron_density(self.N0, self.EA, self.Et_bulk, self.T))

    @property
    def pt_bulk(self) -> np.ndarray:
        return np.asarray(equilibrium_hole_density(self.N0, self.IP, self.Et_bulk, self.T))

    def _midpoints(self, v: np.ndarray) -> np.ndarray:
        return 0.5 * (v[:-1] + v[1:])

    @property
    def nt_inter(self) -> np.ndarray:
        """Same as nt_bulk for interface traps, at the interface midpoint."""
        if not self.interfaces:
            return np.zeros(0)
        return np.atleast_1d(equilibrium_electron_density(
            self._midpoints(self.N0), self._midpoints(self.EA), self.Et_inter, self.T))

    @property
    def pt_inter(self) -> np.ndarray:
        if not self.interfaces:
            return np.zeros(0)
        return np.atleast_1d(equilibrium_hole_density(
            self._midpoints(self.N0), self._midpoints(self.IP), self.Et_inter, self.T))

    # -----------------------------------------------------------------
    # Space-charge region (one-sided depletion approximation)
    # -----------------------------------------------------------------

    def _depletion_width(self, N: float) -> float:
        """
        Depletion reach into a contact layer of doping N next to the active layer:
            w = (-d N q + sqrt(N q (d^2 N q + 4 eps Vbi))) / (2 N q)
        evaluated in the cancellation-free form 2 eps Vbi / (d N q + sqrt(...)).
        Zero when Vbi <= 0.
        """
        Vbi = self.Vbi
        if Vbi <= 0.0:
            return 0.0
        k = self.active_layer
        d = self.d[k]
        eps = self.epp[k] * EPP0
        bq = d * N * Q
        return float(2.0 * eps * Vbi / (bq + np.sqrt(bq * bq + 4.0 * N * Q * eps * Vbi)))

    @property
    def wp(self) -> float:
        """SCR width on the p (anode) side [cm]."""
        return self._depletion_width(self.NA[0])

    @property
    def wn(self) -> float:
        """SCR width on the n (cathode) side [cm]."""
        return self._depletion_width(self.ND[-1])

    @property
    def wscr(self) -> float:
        """Total SCR width: wp + active-layer thickness + wn [cm]."""
        return self.wp + float(self.d[self.active_layer]) + self.wn

    # -----------------------------------------------------------------
    # Export
    # -----------------------------------------------------------------

    def summary(self) -> dict:
        """Derived scalars and per-layer arrays as plain Python values."""
        return {
            "T_K": float(self.T),
            "active_layer": int(self.active_layer),
            "thickness_cm": self.d.tolist(),
            "dcum_cm": self.dcum.tolist(),
            "Eg_eV": self.Eg.tolist(),
            "Eif_eV": self.Eif.tolist(),
            "Vbi_V": self.Vbi,
            "NA_cm3": self.NA.tolist(),
            "ND_cm3": self.ND.tolist(),
            "ni_cm3": self.ni.tolist(),
            "n0_cm3": self.n0.tolist(),
            "p0_cm3": self.p0.tolist(),
            "nleft_cm3": float(self.nleft),
            "nright_cm3": float(self.nright),
            "pleft_cm3": float(self.pleft),
            "pright_cm3": float(self.pright),
            "wp_cm": self.wp,
            "wn_cm": self.wn,
            "wscr_cm": self.wscr,
            "mesh_points": len(self.mesh),
        }


def build_parameters(
    layers: Sequence[LayerSpec],
    interfaces: Sequence[InterfaceSpec] = (),
    *,
    electrodes: Optional[ElectrodeSpec] = None,
    mesh: Optional[MeshSpec] = None,
    controls: Optional[ControlSpec] = None,
    T: float = 300.0,
    active_layer: Optional[int] = None,
) -> ParameterSet:
    """Validate constants and return a ParameterSet (raises on any inconsistency)."""
    params = ParameterSet(
        layers=tuple(layers),
        interfaces=tuple(interfaces),
        electrodes=electrodes if electrodes is not None else ElectrodeSpec(),
        mesh_spec=mesh if mesh is not None else MeshSpec(),
        controls=controls if controls is not None else ControlSpec(),
        T=float(T),
        active_layer=active_layer,
    )
    logger.debug(
        f"parameters: {params.n_layers} layers, Vbi={params.Vbi:+.3f} V, "
        f"wscr={params.wscr:.3e} cm, mesh N={len(params.mesh)}"
    )
    return params
