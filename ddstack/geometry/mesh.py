# ddstack/geometry/mesh.py
"""
1D spatial mesh generator for layered stacks.

- Model units: cm.
- Node-centered mesh over x in [0, sum(thickness)], strictly increasing.
- Interfaces between layer i and i+1 own a grading region of half-width dint
  centred on the shared boundary; layer bulks are what is left.
- Refinement near interfaces, space-charge sub-regions and electrodes.

Mesh strategies (xmesh_type):
    1  uniform over the whole device, sum(points) nodes
    2  piecewise uniform per layer
    3  as 2 with 2*pint nodes in every interface region (default)
    4  as 3 with pscr nodes in sub-regions of width dscr at the active
       layer's interior edges
    5  as 4 with log-spaced electrode regions of width te (pepe nodes,
       first step dmin) at x = 0 and x = L

Public API (stable):
    MeshSpec
    Mesh1D
    bulk_bounds(dcum0, dint) -> (a, b)
    generate_mesh(thickness, points, spec, active_layer=...) -> Mesh1D

Notes
-----
- Raises ConfigError for unsupported selectors and for refinement widths
  that do not fit inside the available layer thickness.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from ..errors import ConfigError
from ..utils import logger

__all__ = [
    "SUPPORTED_XMESH", "COMMON_XMESH", "MeshSpec", "Mesh1D",
    "bulk_bounds", "generate_mesh",
]

SUPPORTED_XMESH = (1, 2, 3, 4, 5)
COMMON_XMESH = (2, 3, 4)


# ---------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MeshSpec:
    """
    Mesh controls.

    Attributes
    ----------
    xmesh_type : int
        Strategy selector, see module docstring.
    dint : float
        Interface half-width [cm]; also used by the device builder for grading.
    pint : int
        Nodes per interface half (xmesh_type >= 3).
    dscr, pscr : float, int
        Space-charge sub-region width [cm] and its nodes (xmesh_type >= 4).
    te, pepe : float, int
        Electrode region width [cm] and its nodes (xmesh_type == 5).
    dmin : float
        First log step at the electrodes [cm] (xmesh_type == 5).
    """
    xmesh_type: int = 3
    dint: float = 2e-7
    pint: int = 20
    dscr: float = 30e-7
    pscr: int = 30
    te: float = 10e-7
    pepe: int = 20
    dmin: float = 1e-7

    def __post_init__(self) -> None:
        if self.xmesh_type not in SUPPORTED_XMESH:
            raise ConfigError(
                f"xmesh_type should be an integer from {SUPPORTED_XMESH[0]} to "
                f"{SUPPORTED_XMESH[-1]} inclusive (got {self.xmesh_type!r})"
            )
        if self.dint < 0.0:
            raise ConfigError(f"dint must be >= 0 (got {self.dint})")
        for name in ("pint", "pscr", "pepe"):
            v = getattr(self, name)
            if int(v) != v or v < 2:
                raise ConfigError(f"{name} must be an integer >= 2 (got {v!r})")
        for name in ("dscr", "te", "dmin"):
            if not getattr(self, name) > 0.0:
                raise ConfigError(f"{name} must be > 0 (got {getattr(self, name)})")


@dataclass(frozen=True, slots=True)
class Mesh1D:
    """
    Generated mesh. Arrays are float64 and read-only.
    """
    x: np.ndarray        # shape (N,), node coordinates [cm], ascending
    dx: np.ndarray       # shape (N-1,), edge lengths [cm]
    dcum0: np.ndarray    # shape (n_layers+1,), layer boundaries [cm], dcum0[0] = 0
    xmesh_type: int

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def length(self) -> float:
        return float(self.dcum0[-1])


# ---------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------


def _as_ro64(a) -> np.ndarray:
    out = np.ascontiguousarray(a, dtype=np.float64).copy()
    out.setflags(write=False)
    return out


def bulk_bounds(dcum0: np.ndarray, dint: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Bulk interval [a_i, b_i] of every layer.

    The outward faces of the first and last layer carry no interface
    half-width.
    """
    n = dcum0.size - 1
    a = np.array(dcum0[:-1], dtype=np.float64)
    b = np.array(dcum0[1:], dtype=np.float64)
    if n > 1:
        a[1:] = dcum0[1:-1] + dint
        b[:-1] = dcum0[1:-1] - dint
    return a, b


def _segment(x0: float, x1: float, n: int, what: str) -> np.ndarray:
    if not x1 > x0:
        raise ConfigError(f"{what} does not fit: [{x0:.4e}, {x1:.4e}] cm is empty or inverted")
    return np.linspace(x0, x1, int(n))


def _log_segment(x0: float, width: float, n: int, dmin: float, *, mirror: bool) -> np.ndarray:
    """n nodes over [x0, x0+width] (or [x0-width, x0] if mirror), log-spaced from dmin."""
    if not dmin < width:
        raise ConfigError(f"dmin ({dmin:.3e} cm) must be smaller than te ({width:.3e} cm)")
    steps = np.concatenate(([0.0], np.logspace(np.log10(dmin), np.log10(width), int(n) - 1)))
    steps[-1] = width
    return x0 - steps[::-1] if mirror else x0 + steps


def _layer_nodes(
    i: int, a: float, b: float, n_bulk: int, spec: MeshSpec, *, n_layers: int, active: int
) -> list[np.ndarray]:
    parts: list[np.ndarray] = []
    lo, hi = a, b
    if spec.xmesh_type == 5 and i == 0:
        if not spec.te < hi - lo:
            raise ConfigError(f"electrode region te={spec.te:.3e} cm exceeds layer {i} bulk")
        parts.append(_log_segment(lo, spec.te, spec.pepe, spec.dmin, mirror=False))
        lo = lo + spec.te
    if spec.xmesh_type == 5 and i == n_layers - 1:
        if not spec.te < hi - lo:
            raise ConfigError(f"electrode region te={spec.te:.3e} cm exceeds layer {i} bulk")
        parts.append(_log_segment(hi, spec.te, spec.pepe, spec.dmin, mirror=True))
        hi = hi - spec.te
    if spec.xmesh_type >= 4 and i == active:
        if i > 0:
            parts.append(_segment(lo, lo + spec.dscr, spec.pscr, f"space-charge region of layer {i}"))
            lo = lo + spec.dscr
        if i < n_layers - 1:
            parts.append(_segment(hi - spec.dscr, hi, spec.pscr, f"space-charge region of layer {i}"))
            hi = hi - spec.dscr
    parts.append(_segment(lo, hi, n_bulk, f"bulk of layer {i}"))
    return parts


def generate_mesh(
    thickness: Sequence[float],
    points: Sequence[int],
    spec: MeshSpec,
    *,
    active_layer: int = 0,
) -> Mesh1D:
    """Construct the spatial mesh for a layer stack."""
    t = np.asarray(thickness, dtype=np.float64)
    perN = np.asarray(points, dtype=int)
    if t.ndim != 1 or t.size < 1:
        raise ConfigError("stack must contain at least one layer")
    if perN.size != t.size:
        raise ConfigError("points length must match number of layers")
    if np.any(t <= 0.0):
        raise ConfigError("layer thickness must be positive")
    if np.any(perN < 2):
        raise ConfigError("each layer must have at least 2 mesh points")
    if not 0 <= active_layer < t.size:
        raise ConfigError(f"active_layer {active_layer} out of range for {t.size} layers")

    if spec.xmesh_type not in COMMON_XMESH:
        logger.warn(f"xmesh_type={spec.xmesh_type} is supported but rarely used; check the mesh")

    dcum0 = np.concatenate(([0.0], np.cumsum(t)))
    n_layers = t.size
    a, b = bulk_bounds(dcum0, spec.dint)
    for i in range(n_layers):
        if not b[i] > a[i]:
            raise ConfigError(
                f"interface half-width dint={spec.dint:.3e} cm leaves no bulk in layer {i} "
                f"(thickness {t[i]:.3e} cm)"
            )

    if spec.xmesh_type == 1:
        x = np.linspace(0.0, dcum0[-1], int(np.sum(perN)))
    elif spec.xmesh_type == 2:
        x = np.concatenate([np.linspace(dcum0[i], dcum0[i + 1], int(perN[i])) for i in range(n_layers)])
    else:
        nodes: list[np.ndarray] = []
        for i in range(n_layers):
            nodes.extend(_layer_nodes(i, a[i], b[i], int(perN[i]), spec,
                                      n_layers=n_layers, active=active_layer))
            if i < n_layers - 1 and spec.dint > 0.0:
                nodes.append(np.linspace(b[i], a[i + 1], 2 * int(spec.pint)))
        x = np.concatenate(nodes)

    # shared segment endpoints are bit-identical, unique() merges them
    x = np.unique(x)
    if not np.all(np.diff(x) > 0):
        raise RuntimeError("non-monotonic x grid constructed")
    if x[0] != 0.0 or x[-1] != dcum0[-1]:
        raise RuntimeError("mesh does not span [0, L]")

    logger.debug(
        f"mesh: type={spec.xmesh_type} N={x.size} L={dcum0[-1]:.4e} cm "
        f"dx_min={np.min(np.diff(x)):.3e} cm"
    )
    return Mesh1D(
        x=_as_ro64(x),
        dx=_as_ro64(np.diff(x)),
        dcum0=_as_ro64(dcum0),
        xmesh_type=int(spec.xmesh_type),
    )
