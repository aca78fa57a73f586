# ddstack/geometry/regions.py
"""
Region classification of mesh points.

Every node is tagged exactly once as either
    Bulk(layer)              a_i <= x <= b_i          (closed interval)
    Interface(left, right)   b_i <  x <  a_{i+1}      (open interval, right = left + 1)
with a_i, b_i from geometry.mesh.bulk_bounds. Nodes on a region boundary go
to the bulk side. With dint == 0 there are no interface regions and layer
bulks are half-open [a_i, b_i), the last one closed.

A node matched by zero or several regions is a ConfigError: the mesh and
the interface half-width disagree.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from ..errors import ConfigError
from .mesh import bulk_bounds

__all__ = ["BULK", "INTERFACE", "Bulk", "Interface", "Region", "RegionMap", "classify_mesh"]

BULK = 0
INTERFACE = 1


@dataclass(frozen=True, slots=True)
class Bulk:
    layer: int


@dataclass(frozen=True, slots=True)
class Interface:
    left: int
    right: int

    def __post_init__(self) -> None:
        if self.right != self.left + 1:
            raise ValueError("interfaces join adjacent layers only")


Region = Union[Bulk, Interface]


@dataclass(frozen=True, slots=True)
class RegionMap:
    """
    Per-node region tags, stored as arrays.

    kind[j]  : BULK or INTERFACE
    layer[j] : bulk layer index, or the left layer index of an interface
    a, b     : bulk bounds per layer [cm]
    """
    kind: np.ndarray
    layer: np.ndarray
    a: np.ndarray
    b: np.ndarray

    def __len__(self) -> int:
        return int(self.kind.size)

    def tag(self, j: int) -> Region:
        i = int(self.layer[j])
        if self.kind[j] == BULK:
            return Bulk(i)
        return Interface(i, i + 1)

    def tags(self) -> tuple[Region, ...]:
        return tuple(self.tag(j) for j in range(len(self)))

    def regions(self) -> list[Region]:
        """Distinct regions present on the mesh, in position order."""
        out: list[Region] = []
        for j in range(len(self)):
            r = self.tag(j)
            if not out or out[-1] != r:
                out.append(r)
        return out

    def mask(self, region: Region) -> np.ndarray:
        if isinstance(region, Bulk):
            return (self.kind == BULK) & (self.layer == region.layer)
        return (self.kind == INTERFACE) & (self.layer == region.left)


def classify_mesh(x: np.ndarray, dcum0: np.ndarray, dint: float) -> RegionMap:
    """Tag every mesh node with its bulk or interface region."""
    x = np.asarray(x, dtype=np.float64)
    dcum0 = np.asarray(dcum0, dtype=np.float64)
    n_layers = dcum0.size - 1
    a, b = bulk_bounds(dcum0, dint)

    hits = np.zeros(x.size, dtype=int)
    kind = np.full(x.size, -1, dtype=np.int8)
    layer = np.full(x.size, -1, dtype=np.int64)

    for i in range(n_layers):
        last = i == n_layers - 1
        if dint > 0.0 or last:
            m = (x >= a[i]) & (x <= b[i])
        else:
            m = (x >= a[i]) & (x < b[i])
        hits += m
        kind[m] = BULK
        layer[m] = i
        if not last and dint > 0.0:
            m = (x > b[i]) & (x < a[i + 1])
            hits += m
            kind[m] = INTERFACE
            layer[m] = i

    bad = np.where(hits != 1)[0]
    if bad.size:
        j = int(bad[0])
        what = "no region" if hits[j] == 0 else f"{int(hits[j])} regions"
        raise ConfigError(
            f"mesh point {j} at x={x[j]:.6e} cm falls in {what}; "
            f"mesh and interface half-width dint={dint:.3e} cm are inconsistent"
        )

    kind.setflags(write=False)
    layer.setflags(write=False)
    return RegionMap(kind=kind, layer=layer, a=a, b=b)
