# ddstack/geometry/__init__.py
from __future__ import annotations
from .mesh import MeshSpec, Mesh1D, bulk_bounds, generate_mesh
from .regions import Bulk, Interface, Region, RegionMap, classify_mesh

__all__ = [
    "MeshSpec", "Mesh1D", "bulk_bounds", "generate_mesh",
    "Bulk", "Interface", "Region", "RegionMap", "classify_mesh",
]
