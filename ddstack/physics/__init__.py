# ddstack/physics/__init__.py
from __future__ import annotations
from .statistics import thermal_voltage, equilibrium_electron_density, equilibrium_hole_density
from .intrinsic import intrinsic_level, intrinsic_density

__all__ = [
    "thermal_voltage", "equilibrium_electron_density", "equilibrium_hole_density",
    "intrinsic_level", "intrinsic_density",
]
