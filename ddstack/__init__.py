# ddstack/__init__.py
"""
Parameter and device-model layer for 1D drift-diffusion simulation of
layered devices: validated layer constants -> refined mesh -> graded
per-node device arrays.
"""
from __future__ import annotations

from .errors import ConfigError, DdstackError, DomainError, ValidationError
from .models.layer import ControlSpec, ElectrodeSpec, InterfaceSpec, LayerSpec
from .models.parameters import ParameterSet, build_parameters
from .geometry.mesh import Mesh1D, MeshSpec, generate_mesh
from .geometry.regions import Bulk, Interface, RegionMap, classify_mesh
from .physics.statistics import (
    equilibrium_electron_density,
    equilibrium_hole_density,
    thermal_voltage,
)
from .device.builder import Device, DeviceArrays, build_device, build_device_arrays
from .materials.library import default_parameters, get_layer, list_layers

__version__ = "0.1.0"

__all__ = [
    "ConfigError", "DdstackError", "DomainError", "ValidationError",
    "ControlSpec", "ElectrodeSpec", "InterfaceSpec", "LayerSpec",
    "ParameterSet", "build_parameters",
    "Mesh1D", "MeshSpec", "generate_mesh",
    "Bulk", "Interface", "RegionMap", "classify_mesh",
    "equilibrium_electron_density", "equilibrium_hole_density", "thermal_voltage",
    "Device", "DeviceArrays", "build_device", "build_device_arrays",
    "default_parameters", "get_layer", "list_layers",
]
