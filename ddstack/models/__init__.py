# ddstack/models/__init__.py
from __future__ import annotations
from .layer import LayerSpec, InterfaceSpec, ElectrodeSpec, ControlSpec
from .parameters import ParameterSet, build_parameters

__all__ = ["LayerSpec", "InterfaceSpec", "ElectrodeSpec", "ControlSpec", "ParameterSet", "build_parameters"]
