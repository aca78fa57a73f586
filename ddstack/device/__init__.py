# ddstack/device/__init__.py
from __future__ import annotations
from .builder import QUANTITIES, DeviceArrays, Device, build_device_arrays, build_device

__all__ = ["QUANTITIES", "DeviceArrays", "Device", "build_device_arrays", "build_device"]
