# ddstack/materials/__init__.py
from __future__ import annotations
from .library import get_layer, list_layers, default_parameters

__all__ = ["get_layer", "list_layers", "default_parameters"]
