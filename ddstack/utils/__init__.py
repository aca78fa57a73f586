# ddstack/utils/__init__.py
from __future__ import annotations
from .constants import K_B_EV, EPP0, Q, E_CHARGE

__all__ = ["K_B_EV", "EPP0", "Q", "E_CHARGE"]
