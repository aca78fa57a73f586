# ddstack/physics/intrinsic.py
"""
Intrinsic references (Boltzmann, single effective DOS per layer).

Public API:
    intrinsic_level(EA, IP, T, Nc=None, Nv=None) -> E_i
    intrinsic_density(Eg, N0, T) -> n_i

Notes
-----
- The layer model carries one effective DOS N0 for both bands, so the
  ln(Nv/Nc) correction vanishes unless distinct values are passed.
"""

from __future__ import annotations

import numpy as np

from ..errors import DomainError
from ..utils.constants import K_B_EV

__all__ = [
    "intrinsic_level",
    "intrinsic_density",
]


def _out(a: np.ndarray):
    return float(a) if a.ndim == 0 else a


def intrinsic_level(
    EA: np.ndarray | float,
    IP: np.ndarray | float,
    T: float,
    *,
    Nc: np.ndarray | float | None = None,
    Nv: np.ndarray | float | None = None,
) -> float | np.ndarray:
    """
    Intrinsic Fermi level [eV]:
        E_i = (EA + IP)/2 + (kB T / 2) ln(Nv / Nc).
    """
    if T <= 0.0:
        raise DomainError(f"T must be > 0 K (got {T}).")
    midgap = 0.5 * (np.asarray(EA, dtype=np.float64) + np.asarray(IP, dtype=np.float64))
    if Nc is None or Nv is None:
        return _out(midgap)
    ratio = np.asarray(Nv, dtype=np.float64) / np.asarray(Nc, dtype=np.float64)
    if np.any(ratio <= 0.0):
        raise DomainError("Nc and Nv must be > 0 for the intrinsic level.")
    return _out(midgap + 0.5 * K_B_EV * T * np.log(ratio))


def intrinsic_density(
    Eg: np.ndarray | float,
    N0: np.ndarray | float,
    T: float,
) -> float | np.ndarray:
    """
    Intrinsic density [cm^-3]:
        n_i = N0 exp(-Eg / (2 kB T)).
    """
    if T <= 0.0:
        raise DomainError(f"T must be > 0 K (got {T}).")
    N0 = np.asarray(N0, dtype=np.float64)
    if np.any(N0 <= 0.0):
        raise DomainError("density of states must be > 0 for the intrinsic density.")
    Eg = np.asarray(Eg, dtype=np.float64)
    return _out(N0 * np.exp(-Eg / (2.0 * K_B_EV * T)))
