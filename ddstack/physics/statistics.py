# ddstack/physics/statistics.py
"""
Equilibrium carrier statistics (Boltzmann).

- Model units: eV, K, cm^-3.
- Vectorized over numpy arrays; scalars in, 0-d/float-like arrays out.
- Energies are absolute (vacuum-referenced, negative below vacuum level).

    n = N0 exp((E_F - E_C) / kT)      E_C = electron affinity level
    p = N0 exp((E_V - E_F) / kT)      E_V = ionization potential level

Public API (stable):
    thermal_voltage(T)
    equilibrium_electron_density(N0, Ec, Ef, T)
    equilibrium_hole_density(N0, Ev, Ef, T)

Raises DomainError for non-positive DOS, non-positive temperature or
non-finite inputs.
"""
from __future__ import annotations

import numpy as np

from ..errors import DomainError
from ..utils.constants import K_B_EV

__all__ = [
    "thermal_voltage",
    "equilibrium_electron_density",
    "equilibrium_hole_density",
]


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def _c64(x):
    """float64 array; 0-d for scalar input."""
    return np.asarray(x, dtype=np.float64)


def _validate_inputs(name: str, N0, E_edge, E_F, T) -> None:
    for label, a in (("N0", N0), ("band edge", E_edge), ("E_F", E_F), ("T", T)):
        if not np.all(np.isfinite(a)):
            idx = np.where(~np.isfinite(np.atleast_1d(a)))[0][:5]
            raise DomainError(f"{name}: {label} has non-finite values at indices {idx.tolist()}.")
    if np.any(N0 <= 0.0):
        idx = np.where(np.atleast_1d(N0) <= 0.0)[0][:5]
        raise DomainError(
            f"{name}: density of states must be > 0 (min {float(np.min(N0)):.3e}); "
            f"bad indices {idx.tolist()}."
        )
    if np.any(T <= 0.0):
        raise DomainError(f"{name}: T must be > 0 K (got min {float(np.min(T))}).")


def _out(a: np.ndarray):
    return float(a) if a.ndim == 0 else a


def thermal_voltage(T: float | np.ndarray) -> float | np.ndarray:
    """Thermal energy kT [eV] (numerically equal to the thermal voltage in V)."""
    T = _c64(T)
    if np.any(T <= 0.0):
        raise DomainError(f"T must be > 0 K (got min {float(np.min(T))}).")
    return _out(K_B_EV * T)


# ---------------------------------------------------------------------
# Equilibrium densities
# ---------------------------------------------------------------------
def equilibrium_electron_density(
    N0: float | np.ndarray,
    Ec: float | np.ndarray,
    Ef: float | np.ndarray,
    T: float | np.ndarray,
) -> float | np.ndarray:
    """
    Electron density [cm^-3] with the Fermi level at Ef:
        n = N0 exp((Ef - Ec) / (kB T))
    """
    N0, Ec, Ef, T = _c64(N0), _c64(Ec), _c64(Ef), _c64(T)
    _validate_inputs("equilibrium_electron_density", N0, Ec, Ef, T)
    with np.errstate(over="ignore"):
        n = N0 * np.exp((Ef - Ec) / (K_B_EV * T))
    return _out(n)


def equilibrium_hole_density(
    N0: float | np.ndarray,
    Ev: float | np.ndarray,
    Ef: float | np.ndarray,
    T: float | np.ndarray,
) -> float | np.ndarray:
    """
    Hole density [cm^-3] with the Fermi level at Ef:
        p = N0 exp((Ev - Ef) / (kB T))
    """
    N0, Ev, Ef, T = _c64(N0), _c64(Ev), _c64(Ef), _c64(T)
    _validate_inputs("equilibrium_hole_density", N0, Ev, Ef, T)
    with np.errstate(over="ignore"):
        p = N0 * np.exp((Ev - Ef) / (K_B_EV * T))
    return _out(p)
