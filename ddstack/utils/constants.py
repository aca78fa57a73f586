# ddstack/utils/constants.py
from __future__ import annotations

__all__ = ["K_B_EV", "EPP0", "Q", "E_CHARGE"]

# Model units: eV, cm, cm^-3, charge in units of e
K_B_EV   = 8.617330350e-5        # Boltzmann constant [eV/K]
EPP0     = 552434.0              # vacuum permittivity [e^2 eV^-1 cm^-1]
Q        = 1.0                   # carrier charge [e]
E_CHARGE = 1.61917e-19           # elementary charge [C]
