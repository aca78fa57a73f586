# ddstack/errors.py
"""
Exception taxonomy.

- ValidationError: physically inconsistent constants (doping >= DOS, trap
  energy outside the active layer's gap). Raised at construction or on the
  offending replace(); never clamped.
- ConfigError: unsupported selectors, malformed inputs, overlapping or
  unclassifiable geometry.
- DomainError: invalid inputs to the statistics functions.

All three derive from ValueError so callers may catch them generically.
"""
from __future__ import annotations

__all__ = ["DdstackError", "ValidationError", "ConfigError", "DomainError"]


class DdstackError(Exception):
    """Base class for all ddstack errors."""


class ValidationError(DdstackError, ValueError):
    pass


class ConfigError(DdstackError, ValueError):
    pass


class DomainError(DdstackError, ValueError):
    pass
