from __future__ import annotations


class StaticPortsError(Exception):
    """Base class for every error raised by :mod:`staticports`."""


class ConfigNotFound(StaticPortsError, FileNotFoundError):
    """The parameter file does not exist."""


class ConfigEmpty(StaticPortsError, ValueError):
    """The parameter file holds no usable record (empty, ``null`` or unparseable)."""


class ParameterError(StaticPortsError, ValueError):
    """A parameter is missing its unit, has the wrong type or breaks an invariant."""


class InvalidPhysicalModel(StaticPortsError, ArithmeticError):
    """An intermediate of the port-size pipeline is undefined or non-physical.

    Raised instead of letting NaN/inf propagate: zero velocity, an altitude
    beyond the validity of the barometric formula, a negative base under a
    fractional power and so on.
    """


__all__ = [
    "StaticPortsError",
    "ConfigNotFound",
    "ConfigEmpty",
    "ParameterError",
    "InvalidPhysicalModel",
]
