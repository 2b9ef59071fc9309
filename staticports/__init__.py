"""
staticports - static pressure port sizing for rocket altimeter bays.
"""

__version__ = "0.1.0"

from .errors import (
    StaticPortsError,
    ConfigNotFound,
    ConfigEmpty,
    ParameterError,
    InvalidPhysicalModel,
)
from .units import (
    LengthUnit,
    VelocityUnit,
    TemperatureUnit,
    Length,
    Velocity,
    Temperature,
)
from .parameters import Parameters, DEFAULTS
from .calculator import PortSizing, round_up, size_ports, port_diameter_mm
from .io import load_parameters, strip_json_comments
from .sweep import port_size_table, velocity_range, write_table

__all__ = [
    "__version__",
    "StaticPortsError", "ConfigNotFound", "ConfigEmpty", "ParameterError", "InvalidPhysicalModel",
    "LengthUnit", "VelocityUnit", "TemperatureUnit", "Length", "Velocity", "Temperature",
    "Parameters", "DEFAULTS",
    "PortSizing", "round_up", "size_ports", "port_diameter_mm",
    "load_parameters", "strip_json_comments",
    "port_size_table", "velocity_range", "write_table",
]
