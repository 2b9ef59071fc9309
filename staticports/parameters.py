from __future__ import annotations

from dataclasses import dataclass, field, fields, replace as _dc_replace
from typing import Any, Dict, Mapping
import logging
import numbers

from .errors import ParameterError
from .units import Length, Velocity, Temperature, mm, cm, meters, m_s, celsius, quantity_from_json

logger = logging.getLogger(__name__)

# Names used in parameter files -> dataclass attribute.  Matching is on the
# lower-cased key, so "NumberOfPorts", "numberofports" and "number_of_ports"
# all land on the same field.
_FILE_KEYS: Dict[str, str] = {
    "numberofports": "number_of_ports",
    "bodytubeinsideradius": "body_tube_inside_radius",
    "bodytubelength": "body_tube_length",
    "launchaltitude": "launch_altitude",
    "maxvelocity": "max_velocity",
    "temperature": "temperature",
}

_QUANTITY_TYPES = {
    "body_tube_inside_radius": Length,
    "body_tube_length": Length,
    "launch_altitude": Length,
    "max_velocity": Velocity,
    "temperature": Temperature,
}


@dataclass(frozen=True)
class Parameters:
    """Physical inputs of one port-size calculation.

    Every field has an engineering default so a partially filled parameter
    file still yields a complete record.  Validation runs on construction;
    an instance that exists is safe to hand to the calculator.
    """

    number_of_ports: int = 3
    body_tube_inside_radius: Length = field(default_factory=lambda: mm(7.5))
    body_tube_length: Length = field(default_factory=lambda: cm(14))
    launch_altitude: Length = field(default_factory=lambda: meters(0))
    max_velocity: Velocity = field(default_factory=lambda: m_s(100))
    temperature: Temperature = field(default_factory=lambda: celsius(21))

    def __post_init__(self) -> None:
        n = self.number_of_ports
        if isinstance(n, bool) or not isinstance(n, numbers.Integral):
            if isinstance(n, float) and n.is_integer():
                object.__setattr__(self, "number_of_ports", int(n))
            else:
                raise ParameterError(f"number_of_ports must be an integer, got {n!r}")
        if self.number_of_ports < 1:
            raise ParameterError(f"number_of_ports must be >= 1, got {self.number_of_ports}")

        for name, kind in _QUANTITY_TYPES.items():
            q = getattr(self, name)
            if not isinstance(q, kind):
                raise ParameterError(f"{name} must be a {kind.__name__} with a unit, got {q!r}")
            if not q.is_finite():
                raise ParameterError(f"{name} must be finite, got {q}")

        if self.body_tube_inside_radius.value <= 0:
            raise ParameterError(f"body_tube_inside_radius must be > 0, got {self.body_tube_inside_radius}")
        if self.body_tube_length.value <= 0:
            raise ParameterError(f"body_tube_length must be > 0, got {self.body_tube_length}")
        # Zero is left to the calculator, which reports it as a non-physical model.
        if self.max_velocity.value < 0:
            raise ParameterError(f"max_velocity must be >= 0, got {self.max_velocity}")
        if self.temperature.kelvin <= 0:
            raise ParameterError(f"temperature must be above absolute zero, got {self.temperature}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Parameters":
        """Overlay user-supplied values on the defaults.

        Keys are matched case-insensitively against both the file names
        (``bodyTubeLength``) and the attribute names (``body_tube_length``).
        Quantities must carry a unit, either ``"17 cm"`` or
        ``{"value": 17, "unit": "cm"}``.  Unknown keys are ignored with a warning.
        """
        if not isinstance(data, Mapping):
            raise ParameterError(f"Parameters must be an object, got {type(data).__name__}")
        kwargs: Dict[str, Any] = {}
        seen: set = set()
        for key, raw in data.items():
            name = _FILE_KEYS.get(str(key).replace("_", "").lower())
            if name is None:
                logger.warning("Ignoring unknown parameter %r", key)
                continue
            if name in seen:
                raise ParameterError(f"Parameter {name} given more than once")
            seen.add(name)
            if raw is None:
                continue  # explicit null -> keep the default
            kind = _QUANTITY_TYPES.get(name)
            try:
                kwargs[name] = quantity_from_json(kind, raw) if kind else raw
            except ParameterError as e:
                raise ParameterError(f"{key}: {e}") from e
        return cls(**kwargs)

    def replace(self, **changes: Any) -> "Parameters":
        return _dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = v if isinstance(v, int) else str(v)
        return out


DEFAULTS = Parameters()

__all__ = ["Parameters", "DEFAULTS"]
