"""
Unit-tagged physical quantities.

Every length, speed and temperature handed to the port-size pipeline carries
its unit; numbers only leave a quantity through an explicit conversion
(``Length.cm``, ``Velocity.m_s``, ``Temperature.kelvin``).

    >>> Length.parse("17 cm").mm
    170.0
    >>> Temperature(21, TemperatureUnit.C).kelvin
    294.15
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping
import math
import numbers
import re

from .errors import ParameterError


class _ScaledUnit(Enum):
    """Unit that converts to SI by a constant factor."""

    def __init__(self, symbol: str, factor: float):
        self.symbol = symbol
        self.factor = factor

    def to_si(self, v: float) -> float:
        return v * self.factor

    def from_si(self, v: float) -> float:
        return v / self.factor


class LengthUnit(_ScaledUnit):
    MM = ("mm", 1e-3)
    CM = ("cm", 1e-2)
    M = ("m", 1.0)
    KM = ("km", 1e3)
    IN = ("in", 0.0254)
    FT = ("ft", 0.3048)


class VelocityUnit(_ScaledUnit):
    M_S = ("m/s", 1.0)
    KM_H = ("km/h", 1.0 / 3.6)
    FT_S = ("ft/s", 0.3048)
    MPH = ("mph", 0.44704)
    KNOT = ("kn", 1852.0 / 3600.0)


class TemperatureUnit(Enum):
    C = "C"
    K = "K"
    F = "F"

    @property
    def symbol(self) -> str:
        return self.value

    def to_si(self, v: float) -> float:
        if self is TemperatureUnit.C:
            return v + 273.15
        if self is TemperatureUnit.F:
            return (v - 32.0) * 5.0 / 9.0 + 273.15
        return v

    def from_si(self, v: float) -> float:
        if self is TemperatureUnit.C:
            return v - 273.15
        if self is TemperatureUnit.F:
            return (v - 273.15) * 9.0 / 5.0 + 32.0
        return v


# Lower-case spellings accepted in parameter files, on top of each unit's symbol.
_LENGTH_ALIASES: Dict[str, LengthUnit] = {
    "millimeter": LengthUnit.MM, "millimeters": LengthUnit.MM,
    "millimetre": LengthUnit.MM, "millimetres": LengthUnit.MM,
    "centimeter": LengthUnit.CM, "centimeters": LengthUnit.CM,
    "centimetre": LengthUnit.CM, "centimetres": LengthUnit.CM,
    "meter": LengthUnit.M, "meters": LengthUnit.M,
    "metre": LengthUnit.M, "metres": LengthUnit.M,
    "kilometer": LengthUnit.KM, "kilometers": LengthUnit.KM,
    "inch": LengthUnit.IN, "inches": LengthUnit.IN, '"': LengthUnit.IN,
    "foot": LengthUnit.FT, "feet": LengthUnit.FT, "'": LengthUnit.FT,
}
_VELOCITY_ALIASES: Dict[str, VelocityUnit] = {
    "m/sec": VelocityUnit.M_S, "mps": VelocityUnit.M_S, "msec": VelocityUnit.M_S,
    "ms": VelocityUnit.M_S,
    "kph": VelocityUnit.KM_H, "kmh": VelocityUnit.KM_H, "km/hr": VelocityUnit.KM_H,
    "fps": VelocityUnit.FT_S, "ft/sec": VelocityUnit.FT_S,
    "mi/h": VelocityUnit.MPH,
    "kt": VelocityUnit.KNOT, "kts": VelocityUnit.KNOT,
    "knot": VelocityUnit.KNOT, "knots": VelocityUnit.KNOT,
}
_TEMPERATURE_ALIASES: Dict[str, TemperatureUnit] = {
    "°c": TemperatureUnit.C, "degc": TemperatureUnit.C, "celsius": TemperatureUnit.C,
    "kelvin": TemperatureUnit.K,
    "°f": TemperatureUnit.F, "degf": TemperatureUnit.F, "fahrenheit": TemperatureUnit.F,
}

_QUANTITY_RE = re.compile(
    r"^\s*(?P<num>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(?P<unit>\S.*?)?\s*$"
)


@dataclass(frozen=True)
class _Quantity:
    value: float
    unit: Any

    units: ClassVar[type] = Enum
    aliases: ClassVar[Mapping[str, Any]] = {}
    kind: ClassVar[str] = "quantity"
    example: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise ParameterError(f"{self.kind} value must be a number, got {self.value!r}")
        if not isinstance(self.unit, self.units):
            raise ParameterError(
                f"{self.kind} needs a {self.units.__name__}, got {self.unit!r}"
            )
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def lookup_unit(cls, text: str):
        key = text.strip().lower()
        for u in cls.units:
            if u.symbol.lower() == key:
                return u
        try:
            return cls.aliases[key]
        except KeyError:
            known = ", ".join(u.symbol for u in cls.units)
            raise ParameterError(f"Unknown {cls.kind} unit {text!r} (expected one of {known})") from None

    @classmethod
    def parse(cls, text: str):
        """Parse ``"<number> <unit>"``; the unit is mandatory."""
        m = _QUANTITY_RE.match(text)
        if not m:
            raise ParameterError(f"Cannot read {cls.kind} from {text!r} (expected e.g. {cls.example!r})")
        if not m.group("unit"):
            raise ParameterError(f"{cls.kind} {text!r} has no unit (expected e.g. {cls.example!r})")
        return cls(float(m.group("num")), cls.lookup_unit(m.group("unit")))

    @classmethod
    def from_json(cls, raw: Any):
        """Build from a parameter-file value: ``"17cm"`` or ``{"value": 17, "unit": "cm"}``."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            return cls.parse(raw)
        if isinstance(raw, Mapping):
            low = {str(k).lower(): v for k, v in raw.items()}
            if "value" not in low or "unit" not in low:
                raise ParameterError(f"{cls.kind} object needs 'value' and 'unit' keys, got {dict(raw)!r}")
            unit = low["unit"]
            if not isinstance(unit, str):
                raise ParameterError(f"{cls.kind} unit must be a string, got {unit!r}")
            return cls(low["value"], cls.lookup_unit(unit))
        raise ParameterError(f"{cls.kind} {raw!r} has no unit (expected e.g. {cls.example!r})")

    def to(self, unit) -> float:
        """Magnitude expressed in ``unit`` (enum member or symbol)."""
        if isinstance(unit, str):
            unit = self.lookup_unit(unit)
        if unit is self.unit:
            return self.value
        return unit.from_si(self.unit.to_si(self.value))

    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit.symbol}"


@dataclass(frozen=True)
class Length(_Quantity):
    unit: LengthUnit

    units: ClassVar[type] = LengthUnit
    aliases: ClassVar[Mapping[str, Any]] = _LENGTH_ALIASES
    kind: ClassVar[str] = "length"
    example: ClassVar[str] = "7.5 mm"

    @property
    def mm(self) -> float:
        return self.to(LengthUnit.MM)

    @property
    def cm(self) -> float:
        return self.to(LengthUnit.CM)

    @property
    def m(self) -> float:
        return self.to(LengthUnit.M)


@dataclass(frozen=True)
class Velocity(_Quantity):
    unit: VelocityUnit

    units: ClassVar[type] = VelocityUnit
    aliases: ClassVar[Mapping[str, Any]] = _VELOCITY_ALIASES
    kind: ClassVar[str] = "velocity"
    example: ClassVar[str] = "100 m/s"

    @property
    def m_s(self) -> float:
        return self.to(VelocityUnit.M_S)


@dataclass(frozen=True)
class Temperature(_Quantity):
    unit: TemperatureUnit

    units: ClassVar[type] = TemperatureUnit
    aliases: ClassVar[Mapping[str, Any]] = _TEMPERATURE_ALIASES
    kind: ClassVar[str] = "temperature"
    example: ClassVar[str] = "21 C"

    @property
    def kelvin(self) -> float:
        return self.to(TemperatureUnit.K)

    @property
    def celsius(self) -> float:
        return self.to(TemperatureUnit.C)


def mm(v: float) -> Length:
    return Length(v, LengthUnit.MM)


def cm(v: float) -> Length:
    return Length(v, LengthUnit.CM)


def meters(v: float) -> Length:
    return Length(v, LengthUnit.M)


def m_s(v: float) -> Velocity:
    return Velocity(v, VelocityUnit.M_S)


def celsius(v: float) -> Temperature:
    return Temperature(v, TemperatureUnit.C)


_KINDS = {"length": Length, "velocity": Velocity, "temperature": Temperature}


def quantity_from_json(kind, raw: Any):
    """Parameter-file value -> quantity of ``kind`` (a quantity class or its name)."""
    if isinstance(kind, str):
        try:
            kind = _KINDS[kind.lower()]
        except KeyError:
            raise ParameterError(f"Unknown quantity kind {kind!r}") from None
    return kind.from_json(raw)


__all__ = [
    "LengthUnit", "VelocityUnit", "TemperatureUnit",
    "Length", "Velocity", "Temperature",
    "mm", "cm", "meters", "m_s", "celsius", "quantity_from_json",
]
