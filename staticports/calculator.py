"""Port-size calculation: :class:`Parameters` -> port diameter [mm]."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from decimal import Context, Decimal, ROUND_CEILING
from typing import Any, Dict
import logging
import math

from . import physics
from .errors import InvalidPhysicalModel
from .parameters import Parameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortSizing:
    """Named intermediates of one calculation, in the units given by each suffix."""

    number_of_ports: int
    temperature_K: float
    launch_altitude_m: float
    max_velocity_m_s: float
    bay_volume_cm3: float
    pressure_pa: float
    density_kg_m3: float
    air_mass_kg: float
    pressure_change_rate: float
    equalization_time_s: float
    mass_flow_rate_kg_s: float
    flow_bracket: float
    port_diameter_m: float
    port_diameter_mm_exact: float
    port_diameter_mm: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def round_up(x: float, places: int = 1) -> float:
    """Round toward +inf at ``places`` decimals.

    Goes through the shortest decimal repr of ``x`` so a value that prints as
    an exact tenth (0.3) stays put instead of being bumped by binary noise.
    """
    if not math.isfinite(x):
        raise InvalidPhysicalModel(f"Cannot round non-finite value {x!r}")
    d = Decimal(repr(x))
    # quantize needs every integer digit plus the kept decimals within precision
    ctx = Context(prec=max(28, d.adjusted() + places + 2))
    return float(d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_CEILING, context=ctx))


def size_ports(params: Parameters) -> PortSizing:
    """Run the full pipeline and return every intermediate."""
    T_K = params.temperature.kelvin
    altitude_m = params.launch_altitude.m
    radius_cm = params.body_tube_inside_radius.cm
    length_cm = params.body_tube_length.cm
    velocity = params.max_velocity.m_s
    n = params.number_of_ports

    volume = physics.bay_volume_cm3(radius_cm, length_cm)
    pressure = physics.pressure_at_altitude(altitude_m, T_K)
    rho = physics.air_density(pressure, T_K)
    mass = physics.air_mass(rho, volume)
    dp_rate = physics.pressure_change_rate(altitude_m, T_K)
    eq_time = physics.equalization_time(velocity)
    m_dot = physics.mass_flow_rate(mass, dp_rate, eq_time)
    bracket = physics.flow_bracket(dp_rate)
    d_m = physics.port_diameter_m(m_dot, n, rho, pressure, dp_rate)

    d_mm = d_m * 1000.0
    logger.debug(
        "V=%.6g cm3 P=%.6g Pa rho=%.6g kg/m3 m=%.6g kg dP/P=%.6g t=%.6g s m_dot=%.6g kg/s d=%.6g mm",
        volume, pressure, rho, mass, dp_rate, eq_time, m_dot, d_mm,
    )
    return PortSizing(
        number_of_ports=n,
        temperature_K=T_K,
        launch_altitude_m=altitude_m,
        max_velocity_m_s=velocity,
        bay_volume_cm3=volume,
        pressure_pa=pressure,
        density_kg_m3=rho,
        air_mass_kg=mass,
        pressure_change_rate=dp_rate,
        equalization_time_s=eq_time,
        mass_flow_rate_kg_s=m_dot,
        flow_bracket=bracket,
        port_diameter_m=d_m,
        port_diameter_mm_exact=d_mm,
        port_diameter_mm=round_up(d_mm, 1),
    )


def port_diameter_mm(params: Parameters) -> float:
    """Port diameter in mm, rounded up to one decimal place."""
    return size_ports(params).port_diameter_mm


__all__ = ["PortSizing", "round_up", "size_ports", "port_diameter_mm"]
