from __future__ import annotations

import math

from .errors import InvalidPhysicalModel

DISCHARGE_COEFFICIENT = 0.62   # sharp-edged orifice
AIR_SPECIFIC_HEAT_RATIO = 1.401
SEA_LEVEL_PRESSURE = 101325.0  # Pa
LAPSE_RATE = -0.0065           # K/m
G = 9.80665                    # m/s^2
MOLAR_MASS_AIR = 0.0289645     # kg/mol
GAS_CONSTANT = 8.31432         # J/(mol*K)

CM3_TO_M3 = (1.0 / 100.0) ** 3


def _finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidPhysicalModel(f"{name} is not finite ({value!r})")
    return value


def _power(name: str, base: float, exponent: float) -> float:
    """base**exponent, refusing the cases that are undefined for real numbers."""
    if not math.isfinite(base) or base <= 0.0:
        raise InvalidPhysicalModel(f"{name}: base {base!r} must be positive for exponent {exponent:.6g}")
    try:
        return _finite(name, base ** exponent)
    except OverflowError as e:
        raise InvalidPhysicalModel(f"{name} overflows") from e


def bay_volume_cm3(radius_cm: float, length_cm: float) -> float:
    """Altimeter bay modelled as an empty cylinder: V = pi * r^2 * L [cm^3]."""
    try:
        return _finite("bay volume", math.pi * radius_cm ** 2 * length_cm)
    except OverflowError as e:
        raise InvalidPhysicalModel(f"Bay volume overflows for radius {radius_cm!r} cm") from e


def barometric_exponent() -> float:
    return G * MOLAR_MASS_AIR / (GAS_CONSTANT * LAPSE_RATE)


def pressure_at_altitude(altitude_m: float, T_K: float) -> float:
    """
    Barometric formula with a linear lapse rate anchored at the launch temperature.
    P = P0 * (T / (T + Lr*h)) ** (g*M / (R*Lr))
    """
    if T_K <= 0:
        raise InvalidPhysicalModel(f"Temperature {T_K!r} K at or below absolute zero")
    denom = T_K + LAPSE_RATE * altitude_m
    if not denom > 0:
        raise InvalidPhysicalModel(
            f"Altitude {altitude_m:g} m is outside the lapse-rate atmosphere at {T_K:g} K"
        )
    p = SEA_LEVEL_PRESSURE * _power(f"pressure ratio at {altitude_m:g} m", T_K / denom, barometric_exponent())
    if p <= 0:
        raise InvalidPhysicalModel(f"Pressure at {altitude_m:g} m is not positive ({p!r} Pa)")
    return p


def air_density(pressure_pa: float, T_K: float) -> float:
    """Ideal gas: rho = P*M / (R*T) [kg/m^3]."""
    return _finite("air density", pressure_pa * MOLAR_MASS_AIR / (GAS_CONSTANT * T_K))


def air_mass(density_kg_m3: float, volume_cm3: float) -> float:
    return _finite("air mass", density_kg_m3 * CM3_TO_M3 * volume_cm3)


def pressure_change_rate(altitude_m: float, T_K: float) -> float:
    """Fractional pressure drop over the next metre of climb: (P(h) - P(h+1)) / P(h)."""
    p0 = pressure_at_altitude(altitude_m, T_K)
    p1 = pressure_at_altitude(altitude_m + 1.0, T_K)
    return _finite("pressure change rate", (p0 - p1) / p0)


def equalization_time(max_velocity_m_s: float) -> float:
    """Time available per metre of altitude at max velocity: 1/v [s]."""
    if not math.isfinite(max_velocity_m_s) or max_velocity_m_s <= 0:
        raise InvalidPhysicalModel(
            f"Max velocity must be positive to bound the equalization time, got {max_velocity_m_s!r} m/s"
        )
    return 1.0 / max_velocity_m_s


def mass_flow_rate(mass_kg: float, pressure_change: float, eq_time_s: float) -> float:
    if eq_time_s <= 0:
        raise InvalidPhysicalModel(f"Equalization time must be positive, got {eq_time_s!r} s")
    return _finite("mass flow rate", mass_kg * pressure_change / eq_time_s)


def flow_bracket(pressure_change: float, k: float = AIR_SPECIFIC_HEAT_RATIO) -> float:
    """
    Compressible orifice term ((1-x)^(2/k) - (1-x)^((k+1)/k)) with x the
    fractional pressure drop.  Must be strictly positive for a real port size.
    """
    base = 1.0 - pressure_change
    b = _power("flow bracket", base, 2.0 / k) - _power("flow bracket", base, (k + 1.0) / k)
    if not b > 0:
        raise InvalidPhysicalModel(
            f"Compressible-flow term is not positive ({b!r}) for pressure change {pressure_change!r}"
        )
    return b


def port_diameter_m(
    mass_flow_kg_s: float,
    number_of_ports: int,
    density_kg_m3: float,
    pressure_pa: float,
    pressure_change: float,
    *,
    cd: float = DISCHARGE_COEFFICIENT,
    k: float = AIR_SPECIFIC_HEAT_RATIO,
) -> float:
    """
    Diameter of each of ``number_of_ports`` identical circular ports that pass
    the required mass flow between them:

        d = sqrt(4*m_dot / (pi * n * Cd * sqrt(2*rho*P * k/(k-1) * bracket)))
    """
    if number_of_ports < 1:
        raise InvalidPhysicalModel(f"Number of ports must be >= 1, got {number_of_ports!r}")
    flux = 2.0 * density_kg_m3 * pressure_pa * (k / (k - 1.0)) * flow_bracket(pressure_change, k)
    if not flux > 0:
        raise InvalidPhysicalModel(f"Orifice mass flux term is not positive ({flux!r})")
    try:
        n = float(number_of_ports)
    except OverflowError as e:
        raise InvalidPhysicalModel("Number of ports is too large to represent as a float") from e
    denom = math.pi * n * cd * math.sqrt(flux)
    area_term = 4.0 * mass_flow_kg_s / denom
    if not area_term >= 0:
        raise InvalidPhysicalModel(f"Required port area is negative ({area_term!r})")
    return _finite("port diameter", math.sqrt(area_term))
