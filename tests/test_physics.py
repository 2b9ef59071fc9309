import math

import pytest

from staticports import physics
from staticports.errors import InvalidPhysicalModel

T_21C = 294.15


def test_bay_volume():
    assert physics.bay_volume_cm3(0.75, 14.0) == pytest.approx(24.74004215, rel=1e-9)


def test_sea_level_pressure_and_density():
    p = physics.pressure_at_altitude(0.0, T_21C)
    assert p == pytest.approx(physics.SEA_LEVEL_PRESSURE)
    assert physics.air_density(p, T_21C) == pytest.approx(1.200016065, rel=1e-8)


def test_barometric_exponent():
    assert physics.barometric_exponent() == pytest.approx(-5.255894259, rel=1e-9)


def test_pressure_falls_with_altitude():
    p0 = physics.pressure_at_altitude(0.0, T_21C)
    p1500 = physics.pressure_at_altitude(1500.0, T_21C)
    below = physics.pressure_at_altitude(-400.0, T_21C)
    assert p1500 == pytest.approx(84873.90931, rel=1e-8)
    assert below > p0 > p1500


def test_pressure_change_rate_at_sea_level():
    assert physics.pressure_change_rate(0.0, T_21C) == pytest.approx(1.161370263e-4, rel=1e-6)


def test_air_mass_converts_cm3():
    assert physics.air_mass(1.2, 1e6) == pytest.approx(1.2)


def test_mass_flow_rate():
    t = physics.equalization_time(100.0)
    assert t == pytest.approx(0.01)
    m_dot = physics.mass_flow_rate(2.968844802e-05, 1.161370263e-4, t)
    assert m_dot == pytest.approx(3.447928068e-07, rel=1e-8)


def test_port_diameter_matches_closed_form():
    rho, p, x, m_dot, n = 1.2, 101325.0, 1.2e-4, 3.4e-7, 3
    k, cd = physics.AIR_SPECIFIC_HEAT_RATIO, physics.DISCHARGE_COEFFICIENT
    bracket = (1 - x) ** (2 / k) - (1 - x) ** ((k + 1) / k)
    area_total = m_dot / (cd * math.sqrt(2 * rho * p * k / (k - 1) * bracket))
    expected = 2 * math.sqrt(area_total / (math.pi * n))
    assert physics.port_diameter_m(m_dot, n, rho, p, x) == pytest.approx(expected, rel=1e-12)


@pytest.mark.parametrize("v", [0.0, -1.0, math.nan])
def test_equalization_time_needs_positive_velocity(v):
    with pytest.raises(InvalidPhysicalModel):
        physics.equalization_time(v)


def test_barometric_formula_inverts_above_validity_range():
    # T + Lr*h <= 0 once h >= T/0.0065 (~45 km at 21 C)
    with pytest.raises(InvalidPhysicalModel):
        physics.pressure_at_altitude(50_000.0, T_21C)


@pytest.mark.parametrize("x", [1.0, 1.5, 0.0, -0.2])
def test_flow_bracket_must_be_positive(x):
    with pytest.raises(InvalidPhysicalModel):
        physics.flow_bracket(x)


def test_flow_bracket_small_drop():
    assert physics.flow_bracket(1.161370263e-4) == pytest.approx(3.323708546e-05, rel=1e-6)


def test_bay_volume_overflow():
    with pytest.raises(InvalidPhysicalModel):
        physics.bay_volume_cm3(1e200, 14.0)


def test_port_diameter_huge_port_count():
    with pytest.raises(InvalidPhysicalModel):
        physics.port_diameter_m(3.4e-7, 10**400, 1.2, 101325.0, 1.2e-4)
