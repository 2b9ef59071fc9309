import math

import pytest

from staticports.errors import ParameterError
from staticports.parameters import Parameters
from staticports.units import Length, LengthUnit, Velocity, VelocityUnit, Temperature, TemperatureUnit


def test_defaults():
    p = Parameters()
    assert p.number_of_ports == 3
    assert p.body_tube_inside_radius == Length(7.5, LengthUnit.MM)
    assert p.body_tube_length == Length(14, LengthUnit.CM)
    assert p.launch_altitude == Length(0, LengthUnit.M)
    assert p.max_velocity == Velocity(100, VelocityUnit.M_S)
    assert p.temperature == Temperature(21, TemperatureUnit.C)


def test_from_mapping_overlays_defaults_case_insensitively():
    p = Parameters.from_mapping({
        "NUMBEROFPORTS": 4,
        "bodyTubeLength": "17 cm",
        "BodyTubeInsideRadius": {"value": 12, "unit": "mm"},
        "max_velocity": "184 m/s",
    })
    assert p.number_of_ports == 4
    assert p.body_tube_length.cm == 17.0
    assert p.body_tube_inside_radius.mm == 12.0
    assert p.max_velocity.m_s == 184.0
    assert p.temperature == Parameters().temperature
    assert p.launch_altitude == Parameters().launch_altitude


def test_from_mapping_ignores_unknown_and_null(caplog):
    p = Parameters.from_mapping({"colour": "red", "temperature": None})
    assert p == Parameters()
    assert "colour" in caplog.text


def test_from_mapping_rejects_unitless_quantity():
    with pytest.raises(ParameterError, match="maxVelocity"):
        Parameters.from_mapping({"maxVelocity": 184})


def test_from_mapping_rejects_duplicate_spellings():
    with pytest.raises(ParameterError, match="more than once"):
        Parameters.from_mapping({"maxVelocity": "1 m/s", "max_velocity": "2 m/s"})


def test_from_mapping_requires_object():
    with pytest.raises(ParameterError):
        Parameters.from_mapping([1, 2])


@pytest.mark.parametrize("changes", [
    {"number_of_ports": 0},
    {"number_of_ports": 2.5},
    {"number_of_ports": True},
    {"body_tube_inside_radius": Length(0, LengthUnit.MM)},
    {"body_tube_length": Length(-1, LengthUnit.CM)},
    {"launch_altitude": Length(math.inf, LengthUnit.M)},
    {"max_velocity": Velocity(-5, VelocityUnit.M_S)},
    {"temperature": Temperature(-300, TemperatureUnit.C)},
    {"launch_altitude": 100.0},
])
def test_invalid_values_rejected(changes):
    with pytest.raises(ParameterError):
        Parameters(**changes)


def test_negative_altitude_and_zero_velocity_allowed():
    p = Parameters(launch_altitude=Length(-400, LengthUnit.M), max_velocity=Velocity(0, VelocityUnit.M_S))
    assert p.launch_altitude.m == -400.0


def test_integral_float_port_count_is_accepted():
    assert Parameters(number_of_ports=2.0).number_of_ports == 2


def test_immutable_and_replace():
    p = Parameters()
    with pytest.raises(AttributeError):
        p.number_of_ports = 5
    q = p.replace(number_of_ports=5)
    assert q.number_of_ports == 5 and p.number_of_ports == 3
    with pytest.raises(ParameterError):
        p.replace(number_of_ports=0)


def test_to_dict_keeps_units():
    d = Parameters().to_dict()
    assert d["number_of_ports"] == 3
    assert d["body_tube_inside_radius"] == "7.5 mm"
    assert d["temperature"] == "21 C"


def test_duplicate_spelling_detected_after_null():
    with pytest.raises(ParameterError, match="more than once"):
        Parameters.from_mapping({"maxVelocity": None, "max_velocity": "2 m/s"})
