import pytest

from nephrosim.core.utils import format_clock, format_number, round_value


@pytest.mark.parametrize("value, expected", [
    (5.2 - 0.5, 4.7),
    (0.125, 0.13),
    (-0.125, -0.13),
    (85 - 0.2, 84.8),
    (2.5 + 0.005, 2.51),
    (17.99, 17.99),
    (120, 120.0),
])
def test_round_value_half_away_from_zero(value, expected):
    assert round_value(value) == expected


def test_round_value_places():
    assert round_value(1.23456, 3) == 1.235
    assert round_value(1.5, 0) == 2.0


def test_round_value_has_no_negative_zero():
    result = round_value(-0.001)
    assert result == 0.0
    assert str(result) == "0.0"


@pytest.mark.parametrize("value, expected", [
    (120, "120"),
    (120.0, "120"),
    (4.7, "4.7"),
    (84.8, "84.8"),
    (-1.0, "-1"),
    (5.202, "5.202"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_clock():
    assert format_clock(300) == "05:00"
    assert format_clock(59) == "00:59"
    assert format_clock(0) == "00:00"
    assert format_clock(-3) == "00:00"
