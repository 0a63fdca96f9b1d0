import math

import pytest

from core.document_template.utils.math_utils import format_fixed, format_plain_number, parse_number


@pytest.mark.parametrize("raw, expected", [
    ("$1,234.56", 1234.56),
    ("abc", 0.0),
    (None, 0.0),
    ("", 0.0),
    ("-", 0.0),
    ("  42 ", 42.0),
    ("-12.5", -12.5),
    ("12.", 12.0),
    (".5", 0.5),
    ("1.2.3", 1.2),
    ("EUR 99,90", 9990.0),
    (7, 7.0),
    (2.5, 2.5),
    (True, 1.0),
    (False, 0.0),
])
def test_parse_number(raw, expected):
    assert parse_number(raw) == pytest.approx(expected)


def test_parse_number_nan_and_garbage_objects_become_zero():
    assert parse_number(float("nan")) == 0.0
    assert parse_number(object()) == 0.0
    assert parse_number([1, 2]) == 0.0


def test_parse_number_keeps_infinity_from_numbers():
    assert math.isinf(parse_number(float("inf")))


def test_format_fixed():
    assert format_fixed(200) == "200.00"
    assert format_fixed(310.0) == "310.00"
    assert format_fixed(1.005 * 1000) == "1005.00"
    assert format_fixed(-25) == "-25.00"
    assert format_fixed(-0.0) == "0.00"


def test_format_plain_number():
    assert format_plain_number(13.0) == "13"
    assert format_plain_number(0) == "0"
    assert format_plain_number(2.5) == "2.5"
