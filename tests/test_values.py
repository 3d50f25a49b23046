from datetime import date, datetime
from decimal import Decimal

import pytest

from db.values import (
    get_bytes_value, get_datetime_value, get_double_value, get_int_value,
    get_long_value, get_object_value, get_string_value,
)


@pytest.mark.parametrize("fn", [
    get_object_value, get_string_value, get_int_value, get_long_value,
    get_double_value, get_bytes_value, get_datetime_value,
])
def test_null_is_none(fn):
    assert fn(None) is None


def test_string_value():
    assert get_string_value(12) == "12"
    assert get_string_value(b"abc") == "abc"
    assert get_string_value("") == ""


def test_int_value():
    assert get_int_value("3600") == 3600
    assert get_int_value(Decimal("7")) == 7
    assert get_int_value(0) == 0


def test_int_value_rejects_non_numeric():
    with pytest.raises(ValueError):
        get_int_value("abc")
    with pytest.raises(ValueError):
        get_int_value("1.5")


def test_int_value_range():
    with pytest.raises(ValueError):
        get_int_value(2 ** 31)
    assert get_long_value(2 ** 31) == 2 ** 31
    with pytest.raises(ValueError):
        get_long_value(2 ** 63)


def test_double_value():
    assert get_double_value("1.5") == 1.5
    assert get_double_value(Decimal("2.25")) == 2.25
    with pytest.raises(ValueError):
        get_double_value("nope")


def test_bytes_value():
    assert get_bytes_value(bytearray(b"\x00\x01")) == b"\x00\x01"
    with pytest.raises(TypeError):
        get_bytes_value("text")


def test_datetime_value():
    dt = datetime(2024, 5, 1, 12, 30)
    assert get_datetime_value(dt) is dt
    assert get_datetime_value(date(2024, 5, 1)) == datetime(2024, 5, 1)
    assert get_datetime_value("2024-05-01 12:30:00") == dt
    with pytest.raises(ValueError):
        get_datetime_value("yesterday")
