# db/values.py
"""
Typed reads of raw cell values.

pymysql hands SQL NULL back as ``None``; every helper maps that to ``None`` and
otherwise converts through the value's canonical form. A non-null value that
cannot be represented raises straight away (``ValueError`` / ``TypeError``).
"""
from datetime import date, datetime
from typing import Any, Optional

INT32_MIN, INT32_MAX = -2 ** 31, 2 ** 31 - 1
INT64_MIN, INT64_MAX = -2 ** 63, 2 ** 63 - 1


def get_object_value(value: Any) -> Optional[Any]:
    return value


def get_string_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


def _parse_int(value: Any, lo: int, hi: int, kind: str) -> Optional[int]:
    if value is None:
        return None
    text = get_string_value(value).strip()
    n = int(text)
    if n < lo or n > hi:
        raise ValueError(f"{text} is out of range for {kind}")
    return n


def get_int_value(value: Any) -> Optional[int]:
    return _parse_int(value, INT32_MIN, INT32_MAX, "int")


def get_long_value(value: Any) -> Optional[int]:
    return _parse_int(value, INT64_MIN, INT64_MAX, "long")


def get_double_value(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(get_string_value(value))


def get_bytes_value(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"cannot read {type(value).__name__} as bytes")


def get_datetime_value(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(get_string_value(value).strip())
