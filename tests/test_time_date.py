"""Tests for the 10.001 time of day and 11.001 date translators."""

from __future__ import annotations

import logging
from datetime import date, datetime, time

import pytest

from dpt import CodecSettings, apply_settings, create_translator
from dpt.errors import DPTFormatError, DPTUsageError
from dpt.time import DPT_TIMEOFDAY, StrftimeTimeFormat, TimeTranslator

# ---------------------------------------------------------------------------
# 10.001
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text,payload,rendered",
    [
        ("Mon, 12:30:00", b"\x2c\x1e\x00", "Mon, 12:30:00"),
        ("23:59:59", b"\x17\x3b\x3b", "23:59:59"),
        ("Sun, 00:00:00", b"\xe0\x00\x00", "Sun, 00:00:00"),
        ("no-day, 08:15:00", b"\x08\x0f\x00", "08:15:00"),
        ("Tue 7:05:09", b"\x47\x05\x09", "Tue, 07:05:09"),
        ("wed, 1 2 3", b"\x61\x02\x03", "Wed, 01:02:03"),
    ],
)
def test_time_text(text: str, payload: bytes, rendered: str):
    t = create_translator("10.001")
    t.set_value(text)
    assert t.data == payload
    assert t.value == rendered


@pytest.mark.parametrize("text", ["25:00:00", "12:60:00", "12:00", "Xyz, 12:00:00", "noon"])
def test_time_text_rejects(text: str):
    t = create_translator("10.001")
    with pytest.raises(DPTFormatError):
        t.set_value(text)


def test_time_typed_access():
    t = create_translator("10.001")
    t.set_time(5, 18, 45, 30)
    assert t.data == b"\xb2\x2d\x1e"
    assert (t.day_of_week, t.hour, t.minute, t.second) == (5, 18, 45, 30)
    assert t.time_of_day() == time(18, 45, 30)
    assert t.value == "Fri, 18:45:30"


@pytest.mark.parametrize(
    "fields", [(8, 0, 0, 0), (0, 24, 0, 0), (0, 0, 60, 0), (0, 0, 0, 60), (-1, 0, 0, 0)]
)
def test_time_typed_access_rejects(fields: tuple[int, int, int, int]):
    """Invalid fields raise and leave the record unchanged."""
    t = create_translator("10.001")
    t.set_time(1, 1, 1, 1)
    with pytest.raises(DPTUsageError):
        t.set_time(*fields)
    assert t.data == b"\x21\x01\x01"


def test_time_native_values():
    t = create_translator("10.001")
    t.set_value(time(1, 2, 3))
    assert t.value == "01:02:03"
    # 2024-05-06 is a Monday
    t.set_value(datetime(2024, 5, 6, 14, 3, 9))
    assert t.value == "Mon, 14:03:09"
    t.set_value((7, 23, 0, 0))
    assert t.value == "Sun, 23:00:00"
    with pytest.raises(DPTUsageError):
        t.set_value(1200)


def test_time_from_milliseconds():
    """Timestamps are converted in local time."""
    stamp = datetime(2024, 5, 6, 14, 3, 9)
    t = create_translator("10.001")
    t.set_milliseconds(int(stamp.timestamp() * 1000))
    assert (t.day_of_week, t.hour, t.minute, t.second) == (1, 14, 3, 9)


def test_time_reserved_bits_warn(caplog):
    """Reserved minute/second bits are logged and cleared, not rejected."""
    t = create_translator("10.001")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\x0c\x7b\x80")
    assert "reserved bits not 0" in caplog.text
    assert t.data == b"\x0c\x3b\x00"
    assert t.value == "12:59:00"


@pytest.mark.parametrize("payload", [b"\x18\x00\x00", b"\x00\x3c\x00", b"\x00\x00\x3c"])
def test_time_decode_invalid_fields(payload: bytes):
    t = create_translator("10.001")
    with pytest.raises(DPTFormatError):
        t.set_data(payload)


def test_time_custom_format():
    t = TimeTranslator(DPT_TIMEOFDAY, time_format=StrftimeTimeFormat("%H.%M.%S"))
    t.set_value("Mon, 10.20.30")
    assert t.data == b"\x2a\x14\x1e"
    assert t.value == "Mon, 10.20.30"
    with pytest.raises(DPTFormatError):
        t.set_value("10:20:30")


def test_time_format_from_settings():
    """New translators pick up the configured time format."""
    apply_settings(CodecSettings(time_format="%H-%M-%S"))
    t = create_translator("10.001")
    t.set_value("Sat, 12-00-00")
    assert t.data == b"\xcc\x00\x00"
    assert t.value == "Sat, 12-00-00"

    apply_settings(CodecSettings())
    assert create_translator("10.001").value == "00:00:00"


def test_time_split_keeps_format():
    t = TimeTranslator(DPT_TIMEOFDAY, time_format=StrftimeTimeFormat("%H.%M"))
    t.set_data(b"\x2a\x14\x00\x0b\x05\x00")
    assert [p.value for p in t.split()] == ["Mon, 10.20", "11.05"]


# ---------------------------------------------------------------------------
# 11.001
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text,payload",
    [
        ("2024-05-06", b"\x06\x05\x18"),
        ("1995-12-31", b"\x1f\x0c\x5f"),
        ("1990-01-01", b"\x01\x01\x5a"),
        ("2089-12-31", b"\x1f\x0c\x59"),
        ("2000 2 29", b"\x1d\x02\x00"),
    ],
)
def test_date_text(text: str, payload: bytes):
    t = create_translator("11.001")
    t.set_value(text)
    assert t.data == payload


@pytest.mark.parametrize(
    "payload,rendered",
    [
        (b"\x06\x05\x18", "2024-05-06"),
        (b"\x1f\x0c\x5f", "1995-12-31"),
        (b"\x01\x01\x00", "2000-01-01"),
    ],
)
def test_date_decode(payload: bytes, rendered: str):
    t = create_translator("11.001")
    t.set_data(payload)
    assert t.value == rendered


def test_date_initial_value():
    t = create_translator("11.001")
    assert t.value == "2000-01-01"
    assert t.as_date() == date(2000, 1, 1)


@pytest.mark.parametrize(
    "text", ["2090-01-01", "1989-12-31", "2024-13-01", "2024-05-32", "2024-05", "2024-May-06"]
)
def test_date_text_rejects(text: str):
    t = create_translator("11.001")
    with pytest.raises(DPTFormatError):
        t.set_value(text)


def test_date_typed_access():
    t = create_translator("11.001")
    t.set_date(2031, 7, 4)
    assert (t.year, t.month, t.day) == (2031, 7, 4)
    t.set_value(date(1999, 12, 31))
    assert t.value == "1999-12-31"
    with pytest.raises(DPTUsageError):
        t.set_value(date(1989, 1, 1))
    with pytest.raises(DPTUsageError):
        t.set_date(2024, 0, 1)
    assert t.value == "1999-12-31"


def test_date_reserved_bits_warn(caplog):
    t = create_translator("11.001")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\x06\x05\x98")
    assert "reserved bits not 0" in caplog.text
    assert t.value == "2024-05-06"


@pytest.mark.parametrize(
    "payload", [b"\x00\x01\x00", b"\x01\x00\x00", b"\x01\x0d\x00", b"\x01\x01\x64"]
)
def test_date_decode_invalid_fields(payload: bytes):
    t = create_translator("11.001")
    with pytest.raises(DPTFormatError):
        t.set_data(payload)
