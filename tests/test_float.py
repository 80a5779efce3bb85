"""Tests for the 2-byte (9.x) and 4-byte (14.x) float translators."""

from __future__ import annotations

import struct

import pytest

from dpt import create_translator
from dpt.errors import DPTFormatError, DPTRangeError, DPTUsageError
from dpt.float16 import decode_float16, encode_float16
from dpt.float32 import format_float32

# ---------------------------------------------------------------------------
# 9.x
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,payload",
    [
        (21.5, b"\x0c\x33"),
        (-21.5, b"\x8b\xcd"),
        (0, b"\x00\x00"),
        (-0.001, b"\x00\x00"),
        (0.01, b"\x00\x01"),
        (-0.01, b"\x87\xff"),
    ],
)
def test_encode_float16(value: float, payload: bytes):
    assert encode_float16(value) == payload


def test_encode_float16_out_of_domain():
    with pytest.raises(DPTUsageError):
        encode_float16(1e7)


@pytest.mark.parametrize(
    "payload,expected",
    [
        (b"\x0c\x33", 21.5),
        (b"\x8b\xcd", -21.5),
        (b"\x7f\xff", 670760.96),
        (b"\xf8\x00", -671088.64),
        (b"\x00\x01", 0.01),
    ],
)
def test_decode_float16(payload: bytes, expected: float):
    assert decode_float16(payload) == pytest.approx(expected)


@pytest.mark.parametrize(
    "value", [0.01, 1.0, 20.48, 100.5, -0.5, -273.0, 670760.0, -670000.0]
)
def test_float16_within_one_step(value: float):
    """Decoded value differs from the input by at most one mantissa step."""
    payload = encode_float16(value)
    exponent = (payload[0] >> 3) & 0x0F
    assert abs(decode_float16(payload) - value) <= 0.01 * (1 << exponent)


def test_temperature_translator():
    t = create_translator("9.001")
    t.set_value(21.5)
    assert t.data == b"\x0c\x33"
    assert t.value == "21.5 °C"
    assert t.value_float == 21.5

    t.set_value("21,5 °C")
    assert t.data == b"\x0c\x33"

    t.set_data(b"\x00\x00")
    assert t.value == "0.0 °C"
    assert t.numeric_value() == 0.0


def test_temperature_bounds():
    t = create_translator("9.001")
    t.set_value(-273)
    with pytest.raises(DPTRangeError):
        t.set_value(-274)
    with pytest.raises(DPTFormatError):
        t.set_value("warm")


def test_decode_reserved_maximum():
    """0x7FFF decodes to the largest value without a range check."""
    t = create_translator("9.001")
    t.set_data(b"\x7f\xff")
    assert t.value_float == pytest.approx(670760.96)


# ---------------------------------------------------------------------------
# 14.x
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.0, "0.0"),
        (1.5, "1.5"),
        (0.1, "0.1"),
        (-273.15, "-273.15"),
        (100000.0, "1E5"),
        (1234567.0, "1.23457E6"),
    ],
)
def test_format_float32(value: float, expected: str):
    single = struct.unpack("!f", struct.pack("!f", value))[0]
    assert format_float32(single) == expected


def test_float32_translator():
    t = create_translator("14.005")
    t.set_value(1.5)
    assert t.data == b"\x3f\xc0\x00\x00"
    assert t.value == "1.5"

    t.set_value("0,1")
    assert t.value == "0.1"
    assert t.numeric_value() == pytest.approx(0.1)


def test_float32_unit():
    t = create_translator("14.056")
    t.set_value("1234567 W")
    assert t.value == "1.23457E6 W"


def test_float32_rejects():
    t = create_translator("14.056")
    with pytest.raises(DPTRangeError):
        t.set_value(1e39)
    with pytest.raises(DPTFormatError):
        t.set_value("nan")
    with pytest.raises(DPTUsageError):
        t.set_value(None)
