"""Tests for the 5.x, 6.x, 7.x, 8.x, 12.x and 13.x integer translators."""

from __future__ import annotations

import pytest

from dpt import create_translator
from dpt.errors import DPTFormatError, DPTRangeError, DPTUsageError


@pytest.mark.parametrize(
    "dpt_id,value,payload",
    [
        ("5.001", 100, b"\xff"),
        ("5.001", 0, b"\x00"),
        ("5.001", "50 %", b"\x80"),
        ("5.003", 360, b"\xff"),
        ("5.004", 255, b"\xff"),
        ("5.010", "0x10", b"\x10"),
        ("6.010", -128, b"\x80"),
        ("6.001", "-1 %", b"\xff"),
        ("7.001", 65535, b"\xff\xff"),
        ("7.001", "017", b"\x00\x0f"),
        ("7.003", 655350, b"\xff\xff"),
        ("7.003", "1000 ms", b"\x00\x64"),
        ("7.004", 1000, b"\x00\x0a"),
        ("8.001", -32768, b"\x80\x00"),
        ("8.004", -3276800, b"\x80\x00"),
        ("8.010", -327.68, b"\x80\x00"),
        ("8.010", 327.67, b"\x7f\xff"),
        ("8.010", "12,5", b"\x04\xe2"),
        ("12.001", 4294967295, b"\xff\xff\xff\xff"),
        ("13.001", -2147483648, b"\x80\x00\x00\x00"),
        ("13.001", "#7fffffff", b"\x7f\xff\xff\xff"),
    ],
)
def test_encode(dpt_id: str, value, payload: bytes):
    t = create_translator(dpt_id)
    t.set_value(value)
    assert t.data == payload


@pytest.mark.parametrize(
    "dpt_id,payload,text",
    [
        ("5.001", b"\x80", "50 %"),
        ("5.003", b"\x80", "181 °"),
        ("5.010", b"\x10", "16 counter pulses"),
        ("6.010", b"\x80", "-128 counter pulses"),
        ("7.001", b"\xff\xff", "65535 pulses"),
        ("7.003", b"\xff\xff", "655350 ms"),
        ("8.010", b"\x80\x00", "-327.68 %"),
        ("8.010", b"\x04\xe2", "12.5 %"),
        ("12.001", b"\xff\xff\xff\xff", "4294967295 counter pulses"),
        ("13.001", b"\x80\x00\x00\x00", "-2147483648 counter pulses"),
    ],
)
def test_decode(dpt_id: str, payload: bytes, text: str):
    t = create_translator(dpt_id)
    t.set_data(payload)
    assert t.value == text


@pytest.mark.parametrize(
    "dpt_id,value",
    [
        ("5.001", 101),
        ("5.001", -1),
        ("5.003", 361),
        ("5.006", 255),
        ("6.010", 128),
        ("7.001", 65536),
        ("7.001", -1),
        ("8.001", 32768),
        ("8.010", 327.68),
        ("12.001", -1),
        ("13.001", 2147483648),
    ],
)
def test_encode_out_of_range(dpt_id: str, value):
    t = create_translator(dpt_id)
    with pytest.raises(DPTRangeError):
        t.set_value(value)


@pytest.mark.parametrize("dpt_id,text", [("5.010", "1.5"), ("7.001", "lots"), ("5.001", "half")])
def test_encode_wrong_format(dpt_id: str, text: str):
    t = create_translator(dpt_id)
    with pytest.raises(DPTFormatError):
        t.set_value(text)


def test_encode_unsupported_type():
    t = create_translator("7.001")
    with pytest.raises(DPTUsageError):
        t.set_value([1])


def test_scaling_unscaled_access():
    """5.001 exposes the raw byte next to the scaled percentage."""
    t = create_translator("5.001")
    t.set_value_unscaled(128)
    assert t.numeric_value() == 50
    assert t.value_unscaled == 128
    assert t.value == "50 %"
    with pytest.raises(DPTUsageError):
        t.set_value_unscaled(256)


@pytest.mark.parametrize("value", range(0, 101, 5))
def test_scaling_roundtrip(value: int):
    t = create_translator("5.001")
    t.set_value(value)
    assert t.numeric_value() == pytest.approx(value, abs=0.5)


def test_angle_roundtrip_within_one_degree():
    t = create_translator("5.003")
    t.set_value(180)
    assert t.numeric_value() == pytest.approx(180, abs=1)


def test_decode_does_not_range_check():
    """Decoded raw values outside the DPT bounds are passed through."""
    t = create_translator("5.006")
    t.set_data(b"\xff")
    assert t.numeric_value() == 255


@pytest.mark.parametrize(
    "dpt_id,milliseconds,payload,period",
    [
        ("7.002", 1500, b"\x05\xdc", 1500),
        ("7.004", 1000, b"\x00\x0a", 1000),
        ("7.005", 90_500, b"\x00\x5b", 91_000),
        ("7.006", 120_000, b"\x00\x02", 120_000),
        ("8.005", -5000, b"\xff\xfb", -5000),
    ],
)
def test_time_period(dpt_id: str, milliseconds: int, payload: bytes, period: int):
    t = create_translator(dpt_id)
    t.set_time_period(milliseconds)
    assert t.data == payload
    assert t.time_period == period


def test_time_period_only_on_period_subtypes():
    t = create_translator("7.001")
    with pytest.raises(DPTUsageError):
        t.set_time_period(1000)
    with pytest.raises(DPTUsageError):
        t.time_period


@pytest.mark.parametrize("dpt_id", ["7.001", "8.001", "12.001", "13.001"])
@pytest.mark.parametrize("value", [0, 1, 127, 32767])
def test_roundtrip(dpt_id: str, value: int):
    t = create_translator(dpt_id)
    t.set_value(value)
    decoded = create_translator(dpt_id)
    decoded.set_data(t.data)
    assert decoded.numeric_value() == value
