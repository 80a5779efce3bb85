"""Tests for the 1.x boolean, 2.x controlled boolean and 3.x step control translators."""

from __future__ import annotations

import logging

import pytest

from dpt import create_translator
from dpt.errors import DPTFormatError, DPTRangeError, DPTUsageError

# ---------------------------------------------------------------------------
# 1.x
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,payload",
    [
        ("on", b"\x01"),
        ("OFF", b"\x00"),
        (" On ", b"\x01"),
        ("1", b"\x01"),
        ("false", b"\x00"),
        (True, b"\x01"),
        (0, b"\x00"),
    ],
)
def test_switch_encode(value, payload: bytes):
    t = create_translator("1.001")
    t.set_value(value)
    assert t.data == payload


def test_switch_decode():
    t = create_translator("1.001")
    t.set_data(b"\x01")
    assert t.value == "on"
    assert t.value_boolean is True
    assert t.numeric_value() == 1


def test_boolean_decode_masks_upper_bits(caplog):
    """Bits above bit 0 are masked and reported."""
    t = create_translator("1.001")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\xfe")
    assert "reserved bits not 0" in caplog.text
    assert t.data == b"\x00"
    assert t.value == "off"


def test_boolean_rejects():
    t = create_translator("1.001")
    with pytest.raises(DPTFormatError):
        t.set_value("maybe")
    with pytest.raises(DPTRangeError):
        t.set_value(2)


def test_boolean_subtype_words():
    t = create_translator("1.008")
    t.set_value("down")
    assert t.data == b"\x01"
    assert t.value == "down"


# ---------------------------------------------------------------------------
# 2.x
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "dpt_id,value,payload,rendered",
    [
        ("2.001", "1 on", b"\x03", "1 on"),
        ("2.001", "0 off", b"\x00", "0 off"),
        ("2.001", "1 OFF", b"\x02", "1 off"),
        ("2.008", "0 down", b"\x01", "0 down"),
        ("2.001", {"control": True, "value": False}, b"\x02", "1 off"),
        ("2.002", (False, True), b"\x01", "0 true"),
    ],
    ids=["on", "off", "controlled-off", "updown", "dict", "tuple"],
)
def test_controlled_boolean(dpt_id: str, value, payload: bytes, rendered: str):
    t = create_translator(dpt_id)
    t.set_value(value)
    assert t.data == payload
    assert t.value == rendered


def test_controlled_boolean_typed_access():
    t = create_translator("2.001")
    t.set_control_value(True, True)
    assert t.data == b"\x03"
    assert t.control_bit is True
    assert t.value_bit is True
    assert t.dpt.lower == "0 off"
    assert t.dpt.upper == "1 on"


@pytest.mark.parametrize("text", ["on", "2 on", "1 maybe", "1", ""])
def test_controlled_boolean_rejects(text: str):
    t = create_translator("2.001")
    with pytest.raises(DPTFormatError):
        t.set_value(text)
    with pytest.raises(DPTUsageError):
        t.set_value(1.5)


def test_controlled_boolean_decode_masks_reserved(caplog):
    t = create_translator("2.001")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\xf6")
    assert "reserved bits not 0" in caplog.text
    assert t.data == b"\x02"
    assert t.value == "1 off"


# ---------------------------------------------------------------------------
# 3.x
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "dpt_id,text,payload,rendered",
    [
        ("3.007", "increase 5", b"\x0d", "increase 5 steps"),
        ("3.007", "increase 5 steps", b"\x0d", "increase 5 steps"),
        ("3.007", "decrease 1 step", b"\x01", "decrease 1 steps"),
        ("3.007", "decrease break", b"\x00", "decrease break"),
        ("3.007", "Increase Break", b"\x08", "increase break"),
        ("3.008", "down 1", b"\x09", "down 1 steps"),
        ("3.008", "up 7", b"\x07", "up 7 steps"),
    ],
)
def test_control_text(dpt_id: str, text: str, payload: bytes, rendered: str):
    t = create_translator(dpt_id)
    t.set_value(text)
    assert t.data == payload
    assert t.value == rendered


@pytest.mark.parametrize(
    "text",
    ["increase", "increase 8", "sideways 3", "increase 3 jumps", "increase 1 2 3", "increase x"],
)
def test_control_text_rejects(text: str):
    t = create_translator("3.007")
    with pytest.raises(DPTFormatError):
        t.set_value(text)


def test_control_signed_value():
    t = create_translator("3.007")
    t.set_value(-3)
    assert t.data == b"\x03"
    assert t.value == "decrease 3 steps"
    assert t.numeric_value() == -3
    t.set_value(7)
    assert t.value_signed == 7
    with pytest.raises(DPTRangeError):
        t.set_value(8)


def test_control_typed_access():
    t = create_translator("3.007")
    t.set_control(True, 4)
    assert t.data == b"\x0c"
    assert t.control_bit is True
    assert t.step_code == 4
    assert t.intervals == 8
    with pytest.raises(DPTUsageError):
        t.set_control(True, 8)


@pytest.mark.parametrize(
    "intervals,stepcode",
    [(1, 1), (2, 2), (3, 2), (4, 3), (7, 4), (33, 6), (49, 7), (64, 7)],
)
def test_control_intervals(intervals: int, stepcode: int):
    """The step code selects the power of two nearest to the interval count."""
    t = create_translator("3.007")
    t.set_control(True, 1)
    t.set_intervals(intervals)
    assert t.step_code == stepcode
    assert t.control_bit is True


@pytest.mark.parametrize("intervals", [0, 65])
def test_control_intervals_out_of_range(intervals: int):
    t = create_translator("3.007")
    with pytest.raises(DPTUsageError):
        t.set_intervals(intervals)


def test_control_decode_masks_upper_nibble(caplog):
    t = create_translator("3.007")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\xfd")
    assert t.data == b"\x0d"
    assert "reserved bits not 0" in caplog.text


def test_clean_data_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        create_translator("1.001").set_data(b"\x01")
        create_translator("3.007").set_data(b"\x0d")
    assert caplog.text == ""
