"""Tests for the 21.x and 22.x bit set translators."""

from __future__ import annotations

import pytest

from dpt import create_translator
from dpt.errors import DPTFormatError, DPTRangeError, DPTUsageError


@pytest.mark.parametrize(
    "dpt_id,text,payload,rendered",
    [
        ("22.1000", "1 0 1 0 0 0", b"\x00\x28", "Knxip, _3"),
        ("22.1000", "TP1", b"\x00\x02", "TP1"),
        ("22.1000", "RF, TP1", b"\x00\x12", "RF, TP1"),
        ("21.001", "Fault, In Alarm", b"\x0a", "In Alarm, Fault"),
        ("21.001", "InAlarm", b"\x08", "In Alarm"),
        ("21.001", "true false true", b"\x05", "Overridden, Out Of Service"),
        ("21.001", "0x03", b"\x03", "Fault, Out Of Service"),
        ("21.001", "", b"\x00", ""),
        ("22.101", "Heating Mode", b"\x01\x00", "Heating Mode"),
        ("22.101", "Cooling Mode", b"\x00\x00", "Cooling Mode"),
    ],
)
def test_bitset_text(dpt_id: str, text: str, payload: bytes, rendered: str):
    t = create_translator(dpt_id)
    t.set_value(text)
    assert t.data == payload
    assert t.value == rendered


def test_bitset_all_elements():
    t = create_translator("21.001")
    t.set_value("0x1F")
    assert t.value == "Alarm Un Ack, In Alarm, Overridden, Fault, Out Of Service"
    assert t.numeric_value() == 0x1F


@pytest.mark.parametrize("text", ["1 0 0 0 0 0", "Foo", "Fault, Foo"])
def test_bitset_text_rejects(text: str):
    t = create_translator("21.001")
    with pytest.raises(DPTFormatError):
        t.set_value(text)


@pytest.mark.parametrize("value", [32, "32", -1])
def test_bitset_out_of_range(value):
    t = create_translator("21.001")
    with pytest.raises(DPTRangeError):
        t.set_value(value)


def test_bitset_decode_rejects_undefined_bits():
    t = create_translator("21.001")
    with pytest.raises(DPTRangeError):
        t.set_data(b"\x40")


@pytest.mark.parametrize("mask", range(32))
def test_general_status_text_roundtrip(mask: int):
    """Every subset renders to text that encodes back to the same bits."""
    t = create_translator("21.001")
    t.set_value(mask)
    parsed = create_translator("21.001")
    parsed.set_value(t.value)
    assert parsed.numeric_value() == mask


def test_bitset_element_access():
    t = create_translator("21.001")
    t.set_elements(["Fault", "InAlarm"])
    assert t.data == b"\x0a"
    assert t.elements() == ["Fault", "InAlarm"]
    assert t.contains("Fault")
    assert t.contains("In Alarm")
    assert not t.contains("Overridden")
    with pytest.raises(DPTUsageError):
        t.contains("Foo")
    with pytest.raises(DPTUsageError):
        t.set_elements(["Foo"])


def test_rhcc_status_empty_renders_cooling_mode():
    t = create_translator("22.101")
    t.set_data(b"\x00\x00")
    assert t.value == "Cooling Mode"
    t.set_data(b"\x00\x03")
    assert t.value == "Heating Eco Mode, Fault"


def test_sixteen_bit_set_big_endian():
    t = create_translator("22.101")
    t.set_value(0x4001)
    assert t.data == b"\x40\x01"
    assert t.value == "Overheat Alarm, Fault"
