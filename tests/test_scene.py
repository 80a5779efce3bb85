"""Tests for the 17.001 scene number and 18.001 scene control translators."""

from __future__ import annotations

import logging

import pytest

from dpt import create_translator, decode, encode
from dpt.errors import DPTFormatError, DPTRangeError, DPTUsageError


@pytest.mark.parametrize("value,payload", [(0, b"\x00"), (63, b"\x3f"), ("12", b"\x0c")])
def test_scene_number_encode(value, payload: bytes):
    t = create_translator("17.001")
    t.set_value(value)
    assert t.data == payload
    assert t.scene_number == payload[0]
    assert t.numeric_value() == payload[0]


def test_scene_number_rejects():
    t = create_translator("17.001")
    with pytest.raises(DPTRangeError):
        t.set_value(64)
    with pytest.raises(DPTFormatError):
        t.set_value("scene 1")
    with pytest.raises(DPTUsageError):
        t.set_scene(-1)
    with pytest.raises(DPTUsageError):
        t.set_value(1.0)


def test_scene_number_decode_masks_reserved(caplog):
    t = create_translator("17.001")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\xc5")
    assert "reserved bits not 0" in caplog.text
    assert t.value == "5"


@pytest.mark.parametrize(
    "value,payload,rendered",
    [
        ("activate 5", b"\x05", "activate 5"),
        ("Learn 5", b"\x85", "learn 5"),
        ({"learn": True, "number": 63}, b"\xbf", "learn 63"),
        ({"number": 1}, b"\x01", "activate 1"),
        ((False, 0), b"\x00", "activate 0"),
    ],
    ids=["activate", "learn", "dict", "dict-default", "tuple"],
)
def test_scene_control(value, payload: bytes, rendered: str):
    t = create_translator("18.001")
    t.set_value(value)
    assert t.data == payload
    assert t.value == rendered


def test_scene_control_typed_access():
    t = create_translator("18.001")
    t.set_scene(True, 10)
    assert t.data == b"\x8a"
    assert t.learn is True
    assert t.scene_number == 10
    with pytest.raises(DPTUsageError):
        t.set_scene(False, 64)


@pytest.mark.parametrize("text", ["store 5", "learn", "learn x", "activate 5 now"])
def test_scene_control_rejects_text(text: str):
    with pytest.raises(DPTFormatError):
        create_translator("18.001").set_value(text)


def test_scene_control_rejects_range():
    with pytest.raises(DPTRangeError):
        encode("18.001", "learn 64")


def test_scene_control_decode(caplog):
    assert decode("18.001", b"\x85") == "learn 5"
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        assert decode("18.001", b"\xc5") == "learn 5"
    assert "reserved bits not 0" in caplog.text
