"""Tests for the 232.600 RGB, 251.600 RGBW and 252.600 relative control RGBW translators."""

from __future__ import annotations

import logging

import pytest

from dpt import create_translator
from dpt.errors import DPTFormatError, DPTRangeError, DPTUsageError

# ---------------------------------------------------------------------------
# 232.600
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value",
    ["r:255 g:128 b:0", "b:0 R:255 g:128", "255 128 0", (255, 128, 0), [255, 128, 0]],
    ids=["keyed", "keyed-any-order", "plain", "tuple", "list"],
)
def test_rgb_encode(value):
    t = create_translator("232.600")
    t.set_value(value)
    assert t.data == b"\xff\x80\x00"
    assert t.value == "r:255 g:128 b:0"


@pytest.mark.parametrize(
    "text",
    ["r:1 g:2", "r:1 g:2 x:3", "r:1 r:2 b:3", "r:1 2 b:3", "r:a g:0 b:0", "r:1 g:2 b:3 w:4"],
)
def test_rgb_rejects_text(text: str):
    with pytest.raises(DPTFormatError):
        create_translator("232.600").set_value(text)


def test_rgb_rejects_values():
    t = create_translator("232.600")
    with pytest.raises(DPTRangeError):
        t.set_value("r:256 g:0 b:0")
    with pytest.raises(DPTRangeError):
        t.set_value((0, -1, 0))
    with pytest.raises(DPTUsageError):
        t.set_value((1, 2))
    with pytest.raises(DPTUsageError):
        t.set_value((1.0, 2, 3))


def test_rgb_typed_access():
    t = create_translator("232.600")
    t.set_rgb(10, 20, 30)
    assert t.data == b"\x0a\x14\x1e"
    assert (t.red, t.green, t.blue) == (10, 20, 30)
    with pytest.raises(DPTUsageError):
        t.set_rgb(0, 256, 0)


# ---------------------------------------------------------------------------
# 251.600
# ---------------------------------------------------------------------------


def test_rgbw_text_with_invalid_component():
    t = create_translator("251.600")
    t.set_value("50 - 100 0 %")
    assert t.data == b"\x80\x00\xff\x00\x00\x0b"
    assert t.value == "50.2 - 100 0 %"


def test_rgbw_typed_access():
    t = create_translator("251.600")
    t.set_rgbw(50, None, 100, 0)
    assert t.data == b"\x80\x00\xff\x00\x00\x0b"
    assert t.red == pytest.approx(50.196, abs=0.001)
    assert t.green is None
    assert t.blue == 100
    assert t.white == 0


def test_rgbw_all_components():
    t = create_translator("251.600")
    t.set_value("100 100 100 100")
    assert t.data == b"\xff\xff\xff\xff\x00\x0f"
    t.append_unit = False
    assert t.value == "100 100 100 100"


def test_rgbw_all_invalid():
    t = create_translator("251.600")
    t.set_value("- - - -")
    assert t.data == b"\x00" * 6
    assert t.value == "- - - - %"


@pytest.mark.parametrize("text", ["50 50 50", "50 50 50 50 50", "101 0 0 0", "red 0 0 0"])
def test_rgbw_text_rejects(text: str):
    t = create_translator("251.600")
    with pytest.raises(DPTFormatError):
        t.set_value(text)


def test_rgbw_rejects_wrong_component_count():
    t = create_translator("251.600")
    with pytest.raises(DPTUsageError):
        t.set_value((1, 2, 3))


def test_rgbw_reserved_byte_warns(caplog):
    t = create_translator("251.600")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\x80\x00\xff\x00\x01\x0b")
    assert "reserved bits not 0" in caplog.text
    assert t.data[4] == 0


# ---------------------------------------------------------------------------
# 252.600
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text,payload,rendered",
    [
        (
            "G increase 3 W decrease 6",
            b"\x00\x0b\x00\x06\x05",
            "G increase 3 steps W decrease 6 steps",
        ),
        (
            "R increase 5 steps G decrease break B - W increase 1 step",
            b"\x0d\x00\x00\x09\x0d",
            "R increase 5 steps G decrease break W increase 1 steps",
        ),
        ("R break W break", b"\x00\x00\x00\x00\x09", "R decrease break W decrease break"),
        ("R - G - B - W -", b"\x00\x00\x00\x00\x00", "R - G - B - W -"),
        ("", b"\x00\x00\x00\x00\x00", "R - G - B - W -"),
    ],
)
def test_relative_control_text(text: str, payload: bytes, rendered: str):
    t = create_translator("252.600")
    t.set_value(text)
    assert t.data == payload
    assert t.value == rendered


@pytest.mark.parametrize(
    "text", ["R increase 9", "X increase 1", "G increase 1 R increase 1", "R increase", "W up 2"]
)
def test_relative_control_text_rejects(text: str):
    t = create_translator("252.600")
    with pytest.raises(DPTFormatError):
        t.set_value(text)


def test_relative_control_typed_access():
    t = create_translator("252.600")
    t.set_controls((True, 5), None, None, (False, 0))
    assert t.data == b"\x0d\x00\x00\x00\x09"
    assert t.control("R") == (True, 5)
    assert t.control("G") is None
    assert t.control("W") == (False, 0)
    with pytest.raises(DPTUsageError):
        t.set_controls((True, 8), None, None, None)


def test_relative_control_reserved_bits_warn(caplog):
    t = create_translator("252.600")
    with caplog.at_level(logging.WARNING, logger="knxdpt"):
        t.set_data(b"\x1d\x00\x00\x00\x18")
    assert "reserved bits not 0" in caplog.text
    assert t.data == b"\x0d\x00\x00\x00\x08"
    assert t.value == "R increase 5 steps"
