"""Tests for the property data type bridge."""

from __future__ import annotations

import pytest

from dpt import property_types
from dpt.errors import DPTNotFoundError
from dpt.property_types import (
    DPTID,
    PDT_ALARM_INFO,
    PDT_BINARY_INFORMATION,
    PDT_CHAR_BLOCK,
    PDT_DATE,
    PDT_DATE_TIME,
    PDT_ENUM8,
    PDT_KNX_FLOAT,
    PDT_SCALING,
    PDT_SHORT_CHAR_BLOCK,
    PDT_UNSIGNED_INT,
    PDT_VARIABLE_LENGTH,
    PDT_VERSION,
    all_property_types,
    create_translator,
    get_values,
    has_translator,
    register_property_type,
)


def test_has_translator():
    assert has_translator(PDT_KNX_FLOAT)
    assert has_translator(PDT_BINARY_INFORMATION)
    for pdt in (
        PDT_CHAR_BLOCK,
        PDT_SHORT_CHAR_BLOCK,
        PDT_VARIABLE_LENGTH,
        PDT_DATE_TIME,
        PDT_ENUM8,
        PDT_VERSION,
        PDT_ALARM_INFO,
    ):
        assert has_translator(pdt), hex(pdt)
    # Not mapped at all
    assert not has_translator(0x25)


def test_create_translator_without_unit():
    t = create_translator(PDT_UNSIGNED_INT)
    assert t.dpt.id == "7.001"
    assert t.append_unit is False
    t.set_value(10)
    assert t.value == "10"


def test_create_translator_with_data():
    t = create_translator(PDT_KNX_FLOAT, b"\x0c\x33")
    assert t.value == "21.5"


def test_create_translator_not_found(monkeypatch):
    with pytest.raises(DPTNotFoundError):
        create_translator(0x25)
    # Mapped, but no translator for the main number
    monkeypatch.setattr(property_types, "_property_types", dict(property_types._property_types))
    register_property_type(0x25, DPTID(99, "99.001"))
    assert not has_translator(0x25)
    with pytest.raises(DPTNotFoundError):
        create_translator(0x25)


@pytest.mark.parametrize(
    "pdt,dpt_id",
    [
        (PDT_CHAR_BLOCK, "24.001"),
        (PDT_SHORT_CHAR_BLOCK, "24.001"),
        (PDT_VARIABLE_LENGTH, "24.001"),
        (PDT_DATE_TIME, "19.001"),
        (PDT_ENUM8, "20.1000"),
        (PDT_VERSION, "217.001"),
        (PDT_ALARM_INFO, "219.001"),
    ],
)
def test_create_translator_added_families(pdt: int, dpt_id: str):
    assert create_translator(pdt).dpt.id == dpt_id


@pytest.mark.parametrize(
    "pdt,data,expected",
    [
        (PDT_KNX_FLOAT, b"\x0c\x33\x00\x00", ["21.5", "0.0"]),
        (PDT_SCALING, b"\xff", ["100"]),
        (PDT_DATE, b"\x06\x05\x18", ["2024-05-06"]),
        (PDT_BINARY_INFORMATION, b"\x00\x01", ["false", "true"]),
        (PDT_CHAR_BLOCK, b"KNX\x00dpt\x00", ["KNX", "dpt"]),
        (PDT_ENUM8, b"\x00\x06", ["Data link layer", "cEMI transport layer"]),
        (PDT_VERSION, b"\x08\x83", ["1.2.3"]),
        (
            PDT_ALARM_INFO,
            b"\x01\x02\x03\x04\x05\x01",
            ["log 1, priority 2, area 3, error 4, attributes 5, status 1"],
        ),
    ],
)
def test_get_values(pdt: int, data: bytes, expected: list[str]):
    assert get_values(pdt, data) == expected


def test_register_property_type(monkeypatch):
    monkeypatch.setattr(property_types, "_property_types", dict(property_types._property_types))
    register_property_type(0x25, DPTID(9, "9.001"))
    assert all_property_types()[0x25] == DPTID(9, "9.001")
    assert get_values(0x25, b"\x0c\x33") == ["21.5"]
