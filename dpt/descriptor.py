"""Datapoint type descriptors.

A descriptor is the static identity of one KNX datapoint type: its ID
("main.sub"), a description, the lower and upper value bound as text, and
an optional unit. Descriptors are immutable and shared by every translator
created for that type.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import DPTFormatError

# Absolute domain of the 2-byte KNX float (DPT 9.x)
FLOAT16_MIN = -671088.64
FLOAT16_MAX = 670760.96


def parse_dpt_id(dpt_id: str) -> tuple[int, int]:
    """Parse "9.001" → (9, 1). Raises DPTFormatError on malformed IDs."""
    main, sep, sub = dpt_id.strip().partition(".")
    try:
        if not sep:
            return int(main), 0
        return int(main), int(sub)
    except ValueError as e:
        raise DPTFormatError("invalid DPT ID", dpt_id) from e


def format_dpt_id(main: int, sub: int) -> str:
    """Format (9, 1) → "9.001"."""
    return f"{main}.{sub:03d}"


@dataclass(frozen=True)
class DPT:
    """Metadata for one datapoint type."""

    id: str
    description: str
    lower: str
    upper: str
    unit: str = ""

    @property
    def main_number(self) -> int:
        return parse_dpt_id(self.id)[0]

    @property
    def sub_number(self) -> int:
        return parse_dpt_id(self.id)[1]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.description,
            "unit": self.unit,
            "min": self.lower,
            "max": self.upper,
        }

    def __str__(self) -> str:
        s = f"{self.id}: {self.description}, values {self.lower}"
        if self.upper:
            s += f" {self.upper}"
        if self.unit:
            s += f" {self.unit}"
        return s


@dataclass(frozen=True)
class ControlDPT(DPT):
    """DPT 3.x — step control; bounds derive from the boolean control DPT."""

    control: DPT | None = field(default=None, compare=False)

    @classmethod
    def of(cls, dpt_id: str, description: str, control: DPT) -> "ControlDPT":
        return cls(
            dpt_id,
            description,
            f"{control.lower} 7",
            f"{control.upper} 7",
            control=control,
        )


@dataclass(frozen=True)
class BooleanControlDPT(DPT):
    """DPT 2.x — a boolean value with a control bit; bounds read "0 off" .. "1 on"."""

    value: DPT | None = field(default=None, compare=False)

    @classmethod
    def of(cls, dpt_id: str, description: str, value: DPT) -> "BooleanControlDPT":
        return cls(dpt_id, description, f"0 {value.lower}", f"1 {value.upper}", value=value)


def friendly_name(name: str) -> str:
    """Insert spaces at camel-case humps: "HeatingEcoMode" → "Heating Eco Mode"."""
    out = []
    for i, ch in enumerate(name):
        if i > 0 and ch.isupper() and name[i - 1].islower():
            out.append(" ")
        out.append(ch)
    return "".join(out)


@dataclass(frozen=True)
class EnumDPT(DPT):
    """Bit-set DPT whose bits are named by an explicit (name, bit) list."""

    elements: tuple[tuple[str, int], ...] = ()

    @classmethod
    def of(cls, dpt_id: str, name: str, elements: list[str]) -> "EnumDPT":
        """Build from an element list in bit order (first element = bit 0)."""
        pairs = tuple((e, bit) for bit, e in enumerate(elements))
        upper = (1 << len(pairs)) - 1
        return cls(dpt_id, friendly_name(name), "0", str(upper), elements=pairs)

    @property
    def max_value(self) -> int:
        return (1 << len(self.elements)) - 1

    def find(self, text: str) -> int | None:
        """Return the bit for an element name or its friendly rendering."""
        for name, bit in self.elements:
            if text == name or text == friendly_name(name):
                return bit
        return None

    def text_of(self, bit: int) -> str:
        for name, b in self.elements:
            if b == bit:
                return friendly_name(name)
        raise KeyError(f"{self.id} has no element for bit {bit}")


def _constant_name(description: str) -> str:
    """"Building Protection" → "BuildingProtection"."""
    words = "".join(c if c.isalnum() else " " for c in description).split()
    return "".join(w[:1].upper() + w[1:] for w in words)


@dataclass(frozen=True)
class Enum8DPT(DPT):
    """8-bit enumeration DPT (20.x); each element is a (value, description) pair."""

    elements: tuple[tuple[int, str], ...] = ()

    @classmethod
    def of(cls, dpt_id: str, description: str, elements: dict[int, str]) -> "Enum8DPT":
        pairs = tuple(elements.items())
        values = [v for v, _ in pairs]
        return cls(dpt_id, description, str(min(values)), str(max(values)), elements=pairs)

    @property
    def first_value(self) -> int:
        return self.elements[0][0]

    def contains(self, value: int) -> bool:
        return any(v == value for v, _ in self.elements)

    def find(self, text: str) -> int | None:
        """Element value for a description ("Building Protection") or its
        constant form ("BuildingProtection"), ignoring case."""
        s = text.strip().lower()
        for value, description in self.elements:
            if s == description.lower() or s == _constant_name(description).lower():
                return value
        return None

    def text_of(self, value: int) -> str:
        for v, description in self.elements:
            if v == value:
                return description
        raise KeyError(f"{self.id} has no element {value}")


@dataclass(frozen=True)
class Float16DPT(DPT):
    """DPT 9.x descriptor; bounds must lie inside the 2-byte float domain."""

    def __post_init__(self):
        for limit in (self.lower, self.upper):
            try:
                value = float(limit)
            except ValueError as e:
                raise DPTFormatError(f"{self.id}: invalid DPT range", limit) from e
            if not FLOAT16_MIN <= value <= FLOAT16_MAX:
                raise DPTFormatError(f"{self.id}: limit not in valid DPT range", limit)
