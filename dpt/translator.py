"""DPT translator base class.

A translator is bound to one datapoint type for its lifetime and owns a
record of N items, each exactly type_size bytes wide. Values flow in two
directions:

    encode: set_value("21.5 °C") / set_value(21.5) → data == b"\\x0c\\x33"
    decode: set_data(b"\\x0c\\x33")              → value == "21.5 °C"

Encoding is atomic: a failing set_value/set_values leaves the current
record untouched. Translators are cheap and not thread-safe; create one per
use site.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from .config import get_settings
from .descriptor import DPT
from .errors import DPTFormatError, DPTNotFoundError, DPTRangeError, DPTUsageError

logger = logging.getLogger("knxdpt.translator")


class Translator:
    """Base class for all DPT translators."""

    # Overridden by every concrete translator
    MAIN_NUMBER: int = 0
    DESCRIPTION: str = ""
    TYPE_SIZE: int = 1
    SUB_TYPES: dict[str, DPT] = {}

    def __init__(self, dpt: Union[DPT, str]):
        dpt_id = dpt.id if isinstance(dpt, DPT) else dpt
        t = self.SUB_TYPES.get(dpt_id)
        if t is None:
            raise DPTNotFoundError(f"DPT {dpt_id} is not available in {self.DESCRIPTION}")
        self.dpt = t
        self.append_unit = get_settings().append_unit
        self._data = self._initial_record()

    # ------------------------------------------------------------------
    # Record access
    # ------------------------------------------------------------------

    @property
    def type_size(self) -> int:
        return self.TYPE_SIZE

    @property
    def sub_types(self) -> dict[str, DPT]:
        return self.SUB_TYPES

    @property
    def items(self) -> int:
        return len(self._data) // self.TYPE_SIZE

    @property
    def data(self) -> bytes:
        """The raw record, items × type_size bytes."""
        return bytes(self._data)

    def get_data(self, dst: bytearray, offset: int = 0) -> bytearray:
        """Copy as many whole items as fit into dst[offset:]."""
        if offset < 0 or offset > len(dst):
            raise DPTUsageError(f"illegal offset {offset}")
        room = (len(dst) - offset) // self.TYPE_SIZE * self.TYPE_SIZE
        end = min(len(self._data), room)
        if end == 0:
            raise DPTUsageError(
                f"insufficient space in destination range for DPT {self.dpt.id} "
                f"(length {len(dst) - offset} < {self.TYPE_SIZE})"
            )
        dst[offset : offset + end] = self._data[:end]
        return dst

    def set_data(self, data: bytes, offset: int = 0) -> None:
        """Decode path: take raw bytes (one or more items) from the bus."""
        if offset < 0 or offset > len(data):
            raise DPTUsageError(f"illegal offset {offset}")
        length = len(data) - offset
        if length == 0 or length % self.TYPE_SIZE:
            raise DPTFormatError(
                f"{self._prefix()}data length {length} is not a multiple of "
                f"datapoint type width {self.TYPE_SIZE}"
            )
        buf = bytearray(data[offset:])
        for i in range(length // self.TYPE_SIZE):
            self._check_item(buf, i)
        self._data = buf

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def set_value(self, value: Any) -> None:
        """Encode path: set a single item from text or a native value."""
        buf = self._initial_record()
        self._to_dpt(value, buf, 0)
        self._data = buf

    def set_values(self, *values: Any) -> None:
        """Set one item per value; no values leaves the record unchanged."""
        if not values:
            return
        buf = bytearray(self.TYPE_SIZE * len(values))
        for i, value in enumerate(values):
            self._to_dpt(value, buf, i)
        self._data = buf

    @property
    def value(self) -> str:
        """Text of the first item."""
        return self._from_dpt(0)

    def all_values(self) -> list[str]:
        return [self._from_dpt(i) for i in range(self.items)]

    def numeric_value(self) -> float:
        """Numeric value of the first item, where the DPT has one."""
        raise DPTFormatError(f"{self._prefix()}no simple numeric representation possible")

    def split(self) -> list[Translator]:
        """One translator per item (self if there is a single item)."""
        if self.items <= 1:
            return [self]
        parts = []
        for i in range(self.items):
            t = self._new_instance()
            t.append_unit = self.append_unit
            t._data = bytearray(self._item(i))
            parts.append(t)
        return parts

    def __str__(self) -> str:
        return f"DPT {self.dpt.id} [{', '.join(self.all_values())}]"

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def _initial_record(self) -> bytearray:
        return bytearray(self.TYPE_SIZE)

    def _new_instance(self) -> Translator:
        """A fresh translator for the same DPT, sharing no state with self."""
        return type(self)(self.dpt)

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        """Encode value into item `index` of dst."""
        raise NotImplementedError

    def _from_dpt(self, index: int) -> str:
        """Render item `index` as text."""
        raise NotImplementedError

    def _check_item(self, buf: bytearray, index: int) -> None:
        """Validate (and optionally mask) item `index` of incoming data."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _item(self, index: int) -> bytes:
        start = index * self.TYPE_SIZE
        return bytes(self._data[start : start + self.TYPE_SIZE])

    def _prefix(self) -> str:
        return f"{self.dpt.id} {self.dpt.description}: "

    def _append_unit(self, text: str) -> str:
        if self.append_unit and self.dpt.unit:
            return f"{text} {self.dpt.unit}"
        return text

    def _remove_unit(self, text: str) -> str:
        unit = self.dpt.unit
        if unit:
            i = text.rfind(unit)
            if i > -1:
                return text[:i].strip()
        return text.strip()

    def _error(self, message: str, item: Any = None) -> DPTFormatError:
        return DPTFormatError(self._prefix() + message, None if item is None else str(item))

    def _range_error(self, value: Any) -> DPTRangeError:
        return DPTRangeError(
            f"{self._prefix()}translation error, input value out of range "
            f"[{self.dpt.lower}..{self.dpt.upper}]",
            value,
            self.dpt.lower,
            self.dpt.upper,
        )

    def _warn_reserved(self) -> None:
        logger.warning("DPT %s %s: reserved bits not 0", self.dpt.id, self.dpt.description)


def sub_types(*dpts: DPT) -> dict[str, DPT]:
    """Build a SUB_TYPES table from descriptors, keeping declaration order."""
    return {d.id: d for d in dpts}
