"""DPT 11.001 — date.

3 bytes:  000DDDDD  0000MMMM  0YYYYYYY
The year is stored relative: 90..99 → 1990..1999, 0..89 → 2000..2089.
Text form is ISO "yyyy-mm-dd".
"""

import re
from datetime import date
from typing import Any

from .descriptor import DPT
from .errors import DPTFormatError, DPTUsageError
from .translator import Translator, sub_types

DPT_DATE = DPT("11.001", "Date", "1990-01-01", "2089-12-31")


def absolute_year(relative: int) -> int:
    if not 0 <= relative <= 99:
        raise DPTUsageError("relative year out of range [0..99]")
    return relative + (2000 if relative < 90 else 1900)


def _pack(dst: bytearray, index: int, year: int, month: int, day: int) -> None:
    if not 1990 <= year <= 2089:
        raise DPTUsageError("year out of range [1990..2089]")
    if not 1 <= month <= 12:
        raise DPTUsageError("month out of range [1..12]")
    if not 1 <= day <= 31:
        raise DPTUsageError("day out of range [1..31]")
    i = 3 * index
    dst[i : i + 3] = bytes([day, month, year % 100])


class DateTranslator(Translator):
    MAIN_NUMBER = 11
    DESCRIPTION = "Date"
    TYPE_SIZE = 3
    SUB_TYPES = sub_types(DPT_DATE)

    def _initial_record(self) -> bytearray:
        # 2000-01-01
        return bytearray([1, 1, 0])

    def set_date(self, year: int, month: int, day: int) -> None:
        buf = bytearray(3)
        _pack(buf, 0, year, month, day)
        self._data = buf

    @property
    def day(self) -> int:
        return self._data[0]

    @property
    def month(self) -> int:
        return self._data[1]

    @property
    def year(self) -> int:
        return absolute_year(self._data[2])

    def as_date(self) -> date:
        """First item as datetime.date; ValueError for impossible dates."""
        return date(self.year, self.month, self.day)

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            tokens = [t for t in re.split(r"[-\s]+", value.strip()) if t]
            if len(tokens) != 3:
                raise self._error("invalid date", value)
            try:
                year, month, day = (int(t) for t in tokens)
            except ValueError as e:
                raise self._error("invalid number", value) from e
            try:
                _pack(dst, index, year, month, day)
            except DPTUsageError as e:
                raise self._error(f"invalid date, {e}", value) from e
        elif isinstance(value, date):
            _pack(dst, index, value.year, value.month, value.day)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")

    def _from_dpt(self, index: int) -> str:
        i = 3 * index
        day, month, year = self._data[i], self._data[i + 1], absolute_year(self._data[i + 2])
        return f"{year}-{month:02d}-{day:02d}"

    def _check_item(self, buf: bytearray, index: int) -> None:
        i = 3 * index
        if buf[i] & ~0x1F or buf[i + 1] & ~0x0F or buf[i + 2] & ~0x7F:
            self._warn_reserved()
        buf[i] &= 0x1F
        buf[i + 1] &= 0x0F
        buf[i + 2] &= 0x7F
        try:
            _pack(buf, index, absolute_year(buf[i + 2]), buf[i + 1], buf[i])
        except DPTUsageError as e:
            raise DPTFormatError(f"{self._prefix()}invalid date, {e}", buf[i : i + 3].hex()) from e
