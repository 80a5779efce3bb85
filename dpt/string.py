"""Character and string DPTs.

  4.x   one character, 4.001 ASCII (7 bit) or 4.002 ISO-8859-1
  16.x  fixed 14 byte string, zero padded, 16.000 ASCII or 16.001 ISO-8859-1
  24.x  variable length ISO-8859-1 string, zero terminated
  28.x  variable length UTF-8 string, zero terminated

Characters outside the character set of a 16.x string are replaced by "?",
both when encoding text and when decoding data. A single 4.x character has
no replacement and is rejected instead.
"""

import logging
from typing import Any

from .descriptor import DPT
from .errors import DPTFormatError, DPTUsageError
from .translator import Translator, sub_types

logger = logging.getLogger("knxdpt.string")

REPLACEMENT = ord("?")

# ---------------------------------------------------------------------------
# 4.x — character
# ---------------------------------------------------------------------------

DPT_CHAR_ASCII = DPT("4.001", "Character (ASCII)", "0", "127")
DPT_CHAR_8859_1 = DPT("4.002", "Character (ISO-8859-1)", "0", "255")


def _char_limit(dpt: DPT) -> int:
    return int(dpt.upper)


class CharacterTranslator(Translator):
    MAIN_NUMBER = 4
    DESCRIPTION = "Character"
    TYPE_SIZE = 1
    SUB_TYPES = sub_types(DPT_CHAR_ASCII, DPT_CHAR_8859_1)

    @property
    def char(self) -> str:
        return chr(self._data[0])

    def numeric_value(self) -> int:
        return self._data[0]

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            if len(value) != 1:
                raise self._error("expected a single character", value)
            code = ord(value)
            if code > _char_limit(self.dpt):
                raise self._error("character not in character set", value)
        elif isinstance(value, int):
            code = value
            if not 0 <= code <= _char_limit(self.dpt):
                raise self._range_error(value)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        dst[index] = code

    def _from_dpt(self, index: int) -> str:
        return chr(self._data[index])

    def _check_item(self, buf: bytearray, index: int) -> None:
        if buf[index] > _char_limit(self.dpt):
            self._warn_reserved()
            buf[index] &= 0x7F


# ---------------------------------------------------------------------------
# 16.x — 14 byte string
# ---------------------------------------------------------------------------

DPT_STRING_ASCII = DPT("16.000", "ASCII string", "", "")
DPT_STRING_8859_1 = DPT("16.001", "ISO-8859-1 string (Latin 1)", "", "")

STRING_LENGTH = 14


def _encode_chars(text: str, max_char: int) -> bytes:
    return bytes(ord(c) if ord(c) <= max_char else REPLACEMENT for c in text)


class StringTranslator(Translator):
    MAIN_NUMBER = 16
    DESCRIPTION = "String"
    TYPE_SIZE = STRING_LENGTH
    SUB_TYPES = sub_types(DPT_STRING_ASCII, DPT_STRING_8859_1)

    def _max_char(self) -> int:
        return 0x7F if self.dpt is DPT_STRING_ASCII else 0xFF

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if not isinstance(value, str):
            raise DPTUsageError(f"DPT {self.dpt.id}: expected text value, got {value!r}")
        if len(value) > STRING_LENGTH:
            raise self._error(f"maximum KNX string length is {STRING_LENGTH} characters", value)
        encoded = _encode_chars(value, self._max_char())
        offset = index * STRING_LENGTH
        dst[offset : offset + STRING_LENGTH] = encoded.ljust(STRING_LENGTH, b"\x00")

    def _from_dpt(self, index: int) -> str:
        item = self._item(index)
        end = item.find(0)
        if end >= 0:
            item = item[:end]
        return item.decode("latin-1")

    def _check_item(self, buf: bytearray, index: int) -> None:
        max_char = self._max_char()
        offset = index * STRING_LENGTH
        replaced = 0
        for i in range(offset, offset + STRING_LENGTH):
            if buf[i] > max_char:
                buf[i] = REPLACEMENT
                replaced += 1
        if replaced:
            logger.debug(
                "DPT %s: replaced %d characters outside the character set", self.dpt.id, replaced
            )


# ---------------------------------------------------------------------------
# 24.x / 28.x — variable length strings
# ---------------------------------------------------------------------------

DPT_STRING_VARIABLE = DPT("24.001", "Character string (ISO-8859-1)", "", "")
DPT_UTF8 = DPT("28.001", "UTF-8 string", "", "")

# Upper limit for a decoded record, far above any string seen on a KNX network
MAX_LENGTH = 1024 * 1024


class _VariableStringTranslator(Translator):
    """Items are zero terminated strings of differing length.

    TYPE_SIZE is 0; type_size reports the length of the first item,
    terminator included.
    """

    TYPE_SIZE = 0
    ENCODING = "latin-1"

    def _initial_record(self) -> bytearray:
        return bytearray(1)

    @property
    def type_size(self) -> int:
        return self._data.index(0) + 1

    @property
    def items(self) -> int:
        return self._data.count(0)

    def get_data(self, dst: bytearray, offset: int = 0) -> bytearray:
        if offset < 0 or offset > len(dst):
            raise DPTUsageError(f"illegal offset {offset}")
        if len(dst) - offset < len(self._data):
            raise DPTUsageError(
                f"insufficient space in destination range for DPT {self.dpt.id} "
                f"(length {len(dst) - offset} < {len(self._data)})"
            )
        dst[offset : offset + len(self._data)] = self._data
        return dst

    def set_data(self, data: bytes, offset: int = 0) -> None:
        if offset < 0 or offset > len(data):
            raise DPTUsageError(f"illegal offset {offset}")
        length = len(data) - offset
        if length == 0:
            raise DPTFormatError(f"{self._prefix()}data length 0 < minimum of 1 byte")
        if length > MAX_LENGTH:
            raise DPTFormatError(
                f"{self._prefix()}data length {length} exceeds limit of {MAX_LENGTH} bytes"
            )
        if data[-1] != 0:
            raise DPTFormatError(f"{self._prefix()}string not zero terminated")
        self._data = bytearray(data[offset:])

    def set_value(self, value: Any) -> None:
        self.set_values(value)

    def set_values(self, *values: Any) -> None:
        if not values:
            return
        buf = bytearray()
        for value in values:
            buf += self._encode(value) + b"\x00"
        self._data = buf

    def _encode(self, value: Any) -> bytes:
        if not isinstance(value, str):
            raise DPTUsageError(f"DPT {self.dpt.id}: expected text value, got {value!r}")
        if "\x00" in value:
            raise self._error("string contains a NUL character", value)
        encoded = value.encode(self.ENCODING, errors="replace")
        if len(encoded) >= MAX_LENGTH:
            raise self._error(f"string exceeds limit of {MAX_LENGTH} bytes", value)
        return encoded

    def _item(self, index: int) -> bytes:
        start = 0
        for _ in range(index):
            start = self._data.index(0, start) + 1
        end = self._data.index(0, start)
        return bytes(self._data[start : end + 1])

    def _from_dpt(self, index: int) -> str:
        return self._item(index)[:-1].decode(self.ENCODING, errors="replace")


class VariableStringTranslator(_VariableStringTranslator):
    MAIN_NUMBER = 24
    DESCRIPTION = "Variable length string"
    SUB_TYPES = sub_types(DPT_STRING_VARIABLE)


class Utf8Translator(_VariableStringTranslator):
    MAIN_NUMBER = 28
    DESCRIPTION = "UTF-8 string"
    SUB_TYPES = sub_types(DPT_UTF8)
    ENCODING = "utf-8"
