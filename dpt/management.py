"""Device management DPTs — 217.001 version and 219.001 alarm info.

217.001, 2 bytes:  MMMMMVVV VVRRRRRR    magic number, version, revision
    "1.2.3" ⇄ 0x08 0x83

219.001, 6 bytes:  log number, priority, application area, error class,
                   attributes (4 bit), alarm status (3 bit)
    "log 1, priority 2, area 3, error 4, attributes 5, status 1"
"""

import re
from typing import Any, Sequence

from .descriptor import DPT
from .errors import DPTUsageError
from .numbers import decode_int
from .translator import Translator, sub_types

# ---------------------------------------------------------------------------
# 217.001 — version
# ---------------------------------------------------------------------------

DPT_VERSION = DPT("217.001", "Version", "0.0.0", "31.31.63")

_VERSION_LIMITS = (("magic number", 31), ("version", 31), ("revision", 63))


class VersionTranslator(Translator):
    MAIN_NUMBER = 217
    DESCRIPTION = "Version"
    TYPE_SIZE = 2
    SUB_TYPES = sub_types(DPT_VERSION)

    def set_version(self, magic: int, version: int, revision: int) -> None:
        for (name, limit), part in zip(_VERSION_LIMITS, (magic, version, revision)):
            if not 0 <= part <= limit:
                raise DPTUsageError(f"{name} out of range [0..{limit}]")
        self._data = bytearray(_pack_version(magic, version, revision))

    @property
    def magic_number(self) -> int:
        return self._raw(0) >> 11

    @property
    def version(self) -> int:
        return (self._raw(0) >> 6) & 0x1F

    @property
    def revision(self) -> int:
        return self._raw(0) & 0x3F

    def _raw(self, index: int) -> int:
        return int.from_bytes(self._item(index), "big")

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            parts = value.strip().split(".")
            if len(parts) != 3:
                raise self._error("version requires magic.version.revision", value)
            try:
                parts = [decode_int(p) for p in parts]
            except ValueError as e:
                raise self._error("wrong value format", value) from e
        elif isinstance(value, Sequence) and len(value) == 3:
            parts = list(value)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        for (_, limit), part in zip(_VERSION_LIMITS, parts):
            if not isinstance(part, int):
                raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
            if not 0 <= part <= limit:
                raise self._range_error(value)
        offset = index * self.TYPE_SIZE
        dst[offset : offset + 2] = _pack_version(*parts)

    def _from_dpt(self, index: int) -> str:
        raw = self._raw(index)
        return f"{raw >> 11}.{(raw >> 6) & 0x1F}.{raw & 0x3F}"


def _pack_version(magic: int, version: int, revision: int) -> bytes:
    return ((magic << 11) | (version << 6) | revision).to_bytes(2, "big")


# ---------------------------------------------------------------------------
# 219.001 — alarm info
# ---------------------------------------------------------------------------

DPT_ALARM_INFO = DPT(
    "219.001",
    "Alarm Info",
    "log 0, priority 0, area 0, error 0, attributes 0, status 0",
    "log 255, priority 3, area 255, error 255, attributes 15, status 7",
)

# (text key, upper bound, reserved bit mask of the byte)
_ALARM_FIELDS = (
    ("log", 255, 0x00),
    ("priority", 3, 0xFC),
    ("area", 255, 0x00),
    ("error", 255, 0x00),
    ("attributes", 15, 0xF0),
    ("status", 7, 0xF8),
)

ACK_SUPPORTED = 0x08
TIMESTAMP_SUPPORTED = 0x04
ALARM_TEXT_SUPPORTED = 0x02
ERROR_CODE_SUPPORTED = 0x01

IN_ALARM = 0x01
UNACKNOWLEDGED = 0x02
LOCKED = 0x04

_FIELD = re.compile(r"\s*([a-z]+)\s+(\S+?)\s*(?:,|$)", re.IGNORECASE)


class AlarmInfoTranslator(Translator):
    MAIN_NUMBER = 219
    DESCRIPTION = "Alarm Info"
    TYPE_SIZE = 6
    SUB_TYPES = sub_types(DPT_ALARM_INFO)

    def set_alarm(
        self,
        log_number: int,
        priority: int,
        area: int,
        error_class: int,
        attributes: int = 0,
        status: int = 0,
    ) -> None:
        fields = (log_number, priority, area, error_class, attributes, status)
        for (name, limit, _), field in zip(_ALARM_FIELDS, fields):
            if not 0 <= field <= limit:
                raise DPTUsageError(f"{name} out of range [0..{limit}]")
        self._data = bytearray(fields)

    @property
    def log_number(self) -> int:
        return self._data[0]

    @property
    def priority(self) -> int:
        return self._data[1]

    @property
    def application_area(self) -> int:
        return self._data[2]

    @property
    def error_class(self) -> int:
        return self._data[3]

    @property
    def attributes(self) -> int:
        return self._data[4]

    @property
    def status(self) -> int:
        return self._data[5]

    @property
    def in_alarm(self) -> bool:
        return bool(self._data[5] & IN_ALARM)

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            fields = self._parse(value)
        elif isinstance(value, dict):
            fields = [value.get(key, 0) for key, _, _ in _ALARM_FIELDS]
        elif isinstance(value, Sequence) and len(value) == self.TYPE_SIZE:
            fields = list(value)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        for (_, limit, _), field in zip(_ALARM_FIELDS, fields):
            if not isinstance(field, int):
                raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
            if not 0 <= field <= limit:
                raise self._range_error(value)
        offset = index * self.TYPE_SIZE
        dst[offset : offset + self.TYPE_SIZE] = bytes(fields)

    def _parse(self, text: str) -> list[int]:
        parsed: dict[str, int] = {}
        pos = 0
        text = text.strip()
        while pos < len(text):
            m = _FIELD.match(text, pos)
            if m is None:
                raise self._error("wrong value format", text[pos:])
            key = m.group(1).lower()
            if key not in (k for k, _, _ in _ALARM_FIELDS) or key in parsed:
                raise self._error("unknown or repeated alarm field", m.group(1))
            try:
                parsed[key] = decode_int(m.group(2))
            except ValueError as e:
                raise self._error("wrong value format", m.group(2)) from e
            pos = m.end()
        missing = [k for k, _, _ in _ALARM_FIELDS[:4] if k not in parsed]
        if missing:
            raise self._error(f"missing alarm field '{missing[0]}'", text)
        return [parsed.get(key, 0) for key, _, _ in _ALARM_FIELDS]

    def _from_dpt(self, index: int) -> str:
        item = self._item(index)
        return ", ".join(f"{key} {b}" for (key, _, _), b in zip(_ALARM_FIELDS, item))

    def _check_item(self, buf: bytearray, index: int) -> None:
        offset = index * self.TYPE_SIZE
        reserved = [(offset + i, mask) for i, (_, _, mask) in enumerate(_ALARM_FIELDS) if mask]
        if any(buf[i] & mask for i, mask in reserved):
            self._warn_reserved()
            for i, mask in reserved:
                buf[i] &= ~mask & 0xFF
