"""DPT 10.001 — time of day.

3 bytes:  DDDHHHHH  00MMMMMM  00SSSSSS
day of week 0 (no day), 1 = Monday .. 7 = Sunday, hour 0..23, minute and
second 0..59. Text form is "Mon, 12:30:00", or "12:30:00" without a day.

The hh:mm:ss part is rendered and parsed by a TimeFormat. Each translator
takes the process-wide default at construction (see apply_settings); the
day prefix is handled the same way for every format.
"""

import re
from datetime import datetime, time
from typing import Any, Optional, Union

from .descriptor import DPT
from .errors import DPTFormatError, DPTUsageError
from .translator import Translator, sub_types

DAYS = ("no-day", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DPT_TIMEOFDAY = DPT("10.001", "Time of day", "no-day, 00:00:00", "Sun, 23:59:59")

_DAY_PREFIX = re.compile(r"^\s*([A-Za-z-]+)\s*[,\s]\s*(.*)$", re.DOTALL)


# ---------------------------------------------------------------------------
# Time formats
# ---------------------------------------------------------------------------


class TimeFormat:
    """Formatting strategy for the hour, minute and second fields."""

    def format(self, hour: int, minute: int, second: int) -> str:
        raise NotImplementedError

    def parse(self, text: str) -> tuple[int, int, int]:
        """Return (hour, minute, second); raise ValueError on bad text."""
        raise NotImplementedError


class DefaultTimeFormat(TimeFormat):
    """hh:mm:ss, zero padded. Parsing also accepts spaces or commas."""

    def format(self, hour: int, minute: int, second: int) -> str:
        return f"{hour:02d}:{minute:02d}:{second:02d}"

    def parse(self, text: str) -> tuple[int, int, int]:
        tokens = [t for t in re.split(r"[:\s,]+", text.strip()) if t]
        if len(tokens) != 3:
            raise ValueError(f"expected hh:mm:ss, got {text!r}")
        hour, minute, second = (int(t) for t in tokens)
        return hour, minute, second


class StrftimeTimeFormat(TimeFormat):
    """Time part rendered with strftime and parsed with strptime."""

    def __init__(self, pattern: str):
        if not pattern:
            raise ValueError("empty time format pattern")
        self.pattern = pattern

    def format(self, hour: int, minute: int, second: int) -> str:
        return time(hour, minute, second).strftime(self.pattern)

    def parse(self, text: str) -> tuple[int, int, int]:
        t = datetime.strptime(text.strip(), self.pattern)
        return t.hour, t.minute, t.second

    def __repr__(self) -> str:
        return f"StrftimeTimeFormat({self.pattern!r})"


DEFAULT_TIME_FORMAT = DefaultTimeFormat()

_default_format: Optional[TimeFormat] = None


def set_default_time_format(fmt: Optional[TimeFormat]) -> None:
    """Install the format new time translators use (None → hh:mm:ss)."""
    global _default_format
    _default_format = fmt


def get_default_time_format() -> TimeFormat:
    return _default_format or DEFAULT_TIME_FORMAT


# ---------------------------------------------------------------------------
# Translator
# ---------------------------------------------------------------------------


def _check_fields(day: int, hour: int, minute: int, second: int) -> None:
    if not 0 <= day <= 7:
        raise DPTUsageError("day of week out of range [0..7]")
    if not 0 <= hour <= 23:
        raise DPTUsageError("hour out of range [0..23]")
    if not 0 <= minute <= 59:
        raise DPTUsageError("minute out of range [0..59]")
    if not 0 <= second <= 59:
        raise DPTUsageError("second out of range [0..59]")


def _pack(dst: bytearray, index: int, day: int, hour: int, minute: int, second: int) -> None:
    _check_fields(day, hour, minute, second)
    i = 3 * index
    dst[i : i + 3] = bytes([(day << 5) | hour, minute, second])


class TimeTranslator(Translator):
    MAIN_NUMBER = 10
    DESCRIPTION = "Time"
    TYPE_SIZE = 3
    SUB_TYPES = sub_types(DPT_TIMEOFDAY)

    def __init__(self, dpt: Union[DPT, str], time_format: Optional[TimeFormat] = None):
        super().__init__(dpt)
        self.time_format = time_format or get_default_time_format()

    def _new_instance(self) -> "TimeTranslator":
        return TimeTranslator(self.dpt, self.time_format)

    # ------------------------------------------------------------------
    # Typed access (first item)
    # ------------------------------------------------------------------

    def set_time(self, day: int, hour: int, minute: int, second: int) -> None:
        """Set all four fields; day 0 means no day."""
        buf = bytearray(3)
        _pack(buf, 0, day, hour, minute, second)
        self._data = buf

    def set_milliseconds(self, milliseconds: int) -> None:
        """Set from a POSIX timestamp in ms, in local time."""
        dt = datetime.fromtimestamp(milliseconds / 1000)
        self.set_time(dt.isoweekday(), dt.hour, dt.minute, dt.second)

    @property
    def day_of_week(self) -> int:
        return self._data[0] >> 5

    @property
    def hour(self) -> int:
        return self._data[0] & 0x1F

    @property
    def minute(self) -> int:
        return self._data[1]

    @property
    def second(self) -> int:
        return self._data[2]

    def time_of_day(self) -> time:
        return time(self.hour, self.minute, self.second)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            day, hour, minute, second = self._parse(value)
        elif isinstance(value, datetime):
            day, hour, minute, second = value.isoweekday(), value.hour, value.minute, value.second
        elif isinstance(value, time):
            day, hour, minute, second = 0, value.hour, value.minute, value.second
        elif isinstance(value, tuple) and len(value) == 4:
            day, hour, minute, second = value
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        try:
            _pack(dst, index, day, hour, minute, second)
        except DPTUsageError as e:
            if isinstance(value, str):
                raise self._error(f"invalid time, {e}", value) from e
            raise

    def _parse(self, text: str) -> tuple[int, int, int, int]:
        day = 0
        rest = text
        m = _DAY_PREFIX.match(text)
        if m:
            token = m.group(1).lower()
            for i, name in enumerate(DAYS):
                if token == name.lower():
                    day, rest = i, m.group(2)
                    break
        try:
            hour, minute, second = self.time_format.parse(rest)
        except ValueError as e:
            raise self._error("invalid time", text) from e
        return day, hour, minute, second

    def _from_dpt(self, index: int) -> str:
        i = 3 * index
        day = self._data[i] >> 5
        text = self.time_format.format(self._data[i] & 0x1F, self._data[i + 1], self._data[i + 2])
        if day:
            return f"{DAYS[day]}, {text}"
        return text

    def _check_item(self, buf: bytearray, index: int) -> None:
        i = 3 * index
        if buf[i + 1] & ~0x3F or buf[i + 2] & ~0x3F:
            self._warn_reserved()
        buf[i + 1] &= 0x3F
        buf[i + 2] &= 0x3F
        try:
            _check_fields(buf[i] >> 5, buf[i] & 0x1F, buf[i + 1], buf[i + 2])
        except DPTUsageError as e:
            raise DPTFormatError(f"{self._prefix()}invalid time, {e}", buf[i : i + 3].hex()) from e
