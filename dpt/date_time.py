"""DPT 19.001 — date with time.

8 bytes:

    0  YYYYYYYY   year - 1900
    1  0000MMMM   month 1..12
    2  000DDDDD   day 1..31
    3  WWWHHHHH   day of week 0 (any day), 1 = Monday .. 7, hour 0..24
    4  00MMMMMM   minute
    5  00SSSSSS   second
    6  flags      fault, working day, no working day, no year, no date,
                  no day of week, no time, summer time
    7  Q0000000   clock synchronised to an external time signal

Hour 24 is only valid as 24:00:00. Each part of the text form is present
only when its field is valid:

    "2024/05/17, Fri (workday) 14:30:00 DST, in sync"
    "14:30:00, no sync"
"""

import re
from datetime import date, datetime, time, timedelta
from time import localtime
from typing import Any

from .descriptor import DPT
from .errors import DPTFormatError, DPTUsageError
from .translator import Translator, sub_types

DPT_DATE_TIME = DPT(
    "19.001", "Date with time", "1900/01/01 00:00:00", "2155/12/31 24:00:00"
)

# Fields for is_valid_field / set_valid_field
YEAR = 0
DATE = 1
TIME = 2
DAY_OF_WEEK = 3
WORKDAY = 4
# Flags for flag / set_flag
DAYLIGHT = 5
CLOCK_FAULT = 6
CLOCK_SYNC = 7

MIN_YEAR = 1900
MAX_YEAR = MIN_YEAR + 0xFF

DAYS = ("Any day", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Byte 6
DST = 0x01
NO_TIME = 0x02
NO_DOW = 0x04
NO_DATE = 0x08
NO_YEAR = 0x10
NO_WD = 0x20
WD = 0x40
FAULT = 0x80
# Byte 7
QUALITY = 0x80

_FIELD_MASKS = {YEAR: NO_YEAR, DATE: NO_DATE, TIME: NO_TIME, DAY_OF_WEEK: NO_DOW, WORKDAY: NO_WD}
_FLAG_MASKS = {WORKDAY: WD, DAYLIGHT: DST, CLOCK_FAULT: FAULT}

_RANGES = {
    "year": (MIN_YEAR, MAX_YEAR),
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 24),
    "minute": (0, 59),
    "second": (0, 59),
    "day of week": (0, 7),
}

_BYTE_MASKS = (0xFF, 0x0F, 0x1F, 0xFF, 0x3F, 0x3F, 0xFF, 0x80)

_SEPARATORS = re.compile(r"[:\-/ (,.)]+")


def _check(name: str, value: int) -> None:
    lo, hi = _RANGES[name]
    if not lo <= value <= hi:
        raise DPTUsageError(f"{name} out of range [{lo}..{hi}]: {value}")


def _check_24_hours(hour: int, minute: int, second: int) -> None:
    if hour == 24 and (minute or second):
        raise DPTUsageError("incorrect time, hour 24 requires 24:00:00")


class DateTimeTranslator(Translator):
    MAIN_NUMBER = 19
    DESCRIPTION = "Date with Time"
    TYPE_SIZE = 8
    SUB_TYPES = sub_types(DPT_DATE_TIME)

    def _initial_record(self) -> bytearray:
        return bytearray([0, 1, 1, 0, 0, 0, NO_WD | NO_DOW, 0])

    # ------------------------------------------------------------------
    # Typed access (first item)
    # ------------------------------------------------------------------

    def set_date(self, year: int, month: int, day: int) -> None:
        """Set year, month and day; marks year and date valid."""
        _check("year", year)
        _check("month", month)
        _check("day", day)
        d = self._data
        d[0], d[1], d[2] = year - MIN_YEAR, month, day
        d[6] &= ~(NO_YEAR | NO_DATE) & 0xFF

    def set_time(self, hour: int, minute: int, second: int) -> None:
        """Set the time of day; marks the time valid."""
        _check("hour", hour)
        _check("minute", minute)
        _check("second", second)
        _check_24_hours(hour, minute, second)
        d = self._data
        d[3] = (d[3] & 0xE0) | hour
        d[4], d[5] = minute, second
        d[6] &= ~NO_TIME & 0xFF

    def set_day_of_week(self, day: int) -> None:
        """Set the day of week (0 = any day); marks it valid."""
        _check("day of week", day)
        d = self._data
        d[3] = (day << 5) | (d[3] & 0x1F)
        d[6] &= ~NO_DOW & 0xFF

    def set_milliseconds(self, milliseconds: int) -> None:
        """Set all fields from a POSIX timestamp in ms, in local time."""
        seconds = milliseconds / 1000
        dt = datetime.fromtimestamp(seconds)
        self._data = self._initial_record()
        self._pack_datetime(self._data, 0, dt, localtime(seconds).tm_isdst > 0)

    @property
    def year(self) -> int:
        return self._data[0] + MIN_YEAR

    @property
    def month(self) -> int:
        return self._data[1]

    @property
    def day(self) -> int:
        return self._data[2]

    @property
    def day_of_week(self) -> int:
        return self._data[3] >> 5

    @property
    def hour(self) -> int:
        return self._data[3] & 0x1F

    @property
    def minute(self) -> int:
        return self._data[4]

    @property
    def second(self) -> int:
        return self._data[5]

    def is_valid_field(self, field: int) -> bool:
        """Whether YEAR, DATE, TIME, DAY_OF_WEEK or WORKDAY carries a value."""
        return not self._data[6] & self._field_mask(field)

    def set_valid_field(self, field: int, valid: bool) -> None:
        mask = self._field_mask(field)
        if valid:
            self._data[6] &= ~mask & 0xFF
        else:
            self._data[6] |= mask

    def flag(self, field: int) -> bool:
        """State of WORKDAY, DAYLIGHT, CLOCK_FAULT or CLOCK_SYNC."""
        if field == CLOCK_SYNC:
            return bool(self._data[7] & QUALITY)
        return bool(self._data[6] & self._flag_mask(field))

    def set_flag(self, field: int, value: bool) -> None:
        if field == CLOCK_SYNC:
            index, mask = 7, QUALITY
        else:
            index, mask = 6, self._flag_mask(field)
        if value:
            self._data[index] |= mask
        else:
            self._data[index] &= ~mask & 0xFF

    @staticmethod
    def _field_mask(field: int) -> int:
        mask = _FIELD_MASKS.get(field)
        if mask is None:
            raise DPTUsageError(f"illegal field {field}")
        return mask

    @staticmethod
    def _flag_mask(field: int) -> int:
        mask = _FLAG_MASKS.get(field)
        if mask is None:
            raise DPTUsageError(f"illegal flag {field}")
        return mask

    def to_datetime(self) -> datetime:
        """First item as datetime; 24:00:00 becomes midnight of the next day.

        Raises DPTFormatError if the clock is faulty, year or date are not
        valid, the date does not exist or the day of week differs.
        """
        return self._to_datetime(0)

    def validate(self) -> bool:
        """True if every item with a valid year and date is a real date."""
        try:
            for i in range(self.items):
                if not self._bit(i, NO_YEAR) and not self._bit(i, NO_DATE):
                    self._to_datetime(i)
        except DPTFormatError:
            return False
        return True

    def _bit(self, index: int, mask: int) -> bool:
        return bool(self._data[index * 8 + 6] & mask)

    def _to_datetime(self, index: int) -> datetime:
        i = index * 8
        d = self._data
        if self._bit(index, FAULT) or self._bit(index, NO_YEAR) or self._bit(index, NO_DATE):
            raise self._error("insufficient information for calendar")
        try:
            result = datetime(d[i] + MIN_YEAR, d[i + 1], d[i + 2])
        except ValueError as e:
            raise self._error(f"invalid calendar value, {e}") from e
        weekday = result.isoweekday()
        if not self._bit(index, NO_TIME):
            result += timedelta(hours=d[i + 3] & 0x1F, minutes=d[i + 4], seconds=d[i + 5])
        if not self._bit(index, NO_DOW) and d[i + 3] >> 5:
            if d[i + 3] >> 5 != weekday:
                raise self._error("differing day of week")
        return result

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, date) and not MIN_YEAR <= value.year <= MAX_YEAR:
            raise self._range_error(value)
        if isinstance(value, str):
            record = self._parse(value)
        elif isinstance(value, datetime):
            record = self._initial_record()
            dst_flag = bool(value.dst()) if value.tzinfo is not None else False
            self._pack_datetime(record, 0, value, dst_flag)
        elif isinstance(value, date):
            record = self._initial_record()
            record[0:3] = bytes([value.year - MIN_YEAR, value.month, value.day])
            record[3] = value.isoweekday() << 5
            record[6] = NO_WD | NO_TIME
        elif isinstance(value, time):
            record = self._initial_record()
            record[3:6] = bytes([value.hour, value.minute, value.second])
            record[6] = NO_WD | NO_DOW | NO_YEAR | NO_DATE
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        dst[index * 8 : index * 8 + 8] = record

    @staticmethod
    def _pack_datetime(dst: bytearray, index: int, value: datetime, daylight: bool) -> None:
        _check("year", value.year)
        i = index * 8
        dst[i : i + 6] = bytes(
            [
                value.year - MIN_YEAR,
                value.month,
                value.day,
                (value.isoweekday() << 5) | value.hour,
                value.minute,
                value.second,
            ]
        )
        dst[i + 6] = NO_WD | (DST if daylight else 0)
        dst[i + 7] = 0

    def _parse(self, text: str) -> bytearray:
        record = bytearray(8)
        flags = NO_WD | NO_YEAR | NO_DATE | NO_DOW | NO_TIME
        numbers: list[int] = []
        tokens = [t for t in _SEPARATORS.split(text.strip()) if t]
        seen_sync = False
        seen_day = False
        i = 0
        while i < len(tokens):
            token = tokens[i]
            word = token.lower()
            nxt = tokens[i + 1].lower() if i + 1 < len(tokens) else ""
            i += 1
            if token.isdigit():
                number = int(token)
                if MIN_YEAR <= number <= MAX_YEAR and flags & NO_YEAR:
                    record[0] = number - MIN_YEAR
                    flags &= ~NO_YEAR
                else:
                    numbers.append(number)
            elif word == "dst":
                flags |= DST
            elif word == "workday":
                flags = (flags & ~NO_WD) | WD
            elif word in ("no", "in") and nxt == "sync" and not seen_sync:
                seen_sync = True
                if word == "in":
                    record[7] = QUALITY
                i += 1
            elif word == "no" and nxt == "workday":
                flags &= ~(NO_WD | WD)
                i += 1
            elif not seen_day and (word == "any" and nxt == "day" or len(word) == 3):
                day = 0 if word == "any" else self._day_of_week(token)
                if word == "any":
                    i += 1
                seen_day = True
                record[3] = day << 5
                flags &= ~NO_DOW
            else:
                raise self._error("wrong date/time", token)

        if len(numbers) not in (0, 2, 3, 5):
            raise self._error("ambiguous date/time", text)
        try:
            if len(numbers) in (2, 5):
                month, day = numbers[0], numbers[1]
                _check("month", month)
                _check("day", day)
                record[1], record[2] = month, day
                flags &= ~NO_DATE
            if len(numbers) in (3, 5):
                hour, minute, second = numbers[-3:]
                _check("hour", hour)
                _check("minute", minute)
                _check("second", second)
                _check_24_hours(hour, minute, second)
                record[3] |= hour
                record[4], record[5] = minute, second
                flags &= ~NO_TIME
        except DPTUsageError as e:
            raise self._error(str(e), text) from e
        record[6] = flags
        return record

    def _day_of_week(self, token: str) -> int:
        prefix = token.lower()
        for day in range(1, len(DAYS)):
            if DAYS[day].lower().startswith(prefix):
                return day
        raise self._error("wrong weekday", token)

    def _from_dpt(self, index: int) -> str:
        i = index * 8
        d = self._data
        if self._bit(index, FAULT):
            return "corrupted date/time"
        text = ""
        if not self._bit(index, NO_YEAR):
            text += str(d[i] + MIN_YEAR)
        if not self._bit(index, NO_DATE):
            text += ("/" if text else "") + f"{d[i + 1]:02d}/{d[i + 2]:02d}"
        if not self._bit(index, NO_DOW):
            text += ", " + DAYS[d[i + 3] >> 5]
        if not self._bit(index, NO_WD):
            text += " (workday)" if self._bit(index, WD) else " (no workday)"
        if not self._bit(index, NO_TIME):
            text += f" {d[i + 3] & 0x1F:02d}:{d[i + 4]:02d}:{d[i + 5]:02d}"
            if self._bit(index, DST):
                text += " DST"
        text += ", in sync" if d[i + 7] & QUALITY else ", no sync"
        return text.lstrip(", ")

    def _check_item(self, buf: bytearray, index: int) -> None:
        i = index * 8
        reserved = False
        for k, mask in enumerate(_BYTE_MASKS):
            if buf[i + k] & ~mask:
                reserved = True
                buf[i + k] &= mask
        if reserved:
            self._warn_reserved()
        flags = buf[i + 6]
        try:
            if not flags & NO_DATE:
                _check("month", buf[i + 1])
                _check("day", buf[i + 2])
            if not flags & NO_TIME:
                hour, minute, second = buf[i + 3] & 0x1F, buf[i + 4], buf[i + 5]
                _check("hour", hour)
                _check("minute", minute)
                _check("second", second)
                _check_24_hours(hour, minute, second)
        except DPTUsageError as e:
            raise DPTFormatError(f"{self._prefix()}{e}", buf[i : i + 8].hex()) from e
