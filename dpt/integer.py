"""Integer DPTs — 1, 2 and 4 byte signed/unsigned, big-endian.

  5.x   8-bit unsigned   5.001 and 5.003 are scaled onto 0..100 % / 0..360 °
  6.x   8-bit signed
  7.x   2-byte unsigned  7.003/7.004 carry 10 ms / 100 ms per raw step
  8.x   2-byte signed    8.003/8.004 as above, 8.010 is 0.01 % per step
  12.x  4-byte unsigned
  13.x  4-byte signed

Encode range-checks against the DPT bounds. Decode trusts the raw value.
"""

import struct
from typing import Any, Union

from .descriptor import DPT
from .errors import DPTUsageError
from .numbers import decode_int, format_number, parse_decimal, parse_number, round_half_up
from .translator import Translator, sub_types

Number = Union[int, float]

# ms per unit of the time period subtypes
_TIME_PERIODS = {
    "7.002": 1,
    "7.003": 1,
    "7.004": 1,
    "7.005": 1000,
    "7.006": 60_000,
    "7.007": 3_600_000,
    "8.002": 1,
    "8.003": 1,
    "8.004": 1,
    "8.005": 1000,
    "8.006": 60_000,
    "8.007": 3_600_000,
}


class _IntegerTranslator(Translator):
    """Shared codec for the fixed width integer families."""

    STRUCT = struct.Struct("!B")
    SIGNED = False
    # Value per raw step, for subtypes with a resolution other than 1
    RESOLUTION: dict[str, Number] = {}

    def __init__(self, dpt: Union[DPT, str]):
        super().__init__(dpt)
        self._resolution = self.RESOLUTION.get(self.dpt.id, 1)
        self._min = self._limit(self.dpt.lower)
        self._max = self._limit(self.dpt.upper)

    def _limit(self, text: str) -> Number:
        try:
            value = parse_number(text)
        except ValueError as e:
            raise self._error("invalid DPT range", text) from e
        bits = self.STRUCT.size * 8
        if self.SIGNED:
            lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        else:
            lo, hi = 0, (1 << bits) - 1
        if not lo <= self._raw_of(value) <= hi:
            raise self._error("limit not in valid DPT range", text)
        return value

    # ------------------------------------------------------------------
    # Typed access (first item)
    # ------------------------------------------------------------------

    def numeric_value(self) -> Number:
        return self._numeric(0)

    def set_time_period(self, milliseconds: int) -> None:
        """Set a time period given in ms, converted to the subtype's unit."""
        per_unit = _TIME_PERIODS.get(self.dpt.id)
        if per_unit is None:
            raise DPTUsageError(f"DPT {self.dpt.id} is not a time period")
        value = milliseconds if per_unit == 1 else round_half_up(milliseconds / per_unit)
        self.set_value(value)

    @property
    def time_period(self) -> int:
        """First item as time period in ms."""
        per_unit = _TIME_PERIODS.get(self.dpt.id)
        if per_unit is None:
            raise DPTUsageError(f"DPT {self.dpt.id} is not a time period")
        return round_half_up(self._numeric(0) * per_unit)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            value = self._parse(value)
        elif not isinstance(value, (int, float)):
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value type {type(value).__name__}")
        if not self._min <= value <= self._max:
            raise self._range_error(value)
        self.STRUCT.pack_into(dst, index * self.TYPE_SIZE, self._raw_of(value))

    def _parse(self, text: str) -> Number:
        s = self._remove_unit(text)
        try:
            return decode_int(s)
        except ValueError:
            if isinstance(self._resolution, int):
                raise self._error("wrong value format", text) from None
        try:
            return parse_decimal(s)
        except ValueError as e:
            raise self._error("wrong value format", text) from e

    def _raw_of(self, value: Number) -> int:
        if self._resolution == 1 and isinstance(value, int):
            return value
        return round_half_up(value / self._resolution)

    def _numeric(self, index: int) -> Number:
        raw = self.STRUCT.unpack_from(self._data, index * self.TYPE_SIZE)[0]
        if self._resolution == 1:
            return raw
        return raw * self._resolution

    def _from_dpt(self, index: int) -> str:
        value = self._numeric(index)
        text = str(value) if isinstance(value, int) else format_number(value, 2)
        return self._append_unit(text)


# ---------------------------------------------------------------------------
# 5.x — 8 bit unsigned
# ---------------------------------------------------------------------------

DPT_SCALING = DPT("5.001", "Scaling", "0", "100", "%")
DPT_ANGLE = DPT("5.003", "Angle", "0", "360", "°")
DPT_PERCENT_U8 = DPT("5.004", "Percent (8 Bit)", "0", "255", "%")
DPT_DECIMALFACTOR = DPT("5.005", "Decimal factor", "0", "255", "ratio")
DPT_TARIFF = DPT("5.006", "Tariff information", "0", "254")
DPT_VALUE_1_UCOUNT = DPT("5.010", "Unsigned count", "0", "255", "counter pulses")


class EightBitUnsignedTranslator(_IntegerTranslator):
    """5.x; 5.001 and 5.003 map the stored byte 0..255 onto their domain."""

    MAIN_NUMBER = 5
    DESCRIPTION = "8-Bit Unsigned Value"
    TYPE_SIZE = 1
    STRUCT = struct.Struct("!B")
    SUB_TYPES = sub_types(
        DPT_SCALING,
        DPT_ANGLE,
        DPT_PERCENT_U8,
        DPT_DECIMALFACTOR,
        DPT_TARIFF,
        DPT_VALUE_1_UCOUNT,
    )
    # Domain maximum of the scaled subtypes
    SCALED = {"5.001": 100, "5.003": 360}

    def __init__(self, dpt: Union[DPT, str]):
        self._domain = self.SCALED.get(dpt.id if isinstance(dpt, DPT) else dpt)
        super().__init__(dpt)

    def set_value_unscaled(self, value: int) -> None:
        """Set the raw byte, bypassing any scaling."""
        if not 0 <= value <= 255:
            raise DPTUsageError(f"unscaled value {value} out of range [0..255]")
        self._data = bytearray([value])

    @property
    def value_unscaled(self) -> int:
        return self._data[0]

    def _parse(self, text: str) -> Number:
        if self._domain is None:
            return super()._parse(text)
        try:
            return parse_number(self._remove_unit(text))
        except ValueError as e:
            raise self._error("wrong value format", text) from e

    def _raw_of(self, value: Number) -> int:
        if self._domain is None:
            return super()._raw_of(value)
        return round_half_up(value * 255 / self._domain)

    def _numeric(self, index: int) -> Number:
        raw = self._data[index]
        if self._domain is None:
            return raw
        value = round_half_up(raw * self._domain / 255)
        if value > self._domain:
            raise self._range_error(value)
        return value


# ---------------------------------------------------------------------------
# 6.x — 8 bit signed
# ---------------------------------------------------------------------------

DPT_PERCENT_V8 = DPT("6.001", "Percent (8 Bit)", "-128", "127", "%")
DPT_VALUE_1_COUNT = DPT("6.010", "Signed count", "-128", "127", "counter pulses")


class EightBitSignedTranslator(_IntegerTranslator):
    MAIN_NUMBER = 6
    DESCRIPTION = "8-Bit Signed Value"
    TYPE_SIZE = 1
    STRUCT = struct.Struct("!b")
    SIGNED = True
    SUB_TYPES = sub_types(DPT_PERCENT_V8, DPT_VALUE_1_COUNT)


# ---------------------------------------------------------------------------
# 7.x — 2 byte unsigned
# ---------------------------------------------------------------------------

DPT_VALUE_2_UCOUNT = DPT("7.001", "Unsigned count", "0", "65535", "pulses")
DPT_TIMEPERIOD = DPT("7.002", "Time period in ms", "0", "65535", "ms")
DPT_TIMEPERIOD_10 = DPT("7.003", "Time period (resolution 10 ms)", "0", "655350", "ms")
DPT_TIMEPERIOD_100 = DPT("7.004", "Time period (resolution 100 ms)", "0", "6553500", "ms")
DPT_TIMEPERIOD_SEC = DPT("7.005", "Time period in seconds", "0", "65535", "s")
DPT_TIMEPERIOD_MIN = DPT("7.006", "Time period in minutes", "0", "65535", "min")
DPT_TIMEPERIOD_HOURS = DPT("7.007", "Time period in hours", "0", "65535", "h")
DPT_PROP_DATATYPE = DPT("7.010", "Interface object property ID", "0", "65535")
DPT_LENGTH = DPT("7.011", "Length in mm", "0", "65535", "mm")
DPT_ELECTRICAL_CURRENT = DPT("7.012", "Electrical current", "0", "65535", "mA")
DPT_BRIGHTNESS = DPT("7.013", "Brightness", "0", "65535", "lx")
DPT_ABSOLUTE_COLOR_TEMPERATURE = DPT("7.600", "Absolute color temperature", "0", "65535", "K")


class TwoByteUnsignedTranslator(_IntegerTranslator):
    MAIN_NUMBER = 7
    DESCRIPTION = "2-Octet Unsigned Value"
    TYPE_SIZE = 2
    STRUCT = struct.Struct("!H")
    SUB_TYPES = sub_types(
        DPT_VALUE_2_UCOUNT,
        DPT_TIMEPERIOD,
        DPT_TIMEPERIOD_10,
        DPT_TIMEPERIOD_100,
        DPT_TIMEPERIOD_SEC,
        DPT_TIMEPERIOD_MIN,
        DPT_TIMEPERIOD_HOURS,
        DPT_PROP_DATATYPE,
        DPT_LENGTH,
        DPT_ELECTRICAL_CURRENT,
        DPT_BRIGHTNESS,
        DPT_ABSOLUTE_COLOR_TEMPERATURE,
    )
    RESOLUTION = {"7.003": 10, "7.004": 100}


# ---------------------------------------------------------------------------
# 8.x — 2 byte signed
# ---------------------------------------------------------------------------

DPT_VALUE_2_COUNT = DPT("8.001", "Signed count", "-32768", "32767", "pulses")
DPT_DELTA_TIME = DPT("8.002", "Delta time in ms", "-32768", "32767", "ms")
DPT_DELTA_TIME_10 = DPT("8.003", "Delta time in ms (resolution 10 ms)", "-327680", "327670", "ms")
DPT_DELTA_TIME_100 = DPT(
    "8.004", "Delta time in ms (resolution 100 ms)", "-3276800", "3276700", "ms"
)
DPT_DELTA_TIME_SEC = DPT("8.005", "Delta time in seconds", "-32768", "32767", "s")
DPT_DELTA_TIME_MIN = DPT("8.006", "Delta time in minutes", "-32768", "32767", "min")
DPT_DELTA_TIME_HOURS = DPT("8.007", "Delta time in hours", "-32768", "32767", "h")
DPT_PERCENT_V16 = DPT("8.010", "Percent", "-327.68", "327.67", "%")
DPT_ROTATION_ANGLE = DPT("8.011", "Rotation angle", "-32768", "32767", "°")
DPT_LENGTH_M = DPT("8.012", "Length in m", "-32768", "32767", "m")


class TwoByteSignedTranslator(_IntegerTranslator):
    MAIN_NUMBER = 8
    DESCRIPTION = "2-Octet Signed Value"
    TYPE_SIZE = 2
    STRUCT = struct.Struct("!h")
    SIGNED = True
    SUB_TYPES = sub_types(
        DPT_VALUE_2_COUNT,
        DPT_DELTA_TIME,
        DPT_DELTA_TIME_10,
        DPT_DELTA_TIME_100,
        DPT_DELTA_TIME_SEC,
        DPT_DELTA_TIME_MIN,
        DPT_DELTA_TIME_HOURS,
        DPT_PERCENT_V16,
        DPT_ROTATION_ANGLE,
        DPT_LENGTH_M,
    )
    RESOLUTION = {"8.003": 10, "8.004": 100, "8.010": 0.01}


# ---------------------------------------------------------------------------
# 12.x — 4 byte unsigned
# ---------------------------------------------------------------------------

DPT_VALUE_4_UCOUNT = DPT("12.001", "Unsigned count", "0", "4294967295", "counter pulses")
DPT_COUNTER_TIME_SEC = DPT("12.100", "Counter time", "0", "4294967295", "s")
DPT_COUNTER_TIME_MIN = DPT("12.101", "Counter time", "0", "4294967295", "min")
DPT_COUNTER_TIME_HOURS = DPT("12.102", "Counter time", "0", "4294967295", "h")
DPT_VOLUME_LIQUID = DPT("12.1200", "Volume liquid", "0", "4294967295", "l")
DPT_VOLUME = DPT("12.1201", "Volume", "0", "4294967295", "m³")


class FourByteUnsignedTranslator(_IntegerTranslator):
    MAIN_NUMBER = 12
    DESCRIPTION = "4-Octet Unsigned Value"
    TYPE_SIZE = 4
    STRUCT = struct.Struct("!I")
    SUB_TYPES = sub_types(
        DPT_VALUE_4_UCOUNT,
        DPT_COUNTER_TIME_SEC,
        DPT_COUNTER_TIME_MIN,
        DPT_COUNTER_TIME_HOURS,
        DPT_VOLUME_LIQUID,
        DPT_VOLUME,
    )


# ---------------------------------------------------------------------------
# 13.x — 4 byte signed
# ---------------------------------------------------------------------------

_I32_MIN, _I32_MAX = "-2147483648", "2147483647"

DPT_COUNT = DPT("13.001", "Counter pulses", _I32_MIN, _I32_MAX, "counter pulses")
DPT_FLOWRATE = DPT("13.002", "Flow rate", _I32_MIN, _I32_MAX, "m³/h")
DPT_ACTIVE_ENERGY = DPT("13.010", "Active energy", _I32_MIN, _I32_MAX, "Wh")
DPT_APPARENT_ENERGY = DPT("13.011", "Apparent energy", _I32_MIN, _I32_MAX, "VAh")
DPT_REACTIVE_ENERGY = DPT("13.012", "Reactive energy", _I32_MIN, _I32_MAX, "VARh")
DPT_ACTIVE_ENERGY_KWH = DPT("13.013", "Active energy in kWh", _I32_MIN, _I32_MAX, "kWh")
DPT_APPARENT_ENERGY_KVAH = DPT("13.014", "Apparent energy in kVAh", _I32_MIN, _I32_MAX, "kVAh")
DPT_REACTIVE_ENERGY_KVARH = DPT(
    "13.015", "Reactive energy in kVARh", _I32_MIN, _I32_MAX, "kVARh"
)
DPT_DELTA_TIME_SEC_4 = DPT("13.100", "Delta time in seconds", _I32_MIN, _I32_MAX, "s")


class FourByteSignedTranslator(_IntegerTranslator):
    MAIN_NUMBER = 13
    DESCRIPTION = "4-Octet Signed Value"
    TYPE_SIZE = 4
    STRUCT = struct.Struct("!i")
    SIGNED = True
    SUB_TYPES = sub_types(
        DPT_COUNT,
        DPT_FLOWRATE,
        DPT_ACTIVE_ENERGY,
        DPT_APPARENT_ENERGY,
        DPT_REACTIVE_ENERGY,
        DPT_ACTIVE_ENERGY_KWH,
        DPT_APPARENT_ENERGY_KVAH,
        DPT_REACTIVE_ENERGY_KVARH,
        DPT_DELTA_TIME_SEC_4,
    )
