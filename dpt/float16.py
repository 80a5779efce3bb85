"""DPT 9.x — 2-byte KNX float.

Format: MEEEEMMM MMMMMMMM
    value = 0.01 * M * 2^E
where M is a signed 11-bit (two's complement) mantissa and E a 4-bit
exponent. 21.5 encodes as exponent 1, mantissa 1075 → 0x0C 0x33.
"""

from typing import Any, Union

from .descriptor import DPT, Float16DPT
from .errors import DPTUsageError
from .numbers import parse_decimal, round_half_up
from .translator import Translator, sub_types

DPT_TEMPERATURE = Float16DPT("9.001", "Temperature", "-273", "+670760", "°C")
DPT_TEMPERATURE_DIFFERENCE = Float16DPT(
    "9.002", "Temperature difference", "-670760", "+670760", "K"
)
DPT_TEMPERATURE_GRADIENT = Float16DPT("9.003", "Temperature gradient", "-670760", "+670760", "K/h")
DPT_INTENSITY_OF_LIGHT = Float16DPT("9.004", "Light intensity", "0", "+670760", "lx")
DPT_WIND_SPEED = Float16DPT("9.005", "Wind speed", "0", "+670760", "m/s")
DPT_AIR_PRESSURE = Float16DPT("9.006", "Air pressure", "0", "+670760", "Pa")
DPT_HUMIDITY = Float16DPT("9.007", "Humidity", "0", "+670760", "%")
DPT_AIRQUALITY = Float16DPT("9.008", "Air quality", "0", "+670760", "ppm")
DPT_TIME_DIFFERENCE1 = Float16DPT("9.010", "Time difference 1", "-670760", "+670760", "s")
DPT_TIME_DIFFERENCE2 = Float16DPT("9.011", "Time difference 2", "-670760", "+670760", "ms")
DPT_VOLTAGE = Float16DPT("9.020", "Voltage", "-670760", "+670760", "mV")
DPT_ELECTRICAL_CURRENT = Float16DPT("9.021", "Electrical current", "-670760", "+670760", "mA")
DPT_POWERDENSITY = Float16DPT("9.022", "Power density", "-670760", "+670760", "W/m²")
DPT_KELVIN_PER_PERCENT = Float16DPT("9.023", "Kelvin/percent", "-670760", "+670760", "K/%")
DPT_POWER = Float16DPT("9.024", "Power", "-670760", "+670760", "kW")
DPT_VOLUME_FLOW = Float16DPT("9.025", "Volume flow", "-670760", "+670760", "l/h")
DPT_RAIN_AMOUNT = Float16DPT("9.026", "Rain amount", "-671088.64", "670760.96", "l/m²")
DPT_TEMP_F = Float16DPT("9.027", "Temperature", "-459.6", "670760.96", "°F")
DPT_WIND_SPEED_KMH = Float16DPT("9.028", "Wind speed", "0", "670760.96", "km/h")


def encode_float16(value: float) -> bytes:
    """Pack a value into the 2-byte float format. No bounds check."""
    v = value * 100.0
    exp = 0
    while v < -2048.0:
        v /= 2
        exp += 1
    while v > 2047.0:
        v /= 2
        exp += 1
    mantissa = round_half_up(v)
    if exp > 15:
        raise DPTUsageError(f"value {value} not representable as 2-byte float")

    m = mantissa & 0x7FF
    msb = (exp << 3) | (m >> 8)
    if mantissa < 0:
        msb |= 0x80
    return bytes([msb, m & 0xFF])


def decode_float16(data: bytes) -> float:
    """Unpack the first two bytes of data."""
    hi, lo = data[0], data[1]
    exp = (hi >> 3) & 0x0F
    mantissa = ((hi & 0x07) << 8) | lo
    if hi & 0x80:
        mantissa -= 2048
    return (mantissa << exp) / 100


class Float16Translator(Translator):
    MAIN_NUMBER = 9
    DESCRIPTION = "2-Octet Float Value"
    TYPE_SIZE = 2
    SUB_TYPES = sub_types(
        DPT_TEMPERATURE,
        DPT_TEMPERATURE_DIFFERENCE,
        DPT_TEMPERATURE_GRADIENT,
        DPT_INTENSITY_OF_LIGHT,
        DPT_WIND_SPEED,
        DPT_AIR_PRESSURE,
        DPT_HUMIDITY,
        DPT_AIRQUALITY,
        DPT_TIME_DIFFERENCE1,
        DPT_TIME_DIFFERENCE2,
        DPT_VOLTAGE,
        DPT_ELECTRICAL_CURRENT,
        DPT_POWERDENSITY,
        DPT_KELVIN_PER_PERCENT,
        DPT_POWER,
        DPT_VOLUME_FLOW,
        DPT_RAIN_AMOUNT,
        DPT_TEMP_F,
        DPT_WIND_SPEED_KMH,
    )

    def __init__(self, dpt: Union[DPT, str]):
        super().__init__(dpt)
        self._min = float(self.dpt.lower)
        self._max = float(self.dpt.upper)

    @property
    def value_float(self) -> float:
        return decode_float16(self._data)

    def numeric_value(self) -> float:
        return self.value_float

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            try:
                value = parse_decimal(self._remove_unit(value))
            except ValueError as e:
                raise self._error("wrong value format", value) from e
        elif not isinstance(value, (int, float)):
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value type {type(value).__name__}")
        if not self._min <= value <= self._max:
            raise self._range_error(value)
        i = 2 * index
        dst[i : i + 2] = encode_float16(value)

    def _from_dpt(self, index: int) -> str:
        value = decode_float16(self._item(index))
        return self._append_unit(repr(value))
