"""DPT 1.x — 1-bit boolean.

Each subtype names its two states; DPT 1.001 renders "off"/"on". The value
occupies bit 0 of one byte (the APDU shares that byte on the bus).
"""

from typing import Any

from .descriptor import DPT
from .translator import Translator, sub_types

DPT_SWITCH = DPT("1.001", "Switch", "off", "on")
DPT_BOOL = DPT("1.002", "Boolean", "false", "true")
DPT_ENABLE = DPT("1.003", "Enable", "disable", "enable")
DPT_RAMP = DPT("1.004", "Ramp", "no ramp", "ramp")
DPT_ALARM = DPT("1.005", "Alarm", "no alarm", "alarm")
DPT_BINARYVALUE = DPT("1.006", "Binary value", "low", "high")
DPT_STEP = DPT("1.007", "Step", "decrease", "increase")
DPT_UPDOWN = DPT("1.008", "Up/Down", "up", "down")
DPT_OPENCLOSE = DPT("1.009", "Open/Close", "open", "close")
DPT_START = DPT("1.010", "Start", "stop", "start")
DPT_STATE = DPT("1.011", "State", "inactive", "active")
DPT_INVERT = DPT("1.012", "Invert", "not inverted", "inverted")
DPT_DIMSENDSTYLE = DPT("1.013", "Dim send-style", "start/stop", "cyclic")
DPT_INPUTSOURCE = DPT("1.014", "Input source", "fixed", "calculated")
DPT_RESET = DPT("1.015", "Reset", "no action", "reset")
DPT_ACK = DPT("1.016", "Acknowledge", "no action", "acknowledge")
DPT_TRIGGER = DPT("1.017", "Trigger", "trigger", "trigger")
DPT_OCCUPANCY = DPT("1.018", "Occupancy", "not occupied", "occupied")
DPT_WINDOW_DOOR = DPT("1.019", "Window/Door", "closed", "open")
DPT_LOGICAL_FUNCTION = DPT("1.021", "Logical function", "OR", "AND")
DPT_SCENE_AB = DPT("1.022", "Scene A/B", "scene A", "scene B")
DPT_SHUTTER_BLINDS_MODE = DPT(
    "1.023", "Shutter/Blinds mode", "only move up/down", "move up/down + step-stop"
)
DPT_HEAT_COOL = DPT("1.100", "Heat/Cool", "cooling", "heating")

_TRUE_WORDS = ("1", "true")
_FALSE_WORDS = ("0", "false")


class BooleanTranslator(Translator):
    MAIN_NUMBER = 1
    DESCRIPTION = "Boolean"
    TYPE_SIZE = 1
    SUB_TYPES = sub_types(
        DPT_SWITCH,
        DPT_BOOL,
        DPT_ENABLE,
        DPT_RAMP,
        DPT_ALARM,
        DPT_BINARYVALUE,
        DPT_STEP,
        DPT_UPDOWN,
        DPT_OPENCLOSE,
        DPT_START,
        DPT_STATE,
        DPT_INVERT,
        DPT_DIMSENDSTYLE,
        DPT_INPUTSOURCE,
        DPT_RESET,
        DPT_ACK,
        DPT_TRIGGER,
        DPT_OCCUPANCY,
        DPT_WINDOW_DOOR,
        DPT_LOGICAL_FUNCTION,
        DPT_SCENE_AB,
        DPT_SHUTTER_BLINDS_MODE,
        DPT_HEAT_COOL,
    )

    @property
    def value_boolean(self) -> bool:
        return bool(self._data[0] & 0x01)

    def numeric_value(self) -> int:
        return 1 if self.value_boolean else 0

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            value = self._parse(value)
        elif isinstance(value, int) and value not in (0, 1):
            raise self._range_error(value)
        dst[index] = 1 if value else 0

    def _parse(self, text: str) -> bool:
        s = text.strip()
        if s.lower() == self.dpt.lower.lower():
            return False
        if s.lower() == self.dpt.upper.lower():
            return True
        if s.lower() in _FALSE_WORDS:
            return False
        if s.lower() in _TRUE_WORDS:
            return True
        raise self._error("translation error, value not recognized", text)

    def _from_dpt(self, index: int) -> str:
        return self.dpt.upper if self._data[index] & 0x01 else self.dpt.lower

    def _check_item(self, buf: bytearray, index: int) -> None:
        if buf[index] & 0xFE:
            self._warn_reserved()
        buf[index] &= 0x01
