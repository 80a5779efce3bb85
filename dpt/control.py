"""Controlled DPTs — 2.x (1-bit controlled) and 3.x (3-bit controlled).

2.x uses two bits: bit 1 is the control bit, bit 0 a boolean value named by
the 1.x DPT it wraps. Text form is "<control> <value word>":

    "1 on" ⇄ 0x03        "0 off" ⇄ 0x00

3.x uses one nibble: bit 3 is the control bit (direction, named by the boolean
control DPT), bits 0-2 the step code. Step code 0 means "break", any other
code n divides the range into 2^(n-1) intervals.

    "increase 5 steps" ⇄ 0x0D        "decrease break" ⇄ 0x00
"""

from typing import Any

from .boolean import (
    DPT_ALARM,
    DPT_BINARYVALUE,
    DPT_BOOL,
    DPT_ENABLE,
    DPT_INVERT,
    DPT_OPENCLOSE,
    DPT_RAMP,
    DPT_START,
    DPT_STATE,
    DPT_STEP,
    DPT_SWITCH,
    DPT_UPDOWN,
    BooleanTranslator,
)
from .descriptor import BooleanControlDPT, ControlDPT
from .errors import DPTError, DPTUsageError
from .numbers import decode_int
from .translator import Translator, sub_types

# ---------------------------------------------------------------------------
# 2.x — 1-bit controlled
# ---------------------------------------------------------------------------

DPT_SWITCH_CONTROL = BooleanControlDPT.of("2.001", "Switch Controlled", DPT_SWITCH)
DPT_BOOL_CONTROL = BooleanControlDPT.of("2.002", "Boolean Controlled", DPT_BOOL)
DPT_ENABLE_CONTROL = BooleanControlDPT.of("2.003", "Enable Controlled", DPT_ENABLE)
DPT_RAMP_CONTROL = BooleanControlDPT.of("2.004", "Ramp Controlled", DPT_RAMP)
DPT_ALARM_CONTROL = BooleanControlDPT.of("2.005", "Alarm Controlled", DPT_ALARM)
DPT_BINARY_CONTROL = BooleanControlDPT.of("2.006", "Binary Controlled", DPT_BINARYVALUE)
DPT_STEP_CONTROL = BooleanControlDPT.of("2.007", "Step Controlled", DPT_STEP)
DPT_UPDOWN_CONTROL = BooleanControlDPT.of("2.008", "Up/Down Controlled", DPT_UPDOWN)
DPT_OPENCLOSE_CONTROL = BooleanControlDPT.of("2.009", "Open/Close Controlled", DPT_OPENCLOSE)
DPT_START_CONTROL = BooleanControlDPT.of("2.010", "Start Controlled", DPT_START)
DPT_STATE_CONTROL = BooleanControlDPT.of("2.011", "State Controlled", DPT_STATE)
DPT_INVERT_CONTROL = BooleanControlDPT.of("2.012", "Invert Controlled", DPT_INVERT)

VALUE_BIT = 0x01
CONTROLLED_BIT = 0x02


class BooleanControlTranslator(Translator):
    MAIN_NUMBER = 2
    DESCRIPTION = "1-Bit Controlled"
    TYPE_SIZE = 1
    SUB_TYPES = sub_types(
        DPT_SWITCH_CONTROL,
        DPT_BOOL_CONTROL,
        DPT_ENABLE_CONTROL,
        DPT_RAMP_CONTROL,
        DPT_ALARM_CONTROL,
        DPT_BINARY_CONTROL,
        DPT_STEP_CONTROL,
        DPT_UPDOWN_CONTROL,
        DPT_OPENCLOSE_CONTROL,
        DPT_START_CONTROL,
        DPT_STATE_CONTROL,
        DPT_INVERT_CONTROL,
    )

    def __init__(self, dpt=DPT_SWITCH_CONTROL):
        super().__init__(dpt)
        self._value = BooleanTranslator(self.dpt.value)

    def set_control_value(self, control: bool, value: bool) -> None:
        self._data = bytearray([self._pack(control, value)])

    @property
    def control_bit(self) -> bool:
        return bool(self._data[0] & CONTROLLED_BIT)

    @property
    def value_bit(self) -> bool:
        return bool(self._data[0] & VALUE_BIT)

    def _pack(self, control: Any, value: Any) -> int:
        return (CONTROLLED_BIT if control else 0) | (VALUE_BIT if value else 0)

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            dst[index] = self._parse(value)
        elif isinstance(value, dict):
            dst[index] = self._pack(value.get("control", False), value.get("value", False))
        elif isinstance(value, tuple) and len(value) == 2:
            dst[index] = self._pack(*value)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")

    def _parse(self, text: str) -> int:
        ctrl, _, rest = text.strip().partition(" ")
        if ctrl not in ("0", "1") or not rest.strip():
            raise self._error("wrong value format", text)
        try:
            self._value.set_value(rest)
        except DPTError as e:
            raise self._error("translation error, value not recognized", rest) from e
        return self._pack(ctrl == "1", self._value.value_boolean)

    def _from_dpt(self, index: int) -> str:
        b = self._data[index]
        value_dpt = self.dpt.value
        word = value_dpt.upper if b & VALUE_BIT else value_dpt.lower
        return f"{1 if b & CONTROLLED_BIT else 0} {word}"

    def _check_item(self, buf: bytearray, index: int) -> None:
        if buf[index] & 0xFC:
            self._warn_reserved()
        buf[index] &= 0x03


# ---------------------------------------------------------------------------
# 3.x — 3-bit controlled
# ---------------------------------------------------------------------------

DPT_CONTROL_DIMMING = ControlDPT.of("3.007", "Dimming", DPT_STEP)
DPT_CONTROL_BLINDS = ControlDPT.of("3.008", "Blinds", DPT_UPDOWN)

CONTROL_BIT = 0x08
STEPCODE_MASK = 0x07


class ControlTranslator(Translator):
    MAIN_NUMBER = 3
    DESCRIPTION = "3-Bit Controlled"
    TYPE_SIZE = 1
    SUB_TYPES = sub_types(DPT_CONTROL_DIMMING, DPT_CONTROL_BLINDS)

    # ------------------------------------------------------------------
    # Typed access (first item)
    # ------------------------------------------------------------------

    def set_control(self, control: bool, stepcode: int) -> None:
        """Set direction and step code (0 = break, 1..7)."""
        if not 0 <= stepcode <= 7:
            raise DPTUsageError("stepcode out of range [0..7]")
        self._data = bytearray([(CONTROL_BIT if control else 0) | stepcode])

    @property
    def control_bit(self) -> bool:
        return bool(self._data[0] & CONTROL_BIT)

    @property
    def step_code(self) -> int:
        return self._data[0] & STEPCODE_MASK

    def set_intervals(self, intervals: int) -> None:
        """Set the step code whose interval count (a power of two) is nearest."""
        if not 1 <= intervals <= 64:
            raise DPTUsageError("intervals out of range [1..64]")
        code = 7
        threshold = 0x30
        while threshold >= intervals:
            code -= 1
            threshold >>= 1
        self.set_control(self.control_bit, code)

    @property
    def intervals(self) -> int:
        code = self.step_code
        return 0 if code == 0 else 1 << (code - 1)

    @property
    def value_signed(self) -> int:
        """Step code, negated when the control bit is clear."""
        return self.step_code if self.control_bit else -self.step_code

    def numeric_value(self) -> int:
        return self.value_signed

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            dst[index] = self._parse(value)
            return
        if not -7 <= value <= 7:
            raise self._range_error(value)
        dst[index] = (CONTROL_BIT if value >= 0 else 0) | abs(value)

    def _parse(self, text: str) -> int:
        tokens = text.split()
        if len(tokens) < 2 or len(tokens) > 3:
            raise self._error("wrong value format", text)
        if len(tokens) == 3 and tokens[2].lower() not in ("step", "steps"):
            raise self._error("wrong value format", text)

        ctrl_dpt = self.dpt.control
        word = tokens[0].lower()
        if word == ctrl_dpt.upper.lower():
            ctrl = CONTROL_BIT
        elif word == ctrl_dpt.lower.lower():
            ctrl = 0
        else:
            raise self._error("translation error, unknown control value string", tokens[0])

        code_text = tokens[1]
        if code_text.lower() == "break":
            return ctrl
        try:
            code = decode_int(code_text)
        except ValueError as e:
            raise self._error("invalid stepcode", code_text) from e
        if not 0 <= code <= 7:
            raise self._error("invalid stepcode", code_text)
        return ctrl | code

    def _from_dpt(self, index: int) -> str:
        ctrl_dpt = self.dpt.control
        b = self._data[index]
        word = ctrl_dpt.upper if b & CONTROL_BIT else ctrl_dpt.lower
        steps = b & STEPCODE_MASK
        if steps == 0:
            return f"{word} break"
        return f"{word} {steps} steps"

    def _check_item(self, buf: bytearray, index: int) -> None:
        if buf[index] & 0xF0:
            self._warn_reserved()
        buf[index] &= 0x0F
