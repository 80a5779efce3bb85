"""Color DPTs — 232.600 RGB, 251.600 RGBW and 252.600 relative control RGBW.

232.600, 3 bytes:  R G B                      raw 0..255 components
    "r:255 g:128 b:0"

The RGBW types carry a trailing valid mask; a component whose mask bit is
clear is rendered (and may be given) as "-".

251.600, 6 bytes:  R G B W reserved mask     mask bit 3 = red .. bit 0 = white
    "50 - 100 0 %"  components in percent, 0..255 on the wire

252.600, 5 bytes:  R G B W mask               each byte a 3-bit control nibble
    "R increase 5 steps G decrease break"      "R break" stops fading
"""

from typing import Any, Optional, Sequence

from .control import DPT_CONTROL_DIMMING, ControlTranslator
from .descriptor import DPT
from .errors import DPTError, DPTUsageError
from .integer import DPT_SCALING, EightBitUnsignedTranslator
from .numbers import decode_int, format_number
from .translator import Translator, sub_types

INVALID = "-"

# ---------------------------------------------------------------------------
# 232.600 — RGB
# ---------------------------------------------------------------------------

DPT_RGB = DPT("232.600", "RGB", "r:0 g:0 b:0", "r:255 g:255 b:255")

_RGB_KEYS = ("r", "g", "b")


class RgbTranslator(Translator):
    MAIN_NUMBER = 232
    DESCRIPTION = "RGB color"
    TYPE_SIZE = 3
    SUB_TYPES = sub_types(DPT_RGB)

    def set_rgb(self, red: int, green: int, blue: int) -> None:
        """Set the raw 0..255 components."""
        for name, component in zip(_RGBW_COMPONENTS, (red, green, blue)):
            if not 0 <= component <= 255:
                raise DPTUsageError(f"{name} out of range [0..255]")
        self._data = bytearray([red, green, blue])

    @property
    def red(self) -> int:
        return self._data[0]

    @property
    def green(self) -> int:
        return self._data[1]

    @property
    def blue(self) -> int:
        return self._data[2]

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            components = self._parse(value)
        elif isinstance(value, Sequence) and len(value) == 3:
            components = list(value)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: RGB value requires 3 components")
        for component in components:
            if not isinstance(component, int):
                raise DPTUsageError(f"DPT {self.dpt.id}: unsupported component {component!r}")
            if not 0 <= component <= 255:
                raise self._range_error(value)
        offset = index * self.TYPE_SIZE
        dst[offset : offset + self.TYPE_SIZE] = bytes(components)

    def _parse(self, text: str) -> list[int]:
        """"r:255 g:128 b:0" in any order, or three plain numbers."""
        tokens = text.split()
        if len(tokens) != 3:
            raise self._error("RGB format requires 3 components", text)
        keyed = {}
        for token in tokens:
            key, sep, number = token.partition(":")
            if not sep:
                break
            if key.lower() not in _RGB_KEYS or key.lower() in keyed:
                raise self._error("invalid color component", token)
            keyed[key.lower()] = number
        if keyed and len(keyed) != 3:
            raise self._error("expected component identifier 'r:', 'g:' or 'b:'", text)
        numbers = [keyed[k] for k in _RGB_KEYS] if keyed else tokens
        try:
            return [decode_int(n) for n in numbers]
        except ValueError as e:
            raise self._error("invalid number", text) from e

    def _from_dpt(self, index: int) -> str:
        r, g, b = self._item(index)
        return f"r:{r} g:{g} b:{b}"


# ---------------------------------------------------------------------------
# 251.600 — RGBW
# ---------------------------------------------------------------------------

DPT_RGBW = DPT("251.600", "RGBW color", "0 0 0 0", "100 100 100 100", "%")

_RGBW_COMPONENTS = ("red", "green", "blue", "white")


class RgbwTranslator(Translator):
    MAIN_NUMBER = 251
    DESCRIPTION = "RGBW color"
    TYPE_SIZE = 6
    SUB_TYPES = sub_types(DPT_RGBW)

    def __init__(self, dpt=DPT_RGBW):
        super().__init__(dpt)
        self._scaling = EightBitUnsignedTranslator(DPT_SCALING)

    def set_rgbw(
        self,
        red: Optional[float],
        green: Optional[float],
        blue: Optional[float],
        white: Optional[float],
    ) -> None:
        """Set components in percent; None leaves a component invalid."""
        buf = bytearray(self.TYPE_SIZE)
        self._to_dpt((red, green, blue, white), buf, 0)
        self._data = buf

    @property
    def red(self) -> Optional[float]:
        return self._component(0, 0)

    @property
    def green(self) -> Optional[float]:
        return self._component(0, 1)

    @property
    def blue(self) -> Optional[float]:
        return self._component(0, 2)

    @property
    def white(self) -> Optional[float]:
        return self._component(0, 3)

    def _component(self, index: int, component: int) -> Optional[float]:
        offset = index * self.TYPE_SIZE
        if self._data[offset + 5] & (1 << (3 - component)):
            return self._data[offset + component] * 100 / 255
        return None

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            components = self._remove_unit(value).split()
            if len(components) != 4:
                raise self._error("RGBW format requires 4 components", value)
            components = [None if c == INVALID else c for c in components]
        elif isinstance(value, Sequence) and len(value) == 4:
            components = list(value)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: RGBW value requires 4 components")

        offset = index * self.TYPE_SIZE
        record = bytearray(self.TYPE_SIZE)
        for i, component in enumerate(components):
            if component is None:
                continue
            try:
                self._scaling.set_value(component)
            except DPTError as e:
                raise self._error(f"{_RGBW_COMPONENTS[i]}: {e}", component) from e
            record[i] = self._scaling.value_unscaled
            record[5] |= 1 << (3 - i)
        dst[offset : offset + self.TYPE_SIZE] = record

    def _from_dpt(self, index: int) -> str:
        parts = []
        for component in range(4):
            value = self._component(index, component)
            parts.append(INVALID if value is None else format_number(value, 1))
        return self._append_unit(" ".join(parts))

    def _check_item(self, buf: bytearray, index: int) -> None:
        reserved = index * self.TYPE_SIZE + 4
        if buf[reserved]:
            self._warn_reserved()
            buf[reserved] = 0


# ---------------------------------------------------------------------------
# 252.600 — relative control RGBW
# ---------------------------------------------------------------------------

DPT_RELATIVE_CONTROL_RGBW = DPT(
    "252.600",
    "relative control RGBW",
    "R decrease 0 G decrease 0 B decrease 0 W decrease 0",
    "R increase 7 G increase 7 B increase 7 W increase 7",
)

_PREFIXES = ("R", "G", "B", "W")
_STEP_WORDS = ("step", "steps")


class RelativeControlRgbwTranslator(Translator):
    MAIN_NUMBER = 252
    DESCRIPTION = "relative control RGBW"
    TYPE_SIZE = 5
    SUB_TYPES = sub_types(DPT_RELATIVE_CONTROL_RGBW)

    def __init__(self, dpt=DPT_RELATIVE_CONTROL_RGBW):
        super().__init__(dpt)
        self._control = ControlTranslator(DPT_CONTROL_DIMMING)

    def set_controls(
        self,
        red: Optional[tuple[bool, int]],
        green: Optional[tuple[bool, int]],
        blue: Optional[tuple[bool, int]],
        white: Optional[tuple[bool, int]],
    ) -> None:
        """Set (increase, stepcode) per component; None leaves it invalid."""
        record = bytearray(self.TYPE_SIZE)
        for i, ctrl in enumerate((red, green, blue, white)):
            if ctrl is None:
                continue
            self._control.set_control(*ctrl)
            record[i] = self._control.data[0]
            record[4] |= 0x08 >> i
        self._data = record

    def control(self, component: str) -> Optional[tuple[bool, int]]:
        """(increase, stepcode) of component "R", "G", "B" or "W" in the first item."""
        i = _PREFIXES.index(component)
        if not self._data[4] & (0x08 >> i):
            return None
        self._control.set_data(self._data[i : i + 1])
        return self._control.control_bit, self._control.step_code

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if not isinstance(value, str):
            raise DPTUsageError(f"DPT {self.dpt.id}: expected text value, got {value!r}")
        record = bytearray(self.TYPE_SIZE)
        tokens = value.split()
        pos = 0
        for i, prefix in enumerate(_PREFIXES):
            if pos >= len(tokens) or tokens[pos] != prefix:
                continue
            pos += 1
            if pos < len(tokens) and tokens[pos] == INVALID:
                pos += 1
                continue
            if pos < len(tokens) and tokens[pos].lower() == "break":
                pos += 1
                record[4] |= 0x08 >> i
                continue
            field = tokens[pos : pos + 2]
            if len(field) < 2:
                raise self._error(f"missing control for component {prefix}", value)
            try:
                self._control.set_value(" ".join(field))
            except DPTError as e:
                raise self._error(f"component {prefix}: {e}", " ".join(field)) from e
            pos += 2
            if pos < len(tokens) and tokens[pos].lower() in _STEP_WORDS:
                pos += 1
            record[i] = self._control.data[0]
            record[4] |= 0x08 >> i
        if pos < len(tokens):
            raise self._error("value contains excessive components", tokens[pos])
        offset = index * self.TYPE_SIZE
        dst[offset : offset + self.TYPE_SIZE] = record

    def _from_dpt(self, index: int) -> str:
        offset = index * self.TYPE_SIZE
        mask = self._data[offset + 4]
        parts = []
        for i, prefix in enumerate(_PREFIXES):
            if mask & (0x08 >> i):
                self._control.set_data(self._data[offset + i : offset + i + 1])
                parts.append(f"{prefix} {self._control.value}")
            else:
                parts.append(f"{prefix} {INVALID}")
        if not mask & 0x0F:
            return " ".join(parts)
        return " ".join(p for p in parts if not p.endswith(f" {INVALID}"))

    def _check_item(self, buf: bytearray, index: int) -> None:
        offset = index * self.TYPE_SIZE
        if buf[offset + 4] & 0xF0 or any(b & 0xF0 for b in buf[offset : offset + 4]):
            self._warn_reserved()
        for i in range(offset, offset + 5):
            buf[i] &= 0x0F
