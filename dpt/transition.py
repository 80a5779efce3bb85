"""xyY color DPTs — 242.600 color xyY and 243.600 color transition xyY.

242.600, 6 bytes:  x (2)  y (2)  brightness (1)  valid mask (1)
243.600, 8 bytes:  fade time (2)  y (2)  x (2)  brightness (1)  valid mask (1)

x and y map 0..65535 onto 0.0..1.0, brightness is a 5.001 scaled byte and
fade time counts 100 ms steps. Mask bit 1 marks the color valid, bit 0 the
brightness. An invalid part is rendered (and may be given) as "-":

    "(0.3127, 0.329) 50 %"      "- 50 %"      "(0.3, 0.3) -"
    "(0.3127, 0.329) 50 % 1000 ms"      "- 50 % 1000 ms"      "(0.3, 0.3) - 0 ms"
"""

from typing import Any, Optional, Sequence

from .descriptor import DPT
from .errors import DPTError, DPTUsageError
from .integer import (
    DPT_SCALING,
    DPT_TIMEPERIOD_100,
    EightBitUnsignedTranslator,
    TwoByteUnsignedTranslator,
)
from .numbers import format_number, parse_decimal, round_half_up
from .translator import Translator, sub_types

DPT_XYY = DPT("242.600", "color xyY", "(0, 0) 0 %", "(1, 1) 100 %")
DPT_XYY_TRANSITION = DPT(
    "243.600", "color transition xyY", "(0, 0) 0 % 0 ms", "(1, 1) 100 % 6553500 ms"
)

COLOR_VALID = 0x02
BRIGHTNESS_VALID = 0x01
INVALID = "-"


class _ChromaticityTranslator(Translator):
    """Shared parsing and rendering of the (x, y) color and the brightness."""

    def __init__(self, dpt):
        super().__init__(dpt)
        self._brightness = EightBitUnsignedTranslator(DPT_SCALING)

    def _take_color(
        self, tokens: list[str], text: str
    ) -> tuple[Optional[tuple[float, float]], int]:
        """Leading "(x, y)" or "-"; returns the color and the next token index."""
        if tokens[0].startswith("("):
            end = 0
            while end < len(tokens) and not tokens[end].endswith(")"):
                end += 1
            if end == len(tokens):
                raise self._error("missing ')' in color coordinates", text)
            return self._parse_color(tokens[: end + 1], text), end + 1
        if tokens[0] == INVALID:
            return None, 1
        return None, 0

    def _parse_color(self, tokens: list[str], text: str) -> tuple[float, float]:
        inner = " ".join(tokens)[1:-1].strip()
        parts = inner.split()
        if len(parts) == 2:
            parts = [parts[0].rstrip(","), parts[1]]
        elif len(parts) == 1:
            parts = parts[0].split(",")
        if len(parts) != 2:
            raise self._error("color requires x and y coordinate", text)
        try:
            x, y = (parse_decimal(p) for p in parts)
        except ValueError as e:
            raise self._error("wrong value format", text) from e
        return x, y

    def _take_brightness(self, tokens: list[str], i: int) -> tuple[Optional[str], int]:
        """Brightness as "50 %", "50%" or "-" at token i; returns it and the next index."""
        if i + 1 < len(tokens) and tokens[i + 1] == "%":
            return tokens[i], i + 2
        if i < len(tokens) and tokens[i].endswith("%"):
            return tokens[i][:-1], i + 1
        if i < len(tokens) and tokens[i] == INVALID:
            return None, i + 1
        return None, i

    def _raw_xy(self, color: tuple[float, float]) -> tuple[bytes, bytes]:
        x, y = color
        for name, coord in (("x", x), ("y", y)):
            if not 0 <= coord <= 1:
                raise self._error(f"{name} {coord} out of range [0..1]", coord)
        return (
            round_half_up(x * 65535).to_bytes(2, "big"),
            round_half_up(y * 65535).to_bytes(2, "big"),
        )

    def _raw_brightness(self, brightness: Any) -> int:
        try:
            self._brightness.set_value(brightness)
        except DPTError as e:
            raise self._error(f"brightness: {e}", brightness) from e
        return self._brightness.value_unscaled

    def _render(self, x_raw: bytes, y_raw: bytes, brightness: int, mask: int) -> list[str]:
        parts = []
        if mask & COLOR_VALID:
            x = int.from_bytes(x_raw, "big") / 65535
            y = int.from_bytes(y_raw, "big") / 65535
            parts.append(f"({format_number(x, 4)}, {format_number(y, 4)})")
        else:
            parts.append(INVALID)
        if mask & BRIGHTNESS_VALID:
            self._brightness.append_unit = self.append_unit
            self._brightness.set_value_unscaled(brightness)
            parts.append(self._brightness.value)
        else:
            parts.append(INVALID)
        return parts

    def _check_mask(self, buf: bytearray, mask: int) -> None:
        if buf[mask] & ~0x03:
            self._warn_reserved()
            buf[mask] &= 0x03


# ---------------------------------------------------------------------------
# 242.600 — xyY
# ---------------------------------------------------------------------------


class XyYTranslator(_ChromaticityTranslator):
    MAIN_NUMBER = 242
    DESCRIPTION = "color xyY"
    TYPE_SIZE = 6
    SUB_TYPES = sub_types(DPT_XYY)

    def __init__(self, dpt=DPT_XYY):
        super().__init__(dpt)

    def set_xyy(self, x: Optional[float], y: Optional[float], brightness: Optional[float]) -> None:
        """Set chromaticity (both or neither) and brightness in %."""
        if (x is None) != (y is None):
            raise DPTUsageError("x and y must both be set or both be None")
        record = bytearray(self.TYPE_SIZE)
        try:
            self._pack(record, 0, None if x is None else (x, y), brightness)
        except DPTError as e:
            raise DPTUsageError(str(e)) from e
        self._data = record

    @property
    def x(self) -> Optional[float]:
        if not self._data[5] & COLOR_VALID:
            return None
        return int.from_bytes(self._data[0:2], "big") / 65535

    @property
    def y(self) -> Optional[float]:
        if not self._data[5] & COLOR_VALID:
            return None
        return int.from_bytes(self._data[2:4], "big") / 65535

    @property
    def brightness(self) -> Optional[float]:
        if not self._data[5] & BRIGHTNESS_VALID:
            return None
        return self._data[4] * 100 / 255

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            tokens = value.split()
            if not tokens:
                raise self._error("unsupported format for color xyY", value)
            color, i = self._take_color(tokens, value)
            brightness, i = self._take_brightness(tokens, i)
            if brightness is None and i < len(tokens) and i == len(tokens) - 1:
                brightness, i = tokens[i], i + 1
            if i < len(tokens):
                raise self._error("value contains excessive components", tokens[i])
        elif isinstance(value, Sequence) and len(value) == 3:
            x, y, brightness = value
            if (x is None) != (y is None):
                raise DPTUsageError(f"DPT {self.dpt.id}: x and y must both be set or both be None")
            color = None if x is None else (x, y)
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: xyY value requires (x, y, brightness)")
        self._pack(dst, index, color, brightness)

    def _pack(
        self,
        dst: bytearray,
        index: int,
        color: Optional[tuple[float, float]],
        brightness: Any,
    ) -> None:
        record = bytearray(self.TYPE_SIZE)
        if color is not None:
            record[0:2], record[2:4] = self._raw_xy(color)
            record[5] |= COLOR_VALID
        if brightness is not None:
            record[4] = self._raw_brightness(brightness)
            record[5] |= BRIGHTNESS_VALID
        offset = index * self.TYPE_SIZE
        dst[offset : offset + self.TYPE_SIZE] = record

    def _from_dpt(self, index: int) -> str:
        item = self._item(index)
        return " ".join(self._render(item[0:2], item[2:4], item[4], item[5]))

    def _check_item(self, buf: bytearray, index: int) -> None:
        self._check_mask(buf, index * self.TYPE_SIZE + 5)


# ---------------------------------------------------------------------------
# 243.600 — color transition xyY
# ---------------------------------------------------------------------------


class XyYTransitionTranslator(_ChromaticityTranslator):
    MAIN_NUMBER = 243
    DESCRIPTION = "color transition xyY"
    TYPE_SIZE = 8
    SUB_TYPES = sub_types(DPT_XYY_TRANSITION)

    def __init__(self, dpt=DPT_XYY_TRANSITION):
        super().__init__(dpt)
        self._fade = TwoByteUnsignedTranslator(DPT_TIMEPERIOD_100)

    # ------------------------------------------------------------------
    # Typed access (first item)
    # ------------------------------------------------------------------

    def set_transition(
        self,
        x: Optional[float],
        y: Optional[float],
        brightness: Optional[float],
        fading_time: int,
    ) -> None:
        """Set chromaticity (both or neither), brightness in % and fade time in ms."""
        if (x is None) != (y is None):
            raise DPTUsageError("x and y must both be set or both be None")
        color = None if x is None else (x, y)
        record = bytearray(self.TYPE_SIZE)
        try:
            self._pack(record, 0, color, brightness, fading_time)
        except DPTError as e:
            raise DPTUsageError(str(e)) from e
        self._data = record

    @property
    def x(self) -> Optional[float]:
        if not self._data[7] & COLOR_VALID:
            return None
        return int.from_bytes(self._data[4:6], "big") / 65535

    @property
    def y(self) -> Optional[float]:
        if not self._data[7] & COLOR_VALID:
            return None
        return int.from_bytes(self._data[2:4], "big") / 65535

    @property
    def brightness(self) -> Optional[float]:
        if not self._data[7] & BRIGHTNESS_VALID:
            return None
        return self._data[6] * 100 / 255

    @property
    def fading_time(self) -> int:
        """Fade time in ms."""
        return int.from_bytes(self._data[0:2], "big") * 100

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if not isinstance(value, str):
            raise DPTUsageError(f"DPT {self.dpt.id}: expected text value, got {value!r}")
        tokens = value.split()
        if not tokens:
            raise self._error("unsupported format for color transition xyY", value)

        color, i = self._take_color(tokens, value)
        if color is None and i == 1 and len(tokens) == 1:
            i = 0
        brightness, i = self._take_brightness(tokens, i)
        if brightness is None and i == len(tokens) and tokens[-1] == INVALID:
            i -= 1

        if i >= len(tokens):
            raise self._error("missing fade time", value)
        fade = tokens[i]
        i += 1
        if i < len(tokens) and tokens[i] == "ms":
            i += 1
        if i < len(tokens):
            raise self._error("value contains excessive components", tokens[i])

        self._pack(dst, index, color, brightness, fade)

    def _pack(
        self,
        dst: bytearray,
        index: int,
        color: Optional[tuple[float, float]],
        brightness: Any,
        fade: Any,
    ) -> None:
        record = bytearray(self.TYPE_SIZE)
        try:
            self._fade.set_value(fade)
        except DPTError as e:
            raise self._error(f"fade time: {e}", fade) from e
        record[0:2] = self._fade.data

        if color is not None:
            record[4:6], record[2:4] = self._raw_xy(color)
            record[7] |= COLOR_VALID

        if brightness is not None:
            record[6] = self._raw_brightness(brightness)
            record[7] |= BRIGHTNESS_VALID

        offset = index * self.TYPE_SIZE
        dst[offset : offset + self.TYPE_SIZE] = record

    def _from_dpt(self, index: int) -> str:
        item = self._item(index)
        parts = self._render(item[4:6], item[2:4], item[6], item[7])
        self._fade.append_unit = self.append_unit
        self._fade.set_data(item[0:2])
        parts.append(self._fade.value)
        return " ".join(parts)

    def _check_item(self, buf: bytearray, index: int) -> None:
        self._check_mask(buf, index * self.TYPE_SIZE + 7)
