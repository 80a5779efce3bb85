"""Scene DPTs — 17.001 scene number and 18.001 scene control.

17.001, 1 byte:  00NNNNNN          scene number 0..63
18.001, 1 byte:  C0NNNNNN          C = learn (1) or activate (0)

    "activate 5" ⇄ 0x05        "learn 5" ⇄ 0x85
"""

from typing import Any

from .descriptor import DPT
from .errors import DPTUsageError
from .numbers import decode_int
from .translator import Translator, sub_types

DPT_SCENE_NUMBER = DPT("17.001", "Scene Number", "0", "63")
DPT_SCENE_CONTROL = DPT("18.001", "Scene Control", "activate 0", "learn 63")

SCENE_MASK = 0x3F
LEARN_BIT = 0x80


def _check_scene(scene: int) -> None:
    if not 0 <= scene <= 63:
        raise DPTUsageError("scene number out of range [0..63]")


class SceneNumberTranslator(Translator):
    MAIN_NUMBER = 17
    DESCRIPTION = "Scene Number"
    TYPE_SIZE = 1
    SUB_TYPES = sub_types(DPT_SCENE_NUMBER)

    def set_scene(self, scene: int) -> None:
        _check_scene(scene)
        self._data = bytearray([scene])

    @property
    def scene_number(self) -> int:
        return self._data[0] & SCENE_MASK

    def numeric_value(self) -> int:
        return self.scene_number

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            try:
                value = decode_int(value)
            except ValueError as e:
                raise self._error("wrong value format", value) from e
        elif not isinstance(value, int):
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        if not 0 <= value <= 63:
            raise self._range_error(value)
        dst[index] = value

    def _from_dpt(self, index: int) -> str:
        return str(self._data[index] & SCENE_MASK)

    def _check_item(self, buf: bytearray, index: int) -> None:
        if buf[index] & ~SCENE_MASK:
            self._warn_reserved()
            buf[index] &= SCENE_MASK


class SceneControlTranslator(Translator):
    MAIN_NUMBER = 18
    DESCRIPTION = "Scene Control"
    TYPE_SIZE = 1
    SUB_TYPES = sub_types(DPT_SCENE_CONTROL)

    def set_scene(self, learn: bool, scene: int) -> None:
        _check_scene(scene)
        self._data = bytearray([(LEARN_BIT if learn else 0) | scene])

    @property
    def learn(self) -> bool:
        return bool(self._data[0] & LEARN_BIT)

    @property
    def scene_number(self) -> int:
        return self._data[0] & SCENE_MASK

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            learn, scene = self._parse(value)
        elif isinstance(value, dict):
            learn, scene = value.get("learn", False), value.get("number", 0)
        elif isinstance(value, tuple) and len(value) == 2:
            learn, scene = value
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        if not 0 <= scene <= 63:
            raise self._range_error(value)
        dst[index] = (LEARN_BIT if learn else 0) | scene

    def _parse(self, text: str) -> tuple[bool, int]:
        tokens = text.split()
        if len(tokens) != 2:
            raise self._error("wrong value format", text)
        word = tokens[0].lower()
        if word not in ("learn", "activate"):
            raise self._error("expected 'activate' or 'learn'", tokens[0])
        try:
            scene = decode_int(tokens[1])
        except ValueError as e:
            raise self._error("wrong value format", text) from e
        return word == "learn", scene

    def _from_dpt(self, index: int) -> str:
        b = self._data[index]
        word = "learn" if b & LEARN_BIT else "activate"
        return f"{word} {b & SCENE_MASK}"

    def _check_item(self, buf: bytearray, index: int) -> None:
        if buf[index] & 0x40:
            self._warn_reserved()
            buf[index] &= LEARN_BIT | SCENE_MASK
