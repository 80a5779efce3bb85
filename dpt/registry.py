"""Translator registry — resolve a DPT ID to a translator at runtime.

Main numbers map to a MainType entry (translator class plus description).
The table is an immutable snapshot: lookups read it without locking,
register_main_type swaps in a new copy under a lock.

Usage:
    from dpt import create_translator, encode, decode

    t = create_translator("9.001")
    t.set_value("21.5")                 # t.data == b'\\x0c\\x33'
    raw = encode("9.001", 21.5)         # → b'\\x0c\\x33'
    text = decode("9.001", raw)         # → "21.5 °C"
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional, Union

from .bitset import EightBitSetTranslator, SixteenBitSetTranslator
from .boolean import BooleanTranslator
from .color import RelativeControlRgbwTranslator, RgbTranslator, RgbwTranslator
from .control import BooleanControlTranslator, ControlTranslator
from .date import DateTranslator
from .date_time import DateTimeTranslator
from .descriptor import DPT, format_dpt_id, parse_dpt_id
from .enumeration import EightBitEnumTranslator
from .errors import DPTError, DPTNotFoundError, DPTUsageError
from .float16 import Float16Translator
from .float32 import Float32Translator
from .integer import (
    EightBitSignedTranslator,
    EightBitUnsignedTranslator,
    FourByteSignedTranslator,
    FourByteUnsignedTranslator,
    TwoByteSignedTranslator,
    TwoByteUnsignedTranslator,
)
from .management import AlarmInfoTranslator, VersionTranslator
from .scene import SceneControlTranslator, SceneNumberTranslator
from .string import (
    CharacterTranslator,
    StringTranslator,
    Utf8Translator,
    VariableStringTranslator,
)
from .time import TimeTranslator
from .transition import XyYTransitionTranslator, XyYTranslator
from .translator import Translator

logger = logging.getLogger("knxdpt.registry")


@dataclass(frozen=True)
class MainType:
    """Registry entry for one main number."""

    main_number: int
    factory: type[Translator]
    description: str = ""

    @property
    def sub_types(self) -> dict[str, DPT]:
        return self.factory.SUB_TYPES

    @property
    def type_size(self) -> int:
        return self.factory.TYPE_SIZE

    def create(self, dpt: Union[DPT, str]) -> Translator:
        return self.factory(dpt)


_lock = threading.Lock()
_main_types: dict[int, MainType] = {}


def register_main_type(main_type: MainType) -> None:
    """Add or replace a main type. Safe against concurrent lookups."""
    global _main_types
    with _lock:
        table = dict(_main_types)
        table[main_type.main_number] = main_type
        _main_types = table
    logger.debug(
        "Registered main type %d (%s, %d subtypes)",
        main_type.main_number,
        main_type.description,
        len(main_type.sub_types),
    )


def get_main_type(main_number: int) -> MainType:
    entry = _main_types.get(main_number)
    if entry is None:
        raise DPTNotFoundError(f"no translator available for main number {main_number}")
    return entry


def all_main_types() -> dict[int, MainType]:
    """Snapshot of all registered main types."""
    return dict(_main_types)


def main_types_by_size(size: int) -> list[MainType]:
    """Main types whose items are exactly `size` bytes wide."""
    return [m for m in _main_types.values() if m.type_size == size]


def resolve(main_number: int) -> dict[str, DPT]:
    """All subtypes known for a main number, by DPT ID."""
    return dict(get_main_type(main_number).sub_types)


def _lookup(dpt: Union[DPT, str, int], sub: Union[int, str, None] = None) -> tuple[MainType, str]:
    if isinstance(dpt, DPT):
        dpt = dpt.id
    if isinstance(dpt, str):
        if "." in dpt:
            if sub is not None:
                raise DPTUsageError(f"sub-type given twice: {dpt} and {sub}")
            main, sub = parse_dpt_id(dpt)
        else:
            main = parse_dpt_id(dpt)[0]
    else:
        main = dpt

    entry = get_main_type(main)
    if sub is None:
        return entry, next(iter(entry.sub_types))
    if isinstance(sub, str):
        sub_main, sub_number = parse_dpt_id(sub) if "." in sub else (main, parse_dpt_id(sub)[0])
        if sub_main != main:
            raise DPTNotFoundError(f"DPT {sub} does not belong to main number {main}")
        dpt_id = format_dpt_id(main, sub_number)
    else:
        dpt_id = format_dpt_id(main, sub)
    if dpt_id not in entry.sub_types:
        raise DPTNotFoundError(f"DPT {dpt_id} not found in main number {main}")
    return entry, dpt_id


def create_translator(
    dpt: Union[DPT, str, int], sub: Union[int, str, None] = None
) -> Translator:
    """Create a translator.

    Accepts a DPT, a full ID ("9.001"), a main number with an optional
    sub number (9, 1), or a bare main number or "9" for its first subtype.
    """
    entry, dpt_id = _lookup(dpt, sub)
    return entry.create(dpt_id)


def has_translator(dpt: Union[DPT, str, int], sub: Union[int, str, None] = None) -> bool:
    try:
        _lookup(dpt, sub)
    except DPTError:
        return False
    return True


def _register_defaults() -> None:
    for factory in (
        BooleanTranslator,
        BooleanControlTranslator,
        ControlTranslator,
        CharacterTranslator,
        EightBitUnsignedTranslator,
        EightBitSignedTranslator,
        TwoByteUnsignedTranslator,
        TwoByteSignedTranslator,
        Float16Translator,
        TimeTranslator,
        DateTranslator,
        FourByteUnsignedTranslator,
        FourByteSignedTranslator,
        Float32Translator,
        StringTranslator,
        SceneNumberTranslator,
        SceneControlTranslator,
        DateTimeTranslator,
        EightBitEnumTranslator,
        EightBitSetTranslator,
        SixteenBitSetTranslator,
        VariableStringTranslator,
        Utf8Translator,
        VersionTranslator,
        AlarmInfoTranslator,
        RgbTranslator,
        XyYTranslator,
        XyYTransitionTranslator,
        RgbwTranslator,
        RelativeControlRgbwTranslator,
    ):
        register_main_type(MainType(factory.MAIN_NUMBER, factory, factory.DESCRIPTION))


_register_defaults()


# ---------------------------------------------------------------------------
# Codec façade
# ---------------------------------------------------------------------------


class DPTCodec:
    """Central access point for DPT encoding/decoding."""

    @staticmethod
    def encode(dpt_id: str, value: Any) -> bytes:
        """Encode a value (text or native) to KNX bytes for the given DPT."""
        t = create_translator(dpt_id)
        t.set_value(value)
        return t.data

    @staticmethod
    def decode(dpt_id: str, data: bytes) -> str:
        """Decode KNX bytes to the value text (with unit) of the given DPT."""
        t = create_translator(dpt_id)
        t.set_data(data)
        return t.value

    @staticmethod
    def get_info(dpt_id: str) -> Optional[DPT]:
        """Get metadata for a DPT, None if unknown."""
        try:
            entry, full_id = _lookup(dpt_id)
        except DPTError:
            return None
        return entry.sub_types[full_id]

    @staticmethod
    def list_dpts() -> list[dict]:
        """List all registered DPTs with metadata, ordered by main and sub number."""
        result = []
        for main in sorted(_main_types):
            dpts = _main_types[main].sub_types.values()
            for dpt in sorted(dpts, key=lambda d: d.sub_number):
                info = dpt.to_dict()
                info["encoding_size"] = _main_types[main].type_size
                result.append(info)
        return result

    @staticmethod
    def is_supported(dpt_id: str) -> bool:
        """Check if a DPT (or bare main number, e.g. "9") is supported."""
        return has_translator(dpt_id)


# Module-level convenience functions
def encode(dpt_id: str, value: Any) -> bytes:
    return DPTCodec.encode(dpt_id, value)


def decode(dpt_id: str, data: bytes) -> str:
    return DPTCodec.decode(dpt_id, data)


def get_dpt_info(dpt_id: str) -> Optional[dict]:
    info = DPTCodec.get_info(dpt_id)
    return info.to_dict() if info else None


def list_dpts() -> list[dict]:
    return DPTCodec.list_dpts()


def is_supported(dpt_id: str) -> bool:
    return DPTCodec.is_supported(dpt_id)
