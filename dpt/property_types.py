"""Property data types (PDT) — bridge onto the DPT registry.

Interface object properties declare one of a small set of storage formats
(PDT_UNSIGNED_INT, PDT_KNX_FLOAT, ...). Each PDT with a sensible datapoint
type maps to (main number, DPT ID); translators created here never append
a unit.

    get_values(PDT_KNX_FLOAT, b"\\x0c\\x33")   → ["21.5"]
"""

import logging
import threading
from typing import NamedTuple, Optional

from . import registry
from .errors import DPTError, DPTNotFoundError
from .translator import Translator

logger = logging.getLogger("knxdpt.registry")

PDT_CONTROL = 0x00
PDT_CHAR = 0x01
PDT_UNSIGNED_CHAR = 0x02
PDT_INT = 0x03
PDT_UNSIGNED_INT = 0x04
PDT_KNX_FLOAT = 0x05
PDT_DATE = 0x06
PDT_TIME = 0x07
PDT_LONG = 0x08
PDT_UNSIGNED_LONG = 0x09
PDT_FLOAT = 0x0A
PDT_DOUBLE = 0x0B
PDT_CHAR_BLOCK = 0x0C
PDT_POLL_GROUP_SETTINGS = 0x0D
PDT_SHORT_CHAR_BLOCK = 0x0E
PDT_DATE_TIME = 0x0F
PDT_VARIABLE_LENGTH = 0x10
PDT_GENERIC_01 = 0x11
PDT_GENERIC_02 = 0x12
PDT_GENERIC_03 = 0x13
PDT_GENERIC_04 = 0x14
PDT_GENERIC_05 = 0x15
PDT_GENERIC_06 = 0x16
PDT_GENERIC_07 = 0x17
PDT_GENERIC_08 = 0x18
PDT_GENERIC_09 = 0x19
PDT_GENERIC_10 = 0x1A
PDT_GENERIC_11 = 0x1B
PDT_GENERIC_12 = 0x1C
PDT_GENERIC_13 = 0x1D
PDT_GENERIC_14 = 0x1E
PDT_GENERIC_15 = 0x1F
PDT_GENERIC_16 = 0x20
PDT_GENERIC_17 = 0x21
PDT_GENERIC_18 = 0x22
PDT_GENERIC_19 = 0x23
PDT_GENERIC_20 = 0x24
# 0x25 - 0x2F reserved
PDT_VERSION = 0x30
PDT_ALARM_INFO = 0x31
PDT_BINARY_INFORMATION = 0x32
PDT_BITSET8 = 0x33
PDT_BITSET16 = 0x34
PDT_ENUM8 = 0x35
PDT_SCALING = 0x36
# 0x37 - 0x3B reserved
PDT_NE_VL = 0x3C
PDT_NE_FL = 0x3D
PDT_FUNCTION = 0x3E


class DPTID(NamedTuple):
    main_number: int
    dpt: str


_lock = threading.Lock()
_property_types: dict[int, DPTID] = {
    PDT_CHAR: DPTID(6, "6.010"),
    PDT_UNSIGNED_CHAR: DPTID(5, "5.010"),
    PDT_INT: DPTID(8, "8.001"),
    PDT_UNSIGNED_INT: DPTID(7, "7.001"),
    PDT_KNX_FLOAT: DPTID(9, "9.002"),
    PDT_DATE: DPTID(11, "11.001"),
    PDT_TIME: DPTID(10, "10.001"),
    PDT_LONG: DPTID(13, "13.001"),
    PDT_UNSIGNED_LONG: DPTID(12, "12.001"),
    PDT_FLOAT: DPTID(14, "14.005"),
    PDT_CHAR_BLOCK: DPTID(24, "24.001"),
    PDT_SHORT_CHAR_BLOCK: DPTID(24, "24.001"),
    PDT_DATE_TIME: DPTID(19, "19.001"),
    PDT_VARIABLE_LENGTH: DPTID(24, "24.001"),
    PDT_VERSION: DPTID(217, "217.001"),
    PDT_ALARM_INFO: DPTID(219, "219.001"),
    PDT_BINARY_INFORMATION: DPTID(1, "1.002"),
    PDT_BITSET8: DPTID(21, "21.001"),
    PDT_BITSET16: DPTID(22, "22.100"),
    PDT_ENUM8: DPTID(20, "20.1000"),
    PDT_SCALING: DPTID(5, "5.001"),
}


def all_property_types() -> dict[int, DPTID]:
    """Snapshot of the PDT → DPT table."""
    return dict(_property_types)


def register_property_type(pdt: int, dpt_id: DPTID) -> None:
    """Map (or remap) a property data type onto a DPT."""
    global _property_types
    with _lock:
        table = dict(_property_types)
        table[pdt] = dpt_id
        _property_types = table
    logger.debug("Mapped PDT 0x%02X to DPT %s", pdt, dpt_id.dpt)


def _dpt_id(pdt: int) -> DPTID:
    dpt_id = _property_types.get(pdt)
    if dpt_id is None:
        raise DPTNotFoundError(f"PDT 0x{pdt:02X} not found")
    return dpt_id


def has_translator(pdt: int) -> bool:
    """True if the PDT maps to a DPT with a registered translator."""
    dpt_id = _property_types.get(pdt)
    if dpt_id is None:
        return False
    try:
        return dpt_id.dpt in registry.get_main_type(dpt_id.main_number).sub_types
    except DPTError:
        return False


def create_translator(pdt: int, data: Optional[bytes] = None) -> Translator:
    """Translator for a PDT, unit rendering off, optionally loaded with data."""
    dpt_id = _dpt_id(pdt)
    t = registry.create_translator(dpt_id.main_number, dpt_id.dpt)
    t.append_unit = False
    if data is not None:
        t.set_data(data)
    return t


def get_values(pdt: int, data: bytes) -> list[str]:
    """Decode all items of a property value."""
    return create_translator(pdt, data).all_values()
