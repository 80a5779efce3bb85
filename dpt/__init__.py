"""KNX Datapoint Type (DPT) codec package."""

from .config import CodecSettings, apply_settings, get_settings, load_settings
from .descriptor import DPT, format_dpt_id, parse_dpt_id
from .errors import DPTError, DPTFormatError, DPTNotFoundError, DPTRangeError, DPTUsageError
from .registry import (
    DPTCodec,
    MainType,
    all_main_types,
    create_translator,
    decode,
    encode,
    get_dpt_info,
    get_main_type,
    has_translator,
    is_supported,
    list_dpts,
    main_types_by_size,
    register_main_type,
    resolve,
)
from .translator import Translator

__all__ = [
    "CodecSettings",
    "DPT",
    "DPTCodec",
    "DPTError",
    "DPTFormatError",
    "DPTNotFoundError",
    "DPTRangeError",
    "DPTUsageError",
    "MainType",
    "Translator",
    "all_main_types",
    "apply_settings",
    "create_translator",
    "decode",
    "encode",
    "format_dpt_id",
    "get_dpt_info",
    "get_main_type",
    "get_settings",
    "has_translator",
    "is_supported",
    "list_dpts",
    "load_settings",
    "main_types_by_size",
    "parse_dpt_id",
    "register_main_type",
    "resolve",
]
