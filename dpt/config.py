"""Codec settings — process-wide defaults applied once at startup.

Settings come from a YAML file (path argument, else $KNXDPT_CONFIG) and are
validated with pydantic. Missing file or keys fall back to the defaults.

Example knxdpt.yaml:
    append_unit: true
    time_format: "%H:%M:%S"
    log_level: INFO
"""

import logging
import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("knxdpt.config")

ENV_CONFIG = "KNXDPT_CONFIG"


class CodecSettings(BaseModel):
    """Defaults picked up by translators at construction time."""

    append_unit: bool = Field(default=True, description="Append DPT unit to value text")
    time_format: Optional[str] = Field(
        default=None,
        min_length=1,
        description="strftime pattern for the time part of DPT 10.001 (day prefix is kept)",
    )
    log_level: str = Field(default="WARNING", description="Level of the knxdpt logger")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level


_settings = CodecSettings()


def get_settings() -> CodecSettings:
    """Return the active settings."""
    return _settings


def load_settings(path: Optional[str] = None) -> CodecSettings:
    """Load settings from YAML. No path and no $KNXDPT_CONFIG → defaults."""
    if path is None:
        path = os.environ.get(ENV_CONFIG)
    if not path:
        return CodecSettings()

    logger.info("Loading codec settings from %s", path)
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return CodecSettings()
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    return CodecSettings(**data)


def apply_settings(settings: CodecSettings) -> None:
    """Install settings as process-wide defaults. Call once before use."""
    global _settings

    # Late import to avoid circular dependency (time → translator → config)
    from .time import StrftimeTimeFormat, set_default_time_format

    _settings = settings
    logging.getLogger("knxdpt").setLevel(settings.log_level)
    if settings.time_format:
        set_default_time_format(StrftimeTimeFormat(settings.time_format))
    else:
        set_default_time_format(None)
    logger.info(
        "Codec settings applied: append_unit=%s time_format=%s",
        settings.append_unit,
        settings.time_format,
    )
