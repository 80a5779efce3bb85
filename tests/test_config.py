"""Tests for codec settings loading and application."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from dpt import CodecSettings, apply_settings, create_translator, get_settings, load_settings
from dpt.config import ENV_CONFIG


def test_defaults():
    settings = CodecSettings()
    assert settings.append_unit is True
    assert settings.time_format is None
    assert settings.log_level == "WARNING"


def test_load_settings_from_file(settings_file):
    path = settings_file('append_unit: false\ntime_format: "%H.%M"\nlog_level: debug\n')
    settings = load_settings(path)
    assert settings.append_unit is False
    assert settings.time_format == "%H.%M"
    assert settings.log_level == "DEBUG"


def test_load_settings_from_environment(settings_file, monkeypatch):
    path = settings_file("append_unit: false\n")
    monkeypatch.setenv(ENV_CONFIG, path)
    assert load_settings().append_unit is False


def test_load_settings_without_file(monkeypatch):
    monkeypatch.delenv(ENV_CONFIG, raising=False)
    assert load_settings() == CodecSettings()


def test_load_settings_empty_file(settings_file):
    assert load_settings(settings_file("")) == CodecSettings()


def test_load_settings_rejects_non_mapping(settings_file):
    with pytest.raises(ValueError):
        load_settings(settings_file("- append_unit\n"))


@pytest.mark.parametrize(
    "content", ["log_level: LOUD\n", 'time_format: ""\n', "append_unit: sometimes\n"]
)
def test_load_settings_rejects_invalid_values(settings_file, content: str):
    with pytest.raises(ValidationError):
        load_settings(settings_file(content))


def test_apply_settings():
    apply_settings(CodecSettings(append_unit=False, log_level="ERROR"))
    assert get_settings().append_unit is False
    assert logging.getLogger("knxdpt").level == logging.ERROR

    t = create_translator("9.001")
    t.set_value(21.5)
    assert t.value == "21.5"
