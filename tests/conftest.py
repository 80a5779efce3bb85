"""Pytest configuration and shared fixtures for knxdpt tests."""

from __future__ import annotations

import os
import sys

import pytest

_TESTS_DIR = os.path.dirname(__file__)
_PROJECT_ROOT = os.path.abspath(os.path.join(_TESTS_DIR, ".."))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with default codec settings and restore them afterwards."""
    from dpt.config import CodecSettings, apply_settings

    apply_settings(CodecSettings())
    yield
    apply_settings(CodecSettings())


@pytest.fixture
def settings_file(tmp_path):
    """Write a YAML settings file and return its path."""

    def _write(content: str) -> str:
        path = tmp_path / "knxdpt.yaml"
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
