# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Shared fixtures for the cfgdoc test suite.
"""

# Standard
import os

# Third-Party
import pytest

# First-Party
from cfgdoc.config import get_settings, Settings
from cfgdoc.serializer import CfgSerializer


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Drop engine env vars and the cached settings around every test."""
    for key in list(os.environ):
        if key.startswith("CFGDOC_") or key == "CONFIG_PATH":
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings that ignore any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def serializer(settings):
    """Serializer bound to default settings."""
    return CfgSerializer(settings)


@pytest.fixture
def write_doc(tmp_path):
    """Write a document to a temporary file and return its path."""

    def _write(text: str, name: str = "config.toml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
