# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

cfgdoc Configuration.
This module defines the engine settings using Pydantic. Values load from
environment variables (prefix ``CFGDOC_``) or a ``.env`` file.

Environment variables:
- CFGDOC_TAG_KEY: Metadata key holding field tags (default: "cfg")
- CFGDOC_SECTION_SCOPE: "section" or "line" header scoping (default: "section")
- CFGDOC_FIELD_PRIORITY: Field names encoded first, CSV or JSON list
- CFGDOC_LOG_LEVEL: Logging level (default: "WARNING")
- CONFIG_PATH / CFGDOC_CONFIG_PATH: Document loaded by ``load_from_env``

Examples:
    >>> from cfgdoc.config import Settings
    >>> s = Settings(section_scope="line")
    >>> s.section_scope
    'line'
    >>> Settings(log_level="debug").log_level
    'DEBUG'
    >>> try:
    ...     Settings(log_level="loud")
    ... except ValueError:
    ...     print("error")
    error
"""

# Standard
from functools import lru_cache
import logging
import os
from typing import Any, List, Literal, Optional

# Third-Party
import orjson
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# First-Party
from cfgdoc.encoder import FIELD_PRIORITY
from cfgdoc.fields import DEFAULT_TAG_KEY

logger = logging.getLogger(__name__)


def _normalize_env_list_vars() -> None:
    """Normalize list-typed env vars to valid JSON arrays.

    If a value is empty or CSV, convert it to a JSON array string.
    """
    for key in ("CFGDOC_FIELD_PRIORITY",):
        raw = os.environ.get(key)
        if raw is None:
            continue
        s = raw.strip()
        if not s:
            os.environ[key] = "[]"
            continue
        if s.startswith("["):
            try:
                orjson.loads(s)
                continue
            except orjson.JSONDecodeError:
                logger.debug(f"{key} is not a JSON list, reading it as CSV")
        items = [item.strip() for item in s.split(",") if item.strip()]
        os.environ[key] = orjson.dumps(items).decode()


class Settings(BaseSettings):
    """Engine settings.

    Attributes:
        tag_key: Metadata key holding ``name[,omitempty]`` field tags.
        section_scope: How long a ``[section]`` header stays in effect.
        field_priority: Field names encoded first in every structure.
        log_level: Level applied to the ``cfgdoc`` logger.
        config_path: Document path used by ``load_from_env``.
    """

    tag_key: str = Field(default=DEFAULT_TAG_KEY, min_length=1, description="Metadata key holding field tags")
    section_scope: Literal["section", "line"] = Field(default="section", description="Header scoping: until the next header, or until the next newline")
    field_priority: List[str] = Field(default_factory=lambda: list(FIELD_PRIORITY), description="Field names encoded first in structures")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="WARNING")
    config_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("CFGDOC_CONFIG_PATH", "CONFIG_PATH"),
        description="Configuration document loaded by load_from_env",
    )

    model_config = SettingsConfigDict(env_prefix="CFGDOC_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore", populate_by_name=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Uppercase and validate the log level.

        Args:
            v (str): The log level provided via configuration or environment.

        Returns:
            str: The normalized (uppercase) log level.

        Raises:
            ValueError: If the value is not a known level.
        """
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_up = str(v).upper()
        if v_up not in allowed:
            raise ValueError(f"Invalid log_level: {v}")
        return v_up

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the package logger.

        Handlers are left to the application; nothing is attached here.
        """
        logging.getLogger("cfgdoc").setLevel(self.log_level)


@lru_cache()
def get_settings(**kwargs: Any) -> Settings:
    """Get cached settings instance.

    Args:
        **kwargs: Keyword arguments to pass to the Settings setup.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> get_settings() is get_settings()
        True
    """
    _normalize_env_list_vars()
    cfg = Settings(**kwargs)
    cfg.configure_logging()
    return cfg
