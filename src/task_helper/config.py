"""Settings for a task run.

Loaded from `TASK_HELPER_*` environment variables and a local `.env` file (if
present). Settings only affect diagnostics on standard error; they never
change the response contract.
"""

from __future__ import annotations

import logging
import sys
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TaskHelperSettings(BaseSettings):
    """Settings for the task helper.

    Environment variables:
    - TASK_HELPER_LOG_LEVEL   (optional)
    - TASK_HELPER_LOG_FORMAT  (optional, `json` or `text`)
    - TASK_HELPER_DEBUG       (optional)
    """

    log_level: str = Field(
        default="WARNING",
        description="Root logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Format of log records written to standard error",
    )
    debug: bool = Field(
        default=False,
        description="Log task_helper internals at DEBUG level",
    )

    model_config = SettingsConfigDict(
        env_prefix="TASK_HELPER_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings() -> TaskHelperSettings:
    """Load settings, falling back to defaults when the environment is invalid."""

    try:
        return TaskHelperSettings()
    except ValidationError as e:
        print(f"task_helper: ignoring invalid settings: {e}", file=sys.stderr)
        return TaskHelperSettings.model_construct()
