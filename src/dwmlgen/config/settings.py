"""
Environment settings loading helpers.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_ICON_BASE_URL = "http://www.nws.noaa.gov/weather/images/fcicons/"


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Settings(BaseModel):
    """
    Process-wide settings read from the environment.

    Attributes:
        log_level: Overrides the --log-level option when set.
        icon_base_url: Base URL prepended to derived condition icon filenames.
    """
    log_level: Optional[str] = Field(default=None, alias="DWMLGEN_LOG_LEVEL")
    icon_base_url: str = Field(default=DEFAULT_ICON_BASE_URL, alias="DWMLGEN_ICON_BASE_URL")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings from environment/.env exactly once.
    """
    values = {
        field.alias: os.getenv(field.alias)
        for field in Settings.model_fields.values()
        if os.getenv(field.alias)
    }
    return Settings(**values)
