"""
Environment-driven runtime settings.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Settings(BaseModel):
    """
    Settings read from environment variables (or a `.env` in the working directory).

    Attributes:
        log_level: Overrides the CLI `--log-level` option.
        asset_uri_prefix: Prefix applied to asset paths when a config file sets none.
    """
    log_level: Optional[str] = Field(default=None, alias="PANES_LOG_LEVEL")
    asset_uri_prefix: str = Field(default="", alias="PANES_ASSET_URI_PREFIX")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings from the environment exactly once.
    """
    values = {
        field.alias: os.getenv(field.alias)
        for field in Settings.model_fields.values()
        if os.getenv(field.alias) is not None
    }
    return Settings(**values)
