"""
Configuration settings for Gradebook.

Uses Pydantic Settings to load environment variables for the database location
and logging. The database directory defaults to the platform's per-user data
directory when it is not set explicitly.
"""
from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "gradebook"
DEFAULT_DB_NAME = "grades.db"


def default_data_dir() -> Path:
    """
    Resolve the platform-appropriate directory for application data.
    """
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        xdg = os.environ.get("XDG_DATA_HOME")
        root = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return root / APP_DIR_NAME


class Settings(BaseSettings):
    # Database
    db_dir: Optional[Path] = Field(None, alias="GRADEBOOK_DB_DIR")
    db_name: str = Field(DEFAULT_DB_NAME, alias="GRADEBOOK_DB_NAME")

    # Logging
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def database_path(self) -> Path:
        """Full path of the SQLite file, with `~` expanded."""
        directory = self.db_dir if self.db_dir is not None else default_data_dir()
        return Path(directory).expanduser() / self.db_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings", "default_data_dir", "DEFAULT_DB_NAME"]
