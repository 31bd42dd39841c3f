"""
Runtime settings loaded from the environment and an optional `.env` file.
"""

from __future__ import annotations

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from dotenv import load_dotenv

from ..errors import SettingsError

DEFAULT_BUFFER_SIZE = 64 * 1024
MIN_BUFFER_SIZE = 4 * 1024
MAX_BUFFER_SIZE = 1024 * 1024


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


def _default_template_dir() -> Path:
    return Path.home() / ".gamescaffold" / "templates"


class ScaffolderSettings(BaseModel):
    """
    Settings that callers usually leave at their defaults.

    Attributes:
        template_dir: Directory holding template archives and `templates.toml`.
        buffer_size: Chunk size used when copying entry bytes to disk.
        log_level: Optional logging level override for the CLI.
    """
    template_dir: Path = Field(default_factory=_default_template_dir, alias="GAMESCAFFOLD_TEMPLATE_DIR")
    buffer_size: int = Field(
        default=DEFAULT_BUFFER_SIZE,
        ge=MIN_BUFFER_SIZE,
        le=MAX_BUFFER_SIZE,
        alias="GAMESCAFFOLD_BUFFER_SIZE",
    )
    log_level: Optional[str] = Field(default=None, alias="GAMESCAFFOLD_LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> ScaffolderSettings:
    """
    Load settings from environment/.env exactly once.

    Unset variables fall back to the model defaults.

    Raises:
        SettingsError: If a variable holds an invalid value.
    """
    values = {
        field.alias: os.getenv(field.alias)
        for field in ScaffolderSettings.model_fields.values()
        if os.getenv(field.alias)
    }
    try:
        return ScaffolderSettings(**values)
    except ValidationError as exc:
        raise SettingsError(f"Invalid scaffolder settings: {exc}") from exc
