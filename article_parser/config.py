"""
Runtime settings read from ARTICLE_PARSER_* environment variables.

The command-line script loads a .env file with python-dotenv before the
first get_settings() call; library callers can also construct Settings
directly and pass values to ArticleTransformer / ArticleLoader.
"""

import logging
import os
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError

from .exceptions import ConfigurationError

TreeBuilder = Literal["html5lib", "lxml", "html.parser"]

# Order matters: html5lib follows the WHATWG algorithm and is the most
# lenient, lxml is faster but restructures less faithfully, html.parser is
# always available.
TREE_BUILDERS: tuple[str, ...] = ("html5lib", "lxml", "html.parser")

ENV_PREFIX = "ARTICLE_PARSER_"


class Settings(BaseModel):
    """Settings for the transform, logging, and the background loader."""
    tree_builder: TreeBuilder = "html5lib"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    workers: int = 2

    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ConfigurationError(
                f"Unknown log level: {self.log_level}",
                setting=f"{ENV_PREFIX}LOG_LEVEL"
            )
        return level


def _read_env() -> dict:
    values = {}
    for field in Settings.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{field.upper()}")
        if raw is not None and raw.strip():
            values[field] = raw.strip()
    return values


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    values = _read_env()
    try:
        settings = Settings(**values)
    except ValidationError as e:
        field = str(e.errors()[0]["loc"][0]) if e.errors() else "unknown"
        raise ConfigurationError(
            f"Invalid setting {ENV_PREFIX}{field.upper()}: {values.get(field)!r}",
            setting=f"{ENV_PREFIX}{field.upper()}",
            details={"errors": [err["msg"] for err in e.errors()]}
        )
    if settings.workers < 1:
        raise ConfigurationError(
            f"{ENV_PREFIX}WORKERS must be at least 1, got {settings.workers}",
            setting=f"{ENV_PREFIX}WORKERS"
        )
    return settings
