# File: strapigen/config.py
"""
StrapiGen - Configuration
==========================
Typed settings for the two halves of a run.

``DatabaseSettings`` is read from ``SOURCE_DB_*`` environment variables
(and an optional ``.env`` file) by ``pydantic-settings``.  ``GeneratorSettings``
controls where and how files are emitted.  Both are built once by the CLI
and handed to the reader, emitter and generator; nothing below this module
reads the process environment.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from strapigen.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("strapigen.config")


# ---------------------------------------------------------------------------
# Source database
# ---------------------------------------------------------------------------


class DatabaseSettings(BaseSettings):
    """Connection parameters of the database whose schema is introspected."""

    model_config = SettingsConfigDict(
        env_prefix="SOURCE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host.")
    user: str = Field(default="root", description="Login user.")
    password: str = Field(default="", description="Login password.")
    name: str = Field(default="restaurant", description="Schema to introspect.")
    port: int = Field(default=3306, ge=1, le=65535, description="TCP port.")
    table_prefix: str = Field(
        default="",
        description="Only tables starting with this prefix are generated.",
    )
    driver: str = Field(
        default="mysql+pymysql",
        description="SQLAlchemy dialect+driver used to connect.",
    )

    def url(self) -> URL:
        """SQLAlchemy URL for the configured database."""
        return URL.create(
            drivername=self.driver,
            username=self.user or None,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        )

    def safe_url(self) -> str:
        """URL rendered with the password masked, for logs."""
        return self.url().render_as_string(hide_password=True)


# ---------------------------------------------------------------------------
# Generator output
# ---------------------------------------------------------------------------


class GeneratorSettings(BaseModel):
    """Where and how the Strapi modules are written."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    output_root: Path = Field(
        default_factory=Path.cwd,
        description="Strapi project root; modules go under <root>/<api_dir>.",
    )
    api_dir: str = Field(default="src/api", min_length=1)
    stub_extension: Literal["ts", "js"] = Field(
        default="ts", description="Language of controller/service/route stubs."
    )
    draft_and_publish: bool = Field(default=True)
    dry_run: bool = Field(
        default=False, description="Render and report, but write nothing."
    )

    @property
    def api_root(self) -> Path:
        return Path(self.output_root) / self.api_dir


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_database_settings(env_file: Optional[Path] = None) -> DatabaseSettings:
    """
    Build ``DatabaseSettings`` from the environment.

    Args:
        env_file: Optional dotenv file to read instead of ``./.env``.

    Raises:
        ConfigurationError: If a value fails validation (e.g. a
            non-numeric ``SOURCE_DB_PORT``).
    """
    try:
        if env_file is not None:
            if not Path(env_file).is_file():
                raise ConfigurationError(f"Env file not found: {env_file}")
            settings = DatabaseSettings(_env_file=str(env_file))
        else:
            settings = DatabaseSettings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid database settings: {exc}") from exc

    logger.info(
        "Source database: %s (table prefix: %r).",
        settings.safe_url(),
        settings.table_prefix,
    )
    return settings


__all__: List[str] = [
    "DatabaseSettings",
    "GeneratorSettings",
    "load_database_settings",
]

logger.debug("strapigen.config loaded.")
