"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (TYPEINDEX__CLIENT__ACCEPT=application/ld+json)
  3. typeindex.yaml         (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("typeindex")


def _find_config_file() -> str | None:
    """Return the path of the first typeindex.yaml found, or None."""
    candidates = [
        Path("typeindex.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "typeindex.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ClientSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accept: str = "text/turtle"
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = "typeindex/0.1"


class RegistrySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    public_index_slug: str = "publicTypeIndex.ttl"
    private_index_slug: str = "privateTypeIndex.ttl"
    # Characters of the hash kept for each half of a registration fragment
    fragment_length: int = Field(default=10, ge=4, le=43)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: TYPEINDEX__CLIENT__TIMEOUT_SECONDS=5
        env_prefix="TYPEINDEX__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    client: ClientSettings = ClientSettings()
    registry: RegistrySettings = RegistrySettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            # dotenv and file secrets intentionally excluded
        )
