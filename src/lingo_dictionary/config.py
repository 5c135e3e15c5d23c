"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (LINGO__DICTIONARY__LANGUAGE=Luganda)
  2. lingo.yaml             (searched in cwd, then ~/.config/lingo-dictionary/)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
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

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("lingo-dictionary")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "store.db")


def _find_config_file() -> str | None:
    """Return the path of the first lingo.yaml found, or None."""
    candidates = [
        Path("lingo.yaml"),
        Path.home() / ".config" / "lingo-dictionary" / "lingo.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class DictionarySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    language: str = "Luganda"
    # False switches fetch and freshness checks to the bundled offline dictionary
    use_remote_dictionary: bool = True
    storage_key: str = "lingoDictionary"
    min_similarity_score: float = Field(default=0.7, ge=0.0, le=1.0)


class ApiSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = "http://localhost:8000/api"
    timeout_seconds: float = Field(default=30.0, gt=0)


class StoreSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    db_path: str = _DEFAULT_DB_PATH


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: LINGO__API__URL=https://...
        env_prefix="LINGO__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    dictionary: DictionarySettings = DictionarySettings()
    api: ApiSettings = ApiSettings()
    store: StoreSettings = StoreSettings()
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
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
