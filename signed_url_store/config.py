"""Configuration with JSON file, YAML overlay, and env variable support."""

import json
import logging
import os
from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from signed_url_store.enums import StorageBackend

logger = logging.getLogger(__name__)

ENV_PREFIX = "SIGNED_URL_"


def _load_yaml_mapping(path: Path) -> dict:
    """Load a YAML file that must contain a mapping.

    Missing files yield an empty dict; a file holding anything other than
    a mapping is a configuration error.
    """
    if not path.exists() or not path.is_file():
        return {}

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


class SignedUrlConfig(BaseSettings):
    """Configuration with JSON file + YAML overlay + env var support.

    Load order (later overrides earlier):
    1. config.json - base configuration
    2. config.yml - optional overlay
    3. Environment variables - runtime overrides

    Prefix: SIGNED_URL_ (e.g., SIGNED_URL_DATABASE_URL)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage settings
    storage_backend: StorageBackend = Field(default=StorageBackend.DATABASE)
    database_url: str = Field(default="sqlite+aiosqlite:///./signed_urls.db")
    auto_create_tables: bool = Field(
        default=True,
        description="Create missing tables at startup instead of relying on Alembic",
    )
    lock_shards: int = Field(
        default=16,
        ge=1,
        description="Number of striped locks used by the in-memory backend",
    )

    # Garbage collection
    gc_interval_seconds: int = Field(default=300, ge=1)

    # Logging
    log_level: str = Field(default="INFO")

    @classmethod
    def from_json_file(
        cls,
        config_path: str = "config.json",
        yaml_path: str = "config.yml",
    ) -> "SignedUrlConfig":
        """Load config from JSON + YAML with env var overrides.

        Args:
            config_path: Path to JSON config file.
            yaml_path: Path to optional YAML overlay.

        Returns:
            Configured SignedUrlConfig instance.
        """
        config_data: dict = {}

        json_path = Path(config_path)
        if json_path.exists():
            with open(json_path) as f:
                config_data = json.load(f)
            logger.debug("Loaded config from %s", json_path)

        config_data.update(_load_yaml_mapping(Path(yaml_path)))

        # Drop file values shadowed by env vars so pydantic-settings
        # applies the env value
        for key in list(config_data):
            if f"{ENV_PREFIX}{key.upper()}" in os.environ:
                del config_data[key]

        return cls(**config_data)
