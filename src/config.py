from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent / "filedrop" / "templates"


class Settings(BaseSettings):
    """Configuration settings for the application."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_max_bytes: int = 1024 * 1024
    log_backup_count: int = 3
    host: str = "0.0.0.0"
    port: int = 9000
    storage_dir: str = "files"
    templates_dir: str = str(PACKAGE_TEMPLATES_DIR)
    index_template: str = "view.html"
    # bytes of each uploaded part kept in memory before spilling to a temp file
    upload_memory_limit: int = 1024
    confine_paths: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Add ``config.yml`` (or ``CONFIG_PATH``) below the environment sources."""
        yaml_path = Path(os.getenv("CONFIG_PATH", "config.yml"))
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=yaml_path),
            file_secret_settings,
        )

    def storage_path(self) -> Path:
        """Absolute path of the storage directory."""
        return Path(self.storage_dir).resolve()


config = Settings()

__all__ = ["Settings", "config"]
