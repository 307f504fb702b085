"""Configuration management for the inventory system."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PRODUCTS_FILE = "products.csv"
SUPPLIERS_FILE = "suppliers.csv"
ASSIGNMENTS_FILE = "product_suppliers.csv"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ImsSettings(BaseSettings):
    """Settings read from ``IMS_*`` environment variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="IMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding every flat file",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level used by the CLI",
    )

    auto_replenish_on_sale: bool = Field(
        default=False,
        description="Raise replenishment orders right after each sale",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Expected one of: {', '.join(_LOG_LEVELS)}"
            )
        return level

    @property
    def products_file(self) -> Path:
        return self.data_dir / PRODUCTS_FILE

    @property
    def suppliers_file(self) -> Path:
        return self.data_dir / SUPPLIERS_FILE

    @property
    def assignments_file(self) -> Path:
        return self.data_dir / ASSIGNMENTS_FILE


_settings_instance = None


def get_settings() -> ImsSettings:
    """Get or create the global settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = ImsSettings()
        logger.debug("Settings loaded (data_dir=%s)", _settings_instance.data_dir)
    return _settings_instance


def reload_settings() -> ImsSettings:
    """Reload settings (useful for testing)."""
    global _settings_instance
    _settings_instance = ImsSettings()
    return _settings_instance
