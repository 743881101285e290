"""
Configuration module
====================

Loads runtime settings from environment variables and a ``.env`` file.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """
    Application settings, populated from the environment.

    Attributes:
        GROUPS_WORKBOOK_PATH: default source workbook
        PREVIEW_OUTPUT_PATH: where the preview JSON is written
        PREVIEW_SAMPLE_SIZE: number of entities kept in ``sampleGroups``
        GROUPS_RULES_PATH: optional YAML file overriding classification rules
        LOG_LEVEL: package log level
    """
    GROUPS_WORKBOOK_PATH: str = "public/gp.xlsx"
    PREVIEW_OUTPUT_PATH: str = "import-preview-data.json"
    PREVIEW_SAMPLE_SIZE: int = 10
    GROUPS_RULES_PATH: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    @field_validator("PREVIEW_SAMPLE_SIZE")
    @classmethod
    def validate_sample_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError("PREVIEW_SAMPLE_SIZE must be >= 0")
        return v

    @field_validator("GROUPS_RULES_PATH")
    @classmethod
    def blank_rules_path_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


# Process-wide singleton
_settings_instance = None


def get_settings() -> Settings:
    """Return the cached Settings instance, creating it on first call."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached instance so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
