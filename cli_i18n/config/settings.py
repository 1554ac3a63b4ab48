"""Application settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """cli-i18n settings, read from ``CLI_I18N_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLI_I18N_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Resolver
    locale: Optional[str] = Field(default=None, description="Active locale; detected when unset")
    fallback_locale: str = Field(default="en", min_length=1)
    locales_dir: Optional[Path] = Field(default=None, description="Directory with <locale>.json files")

    # Validator
    master_file: str = Field(default="en.json")
    report_file: Path = Field(default=Path("translation-report.json"))

    debug: bool = False
