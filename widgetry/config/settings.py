"""
Application Settings
===================

Library settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    """Main library settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="widgetry", description="Library name")
    app_version: str = Field(default="1.0.0", description="Library version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Asset Configuration
    cdn_base_url: str = Field(
        default="https://cdn.jsdelivr.net/npm", description="Base URL for CSS/JS assets"
    )
    jquery_version: str = Field(default="3.6.0", description="jQuery version")
    bootstrap_version: str = Field(default="3.4.1", description="Bootstrap version")
    ion_rangeslider_version: str = Field(default="2.3.1", description="ion.rangeSlider version")
    datepicker_version: str = Field(
        default="1.9.0", description="bootstrap-datepicker version"
    )
    selectize_version: str = Field(default="0.12.6", description="selectize.js version")
    font_awesome_version: str = Field(default="4.7.0", description="Font Awesome version")

    # Rendering Configuration
    default_theme: Optional[str] = Field(default=None, description="Theme applied when a page has none")
    default_plot_width: str = Field(default="100%", description="Default plot output width")
    default_plot_height: str = Field(default="400px", description="Default plot output height")
    html_lang: str = Field(default="en", description="Document language attribute")
    pretty_print: bool = Field(default=True, description="Indent generated markup")
    indent_width: int = Field(default=2, ge=0, le=8, description="Spaces per indentation level")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("cdn_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise CDN base URL."""
        return v.rstrip("/")

    @field_validator("log_file")
    @classmethod
    def create_log_directory(cls, v: Optional[Path]) -> Optional[Path]:
        """Ensure the log file directory exists."""
        if v is not None:
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="WIDGETRY_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
