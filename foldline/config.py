"""Configuration for the selector profile pipeline using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from foldline.pipeline.patterns.models import Pattern


class PatternSettings(BaseSettings):
    """Force-include / force-exclude patterns applied to every selector."""

    model_config = SettingsConfigDict(
        env_prefix="FOLDLINE_PATTERNS_",
    )

    force_include: list[Pattern] = Field(
        default_factory=list,
        description="Selectors matching any of these are always kept",
    )

    force_exclude: list[Pattern] = Field(
        default_factory=list,
        description="Selectors matching any of these are always removed",
    )

    file: Path | None = Field(
        default=None,
        description="YAML file with additional force_include/force_exclude entries",
    )


class PipelineSettings(BaseSettings):
    """Global settings for the entire pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="FOLDLINE_",
    )

    patterns: PatternSettings = Field(default_factory=PatternSettings)


# Global settings instance that can be accessed throughout the application
_settings: PipelineSettings | None = None


def get_settings() -> PipelineSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = PipelineSettings()
    return _settings


def set_settings(settings: PipelineSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings
