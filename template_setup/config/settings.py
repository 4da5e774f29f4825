"""
Configuration settings using pydantic-settings.

Supports configuration via environment variables and a .env file in
the working directory.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SetupSettings(BaseSettings):
    """Template setup configuration settings.

    Configuration is loaded from (in order of priority):
    1. Environment variables (TEMPLATE_SETUP_*)
    2. .env file in the working directory
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="TEMPLATE_SETUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root: Path = Field(
        default_factory=Path.cwd,
        description="Repository root the setup runs in",
    )
    manifest: str = Field(
        default="dotnet",
        description="Packaged manifest name or path to a manifest YAML file",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )

    # Reporting
    warn_unknown_tokens: bool = Field(
        default=True,
        description="Report placeholders that are neither required nor optional",
    )

    # Prompt defaults
    default_template_owner: str = Field(
        default="Chris-Wolfgang",
        description="Default owner of the template repository",
    )
    default_template_name: str = Field(
        default="repo-template",
        description="Default name of the template repository",
    )
    default_nuget_status: str = Field(
        default="Coming soon to NuGet.org",
        description="Default NuGet package status",
    )


@lru_cache
def get_settings() -> SetupSettings:
    """Get cached settings instance.

    Returns:
        SetupSettings singleton
    """
    return SetupSettings()
