"""Configuration management for template_setup."""

from .settings import (
    SetupSettings,
    get_settings,
)

__all__ = [
    "SetupSettings",
    "get_settings",
]
