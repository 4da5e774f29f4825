"""Pydantic models for setup answers and template manifests."""

from .models import (
    ProjectInfo,
    TemplateManifest,
)

__all__ = [
    "ProjectInfo",
    "TemplateManifest",
]
