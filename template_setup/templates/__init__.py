"""Template manifest registry and loader.

Packaged manifests live next to this module as <name>.yaml. A manifest
can also be loaded from any YAML file path.
"""

import importlib.resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..core.errors import ConfigurationError
from ..schemas.models import TemplateManifest

# Manifest registry: name -> description
MANIFESTS: dict[str, str] = {
    "dotnet": ".NET library repository with DocFX documentation",
}


def list_manifests() -> dict[str, str]:
    """Return dict of manifest_name -> description."""
    return MANIFESTS.copy()


def _parse_manifest(content: str, source: str) -> TemplateManifest:
    yaml = YAML(typ="safe")
    try:
        data: Any = yaml.load(content)
    except YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in manifest {source}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Manifest {source} must be a mapping")

    try:
        return TemplateManifest.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid manifest {source}: {e}") from e


def load_manifest(name_or_path: str | Path) -> TemplateManifest:
    """Load a packaged manifest by name, or a manifest YAML file by path.

    Raises:
        ConfigurationError: If the manifest is unknown or invalid
    """
    if isinstance(name_or_path, str) and name_or_path in MANIFESTS:
        files = importlib.resources.files("template_setup.templates")
        content = (files / f"{name_or_path}.yaml").read_text(encoding="utf-8")
        return _parse_manifest(content, name_or_path)

    path = Path(name_or_path)
    if not path.is_file():
        available = ", ".join(sorted(MANIFESTS.keys()))
        raise ConfigurationError(
            f"Unknown manifest: {name_or_path}",
            suggestion=f"Use a YAML file path or one of: {available}",
        )

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read manifest {path}: {e}") from e
    return _parse_manifest(content, str(path))
