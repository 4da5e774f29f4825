"""Shared fixtures: a throwaway repository laid out like the .NET template."""

import os
from pathlib import Path

import pytest

from template_setup.config import get_settings

TEMPLATE_FILES = {
    "README.md": "# Repository Template\n\nRun scripts/setup.sh to configure.\n",
    "README-TEMPLATE.md": (
        "# {{PROJECT_NAME}}\n"
        "\n"
        "{{PROJECT_DESCRIPTION}}\n"
        "\n"
        "Install: dotnet add package {{PACKAGE_NAME}} ({{NUGET_STATUS}})\n"
        "Docs: {{DOCS_URL}}\n"
        "Source: {{GITHUB_REPO_URL}}\n"
        "\n"
        "## Features\n"
        "\n"
        "{{FEATURES_TABLE}}\n"
        "\n"
        "Licensed under {{LICENSE_TYPE}}.\n"
    ),
    "CONTRIBUTING.md": (
        "Contributions to {{REPO_NAME}} are reviewed by {{GITHUB_USERNAME}}.\n"
        "Created from {{TEMPLATE_REPO_OWNER}}/{{TEMPLATE_REPO_NAME}}.\n"
    ),
    ".github/CODEOWNERS": "* {{GITHUB_USERNAME}}\n",
    "docfx_project/docfx.json": '{"metadata": {"title": "{{PROJECT_NAME}}"}}\n',
    "LICENSE-MIT.txt": "MIT License\n\nCopyright (c) {{YEAR}} {{COPYRIGHT_HOLDER}}\n",
    "LICENSE-APACHE-2.0.txt": "Apache License 2.0\n\nCopyright {{YEAR}} {{COPYRIGHT_HOLDER}}\n",
    "LICENSE-MPL-2.0.txt": "Mozilla Public License 2.0\n",
    "LICENSE-SELECTION.md": "Pick a license.\n",
    "scripts/setup.sh": "#!/usr/bin/env bash\n",
}

ANSWERS = {
    "project_name": "Foo.Bar",
    "project_description": "High-performance foo for bar",
    "github_repo_url": "https://github.com/acme/foo-bar",
    "github_username": "acme",
    "copyright_holder": "Jane Doe",
    "year": "2026",
    "license_type": "MIT",
}


def write_files(root: Path, files: dict[str, str]) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def template_repo(tmp_path: Path) -> Path:
    """A repository freshly created from the template."""
    root = tmp_path / "repo"
    root.mkdir()
    write_files(root, TEMPLATE_FILES)
    return root


@pytest.fixture
def answers() -> dict[str, str]:
    return dict(ANSWERS)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate tests from TEMPLATE_SETUP_* variables and the settings cache."""
    for name in list(os.environ):
        if name.startswith("TEMPLATE_SETUP_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
