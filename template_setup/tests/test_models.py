"""Tests for project answers and template manifests."""

import datetime

import pytest
from pydantic import ValidationError

from template_setup.core.errors import ConfigurationError
from template_setup.schemas.models import ProjectInfo, TemplateManifest
from template_setup.templates import list_manifests, load_manifest


def test_project_info_derives_blank_fields(answers):
    """Test blank fields are derived from the others."""
    info = ProjectInfo(**answers)

    assert info.package_name == "Foo.Bar"
    assert info.repo_name == "foo-bar"
    assert info.github_username == "@acme"
    assert info.docs_url == "https://acme.github.io/foo-bar/"
    assert info.nuget_status == "Coming soon to NuGet.org"
    assert info.template_repo_owner == "Chris-Wolfgang"
    assert info.template_repo_name == "repo-template"


def test_project_info_from_ssh_url(answers):
    """Test derivation from an SSH remote URL."""
    answers["github_repo_url"] = "git@github.com:acme/foo-bar.git"
    info = ProjectInfo(**answers)

    assert info.repo_name == "foo-bar"
    assert info.docs_url == "https://acme.github.io/foo-bar/"


def test_non_package_project(answers):
    """Test non-packages get the project name and no NuGet status."""
    info = ProjectInfo(**answers, is_package=False, package_name="Ignored", nuget_status="Ignored")

    assert info.package_name == "Foo.Bar"
    assert info.nuget_status == "Not applicable"


def test_year_defaults_to_current_year(answers):
    """Test the year defaults to today."""
    del answers["year"]
    assert ProjectInfo(**answers).year == str(datetime.date.today().year)


def test_year_accepts_int(answers):
    """Test an integer year is coerced to a string."""
    answers["year"] = 2030
    assert ProjectInfo(**answers).year == "2030"


def test_required_answers(answers):
    """Test required answers cannot be omitted."""
    del answers["project_name"]
    with pytest.raises(ValidationError):
        ProjectInfo(**answers)


def test_to_replacements_covers_every_template_token(answers):
    """Test the mapping covers every required manifest token."""
    mapping = ProjectInfo(**answers).to_replacements()

    assert set(mapping) == {
        "PROJECT_NAME",
        "PROJECT_DESCRIPTION",
        "PACKAGE_NAME",
        "GITHUB_REPO_URL",
        "REPO_NAME",
        "GITHUB_USERNAME",
        "DOCS_URL",
        "LICENSE_TYPE",
        "YEAR",
        "COPYRIGHT_HOLDER",
        "NUGET_STATUS",
        "TEMPLATE_REPO_OWNER",
        "TEMPLATE_REPO_NAME",
    }
    assert mapping["GITHUB_USERNAME"] == "@acme"


def test_manifest_rejects_overlapping_classes():
    """Test a token cannot be both required and optional."""
    with pytest.raises(ValidationError, match="both required and optional"):
        TemplateManifest(required_tokens=["A"], optional_tokens={"A": "dup"})


def test_manifest_rejects_bad_token_names():
    """Test manifest token names must use [A-Z_]."""
    with pytest.raises(ValidationError, match="Invalid token names"):
        TemplateManifest(required_tokens=["project_name"])


def test_packaged_dotnet_manifest():
    """Test the packaged dotnet manifest loads."""
    manifest = load_manifest("dotnet")

    assert "dotnet" in list_manifests()
    assert manifest.name == "dotnet"
    assert manifest.target_files[0] == "README.md"
    assert "docfx_project/docs/getting-started.md" in manifest.target_files
    assert "PROJECT_NAME" in manifest.required
    assert "YEAR" not in manifest.required
    assert manifest.optional_tokens["TARGET_FRAMEWORKS"] == "List of supported .NET frameworks"
    assert "scripts/setup.sh" in manifest.cleanup_files


def test_manifest_from_file(tmp_path):
    """Test loading a manifest from a YAML path."""
    path = tmp_path / "manifest.yaml"
    path.write_text(
        "name: docs\n"
        "target_files: [index.md]\n"
        "required_tokens: [PROJECT_NAME]\n"
        "optional_tokens:\n"
        "  EXAMPLES: Usage examples\n"
        "readme_template: null\n",
        encoding="utf-8",
    )

    manifest = load_manifest(path)

    assert manifest.name == "docs"
    assert manifest.readme_template is None
    assert manifest.optional == frozenset({"EXAMPLES"})


def test_unknown_manifest():
    """Test an unknown manifest name is a ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Unknown manifest"):
        load_manifest("no-such-manifest")


def test_invalid_manifest_file(tmp_path):
    """Test malformed manifest YAML is a ConfigurationError."""
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="must be a mapping"):
        load_manifest(path)
