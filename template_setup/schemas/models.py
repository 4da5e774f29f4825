"""
Pydantic models for setup answers and template manifests.

ProjectInfo holds the values collected from the user (or a values file)
and turns them into the replacement mapping. TemplateManifest describes
which files a template contains placeholders in and how each token is
classified.
"""

import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.git_info import docs_url_from_repo_url, normalize_repo_url, repo_name_from_url
from ..core.tokens import ReplacementMapping, is_token_name

DEFAULT_NUGET_STATUS = "Coming soon to NuGet.org"
NOT_APPLICABLE = "Not applicable"


class ProjectInfo(BaseModel):
    """Answers collected for one substitution run.

    Blank derived fields are filled in from the others: package_name
    from project_name, repo_name and docs_url from github_repo_url.

    Example:
        info = ProjectInfo(
            project_name="Foo.Bar",
            project_description="Does foo",
            github_repo_url="git@github.com:acme/foo-bar.git",
            github_username="acme",
            copyright_holder="Jane Doe",
            license_type="MIT",
        )
        info.repo_name        # "foo-bar"
        info.github_username  # "@acme"
    """
    project_name: str = Field(min_length=1, description="Project name")
    project_description: str = Field(min_length=1, description="One-line description")
    is_package: bool = Field(default=True, description="Published as a NuGet package")
    package_name: str = Field(default="", description="NuGet package name")
    github_repo_url: str = Field(min_length=1, description="GitHub repository URL")
    repo_name: str = Field(default="", description="Repository name")
    github_username: str = Field(min_length=1, description="GitHub username (with @)")
    docs_url: str = Field(default="", description="Documentation URL (GitHub Pages)")
    license_type: str = Field(default="MIT", description="SPDX license id")
    copyright_holder: str = Field(min_length=1, description="Copyright holder name")
    year: str = Field(
        default_factory=lambda: str(datetime.date.today().year),
        description="Copyright year",
    )
    nuget_status: str = Field(default="", description="NuGet package status")
    template_repo_owner: str = Field(default="Chris-Wolfgang", description="Template repository owner")
    template_repo_name: str = Field(default="repo-template", description="Template repository name")

    @field_validator("github_username")
    @classmethod
    def ensure_at_prefix(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("@"):
            v = f"@{v}"
        return v

    @field_validator("year", mode="before")
    @classmethod
    def coerce_year(cls, v: Any) -> str:
        return str(v)

    @model_validator(mode="after")
    def fill_derived(self) -> "ProjectInfo":
        if not self.is_package:
            self.package_name = self.project_name
            self.nuget_status = NOT_APPLICABLE
        else:
            self.package_name = self.package_name or self.project_name
            self.nuget_status = self.nuget_status or DEFAULT_NUGET_STATUS

        if not self.repo_name:
            self.repo_name = repo_name_from_url(self.github_repo_url)
        if not self.repo_name:
            raise ValueError("repo_name could not be derived from github_repo_url")

        if not self.docs_url:
            self.docs_url = docs_url_from_repo_url(normalize_repo_url(self.github_repo_url))
        return self

    def to_replacements(self) -> ReplacementMapping:
        """Token name -> value for every field the template uses."""
        return ReplacementMapping({
            "PROJECT_NAME": self.project_name,
            "PROJECT_DESCRIPTION": self.project_description,
            "PACKAGE_NAME": self.package_name,
            "GITHUB_REPO_URL": self.github_repo_url,
            "REPO_NAME": self.repo_name,
            "GITHUB_USERNAME": self.github_username,
            "DOCS_URL": self.docs_url,
            "LICENSE_TYPE": self.license_type,
            "YEAR": self.year,
            "COPYRIGHT_HOLDER": self.copyright_holder,
            "NUGET_STATUS": self.nuget_status,
            "TEMPLATE_REPO_OWNER": self.template_repo_owner,
            "TEMPLATE_REPO_NAME": self.template_repo_name,
        })


class TemplateManifest(BaseModel):
    """Which files hold placeholders and how each token is classified.

    Example:
        name: dotnet
        target_files:
          - README.md
          - CONTRIBUTING.md
        required_tokens: [PROJECT_NAME, REPO_NAME]
        optional_tokens:
          FEATURES_TABLE: Markdown table listing features
    """
    name: str = Field(default="custom", description="Manifest name")
    description: str = Field(default="", description="Short description")
    target_files: list[str] = Field(default_factory=list, description="Files to substitute and validate")
    required_tokens: list[str] = Field(default_factory=list, description="Tokens that must be replaced")
    optional_tokens: dict[str, str] = Field(
        default_factory=dict,
        description="Tokens left for the user, with descriptions",
    )
    readme_template: str | None = Field(default="README-TEMPLATE.md", description="README to promote")
    readme: str = Field(default="README.md", description="Final README path")
    cleanup_files: list[str] = Field(default_factory=list, description="Template-only files to remove")

    @field_validator("required_tokens")
    @classmethod
    def check_required_names(cls, v: list[str]) -> list[str]:
        bad = [name for name in v if not is_token_name(name)]
        if bad:
            raise ValueError(f"Invalid token names: {', '.join(bad)}")
        return v

    @field_validator("optional_tokens")
    @classmethod
    def check_optional_names(cls, v: dict[str, str]) -> dict[str, str]:
        bad = [name for name in v if not is_token_name(name)]
        if bad:
            raise ValueError(f"Invalid token names: {', '.join(bad)}")
        return v

    @model_validator(mode="after")
    def check_disjoint(self) -> "TemplateManifest":
        overlap = set(self.required_tokens) & set(self.optional_tokens)
        if overlap:
            raise ValueError(
                f"Tokens cannot be both required and optional: {', '.join(sorted(overlap))}"
            )
        return self

    @property
    def required(self) -> frozenset[str]:
        return frozenset(self.required_tokens)

    @property
    def optional(self) -> frozenset[str]:
        return frozenset(self.optional_tokens)
