"""
template_setup - Configure a repository created from a project template.

This package replaces {{TOKEN}} placeholders across a fixed set of files
and reports any that remain:
- In-place, idempotent substitution with literal replacement values
- Validation grouped into required, optional and unrecognized tokens
- License selection and LICENSE file creation
- Default answers detected from the git repository configuration
- Repository file discovery with build-artifact and secret exclusions

Usage:
    from pathlib import Path
    from template_setup import ProjectInfo, SetupRunner, load_manifest

    info = ProjectInfo(
        project_name="Foo.Bar",
        project_description="Does foo",
        github_repo_url="https://github.com/acme/foo-bar",
        github_username="@acme",
        copyright_holder="Jane Doe",
    )
    runner = SetupRunner(Path("."), load_manifest("dotnet"), info.to_replacements(), "MIT")
    outcome = runner.run()
    raise SystemExit(outcome.exit_code)
"""

__version__ = "0.1.0"

from .config import (
    SetupSettings,
    get_settings,
)
from .core import (
    DEFAULT_EXCLUSIONS,
    LICENSES,
    TOKEN_PATTERN,
    ConfigurationError,
    ExclusionRules,
    FileAccessError,
    GitDefaults,
    GlobMatcher,
    LicenseOption,
    MissingTemplateError,
    PlaceholderReport,
    ReplacementMapping,
    SegmentMatcher,
    SetupError,
    SuffixMatcher,
    UnresolvedPlaceholderError,
    ValidationLevel,
    ValidationMessage,
    apply_to_file_set,
    build_manifest,
    detect_git_defaults,
    discover_files,
    find_tokens,
    get_license,
    group_by_parent,
    install_license,
    placeholder,
    substitute,
    validate,
)
from .core.runner import (
    RunOutcome,
    SetupRunner,
)
from .schemas import (
    ProjectInfo,
    TemplateManifest,
)
from .templates import (
    list_manifests,
    load_manifest,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "SetupError",
    "ConfigurationError",
    "FileAccessError",
    "MissingTemplateError",
    "UnresolvedPlaceholderError",
    # Tokens
    "TOKEN_PATTERN",
    "ReplacementMapping",
    "find_tokens",
    "placeholder",
    # Engine
    "substitute",
    "apply_to_file_set",
    "validate",
    "PlaceholderReport",
    "ValidationLevel",
    "ValidationMessage",
    # Runner
    "SetupRunner",
    "RunOutcome",
    # Discovery
    "discover_files",
    "group_by_parent",
    "build_manifest",
    "ExclusionRules",
    "SuffixMatcher",
    "SegmentMatcher",
    "GlobMatcher",
    "DEFAULT_EXCLUSIONS",
    # Git
    "GitDefaults",
    "detect_git_defaults",
    # Licenses
    "LICENSES",
    "LicenseOption",
    "get_license",
    "install_license",
    # Schemas
    "ProjectInfo",
    "TemplateManifest",
    # Manifests
    "list_manifests",
    "load_manifest",
    # Config
    "SetupSettings",
    "get_settings",
]
