"""Core placeholder substitution engine."""

from .discovery import (
    DEFAULT_EXCLUSIONS,
    ExclusionRules,
    GlobMatcher,
    SegmentMatcher,
    SuffixMatcher,
    build_manifest,
    discover_files,
    group_by_parent,
)
from .errors import (
    ConfigurationError,
    FileAccessError,
    MissingTemplateError,
    SetupError,
    UnresolvedPlaceholderError,
)
from .git_info import (
    GitDefaults,
    detect_git_defaults,
)
from .licenses import (
    LICENSES,
    LicenseOption,
    get_license,
    install_license,
)
from .substitution import (
    apply_to_file_set,
    substitute,
)
from .tokens import (
    TOKEN_PATTERN,
    ReplacementMapping,
    find_tokens,
    placeholder,
)
from .validator import (
    PlaceholderReport,
    ValidationLevel,
    ValidationMessage,
    validate,
)

__all__ = [
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
    # Substitution
    "substitute",
    "apply_to_file_set",
    # Validation
    "validate",
    "PlaceholderReport",
    "ValidationLevel",
    "ValidationMessage",
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
]
