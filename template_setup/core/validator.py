"""
Post-substitution placeholder validation.

Re-scans the target file set for remaining {{TOKEN}} markers and sorts
every finding into one of three groups:
- required: still present means the run failed
- optional: content the user fills in later, informational only
- unrecognized: in neither set; never affects the exit code

Findings are aggregated over every file before reporting, so the
operator gets the complete punch list in one pass.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from typing import Optional

from .errors import ConfigurationError, UnresolvedPlaceholderError
from .substitution import read_text, resolve_path
from .tokens import find_tokens, placeholder

logger = logging.getLogger(__name__)


class ValidationLevel(Enum):
    """Severity level for validation messages."""
    ERROR = "error"       # Required placeholder left behind
    WARNING = "warning"   # Unrecognized placeholder
    INFO = "info"         # Optional placeholder to fill in later


@dataclass
class ValidationMessage:
    """A single finding: one token and every file it still occurs in."""
    level: ValidationLevel
    token: str
    files: list[str]
    description: Optional[str] = None

    @property
    def placeholder(self) -> str:
        return placeholder(self.token)


@dataclass
class PlaceholderReport:
    """Result of validating a target file set.

    Each group maps token name -> sorted, deduplicated file labels,
    with token names in lexicographic order.
    """
    required: dict[str, list[str]] = field(default_factory=dict)
    optional: dict[str, list[str]] = field(default_factory=dict)
    unrecognized: dict[str, list[str]] = field(default_factory=dict)
    descriptions: dict[str, str] = field(default_factory=dict)
    files_scanned: int = 0

    @property
    def ok(self) -> bool:
        """True when no required placeholder remains."""
        return not self.required

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def raise_for_required(self) -> None:
        """Raise UnresolvedPlaceholderError if any required token remains."""
        if not self.ok:
            raise UnresolvedPlaceholderError(self)

    @property
    def messages(self) -> list[ValidationMessage]:
        """All findings, errors first."""
        messages = [
            ValidationMessage(ValidationLevel.ERROR, name, files)
            for name, files in self.required.items()
        ]
        messages.extend(
            ValidationMessage(ValidationLevel.INFO, name, files, self.descriptions.get(name))
            for name, files in self.optional.items()
        )
        messages.extend(
            ValidationMessage(ValidationLevel.WARNING, name, files)
            for name, files in self.unrecognized.items()
        )
        return messages

    @property
    def errors(self) -> list[ValidationMessage]:
        """Get only error messages."""
        return [m for m in self.messages if m.level == ValidationLevel.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        """Get only warning messages."""
        return [m for m in self.messages if m.level == ValidationLevel.WARNING]


def _file_label(path: Path | str) -> str:
    return PurePath(path).as_posix()


def _sorted_groups(found: dict[str, set[str]]) -> dict[str, list[str]]:
    return {name: sorted(found[name]) for name in sorted(found)}


def validate(
    paths: Iterable[Path | str],
    required: Iterable[str],
    optional: Iterable[str],
    root: Optional[Path] = None,
    descriptions: Optional[Mapping[str, str]] = None,
) -> PlaceholderReport:
    """Scan files for placeholders left after substitution.

    Missing files are skipped without error.

    Args:
        paths: Target file set (post-substitution)
        required: Token names that must all be replaced
        optional: Token names that may remain
        root: Repository root for relative paths
        descriptions: Optional token name -> description for the report

    Returns:
        PlaceholderReport with required, optional and unrecognized groups

    Raises:
        ConfigurationError: If a token is both required and optional
        FileAccessError: If a file exists but cannot be read
    """
    required_set = frozenset(required)
    optional_set = frozenset(optional)

    overlap = required_set & optional_set
    if overlap:
        raise ConfigurationError(
            f"Tokens cannot be both required and optional: {', '.join(sorted(overlap))}",
            field="optional_tokens",
        )

    found_required: dict[str, set[str]] = {}
    found_optional: dict[str, set[str]] = {}
    found_unknown: dict[str, set[str]] = {}
    scanned = 0

    for path in paths:
        target = resolve_path(path, root)
        if not target.is_file():
            logger.debug("Not scanning missing file: %s", target)
            continue

        scanned += 1
        label = _file_label(path)
        for name in find_tokens(read_text(target)):
            if name in required_set:
                found_required.setdefault(name, set()).add(label)
            elif name in optional_set:
                found_optional.setdefault(name, set()).add(label)
            else:
                found_unknown.setdefault(name, set()).add(label)

    report = PlaceholderReport(
        required=_sorted_groups(found_required),
        optional=_sorted_groups(found_optional),
        unrecognized=_sorted_groups(found_unknown),
        descriptions=dict(descriptions or {}),
        files_scanned=scanned,
    )

    logger.info(
        "Validated %d file(s): %d required, %d optional, %d unrecognized placeholder(s) remain",
        scanned,
        len(report.required),
        len(report.optional),
        len(report.unrecognized),
    )
    return report
