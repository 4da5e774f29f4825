"""
Setup error hierarchy.

All setup-related exceptions inherit from SetupError, providing a
consistent interface for the CLI to turn failures into a message and
a non-zero exit code.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .validator import PlaceholderReport


class SetupError(Exception):
    """Base exception for all setup-related errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional hint for fixing the error
        context: Optional dict with additional error context
    """

    def __init__(
        self,
        message: str,
        *,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        parts = [self.message]

        if self.suggestion:
            parts.append(f"\n  Hint: {self.suggestion}")

        return "".join(parts)


class ConfigurationError(SetupError):
    """Invalid manifest, settings or replacement values.

    Raised before any file is touched, e.g. when a token name is not
    in the [A-Z_] alphabet or a token is both required and optional.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        **kwargs: Any,
    ):
        self.field = field

        if field:
            message = f"Field '{field}': {message}"

        super().__init__(message, **kwargs)


class FileAccessError(SetupError):
    """A target file exists but could not be read or written.

    Always fatal: the run stops at the first file that fails, so the
    operator never has to untangle a half-substituted file set.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        operation: str = "read",
        original_error: Optional[BaseException] = None,
        **kwargs: Any,
    ):
        self.path = Path(path)
        self.operation = operation
        self.original_error = original_error

        message = f"Cannot {operation} file: {path}"
        if original_error is not None:
            message += f" ({original_error})"

        kwargs.setdefault("suggestion", "Check file permissions and re-run; substitution is idempotent.")
        super().__init__(message, **kwargs)


class MissingTemplateError(SetupError):
    """A file the run cannot proceed without is absent.

    Distinct from a missing target file, which is only a warning.
    """

    def __init__(self, path: Path | str, **kwargs: Any):
        self.path = Path(path)
        super().__init__(f"Template file not found: {path}", **kwargs)


class UnresolvedPlaceholderError(SetupError):
    """Required placeholders remain after substitution."""

    def __init__(self, report: "PlaceholderReport", **kwargs: Any):
        self.report = report

        names = ", ".join(sorted(report.required))
        message = f"Required placeholders were not replaced: {names}"
        kwargs.setdefault(
            "suggestion",
            "Review the listed files and replace these placeholders manually.",
        )
        super().__init__(message, **kwargs)
