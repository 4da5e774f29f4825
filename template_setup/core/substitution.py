"""
In-place placeholder substitution over a fixed set of files.

Files are processed sequentially. Substitution is idempotent: once a
token has been replaced it no longer exists to match, so re-running
with the same mapping is a no-op.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Optional

from .errors import FileAccessError
from .tokens import TOKEN_PATTERN

logger = logging.getLogger(__name__)


def resolve_path(path: Path | str, root: Optional[Path] = None) -> Path:
    """Resolve a target path against the repository root."""
    path = Path(path)
    if root is not None and not path.is_absolute():
        return root / path
    return path


def read_text(path: Path) -> str:
    """Read a whole UTF-8 file, preserving newlines exactly.

    Raises:
        FileAccessError: If the file exists but cannot be read
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(path, operation="read", original_error=e) from e


def write_text(path: Path, content: str) -> None:
    """Overwrite a file with UTF-8 content, preserving newlines exactly.

    Raises:
        FileAccessError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileAccessError(path, operation="write", original_error=e) from e


def replace_tokens(text: str, mapping: Mapping[str, str]) -> tuple[str, int]:
    """Replace every {{NAME}} in text with its mapped value.

    All tokens are replaced in one pass over the original text, so a
    value that itself contains {{OTHER}} is inserted as-is and never
    rescanned. Values are returned from a callable, so backslashes,
    ampersands and group references in a value are inserted literally.
    Tokens absent from the mapping are left untouched.

    Returns:
        Tuple of (new text, number of replacements made)
    """
    total = 0

    def replace(match: re.Match) -> str:
        nonlocal total
        name = match.group(1)
        if name not in mapping:
            return match.group(0)
        total += 1
        return mapping[name]

    text = TOKEN_PATTERN.sub(replace, text)
    return text, total


def substitute(path: Path | str, mapping: Mapping[str, str]) -> bool:
    """Replace known tokens in a single file.

    A missing file is skipped with a warning, since some target files
    only exist for certain project configurations. The file is only
    rewritten when at least one token matched.

    Args:
        path: File to update in place
        mapping: Token name -> replacement value

    Returns:
        True if the file was modified

    Raises:
        FileAccessError: If the file cannot be read or written
    """
    path = Path(path)
    if not path.is_file():
        logger.warning("File not found (skipping): %s", path)
        return False

    original = read_text(path)
    updated, count = replace_tokens(original, mapping)

    if count == 0:
        logger.debug("No placeholders matched in %s", path)
        return False

    write_text(path, updated)
    logger.info("Updated: %s (%d replacement(s))", path, count)
    return True


def apply_to_file_set(
    paths: Iterable[Path | str],
    mapping: Mapping[str, str],
    root: Optional[Path] = None,
) -> int:
    """Run substitute() over every file, in order.

    The first I/O failure aborts the whole run.

    Args:
        paths: Target file set; relative entries resolve against root
        mapping: Token name -> replacement value
        root: Repository root for relative paths

    Returns:
        Number of files actually modified
    """
    modified = 0
    for path in paths:
        if substitute(resolve_path(path, root), mapping):
            modified += 1
    return modified
