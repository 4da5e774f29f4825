"""
License selection and LICENSE file installation.

The template ships one file per supported license. Installing copies
the chosen one to LICENSE, fills in the year and copyright holder, and
removes the per-license templates.
"""

import logging
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError, FileAccessError, MissingTemplateError
from .substitution import substitute

logger = logging.getLogger(__name__)

LICENSE_TOKENS = frozenset({"YEAR", "COPYRIGHT_HOLDER"})


@dataclass(frozen=True)
class LicenseOption:
    """A selectable license."""
    spdx_id: str
    template_file: str
    summary: str


LICENSES: tuple[LicenseOption, ...] = (
    LicenseOption("MIT", "LICENSE-MIT.txt", "Most permissive, simple, business-friendly"),
    LicenseOption("Apache-2.0", "LICENSE-APACHE-2.0.txt", "Permissive with patent grant"),
    LicenseOption("MPL-2.0", "LICENSE-MPL-2.0.txt", "Weak copyleft, file-level"),
)


def license_template_files() -> list[str]:
    return [option.template_file for option in LICENSES]


def get_license(choice: str | int) -> LicenseOption:
    """Look up a license by menu number (1-based) or SPDX id.

    Raises:
        ConfigurationError: If the choice is not recognized
    """
    text = str(choice).strip()
    if text.isdigit():
        index = int(text)
        if 1 <= index <= len(LICENSES):
            return LICENSES[index - 1]
    else:
        for option in LICENSES:
            if option.spdx_id.lower() == text.lower():
                return option

    available = ", ".join(o.spdx_id for o in LICENSES)
    raise ConfigurationError(
        f"Unknown license: {choice!r}",
        field="license_type",
        suggestion=f"Choose 1-{len(LICENSES)} or one of: {available}",
    )


def install_license(
    root: Path,
    choice: str | int,
    mapping: Mapping[str, str],
    remove_templates: bool = True,
) -> Path:
    """Create LICENSE from the chosen template.

    Only YEAR and COPYRIGHT_HOLDER are substituted into the license text.

    Args:
        root: Repository root
        choice: Menu number or SPDX id
        mapping: Replacement values; must contain the license tokens
        remove_templates: Delete every LICENSE-*.txt template afterwards

    Returns:
        Path of the created LICENSE file

    Raises:
        MissingTemplateError: If the chosen template does not exist
        FileAccessError: If LICENSE cannot be written or a template cannot be removed
    """
    option = get_license(choice)
    template = root / option.template_file
    if not template.is_file():
        raise MissingTemplateError(template)

    missing = sorted(LICENSE_TOKENS - set(mapping))
    if missing:
        raise ConfigurationError(f"Missing license values: {', '.join(missing)}")

    target = root / "LICENSE"
    try:
        shutil.copyfile(template, target)
    except OSError as e:
        raise FileAccessError(target, operation="write", original_error=e) from e

    substitute(target, {name: mapping[name] for name in sorted(LICENSE_TOKENS)})
    logger.info("Created LICENSE file (%s)", option.spdx_id)

    if remove_templates:
        for name in license_template_files():
            path = root / name
            if not path.exists():
                continue
            try:
                path.unlink()
            except OSError as e:
                raise FileAccessError(path, operation="delete", original_error=e) from e
            logger.info("Removed license template: %s", name)

    return target
