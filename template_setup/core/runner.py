"""
One complete substitution run over a freshly created repository.

Steps, in order:
1. Promote the README template to README.md
2. Replace placeholders in every target file
3. Create LICENSE from the chosen license template
4. Validate that no required placeholder remains
5. Optionally remove template-only files

I/O failures abort immediately. Validation findings are collected over
all files and reported together at the end. Every step is safe to
repeat, so an interrupted run can simply be re-run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..schemas.models import TemplateManifest
from .errors import FileAccessError, MissingTemplateError
from .licenses import install_license, license_template_files
from .substitution import apply_to_file_set
from .tokens import ReplacementMapping
from .validator import PlaceholderReport, validate

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class RunOutcome:
    """Summary of a substitution run."""
    modified_count: int
    report: PlaceholderReport
    license_path: Optional[Path] = None
    readme_swapped: bool = False
    removed_files: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.report.ok

    @property
    def exit_code(self) -> int:
        return self.report.exit_code


class SetupRunner:
    """Applies a replacement mapping to a repository described by a manifest.

    Example:
        runner = SetupRunner(Path("."), load_manifest("dotnet"), mapping, "MIT")
        outcome = runner.run(cleanup=True)
        sys.exit(outcome.exit_code)
    """

    TOTAL_STEPS = 4

    def __init__(
        self,
        root: Path,
        manifest: TemplateManifest,
        mapping: ReplacementMapping,
        license_choice: Optional[str] = None,
    ):
        self.root = Path(root)
        self.manifest = manifest
        self.mapping = mapping
        self.license_choice = license_choice

    def swap_readme(self) -> bool:
        """Replace README.md with the README template.

        Returns:
            True if the swap happened, False if it was already done

        Raises:
            MissingTemplateError: If neither the template nor a swapped README exists
        """
        if not self.manifest.readme_template:
            return False

        template = self.root / self.manifest.readme_template
        readme = self.root / self.manifest.readme

        if not template.is_file():
            if readme.is_file():
                logger.info("README template already applied, keeping %s", readme)
                return False
            raise MissingTemplateError(template)

        try:
            if readme.exists():
                readme.unlink()
                logger.info("Deleted template README: %s", readme)
            template.rename(readme)
        except OSError as e:
            raise FileAccessError(readme, operation="write", original_error=e) from e

        logger.info("Renamed %s -> %s", template.name, readme.name)
        return True

    def create_license(self) -> Optional[Path]:
        """Install LICENSE, unless no choice was made or it is already done."""
        if not self.license_choice:
            return None

        templates_left = any((self.root / name).exists() for name in license_template_files())
        if not templates_left and (self.root / "LICENSE").is_file():
            logger.info("LICENSE already created, skipping")
            return None

        return install_license(self.root, self.license_choice, self.mapping)

    def validate(self) -> PlaceholderReport:
        return validate(
            self.manifest.target_files,
            self.manifest.required,
            self.manifest.optional,
            root=self.root,
            descriptions=self.manifest.optional_tokens,
        )

    def cleanup(self) -> list[str]:
        """Delete template-only files that exist. Returns removed paths."""
        removed = []
        for name in self.manifest.cleanup_files:
            path = self.root / name
            if not path.is_file():
                continue
            try:
                path.unlink()
            except OSError as e:
                raise FileAccessError(path, operation="delete", original_error=e) from e
            logger.info("Removed: %s", name)
            removed.append(name)
        return removed

    def run(
        self,
        cleanup: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> RunOutcome:
        """Execute every step and return the outcome.

        Cleanup only happens when validation succeeds.

        Args:
            cleanup: Remove the manifest's cleanup_files afterwards
            progress_callback: Optional callback(step, total, message)
        """
        def progress(step: int, message: str) -> None:
            if progress_callback:
                progress_callback(step, self.TOTAL_STEPS, message)

        progress(1, "Swapping README files...")
        swapped = self.swap_readme()

        progress(2, "Replacing placeholders in files...")
        modified = apply_to_file_set(self.manifest.target_files, self.mapping, root=self.root)
        logger.info("Modified %d of %d target file(s)", modified, len(self.manifest.target_files))

        progress(3, "Setting up LICENSE file...")
        license_path = self.create_license()

        progress(4, "Validating changes...")
        report = self.validate()

        outcome = RunOutcome(
            modified_count=modified,
            report=report,
            license_path=license_path,
            readme_swapped=swapped,
        )

        if cleanup:
            if report.ok:
                outcome.removed_files = self.cleanup()
            else:
                logger.warning("Skipping cleanup: required placeholders remain")

        return outcome
