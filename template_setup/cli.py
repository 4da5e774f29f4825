"""
Command-line interface for template_setup.

Provides a unified CLI with subcommands:
- template-setup run: Configure a repository created from the template
- template-setup substitute: Replace placeholders in specific files
- template-setup validate: Report placeholders left in the target files
- template-setup discover: List repository files grouped by directory
- template-setup manifests: List packaged template manifests
"""

import datetime
import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import SetupSettings, get_settings
from .core.discovery import DEFAULT_EXCLUSIONS, GlobMatcher, build_manifest
from .core.errors import SetupError
from .core.git_info import detect_git_defaults, docs_url_from_repo_url, repo_name_from_url
from .core.licenses import LICENSES, get_license
from .core.runner import RunOutcome, SetupRunner
from .core.substitution import apply_to_file_set
from .core.tokens import ReplacementMapping, placeholder
from .core.validator import PlaceholderReport, validate as validate_files
from .schemas.models import ProjectInfo, TemplateManifest
from .templates import list_manifests, load_manifest

console = Console()


def configure_logging(level: str) -> None:
    """Send diagnostic log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    """Parse KEY=VALUE pairs from repeated --set options."""
    values: dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--set")
        values[key.strip()] = value
    return values


def load_values_file(path: Path) -> dict[str, Any]:
    """Load a flat YAML mapping of answers or token values."""
    try:
        data = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as e:
        raise click.BadParameter(f"Cannot load {path}: {e}", param_hint="--values")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a mapping", param_hint="--values")
    return data


def format_report(report: PlaceholderReport, warn_unknown: bool = True) -> list[tuple[str, bool]]:
    """Render a report as (line, to_stderr) pairs.

    Required placeholders are listed first, each with every file it
    still occurs in.
    """
    lines: list[tuple[str, bool]] = []

    if report.required:
        lines.append((click.style("Error: The following required placeholders were not replaced:", fg="red"), True))
        lines.append(("", True))
        for name, files in report.required.items():
            lines.append((click.style(f"  {placeholder(name)}", fg="red"), True))
            lines.append(("    Found in:", True))
            lines.extend((f"      - {file}", True) for file in files)
            lines.append(("", True))
    else:
        lines.append((click.style("All required placeholders replaced successfully!", fg="green"), False))

    if report.optional:
        lines.append(("", False))
        lines.append((click.style("Optional content placeholders to fill in as you develop your project:", fg="cyan"), False))
        lines.append(("", False))
        for name, files in report.optional.items():
            lines.append((click.style(f"  {placeholder(name)}", fg="yellow"), False))
            description = report.descriptions.get(name)
            if description:
                lines.append((f"    Description: {description}", False))
            lines.append(("    Found in:", False))
            lines.extend((f"      - {file}", False) for file in files)
            lines.append(("", False))

    if warn_unknown and report.unrecognized:
        lines.append((click.style("Warning: Unrecognized placeholders (neither required nor optional):", fg="yellow"), True))
        for name, files in report.unrecognized.items():
            lines.append((f"  {placeholder(name)}: {', '.join(files)}", True))
        lines.append(("", True))

    return lines


def print_report(report: PlaceholderReport, warn_unknown: bool = True) -> None:
    """Print a validation report; failures go to stderr."""
    for line, to_stderr in format_report(report, warn_unknown):
        click.echo(line, err=to_stderr)


def print_summary(info: ProjectInfo) -> None:
    """Show the collected answers before anything is changed."""
    table = Table(title="Configuration Summary", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    rows = [
        ("Project Name", info.project_name),
        ("Description", info.project_description),
        ("Package Name", info.package_name),
        ("Repository URL", info.github_repo_url),
        ("Repository Name", info.repo_name),
        ("GitHub Username", info.github_username),
        ("Documentation URL", info.docs_url),
        ("License", info.license_type),
        ("Copyright Holder", info.copyright_holder),
        ("Copyright Year", info.year),
        ("NuGet Status", info.nuget_status),
        ("Template Owner", info.template_repo_owner),
        ("Template Name", info.template_repo_name),
    ]
    for label, value in rows:
        table.add_row(label, value)
    console.print(table)


def _fail(error: Exception) -> NoReturn:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


def _load_manifest_or_exit(name: str) -> TemplateManifest:
    try:
        return load_manifest(name)
    except SetupError as e:
        _fail(e)


# ─────────────────────────────────────────────────────────────────────────────
# Interactive collection
# ─────────────────────────────────────────────────────────────────────────────


def prompt_license() -> str:
    """Ask for a license by menu number and return its SPDX id."""
    click.echo(click.style("Available licenses:", fg="yellow"))
    for index, option in enumerate(LICENSES, 1):
        click.echo(f"  {index}) {option.spdx_id} - {option.summary}")
    click.echo()
    choice = click.prompt(
        click.style(f"Select license (1-{len(LICENSES)})", fg="yellow"),
        type=click.IntRange(1, len(LICENSES)),
    )
    option = get_license(choice)
    click.echo(click.style(f"Selected: {option.spdx_id} License", fg="green"))
    return option.spdx_id


def collect_answers(
    given: dict[str, Any],
    settings: SetupSettings,
    root: Path,
    interactive: bool,
) -> dict[str, Any]:
    """Fill in answers not supplied on the command line.

    Prompt defaults come from the git repository configuration.
    """
    answers = dict(given)
    if "is_package" in answers:
        answers["is_package"] = click.BOOL.convert(answers["is_package"], None, None)
    answers.setdefault("template_repo_owner", settings.default_template_owner)
    answers.setdefault("template_repo_name", settings.default_template_name)
    if not interactive:
        return answers

    git = detect_git_defaults(root)
    if git.remote_url:
        click.echo(click.style(f"Detected repository: {git.remote_url}", fg="green"))

    def ask(key: str, text: str, default: str = "", required: bool = True) -> None:
        if key in given:
            return
        answers[key] = click.prompt(
            click.style(text, fg="yellow"),
            default=default or (None if required else ""),
            show_default=bool(default),
        )

    if "is_package" not in given:
        answers["is_package"] = click.confirm(
            click.style("Will this project be published as a NuGet package?", fg="yellow"),
            default=True,
        )

    ask("project_name", "Project Name (e.g., MyCompany.MyLibrary)")
    ask("project_description", "Project Description (one-line description)")
    if answers["is_package"]:
        ask("package_name", "NuGet Package Name", default=answers["project_name"], required=False)
    ask("github_repo_url", "GitHub Repository URL", default=git.remote_url)
    if "repo_name" not in given:
        repo_name = git.repo_name or repo_name_from_url(answers["github_repo_url"])
        if repo_name:
            answers["repo_name"] = repo_name
        else:
            ask("repo_name", "Repository Name")
    ask("github_username", "GitHub Username (with @)", default=git.github_username)
    ask(
        "docs_url",
        "Documentation URL (GitHub Pages)",
        default=docs_url_from_repo_url(answers["github_repo_url"]),
        required=False,
    )
    ask("copyright_holder", "Copyright Holder Name", default=git.user_name)
    ask("year", "Copyright Year", default=str(datetime.date.today().year))
    if answers["is_package"]:
        ask("nuget_status", "NuGet Package Status", default=settings.default_nuget_status, required=False)
    if "license_type" not in given:
        answers["license_type"] = prompt_license()
    return answers


# ─────────────────────────────────────────────────────────────────────────────
# CLI Group and Commands
# ─────────────────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(package_name="template-setup")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Configure a repository created from a project template."""
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository root (default: current directory)",
)
@click.option("-m", "--manifest", default=None, help="Manifest name or YAML path")
@click.option("--values", "values_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML file with answers (field: value)")
@click.option("--set", "assignments", multiple=True, help="Answer as field=value (repeatable)")
@click.option("--license", "license_choice", default=None, help="License number or SPDX id")
@click.option("--no-input", is_flag=True, help="Never prompt; fail on missing answers")
@click.option("-y", "--yes", is_flag=True, help="Skip the confirmation prompt")
@click.option("--cleanup/--no-cleanup", default=None, help="Remove template-only files afterwards")
@click.pass_obj
def run(
    settings: SetupSettings,
    root: Optional[Path],
    manifest: Optional[str],
    values_file: Optional[Path],
    assignments: tuple[str, ...],
    license_choice: Optional[str],
    no_input: bool,
    yes: bool,
    cleanup: Optional[bool],
):
    """Configure this repository from the template.

    \b
    Exit codes:
      0  All required placeholders replaced
      1  Required placeholders remain, or a file could not be read/written

    \b
    Examples:
      template-setup run
      template-setup run --values answers.yaml --no-input --yes
      template-setup run --set project_name=Foo.Bar --license MIT
    """
    root = root or settings.root
    template = _load_manifest_or_exit(manifest or settings.manifest)

    console.print(Panel.fit("Repository Template - Automated Setup", style="cyan"))

    given: dict[str, Any] = {}
    if values_file:
        given.update({str(k).lower(): v for k, v in load_values_file(values_file).items()})
    given.update({k.lower(): v for k, v in parse_assignments(assignments).items()})
    if license_choice:
        try:
            given["license_type"] = get_license(license_choice).spdx_id
        except SetupError as e:
            _fail(e)

    answers = collect_answers(given, settings, root, interactive=not no_input)

    try:
        info = ProjectInfo.model_validate(answers)
        mapping = info.to_replacements()
    except (ValidationError, ValueError) as e:
        _fail(e)

    print_summary(info)
    if not yes and not no_input:
        if not click.confirm(click.style("Proceed with configuration?", fg="yellow"), default=True):
            click.echo(click.style("Setup cancelled.", fg="yellow"), err=True)
            sys.exit(0)

    if cleanup is None:
        cleanup = False if (yes or no_input) else click.confirm(
            click.style("Remove template-specific files after setup?", fg="yellow"),
            default=False,
        )

    def progress_cb(step: int, total: int, message: str) -> None:
        click.echo(click.style(f"Step {step}/{total}: {message}", fg="cyan"))

    runner = SetupRunner(root, template, mapping, info.license_type)
    try:
        outcome: RunOutcome = runner.run(cleanup=cleanup, progress_callback=progress_cb)
    except SetupError as e:
        _fail(e)

    click.echo(f"Updated {outcome.modified_count} file(s).")
    if outcome.license_path:
        click.echo(click.style(f"Created LICENSE file ({info.license_type})", fg="green"))
    print_report(outcome.report, settings.warn_unknown_tokens)
    for name in outcome.removed_files:
        click.echo(click.style(f"Removed: {name}", fg="green"))

    if outcome.ok:
        click.echo(click.style("\nSetup complete! Your repository is ready for development.", fg="green"))
    sys.exit(outcome.exit_code)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--set", "assignments", multiple=True, help="Token value as NAME=VALUE (repeatable)")
@click.option("--values", "values_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML file mapping token names to values")
@click.option("-q", "--quiet", is_flag=True, help="Suppress status messages")
def substitute(
    files: tuple[Path, ...],
    assignments: tuple[str, ...],
    values_file: Optional[Path],
    quiet: bool,
):
    """Replace {{TOKEN}} placeholders in the given files.

    Files that do not exist are skipped with a warning.

    \b
    Examples:
      template-setup substitute README.md --set PROJECT_NAME=Foo.Bar
      template-setup substitute docs/*.md --values tokens.yaml
    """
    values: dict[str, Any] = {}
    if values_file:
        values.update(load_values_file(values_file))
    values.update(parse_assignments(assignments))

    try:
        mapping = ReplacementMapping(values)
    except ValueError as e:
        _fail(e)

    try:
        modified = apply_to_file_set(files, mapping)
    except SetupError as e:
        _fail(e)

    if not quiet:
        click.echo(f"Updated {modified} of {len(files)} file(s).")
    sys.exit(0)


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository root for manifest target files",
)
@click.option("-m", "--manifest", default=None, help="Manifest name or YAML path")
@click.option("-r", "--required", multiple=True, help="Required token name (repeatable)")
@click.option("-o", "--optional", multiple=True, help="Optional token name (repeatable)")
@click.option("-q", "--quiet", is_flag=True, help="Suppress output (only return exit code)")
@click.pass_obj
def validate(
    settings: SetupSettings,
    files: tuple[Path, ...],
    root: Optional[Path],
    manifest: Optional[str],
    required: tuple[str, ...],
    optional: tuple[str, ...],
    quiet: bool,
):
    """Report placeholders remaining in the target files.

    Without FILES, the manifest's target files under --root are checked.
    Token classes default to the manifest's.

    \b
    Exit codes:
      0  No required placeholders remain
      1  Required placeholders remain, or a file could not be read
    """
    template = _load_manifest_or_exit(manifest or settings.manifest)
    required_set = set(required) if required else set(template.required)
    optional_set = set(optional) if optional else set(template.optional) - required_set

    if files:
        targets: list[Path | str] = list(files)
        base = None
    else:
        targets = list(template.target_files)
        base = root or settings.root

    try:
        report = validate_files(
            targets,
            required_set,
            optional_set,
            root=base,
            descriptions=template.optional_tokens,
        )
    except SetupError as e:
        if not quiet:
            click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if not quiet:
        print_report(report, settings.warn_unknown_tokens)
    sys.exit(report.exit_code)


@cli.command()
@click.argument("root", required=False, type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-i", "--include", multiple=True, help="Glob of files to include (repeatable)")
@click.option("-x", "--exclude", multiple=True, help="Extra glob to exclude (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Print the manifest as JSON")
def discover(root: Optional[Path], include: tuple[str, ...], exclude: tuple[str, ...], as_json: bool):
    """List repository files grouped by parent directory.

    Build artifacts and secret-like files are always excluded.

    \b
    Examples:
      template-setup discover
      template-setup discover src -i '*.csproj'
      template-setup discover --json
    """
    rules = DEFAULT_EXCLUSIONS.extended(GlobMatcher(pattern) for pattern in exclude)
    groups = build_manifest(root or Path("."), include or ("*",), rules)

    if as_json:
        click.echo(json.dumps(groups, indent=2))
        sys.exit(0)

    total = 0
    for group, paths in groups.items():
        click.echo(click.style(f"{group}/", bold=True))
        for path in paths:
            click.echo(f"  {path}")
        total += len(paths)
    click.echo(f"\n{total} file(s) in {len(groups)} group(s)")
    sys.exit(0)


@cli.command()
def manifests():
    """List packaged template manifests."""
    click.echo("Available manifests:\n")
    for name, desc in sorted(list_manifests().items()):
        click.echo(f"  {name:12} - {desc}")
    click.echo("\nUsage: template-setup run --manifest=<name|path.yaml>")
    sys.exit(0)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
