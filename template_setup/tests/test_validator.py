"""Tests for post-substitution placeholder validation."""

import pytest

from template_setup.core.errors import ConfigurationError, FileAccessError, UnresolvedPlaceholderError
from template_setup.core.substitution import substitute
from template_setup.core.validator import ValidationLevel, validate


def test_clean_file_passes(tmp_path):
    """Test a file with no tokens passes."""
    target = tmp_path / "README.md"
    target.write_text("Welcome to {{PROJECT_NAME}}!", encoding="utf-8")
    substitute(target, {"PROJECT_NAME": "Foo.Bar"})

    report = validate([target], required={"PROJECT_NAME"}, optional=set())

    assert report.required == {}
    assert report.ok
    assert report.exit_code == 0


def test_unreplaced_required_token_fails(tmp_path):
    """Test a leftover required token fails the report."""
    target = tmp_path / "README.md"
    target.write_text("{{PROJECT_NAME}}\n{{PACKAGE_NAME}}\n", encoding="utf-8")
    substitute(target, {"PROJECT_NAME": "Foo"})

    assert target.read_text(encoding="utf-8") == "Foo\n{{PACKAGE_NAME}}\n"

    report = validate(
        ["README.md"],
        required={"PROJECT_NAME", "PACKAGE_NAME"},
        optional=set(),
        root=tmp_path,
    )

    assert report.required == {"PACKAGE_NAME": ["README.md"]}
    assert not report.ok
    assert report.exit_code != 0


def test_required_token_lists_every_file(tmp_path):
    """Test each required token lists every file it appears in."""
    for name in ("b.md", "a.md", "c.md"):
        (tmp_path / name).write_text("{{REPO_NAME}} {{REPO_NAME}}", encoding="utf-8")
    (tmp_path / "clean.md").write_text("done", encoding="utf-8")

    report = validate(
        ["c.md", "a.md", "clean.md", "b.md", "a.md"],
        required={"REPO_NAME"},
        optional=set(),
        root=tmp_path,
    )

    assert report.required == {"REPO_NAME": ["a.md", "b.md", "c.md"]}


def test_optional_tokens_never_fail(tmp_path):
    """Test optional tokens are reported without failing."""
    (tmp_path / "README.md").write_text("{{FEATURES_TABLE}}\n{{ACKNOWLEDGMENTS}}\n", encoding="utf-8")

    report = validate(
        ["README.md"],
        required={"PROJECT_NAME"},
        optional={"FEATURES_TABLE", "ACKNOWLEDGMENTS"},
        root=tmp_path,
        descriptions={"FEATURES_TABLE": "Markdown table listing features"},
    )

    assert report.ok
    assert report.exit_code == 0
    assert list(report.optional) == ["ACKNOWLEDGMENTS", "FEATURES_TABLE"]
    assert report.optional["FEATURES_TABLE"] == ["README.md"]
    info = [m for m in report.messages if m.level == ValidationLevel.INFO]
    assert {m.token for m in info} == {"ACKNOWLEDGMENTS", "FEATURES_TABLE"}
    assert next(m for m in info if m.token == "FEATURES_TABLE").description == (
        "Markdown table listing features"
    )


def test_unknown_tokens_stay_out_of_both_sections(tmp_path):
    """Test unrecognized tokens are grouped separately."""
    (tmp_path / "README.md").write_text("{{PROJECT_NAM}} {{SOMETHING_NEW}}", encoding="utf-8")

    report = validate(
        ["README.md"],
        required={"PROJECT_NAME"},
        optional={"FEATURES_TABLE"},
        root=tmp_path,
    )

    assert report.required == {}
    assert report.optional == {}
    assert report.exit_code == 0
    assert report.unrecognized == {
        "PROJECT_NAM": ["README.md"],
        "SOMETHING_NEW": ["README.md"],
    }
    assert [m.token for m in report.warnings] == ["PROJECT_NAM", "SOMETHING_NEW"]


def test_tokens_are_sorted(tmp_path):
    """Test tokens and files are sorted and deduplicated."""
    (tmp_path / "a.md").write_text("{{ZETA}} {{ALPHA}} {{MID}}", encoding="utf-8")

    report = validate(["a.md"], required={"ZETA", "ALPHA", "MID"}, optional=set(), root=tmp_path)

    assert list(report.required) == ["ALPHA", "MID", "ZETA"]
    assert [m.token for m in report.errors] == ["ALPHA", "MID", "ZETA"]
    assert report.errors[0].placeholder == "{{ALPHA}}"


def test_missing_files_are_skipped(tmp_path):
    """Test missing targets are not scanned."""
    (tmp_path / "present.md").write_text("{{PROJECT_NAME}}", encoding="utf-8")

    report = validate(
        ["missing.md", "present.md", "docs/also-missing.md"],
        required={"PROJECT_NAME"},
        optional=set(),
        root=tmp_path,
    )

    assert report.files_scanned == 1
    assert report.required == {"PROJECT_NAME": ["present.md"]}


def test_overlapping_classes_are_rejected(tmp_path):
    """Test overlapping required and optional sets raise."""
    with pytest.raises(ConfigurationError, match="both required and optional"):
        validate([], required={"A", "B"}, optional={"B"}, root=tmp_path)


def test_unreadable_file_is_fatal(tmp_path):
    """Test an undecodable target raises FileAccessError."""
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe\x00")

    with pytest.raises(FileAccessError):
        validate(["bad.md"], required={"A"}, optional=set(), root=tmp_path)


def test_nested_paths_use_forward_slashes(tmp_path):
    """Test file labels use forward slashes."""
    (tmp_path / "docfx_project" / "docs").mkdir(parents=True)
    (tmp_path / "docfx_project" / "docs" / "toc.yml").write_text("- {{PROJECT_NAME}}", encoding="utf-8")

    report = validate(
        ["docfx_project/docs/toc.yml"],
        required={"PROJECT_NAME"},
        optional=set(),
        root=tmp_path,
    )

    assert report.required == {"PROJECT_NAME": ["docfx_project/docs/toc.yml"]}


def test_raise_for_required(tmp_path):
    """Test raise_for_required names the leftover tokens."""
    (tmp_path / "a.md").write_text("{{REPO_NAME}} {{DOCS_URL}}", encoding="utf-8")
    report = validate(["a.md"], required={"REPO_NAME", "DOCS_URL"}, optional=set(), root=tmp_path)

    with pytest.raises(UnresolvedPlaceholderError) as exc_info:
        report.raise_for_required()

    assert exc_info.value.report is report
    assert "DOCS_URL, REPO_NAME" in str(exc_info.value)
    assert "Hint:" in str(exc_info.value)


def test_raise_for_required_passes_when_clean(tmp_path):
    """Test raise_for_required is silent on a clean report."""
    (tmp_path / "a.md").write_text("done", encoding="utf-8")
    validate(["a.md"], required={"REPO_NAME"}, optional=set(), root=tmp_path).raise_for_required()
