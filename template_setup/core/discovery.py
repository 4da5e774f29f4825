"""
Repository file discovery for building a project manifest.

Walks the repository tree lazily, drops build artifacts and secret-like
files, and groups what is left by parent directory.

Exclusion rules are an ordered list of matchers; the first matcher that
matches a path excludes it. An excluded directory is never descended
into.
"""

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

logger = logging.getLogger(__name__)


class Matcher(Protocol):
    """Decides whether a repository-relative path is excluded."""

    def matches(self, path: PurePosixPath) -> bool:
        ...


@dataclass(frozen=True)
class SuffixMatcher:
    """Matches file names ending with a suffix, e.g. '.user'."""
    suffix: str

    def matches(self, path: PurePosixPath) -> bool:
        return path.name.endswith(self.suffix)


@dataclass(frozen=True)
class SegmentMatcher:
    """Matches any path containing a directory or file named segment."""
    segment: str

    def matches(self, path: PurePosixPath) -> bool:
        return self.segment in path.parts


@dataclass(frozen=True)
class GlobMatcher:
    """Matches the file name or the full relative path against a glob."""
    pattern: str

    def matches(self, path: PurePosixPath) -> bool:
        return fnmatch.fnmatchcase(path.name, self.pattern) or fnmatch.fnmatchcase(
            path.as_posix(), self.pattern
        )


@dataclass(frozen=True)
class ExclusionRules:
    """Ordered matchers; a path is excluded by the first match."""
    matchers: tuple[Matcher, ...] = ()

    def first_match(self, path: PurePosixPath) -> Matcher | None:
        for matcher in self.matchers:
            if matcher.matches(path):
                return matcher
        return None

    def excludes(self, path: PurePosixPath) -> bool:
        return self.first_match(path) is not None

    def extended(self, matchers: Iterable[Matcher]) -> "ExclusionRules":
        return ExclusionRules(self.matchers + tuple(matchers))


BUILD_ARTIFACT_MATCHERS: tuple[Matcher, ...] = (
    SegmentMatcher(".git"),
    SegmentMatcher("bin"),
    SegmentMatcher("obj"),
    SegmentMatcher(".vs"),
    SegmentMatcher("TestResults"),
    SegmentMatcher("node_modules"),
    SegmentMatcher("__pycache__"),
    SegmentMatcher("_site"),
    SuffixMatcher(".user"),
    SuffixMatcher(".suo"),
    SuffixMatcher(".pyc"),
)

SECRET_MATCHERS: tuple[Matcher, ...] = (
    GlobMatcher(".env"),
    GlobMatcher(".env.*"),
    GlobMatcher("secrets.json"),
    GlobMatcher("appsettings.*.local.json"),
    SuffixMatcher(".pfx"),
    SuffixMatcher(".snk"),
    SuffixMatcher(".pem"),
    SuffixMatcher(".key"),
)

DEFAULT_EXCLUSIONS = ExclusionRules(BUILD_ARTIFACT_MATCHERS + SECRET_MATCHERS)


def _included(path: PurePosixPath, include: Sequence[str]) -> bool:
    return any(
        fnmatch.fnmatchcase(path.name, pattern) or fnmatch.fnmatchcase(path.as_posix(), pattern)
        for pattern in include
    )


def discover_files(
    root: Path,
    include: Sequence[str] = ("*",),
    exclusions: ExclusionRules = DEFAULT_EXCLUSIONS,
) -> Iterator[PurePosixPath]:
    """Yield repository-relative file paths matching the inclusion rules.

    Directories and files are visited in sorted order, so output is
    deterministic. Each call returns a fresh generator.

    Args:
        root: Repository root
        include: Glob patterns; a file is kept if any pattern matches
        exclusions: Ordered exclusion matchers

    Yields:
        Relative paths using '/' separators
    """
    root = Path(root)
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = PurePosixPath(Path(dirpath).relative_to(root).as_posix())

        kept_dirs = []
        for name in sorted(dirnames):
            candidate = rel_dir / name
            if exclusions.excludes(candidate):
                logger.debug("Excluding directory: %s", candidate)
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for name in sorted(filenames):
            candidate = rel_dir / name
            if exclusions.excludes(candidate):
                logger.debug("Excluding file: %s", candidate)
                continue
            if _included(candidate, include):
                yield candidate


def group_by_parent(paths: Iterable[PurePosixPath]) -> dict[str, list[str]]:
    """Group paths by parent directory ('.' for the root).

    Group keys are sorted; each list keeps the input order.
    """
    groups: dict[str, list[str]] = {}
    for path in paths:
        groups.setdefault(str(path.parent), []).append(path.as_posix())
    return {key: groups[key] for key in sorted(groups)}


def build_manifest(
    root: Path,
    include: Sequence[str] = ("*",),
    exclusions: ExclusionRules = DEFAULT_EXCLUSIONS,
) -> dict[str, list[str]]:
    """Discover files under root and group them by parent directory."""
    return group_by_parent(discover_files(root, include, exclusions))
