"""
Default values auto-detected from the enclosing git repository.

Detection is best effort: a missing git binary, a directory that is not
a repository or an unset config key all yield an empty string.
"""

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

GITHUB_OWNER_PATTERN = re.compile(r"github\.com[:/]([^/]+)/")
GITHUB_SSH_PATTERN = re.compile(r"^git@github\.com:(.+)$")
GITHUB_HTTPS_PATTERN = re.compile(r"^https://github\.com/([^/]+)/([^/]+)")


def _run_git(*args: str, cwd: Optional[Path] = None) -> str:
    """Run a git command and return stripped stdout, or '' on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug("git %s failed: %s", " ".join(args), e)
        return ""

    if result.returncode != 0:
        logger.debug("git %s exited %d: %s", " ".join(args), result.returncode, result.stderr.strip())
        return ""
    return result.stdout.strip()


def strip_git_suffix(url: str) -> str:
    return url[:-4] if url.endswith(".git") else url


def get_remote_url(cwd: Optional[Path] = None) -> str:
    """URL of the 'origin' remote without a trailing .git."""
    return strip_git_suffix(_run_git("remote", "get-url", "origin", cwd=cwd))


def get_user_name(cwd: Optional[Path] = None) -> str:
    return _run_git("config", "user.name", cwd=cwd)


def repo_name_from_url(url: str) -> str:
    """Last path segment of a repository URL, without .git."""
    url = url.rstrip("/")
    if not url:
        return ""
    name = re.split(r"[/:]", url)[-1]
    return strip_git_suffix(name)


def github_username_from_url(url: str) -> str:
    """'@owner' for a github.com URL (https or ssh), else ''."""
    match = GITHUB_OWNER_PATTERN.search(url)
    if match:
        return f"@{match.group(1)}"
    return ""


def normalize_repo_url(url: str) -> str:
    """Convert git@github.com:org/repo to https form and drop .git."""
    match = GITHUB_SSH_PATTERN.match(url)
    if match:
        url = f"https://github.com/{match.group(1)}"
    return strip_git_suffix(url)


def docs_url_from_repo_url(url: str) -> str:
    """GitHub Pages URL for a GitHub repository URL.

    Non-GitHub URLs are returned normalized but otherwise unchanged.
    """
    normalized = normalize_repo_url(url)
    match = GITHUB_HTTPS_PATTERN.match(normalized)
    if not match:
        return normalized
    owner, repo = match.groups()
    return f"https://{owner}.github.io/{repo}/"


@dataclass
class GitDefaults:
    """Prompt defaults detected from git."""
    remote_url: str = ""
    repo_name: str = ""
    github_username: str = ""
    user_name: str = ""


def detect_git_defaults(cwd: Optional[Path] = None) -> GitDefaults:
    """Collect every default the setup prompts can use."""
    remote_url = get_remote_url(cwd)
    defaults = GitDefaults(
        remote_url=remote_url,
        repo_name=repo_name_from_url(remote_url),
        github_username=github_username_from_url(remote_url),
        user_name=get_user_name(cwd),
    )
    if remote_url:
        logger.info("Detected repository: %s", remote_url)
    return defaults
