"""
Git operations for the republisher.

Provides the two remote operations the pipeline needs, using GitPython:
listing the upstream release tags without cloning, and a shallow clone of
the tree at a single tag.
"""

import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from git import Git, Repo
from git.exc import CommandError
from semver import Version

from .errors import CloneError, TagResolutionError
from .versions import is_release_tag, tag_to_version

_TAG_REF_PREFIX_RE = re.compile(r"^.*refs/tags/")


@dataclass(frozen=True)
class ResolvedTag:
    """A release tag together with the version it names."""

    name: str
    version: Version

    @classmethod
    def from_name(cls, name: str) -> "ResolvedTag":
        return cls(name=name, version=tag_to_version(name))


def parse_tag_refs(output: str) -> list[str]:
    """Reduce ``git ls-remote --tags`` output to bare tag names, in order."""
    tags = []
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        tags.append(_TAG_REF_PREFIX_RE.sub("", line))
    return tags


def list_remote_tags(url: str) -> list[str]:
    """
    List the tags of a remote repository without cloning it.

    Tags come back in the remote's descending version order
    (``--sort=-v:refname``).
    """
    try:
        output = Git().ls_remote("--tags", "--sort=-v:refname", url)
    except CommandError as e:
        raise TagResolutionError(f"Failed to list tags of {url}: {e.stderr.strip() or e}") from e
    return parse_tag_refs(output)


def select_latest_tag(names: Iterable[str]) -> ResolvedTag | None:
    """Pick the highest release tag by semantic version, ignoring list order."""
    candidates = [ResolvedTag.from_name(name) for name in names if is_release_tag(name)]
    if not candidates:
        return None
    return max(candidates, key=lambda tag: tag.version)


def resolve_latest_tag(url: str) -> ResolvedTag | None:
    """Find the latest release tag of a remote repository."""
    return select_latest_tag(list_remote_tags(url))


def clone_at_tag(url: str, path: Path, tag: str, force_reclone: bool = False) -> Path:
    """
    Clone a repository at a single tag, without history.

    Args:
        url: Git remote URL
        path: Local path to clone into
        tag: Tag to check out
        force_reclone: If True, delete whatever exists at path first

    Returns:
        The resolved path of the clone
    """
    path = Path(path).resolve()

    if path.exists():
        if force_reclone:
            try:
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                else:
                    path.unlink()
            except OSError as e:
                raise CloneError(f"Failed to remove existing destination {path}: {e}") from e
        elif not path.is_dir() or any(path.iterdir()):
            raise CloneError(f"Destination path already exists and is not empty: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        Repo.clone_from(url, path, branch=tag, depth=1, single_branch=True)
    except CommandError as e:
        raise CloneError(f"Failed to clone {url} at {tag}: {e.stderr.strip() or e}") from e
    return path
