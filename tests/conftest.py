"""Pytest configuration and fixtures for republisher tests."""

import json
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest
from git import Repo

MANIFEST = {
    "name": "upstream-lib",
    "version": "1.2.0",
    "description": "An upstream library",
    "repository": {"type": "git", "url": "https://example.com/upstream/lib.git"},
    "keywords": ["excel", "sheet"],
    "dependencies": {},
}


class RecordingReporter:
    """Reporter that keeps every stage report for assertions."""

    def __init__(self):
        self.started: list[str] = []
        self.finished: list[tuple[str, str, str]] = []

    def start(self, title: str) -> None:
        self.started.append(title)

    def finish(self, title: str, severity: str, message: str) -> None:
        self.finished.append((title, severity, message))


def _registry_session(document=None, status_code: int = 200) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = document
    session = Mock()
    session.get.return_value = response
    return session


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def registry_session():
    """Factory for mock requests sessions answering one registry document."""
    return _registry_session


@pytest.fixture
def upstream_repo(temp_dir: Path):
    """Create a git repository standing in for the upstream library.

    Tags: v1.1.9 on the first commit; v1.2.0 (annotated), v1.2.1-a and
    v1.3.0+deno on the second.
    """
    repo_path = temp_dir / "upstream-remote"
    repo_path.mkdir()

    repo = Repo.init(repo_path)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    manifest = dict(MANIFEST, version="1.1.9")
    (repo_path / "package.json").write_text(json.dumps(manifest, indent=2))
    (repo_path / "README.md").write_text("# Upstream 1.1.9\n")
    repo.index.add(["package.json", "README.md"])
    repo.index.commit("Release 1.1.9")
    repo.create_tag("v1.1.9")

    (repo_path / "package.json").write_text(json.dumps(MANIFEST, indent=2))
    (repo_path / "README.md").write_text("# Upstream 1.2.0\n")
    repo.index.add(["package.json", "README.md"])
    repo.index.commit("Release 1.2.0")
    repo.create_tag("v1.2.0", message="Release 1.2.0")
    repo.create_tag("v1.2.1-a")
    repo.create_tag("v1.3.0+deno")

    yield repo_path


@pytest.fixture
def upstream_url(upstream_repo: Path) -> str:
    return upstream_repo.as_uri()


@pytest.fixture
def custom_readme(temp_dir: Path) -> Path:
    """The README shipped with the republished package."""
    path = temp_dir / "CUSTOM_README.md"
    path.write_bytes("# Republished package\n\nMirrors upstream – unchanged.\n".encode("utf-8"))
    return path
