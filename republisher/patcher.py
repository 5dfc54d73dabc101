"""
Patching of the cloned upstream tree.

Replaces the upstream README with our own and rewrites the package
manifest so the tree publishes under the target name and repository.
"""

import json
import shutil
from pathlib import Path

from .errors import ManifestError, PatchError

MANIFEST_INDENT = 2


def _remove_path(path: Path) -> None:
    """Remove a file or directory, tolerating its absence."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


def replace_readme(source: Path, destination: Path) -> Path:
    """Overwrite the README at destination with an exact copy of source."""
    source = Path(source)
    destination = Path(destination)
    if not source.is_file():
        raise PatchError(f"README not found: {source}")

    _remove_path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
    return destination


def load_manifest(path: Path) -> dict:
    """Read and parse a JSON manifest."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e

    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest is not valid JSON: {path}: {e}") from e

    if not isinstance(manifest, dict):
        raise ManifestError(f"Manifest is not a JSON object: {path}")
    return manifest


def rewrite_manifest(manifest: dict, name: str, repository_url: str) -> dict:
    """Set the package name and repository URL of a parsed manifest."""
    repository = manifest.get("repository")
    if not isinstance(repository, dict):
        raise ManifestError("Manifest has no 'repository' object to patch")

    manifest["name"] = name
    repository["url"] = repository_url
    return manifest


def dump_manifest(manifest: dict) -> str:
    return json.dumps(manifest, indent=MANIFEST_INDENT, ensure_ascii=False)


def patch_manifest(path: Path, name: str, repository_url: str) -> dict:
    """
    Rewrite the manifest at path in place with a new name and repository URL.

    The file is parsed, patched and written back whole: the old file is
    removed first and the new content written in a single call.

    Returns:
        The patched manifest
    """
    path = Path(path)
    manifest = rewrite_manifest(load_manifest(path), name, repository_url)
    content = dump_manifest(manifest)

    _remove_path(path)
    path.write_text(content, encoding="utf-8")
    return manifest
