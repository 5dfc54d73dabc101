"""
Configuration handling for republisher.

Defines the configuration schema and provides methods for loading/saving
the publisher configuration from YAML files.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .registry import DEFAULT_REGISTRY_URL, package_metadata_url

DEFAULT_CONFIG_FILE = Path("republisher.yaml")

# Severity reported when the upstream tag is older than the registry version
BehindSeverity = Literal["warning", "failure"]


class PublisherConfig(BaseModel):
    """Main configuration for the republisher."""

    # Upstream source
    upstream_repo_url: str = Field(
        ..., description="Git remote URL of the upstream library"
    )

    # Target package
    package_name: str = Field(
        ..., description="Package name to publish under (e.g., @scope/name)"
    )
    repository_url: str = Field(
        ..., description="Repository URL written into the patched manifest"
    )
    registry_url: str = Field(
        default=DEFAULT_REGISTRY_URL, description="Base URL of the package registry"
    )
    registry_timeout: float = Field(
        default=30.0, gt=0, description="Timeout in seconds for the registry request"
    )

    # Local layout
    readme_path: Path = Field(
        default=Path("README.md"),
        description="README file copied over the upstream one",
    )
    work_dir: Path = Field(
        default=Path("upstream"),
        description="Directory the upstream repository is cloned into",
    )
    readme_file: str = Field(
        default="README.md", description="README file name inside the clone"
    )
    manifest_file: str = Field(
        default="package.json", description="Manifest file name inside the clone"
    )

    # Behaviour
    strip_prerelease: bool = Field(
        default=True,
        description="Compare only the part of the registry version before the first hyphen",
    )
    behind_severity: BehindSeverity = Field(
        default="warning",
        description="How to report an upstream tag older than the registry version",
    )
    force_reclone: bool = Field(
        default=False,
        description="Delete an existing working directory before cloning",
    )

    @property
    def manifest_path(self) -> Path:
        """Path of the manifest inside the cloned tree."""
        return self.work_dir / self.manifest_file

    @property
    def target_readme_path(self) -> Path:
        """Path of the README inside the cloned tree."""
        return self.work_dir / self.readme_file

    @property
    def package_url(self) -> str:
        """Registry metadata URL for the target package."""
        return package_metadata_url(self.registry_url, self.package_name)

    @classmethod
    def from_yaml(cls, path: Path) -> "PublisherConfig":
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )


def create_default_config(
    upstream_repo_url: str,
    package_name: str,
    repository_url: str,
    work_dir: Path | None = None,
    registry_url: str | None = None,
) -> PublisherConfig:
    """Create a default configuration with sensible defaults."""
    overrides: dict = {}
    if work_dir is not None:
        overrides["work_dir"] = work_dir
    if registry_url is not None:
        overrides["registry_url"] = registry_url

    return PublisherConfig(
        upstream_repo_url=upstream_repo_url,
        package_name=package_name,
        repository_url=repository_url,
        **overrides,
    )
