"""
Main republishing pipeline.

Runs the stages in order (tag resolution, registry lookup, version gate,
clone, README replacement, manifest patching), handing each stage's output
to the next and stopping at the first stage that halts.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol

import requests
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from semver import Version

from .config import PublisherConfig
from .errors import RepublisherError
from .gate import Severity, check_versions
from .git_ops import ResolvedTag, clone_at_tag, resolve_latest_tag
from .patcher import patch_manifest, replace_readme
from .registry import fetch_latest_version

console = Console()

STEP_RESOLVE_TAG = "Getting the latest upstream tag"
STEP_REGISTRY_VERSION = "Getting the package version from the registry"
STEP_CHECK_VERSIONS = "Checking versions"
STEP_CLONE = "Cloning the upstream repository"
STEP_README = "Replacing the README file"
STEP_MANIFEST = "Patching the manifest file"


@dataclass
class StepOutcome:
    """Outcome of a single stage: either continue with a value, or halt."""

    value: Any = None
    halted: bool = False
    severity: Severity = "success"
    message: str = "Success"

    @classmethod
    def proceed(cls, value: Any = None, message: str = "Success", severity: Severity = "success") -> "StepOutcome":
        return cls(value=value, message=message, severity=severity)

    @classmethod
    def halt(cls, message: str, severity: Severity = "failure") -> "StepOutcome":
        return cls(halted=True, severity=severity, message=message)


class Reporter(Protocol):
    """Sink for per-stage progress."""

    def start(self, title: str) -> None: ...

    def finish(self, title: str, severity: Severity, message: str) -> None: ...


_SYMBOLS = {
    "success": "[green]✓[/green]",
    "warning": "[yellow]⚠[/yellow]",
    "failure": "[red]✗[/red]",
}


class ConsoleReporter:
    """Shows a spinner while a stage runs and a status line when it ends."""

    def __init__(self, console: Console = console):
        self.console = console
        self._progress: Progress | None = None

    def start(self, title: str) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._progress.add_task(f"{title}...", total=None)

    def finish(self, title: str, severity: Severity, message: str) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
        self.console.print(f"{_SYMBOLS[severity]} {escape(title)}: {escape(message)}")


@dataclass
class PipelineResult:
    """Result of a pipeline run."""

    success: bool = False
    completed_steps: list[str] = field(default_factory=list)
    halted_at: str | None = None
    severity: Severity = "success"
    message: str = ""
    tag: ResolvedTag | None = None
    registry_version: Version | None = None
    work_path: Path | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


class Republisher:
    """Drives the republishing stages for one configuration."""

    def __init__(
        self,
        config: PublisherConfig,
        reporter: Reporter | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config
        self.reporter = reporter or ConsoleReporter()
        self.session = session

    def _run_step(
        self,
        result: PipelineResult,
        title: str,
        func: Callable[..., StepOutcome],
        *args: Any,
    ) -> StepOutcome:
        """Run one stage, report it, and record a halt on the result."""
        self.reporter.start(title)
        try:
            outcome = func(*args)
        except RepublisherError as e:
            outcome = StepOutcome.halt(e.message or str(e))
        except Exception as e:
            self.reporter.finish(title, "failure", str(e))
            raise
        self.reporter.finish(title, outcome.severity, outcome.message)

        if outcome.halted:
            result.halted_at = title
            result.severity = outcome.severity
            result.message = outcome.message
        else:
            result.completed_steps.append(title)
        return outcome

    # Stages

    def _resolve_tag(self) -> StepOutcome:
        tag = resolve_latest_tag(self.config.upstream_repo_url)
        if tag is None:
            return StepOutcome.halt("No eligible release tag found")
        return StepOutcome.proceed(
            tag,
            f"Success, git effective latest tag name = {tag.name}, tagged version = {tag.version}",
        )

    def _fetch_registry_version(self) -> StepOutcome:
        version = fetch_latest_version(
            self.config.registry_url,
            self.config.package_name,
            strip_prerelease=self.config.strip_prerelease,
            timeout=self.config.registry_timeout,
            session=self.session,
        )
        if version is None:
            return StepOutcome.proceed(
                None,
                "Failed to get a version. The package may not have been published yet",
                severity="warning",
            )
        return StepOutcome.proceed(version, f"Success, registry version = {version}")

    def _check_versions(self, tag: ResolvedTag, registry_version: Version | None) -> StepOutcome:
        gate = check_versions(
            tag.version if tag else None,
            registry_version,
            behind_severity=self.config.behind_severity,
        )
        if not gate.proceed:
            return StepOutcome.halt(gate.message, gate.severity)
        return StepOutcome.proceed(gate.decision, gate.message)

    def _clone(self, tag: ResolvedTag) -> StepOutcome:
        path = clone_at_tag(
            self.config.upstream_repo_url,
            self.config.work_dir,
            tag.name,
            force_reclone=self.config.force_reclone,
        )
        return StepOutcome.proceed(path, f"Success, cloned {tag.name} into {path}")

    def _replace_readme(self) -> StepOutcome:
        replace_readme(self.config.readme_path, self.config.target_readme_path)
        return StepOutcome.proceed()

    def _patch_manifest(self) -> StepOutcome:
        manifest = patch_manifest(
            self.config.manifest_path,
            name=self.config.package_name,
            repository_url=self.config.repository_url,
        )
        return StepOutcome.proceed(manifest, f"Success, name = {manifest['name']}")

    # Drivers

    def _gate(self, result: PipelineResult) -> bool:
        """Run the stages that decide whether to publish; True if they all pass."""
        outcome = self._run_step(result, STEP_RESOLVE_TAG, self._resolve_tag)
        if outcome.halted:
            return False
        result.tag = outcome.value

        outcome = self._run_step(result, STEP_REGISTRY_VERSION, self._fetch_registry_version)
        if outcome.halted:
            return False
        result.registry_version = outcome.value

        outcome = self._run_step(
            result, STEP_CHECK_VERSIONS, self._check_versions, result.tag, result.registry_version
        )
        return not outcome.halted

    def check(self) -> PipelineResult:
        """Decide whether publishing is required, without touching the filesystem."""
        result = PipelineResult()
        result.success = self._gate(result)
        return result

    def run(self) -> PipelineResult:
        """
        Run the whole pipeline.

        Returns:
            PipelineResult; success is True only if every stage completed
        """
        result = PipelineResult()
        if not self._gate(result):
            return result

        outcome = self._run_step(result, STEP_CLONE, self._clone, result.tag)
        if outcome.halted:
            return result
        result.work_path = outcome.value

        for title, step in ((STEP_README, self._replace_readme), (STEP_MANIFEST, self._patch_manifest)):
            if self._run_step(result, title, step).halted:
                return result

        result.success = True
        return result
