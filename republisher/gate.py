"""Version gate deciding whether a new upstream release should be republished."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from semver import Version

Severity = Literal["success", "warning", "failure"]


class GateDecision(Enum):
    PROCEED = "proceed"
    PROCEED_UNPUBLISHED = "proceed-unpublished"
    HALT_EQUAL = "halt-equal"
    HALT_BEHIND = "halt-behind"
    INVALID = "invalid"


@dataclass(frozen=True)
class GateResult:
    """Outcome of comparing the upstream version with the registry version."""

    decision: GateDecision
    severity: Severity
    message: str

    @property
    def proceed(self) -> bool:
        return self.decision in (GateDecision.PROCEED, GateDecision.PROCEED_UNPUBLISHED)


def check_versions(
    resolved: Version | None,
    registry: Version | None,
    behind_severity: Severity = "warning",
) -> GateResult:
    """
    Compare the resolved upstream version with the published one.

    A missing registry version means the package was never published and
    lets the pipeline proceed; a missing upstream version is a failure.
    Versions that differ only in build metadata are not the same release
    here, but neither ranks below the other, so the pipeline proceeds.
    """
    if not isinstance(resolved, Version):
        return GateResult(GateDecision.INVALID, "failure", "One of the versions is invalid")

    if registry is None:
        return GateResult(
            GateDecision.PROCEED_UNPUBLISHED,
            "success",
            f"Passed, {resolved} has not been published yet",
        )

    # Exact match, build metadata included
    if str(resolved) == str(registry):
        return GateResult(
            GateDecision.HALT_EQUAL,
            "success",
            "Versions are the same, no publishing required",
        )

    if resolved < registry:
        return GateResult(
            GateDecision.HALT_BEHIND,
            behind_severity,
            f"Version in the git repository ({resolved}) is lower than the version "
            f"in the registry ({registry}), no publishing required",
        )

    return GateResult(GateDecision.PROCEED, "success", f"Passed, {registry} -> {resolved}")
