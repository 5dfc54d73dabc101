"""Tests for the version gate."""

from semver import Version

from republisher.gate import GateDecision, check_versions

V = Version.parse


class TestCheckVersions:
    """Tests for each branch of check_versions."""

    def test_equal_halts(self):
        gate = check_versions(V("0.20.1"), V("0.20.1"))
        assert gate.decision is GateDecision.HALT_EQUAL
        assert gate.severity == "success"
        assert gate.proceed is False

    def test_unpublished_proceeds(self):
        gate = check_versions(V("0.20.1"), None)
        assert gate.decision is GateDecision.PROCEED_UNPUBLISHED
        assert gate.proceed is True

    def test_behind_halts_with_warning(self):
        gate = check_versions(V("0.19.0"), V("0.20.1"))
        assert gate.decision is GateDecision.HALT_BEHIND
        assert gate.severity == "warning"
        assert gate.proceed is False

    def test_behind_severity_configurable(self):
        gate = check_versions(V("0.19.0"), V("0.20.1"), behind_severity="failure")
        assert gate.decision is GateDecision.HALT_BEHIND
        assert gate.severity == "failure"

    def test_ahead_proceeds(self):
        gate = check_versions(V("0.20.2"), V("0.20.1"))
        assert gate.decision is GateDecision.PROCEED
        assert gate.proceed is True

    def test_numeric_comparison(self):
        assert check_versions(V("0.10.0"), V("0.9.0")).decision is GateDecision.PROCEED

    def test_missing_resolved_version_fails(self):
        gate = check_versions(None, V("0.20.1"))
        assert gate.decision is GateDecision.INVALID
        assert gate.severity == "failure"
        assert gate.proceed is False

        assert check_versions(None, None).decision is GateDecision.INVALID

    def test_prerelease_registry_version(self):
        # Unstripped pre-release of the same triple ranks below the release
        gate = check_versions(V("0.20.1"), V("0.20.1-a"))
        assert gate.decision is GateDecision.PROCEED

    def test_build_metadata_is_not_equal(self):
        # Same precedence but a different published string
        gate = check_versions(V("1.2.0"), V("1.2.0+deno"))
        assert gate.decision is GateDecision.PROCEED
        assert gate.proceed is True
