"""Exception hierarchy for republisher."""


class RepublisherError(Exception):
    """Base exception for all republisher errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class ConfigError(RepublisherError):
    """Raised when the configuration file is missing or invalid."""


class TagResolutionError(RepublisherError):
    """Raised when the remote tag listing cannot be obtained."""


class CloneError(RepublisherError):
    """Raised when the upstream repository cannot be cloned at a tag."""


class PatchError(RepublisherError):
    """Raised when the cloned tree cannot be patched."""


class ManifestError(PatchError):
    """Raised when the package manifest is missing, malformed or lacks a patched field."""
