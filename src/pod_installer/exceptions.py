"""Pod installer exceptions.

Security advisories are not exceptions; they go to the injected warning sink.
File permission failures surface as the builtin PermissionError.
"""


class PodInstallerError(Exception):
    """Base exception for pod installation operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (pod name, paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class FetchError(PodInstallerError):
    """Retrieving the source of a pod failed."""


class DownloadError(FetchError):
    """The downloader could not fetch the pod into the sandbox."""


class SourcePreparationError(PodInstallerError):
    """Preparing a local (development) pod failed."""


class InvalidSpecificationsError(PodInstallerError):
    """Specifications grouped by platform are empty or do not share one root."""


class SandboxError(PodInstallerError):
    """Sandbox metadata could not be read or written."""
