"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class MumuProbeError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(MumuProbeError):
    """Raised for issues related to configuration loading or validation."""


class SearchTimeoutError(MumuProbeError):
    """Raised when no candidate URL resolved before the search timeout."""


class InvalidUrlFormatError(MumuProbeError):
    """Raised when a file name cannot be derived from a URL's path."""


class DownloadError(MumuProbeError):
    """
    Raised when a download fails. `phase` names the step that failed:
    'directory', 'request', 'create', 'read' or 'write'.
    """

    def __init__(self, phase: str, url: str, cause: Exception | None = None):
        self.phase = phase
        self.url = url
        self.cause = cause
        message = f"Download failed during {phase} for {url}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
