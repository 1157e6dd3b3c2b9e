"""Exception types raised by the core file operations.

Routers map these to HTTP responses; the core never imports FastAPI.
"""


class CleanerError(Exception):
    """Base class for hidden-file cleaner failures."""


class UnsafePathError(CleanerError, ValueError):
    """Raised when an uploaded relative path would escape the upload root."""


class ArchiveError(CleanerError):
    """Raised when an entry cannot be written to the clean archive."""
