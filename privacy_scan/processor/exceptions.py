class ScanError(Exception):
    """Base exception for all scan-related errors."""


class UnsupportedFormatError(ScanError):
    """Raised when the top-level file extension is not an accepted format."""


class MalformedArchiveError(ScanError):
    """Raised when an archive cannot be opened or safely extracted."""


class ScanIOError(ScanError):
    """Raised when scratch storage cannot be created, read or removed."""


class ScanCancelledError(ScanError):
    """Raised when the caller cancels a scan that is still running."""
