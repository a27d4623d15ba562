from privacy_scan.processor.exceptions import ScanError


class MalformedDocumentError(ScanError):
    """Raised when a single JSON or CSV document cannot be parsed."""
