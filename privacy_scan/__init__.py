"""Recursive PII scanning for social-platform data exports."""

from privacy_scan.config.settings import Settings
from privacy_scan.parsers.exceptions import MalformedDocumentError
from privacy_scan.processor.exceptions import (
    MalformedArchiveError,
    ScanCancelledError,
    ScanError,
    ScanIOError,
    UnsupportedFormatError,
)
from privacy_scan.processor.models import Report, ScoredItem, Summary, TextFragment
from privacy_scan.processor.processor import Scanner, build_scanner, scan
from privacy_scan.processor.report_serializer import ReportSerializer

__all__ = [
    "MalformedArchiveError",
    "MalformedDocumentError",
    "Report",
    "ReportSerializer",
    "ScanCancelledError",
    "ScanError",
    "ScanIOError",
    "Scanner",
    "ScoredItem",
    "Settings",
    "Summary",
    "TextFragment",
    "UnsupportedFormatError",
    "build_scanner",
    "scan",
]
__version__ = "0.1.0"
