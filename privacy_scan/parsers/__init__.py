from privacy_scan.parsers.base import BaseDocumentParser
from privacy_scan.parsers.csv_parser import CsvParser
from privacy_scan.parsers.exceptions import MalformedDocumentError
from privacy_scan.parsers.factory import DocumentParserFactory
from privacy_scan.parsers.html_parser import HtmlParser
from privacy_scan.parsers.json_parser import JsonParser

__all__ = [
    "BaseDocumentParser",
    "CsvParser",
    "DocumentParserFactory",
    "HtmlParser",
    "JsonParser",
    "MalformedDocumentError",
]
