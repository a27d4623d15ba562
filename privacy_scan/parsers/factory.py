from collections.abc import Sequence

from privacy_scan.config.settings import Settings
from privacy_scan.parsers.base import BaseDocumentParser
from privacy_scan.parsers.csv_parser import CsvParser
from privacy_scan.parsers.html_parser import HtmlParser
from privacy_scan.parsers.json_parser import JsonParser


class DocumentParserFactory:
    """Resolves the parser for a file extension (case-insensitive)."""

    def __init__(self, parsers: Sequence[BaseDocumentParser]) -> None:
        self._by_extension: dict[str, BaseDocumentParser] = {}
        for parser in parsers:
            for extension in parser.extensions:
                self._by_extension[extension.lower()] = parser

    @property
    def supported_extensions(self) -> frozenset[str]:
        return frozenset(self._by_extension)

    def for_extension(self, extension: str) -> BaseDocumentParser | None:
        return self._by_extension.get(extension.lower())

    @classmethod
    def create(cls, settings: Settings) -> "DocumentParserFactory":
        return cls(
            [
                JsonParser(),
                CsvParser(
                    text_columns=settings.csv_text_columns,
                    max_field_size=settings.max_extracted_bytes,
                ),
                HtmlParser(),
            ]
        )
