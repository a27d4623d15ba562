from abc import ABC, abstractmethod
from typing import ClassVar


def decode_text(raw: bytes) -> str:
    """Decode export bytes as UTF-8, tolerating a BOM and replacing bad bytes."""
    return raw.decode("utf-8-sig", errors="replace")


class BaseDocumentParser(ABC):
    """Contract for all per-format text extractors."""

    extensions: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def parse(self, raw: bytes) -> list[str]:
        """Extract free-text fragments from one file.

        Args:
            raw: The file's bytes.

        Returns:
            Fragments in document order. Records with no text contribute
            nothing; an empty list is a valid result.

        Raises:
            MalformedDocumentError: if the document structure cannot be parsed.
        """
