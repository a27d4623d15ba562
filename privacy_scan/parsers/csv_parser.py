import csv
import io
from collections.abc import Sequence
from typing import ClassVar

from privacy_scan.parsers.base import BaseDocumentParser, decode_text
from privacy_scan.parsers.exceptions import MalformedDocumentError

# csv.field_size_limit takes a C long
_MAX_FIELD_SIZE_CAP = 2**31 - 1


class CsvParser(BaseDocumentParser):
    """Extracts one fragment per data row of a CSV file with a header row.

    Structural problems fail the whole file; rows are never salvaged one by one.
    A single cell may be as large as ``max_field_size`` bytes.
    """

    extensions = (".csv",)

    DEFAULT_MAX_FIELD_SIZE: ClassVar[int] = 512 * 1024 * 1024

    def __init__(
        self,
        text_columns: Sequence[str] | None = None,
        max_field_size: int = DEFAULT_MAX_FIELD_SIZE,
    ) -> None:
        self._text_columns = frozenset(column.strip().lower() for column in text_columns or ())
        # The limit is process-wide; it is only ever raised, never lowered.
        limit = min(max_field_size, _MAX_FIELD_SIZE_CAP)
        if csv.field_size_limit() < limit:
            csv.field_size_limit(limit)

    def parse(self, raw: bytes) -> list[str]:
        reader = csv.reader(io.StringIO(decode_text(raw), newline=""), strict=True)
        try:
            rows = [row for row in reader if any(cell.strip() for cell in row)]
        except csv.Error as exc:
            raise MalformedDocumentError(f"invalid CSV at line {reader.line_num}: {exc}") from exc
        if not rows:
            return []

        header, data_rows = rows[0], rows[1:]
        columns = self._select_columns(header)
        fragments: list[str] = []
        for number, row in enumerate(data_rows, start=2):
            if len(row) > len(header):
                raise MalformedDocumentError(
                    f"row {number} has {len(row)} cells but the header has {len(header)}"
                )
            values = [row[index].strip() for index in columns if index < len(row)]
            text = " ".join(value for value in values if value)
            if text:
                fragments.append(text)
        return fragments

    def _select_columns(self, header: list[str]) -> list[int]:
        names = [name.strip().lower() for name in header]
        if not self._text_columns:
            return list(range(len(names)))
        return [index for index, name in enumerate(names) if name in self._text_columns]
