"""JSON export parser.

Export files come in several shapes: a bare list of records, an object with
an ``items`` list, or a platform-specific list such as a followers dump. The
shape is detected by trying each known variant in a fixed priority order; a
document matching none of them contributes no records.
"""

import json
from dataclasses import dataclass
from typing import Any, ClassVar

from privacy_scan.logging.logger import Log
from privacy_scan.parsers.base import BaseDocumentParser, decode_text
from privacy_scan.parsers.exceptions import MalformedDocumentError


@dataclass(frozen=True)
class JsonShape:
    """One known document layout. Empty ``fields`` means a top-level list."""

    name: str
    fields: tuple[str, ...] = ()

    def records(self, data: Any) -> list[Any] | None:
        if not self.fields:
            return data if isinstance(data, list) else None
        if not isinstance(data, dict):
            return None
        for name in self.fields:
            value = data.get(name)
            if isinstance(value, list):
                return value
        return None


class JsonParser(BaseDocumentParser):
    """Extracts one fragment per record of a JSON export."""

    extensions = (".json",)

    SHAPES: ClassVar[tuple[JsonShape, ...]] = (
        JsonShape("sequence"),
        JsonShape("items", ("items",)),
        JsonShape(
            "relationships",
            (
                "relationships_followers",
                "relationships_following",
                "followers",
                "following",
            ),
        ),
    )
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = (
        "text",
        "content",
        "caption",
        "title",
        "message",
        "bio",
        "description",
        "comment",
    )
    # Lists of {"label": ..., "value": ...} style entries; only values are kept.
    VALUE_LIST_FIELDS: ClassVar[tuple[str, ...]] = ("string_list_data", "label_values")

    def parse(self, raw: bytes) -> list[str]:
        try:
            data = json.loads(decode_text(raw))
        except (ValueError, RecursionError) as exc:
            raise MalformedDocumentError(f"invalid JSON: {exc}") from exc

        records = self._detect_records(data)
        fragments: list[str] = []
        for record in records:
            text = self._flatten(record)
            if text:
                fragments.append(text)
        return fragments

    def _detect_records(self, data: Any) -> list[Any]:
        for shape in self.SHAPES:
            records = shape.records(data)
            if records is not None:
                Log.debug(f"JSON document matched '{shape.name}' shape ({len(records)} records)")
                return records
        Log.debug("JSON document matched no known shape")
        return []

    def _flatten(self, record: Any) -> str:
        if isinstance(record, str):
            return record.strip()
        if not isinstance(record, dict):
            return ""

        parts: list[str] = []
        for name in self.TEXT_FIELDS:
            value = record.get(name)
            if isinstance(value, str) and value.strip():
                parts.append(value.strip())
        for name in self.VALUE_LIST_FIELDS:
            entries = record.get(name)
            if not isinstance(entries, list):
                continue
            for entry in entries:
                value = entry.get("value") if isinstance(entry, dict) else None
                if isinstance(value, str) and value.strip():
                    parts.append(value.strip())
        return " ".join(parts)
