import html
import re
from typing import ClassVar

from privacy_scan.parsers.base import BaseDocumentParser, decode_text


class HtmlParser(BaseDocumentParser):
    """Pulls text runs out of HTML without building a DOM.

    Any run between markup delimiters (or the document edges) that is at least
    ``MIN_RUN_LENGTH`` characters long after whitespace collapsing becomes a
    fragment. Unbalanced or broken markup is tolerated; nothing here raises.
    """

    extensions = (".html", ".htm")

    MIN_RUN_LENGTH: ClassVar[int] = 5

    _HIDDEN_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"<(script|style)\b[^>]*>.*?</\1\s*>",
        re.IGNORECASE | re.DOTALL,
    )
    _COMMENT_RE: ClassVar[re.Pattern[str]] = re.compile(r"<!--.*?-->", re.DOTALL)
    _TEXT_RUN_RE: ClassVar[re.Pattern[str]] = re.compile(r"(?:^|>)([^<>]+)(?=<|$)")

    def parse(self, raw: bytes) -> list[str]:
        document = self._COMMENT_RE.sub("", decode_text(raw))
        document = self._HIDDEN_RE.sub("", document)

        fragments: list[str] = []
        for match in self._TEXT_RUN_RE.finditer(document):
            text = " ".join(html.unescape(match.group(1)).split())
            if len(text) >= self.MIN_RUN_LENGTH:
                fragments.append(text)
        return fragments
