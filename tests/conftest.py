import io
import json
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from privacy_scan.config.settings import Settings

ZipEntries = Sequence[tuple[str, bytes]]


def build_zip(entries: ZipEntries) -> bytes:
    """Build an in-memory zip with entries written in the given order."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries:
            zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture()
def make_zip() -> Callable[[ZipEntries], bytes]:
    return build_zip


@pytest.fixture()
def scratch_root(tmp_path: Path) -> Path:
    return tmp_path / "scratch"


@pytest.fixture()
def settings(scratch_root: Path) -> Settings:
    return Settings(scratch_root=scratch_root)


@pytest.fixture()
def posts_json() -> bytes:
    """Export-style posts file with one phone and one clean post."""
    return json.dumps(
        [
            {"caption": "Call me at 555-123-4567", "timestamp": 1700000000},
            {"caption": "Sunset at the beach", "timestamp": 1700000100},
        ]
    ).encode()


@pytest.fixture()
def comments_csv() -> bytes:
    return b"author,text\nalice,Contact me at test@example.com\nbob,Nice photo\n"


@pytest.fixture()
def messages_html() -> bytes:
    return (
        b"<html><head><title>Messages</title></head><body>"
        b"<p>I live on Main Street</p><p>ok</p>"
        b"</body></html>"
    )
