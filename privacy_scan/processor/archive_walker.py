"""Turns a raw upload into the ordered list of text fragments it contains.

Zip uploads are extracted into a per-call scratch directory and walked
depth-first with each directory's entries sorted by name. The zip's own
central-directory order is not used: discovery order is the sorted walk, so
two archives with the same members in different entry order produce the same
fragments. Nested zips are extracted next to it and walked in place of the
archive file. Anything that goes wrong with one file inside the walk is logged
and skipped; anything that goes wrong with the upload itself is raised.
"""

import io
import threading
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path, PurePath, PurePosixPath
from typing import IO, BinaryIO, ClassVar

from privacy_scan.logging.logger import Log
from privacy_scan.parsers.exceptions import MalformedDocumentError
from privacy_scan.parsers.factory import DocumentParserFactory
from privacy_scan.processor.exceptions import (
    MalformedArchiveError,
    ScanCancelledError,
    ScanIOError,
    UnsupportedFormatError,
)
from privacy_scan.processor.models import TextFragment
from privacy_scan.processor.scratch import ScratchSpace

_COPY_CHUNK_SIZE = 64 * 1024


def safe_member_path(name: str) -> PurePosixPath | None:
    """Return the cleaned relative path of a zip entry, or None if it escapes."""
    path = PurePosixPath(name)
    if path.is_absolute() or ".." in path.parts:
        return None
    parts = [part for part in path.parts if part not in ("", ".")]
    return PurePosixPath(*parts) if parts else PurePosixPath(".")


@dataclass
class _WalkState:
    """Bookkeeping for a single walk; never shared between calls."""

    scratch: Path
    cancel_event: threading.Event | None = None
    visited: set[Path] = field(default_factory=set)
    extracted_bytes: int = 0
    nested_archives: int = 0
    fragments: list[TextFragment] = field(default_factory=list)


class ArchiveWalker:
    """Extracts fragments from a zip export or from a single document."""

    ARCHIVE_EXTENSIONS: ClassVar[frozenset[str]] = frozenset({".zip"})
    IGNORED_NAMES: ClassVar[frozenset[str]] = frozenset({"__MACOSX", ".DS_Store"})

    def __init__(
        self,
        parsers: DocumentParserFactory,
        scratch: ScratchSpace,
        max_archive_depth: int = 5,
        max_walk_depth: int = 32,
        max_extracted_bytes: int = 512 * 1024 * 1024,
    ) -> None:
        self._parsers = parsers
        self._scratch = scratch
        self._max_archive_depth = max_archive_depth
        self._max_walk_depth = max_walk_depth
        self._max_extracted_bytes = max_extracted_bytes

    def walk(
        self,
        content: bytes,
        filename: str,
        call_id: int,
        cancel_event: threading.Event | None = None,
    ) -> list[TextFragment]:
        """Return every fragment of the upload in discovery order.

        Raises:
            UnsupportedFormatError: if a single document has no matching parser.
            MalformedArchiveError: if the uploaded zip cannot be extracted.
            MalformedDocumentError: if the single uploaded document cannot be parsed.
            ScanIOError: on scratch storage failures.
            ScanCancelledError: if *cancel_event* is set mid-walk.
        """
        name = PurePath(filename).name
        extension = PurePath(name).suffix.lower()
        if extension in self.ARCHIVE_EXTENSIONS:
            return self._walk_upload_archive(content, call_id, cancel_event)

        parser = self._parsers.for_extension(extension)
        if parser is None:
            raise UnsupportedFormatError(f"Unsupported file type: '{extension or name}'")
        if cancel_event is not None and cancel_event.is_set():
            raise ScanCancelledError("scan cancelled before parsing")
        return [TextFragment(text=text, origin=name) for text in parser.parse(content)]

    def _walk_upload_archive(
        self,
        content: bytes,
        call_id: int,
        cancel_event: threading.Event | None,
    ) -> list[TextFragment]:
        with self._scratch.session(call_id) as scratch:
            state = _WalkState(scratch=scratch, cancel_event=cancel_event)
            root = scratch / "upload"
            self._extract(io.BytesIO(content), root, state)
            self._walk_directory(root, prefix="", walk_depth=0, archive_depth=0, state=state)
            Log.debug(
                f"Scan {call_id} walked {len(state.visited)} entries, "
                f"{state.nested_archives} nested archives, {state.extracted_bytes} bytes"
            )
            return state.fragments

    def _extract(self, source: BinaryIO | Path, target: Path, state: _WalkState) -> None:
        try:
            with zipfile.ZipFile(source) as archive:
                target.mkdir(parents=True, exist_ok=True)
                for info in archive.infolist():
                    self._check_cancelled(state)
                    member = safe_member_path(info.filename)
                    if member is None:
                        raise MalformedArchiveError(f"Unsafe archive entry path: {info.filename!r}")
                    destination = target / member
                    if info.is_dir():
                        destination.mkdir(parents=True, exist_ok=True)
                        continue
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    with archive.open(info) as src, destination.open("wb") as dst:
                        self._copy_bounded(src, dst, state)
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as exc:
            raise MalformedArchiveError(f"Cannot read archive: {exc}") from exc
        except OSError as exc:
            raise MalformedArchiveError(f"Archive extraction failed: {exc}") from exc

    def _copy_bounded(self, src: IO[bytes], dst: IO[bytes], state: _WalkState) -> None:
        while True:
            self._check_cancelled(state)
            chunk = src.read(_COPY_CHUNK_SIZE)
            if not chunk:
                return
            state.extracted_bytes += len(chunk)
            if state.extracted_bytes > self._max_extracted_bytes:
                raise MalformedArchiveError(
                    f"Archive expands beyond {self._max_extracted_bytes} bytes"
                )
            dst.write(chunk)

    def _walk_directory(
        self,
        directory: Path,
        prefix: str,
        walk_depth: int,
        archive_depth: int,
        state: _WalkState,
    ) -> None:
        if walk_depth > self._max_walk_depth:
            Log.warning(f"Skipping {prefix or '/'}: directory nesting exceeds {self._max_walk_depth}")
            return
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise ScanIOError(f"Cannot list extracted directory {prefix or '/'}: {exc}") from exc

        for entry in entries:
            self._check_cancelled(state)
            origin = f"{prefix}{entry.name}"
            if entry.name in self.IGNORED_NAMES:
                continue
            if entry.is_symlink():
                Log.debug(f"Skipping symlink {origin}")
                continue
            real_path = entry.resolve()
            if real_path in state.visited:
                Log.debug(f"Skipping already visited {origin}")
                continue
            state.visited.add(real_path)

            if entry.is_dir():
                self._walk_directory(entry, f"{origin}/", walk_depth + 1, archive_depth, state)
            elif entry.is_file():
                self._visit_file(entry, origin, archive_depth, state)

    def _visit_file(self, path: Path, origin: str, archive_depth: int, state: _WalkState) -> None:
        extension = path.suffix.lower()
        if extension in self.ARCHIVE_EXTENSIONS:
            self._visit_nested_archive(path, origin, archive_depth, state)
            return

        parser = self._parsers.for_extension(extension)
        if parser is None:
            Log.debug(f"Skipping {origin}: no parser for '{extension}'")
            return
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise ScanIOError(f"Cannot read extracted file {origin}: {exc}") from exc
        try:
            texts = parser.parse(raw)
        except MalformedDocumentError as exc:
            Log.warning(f"Skipping malformed document {origin}: {exc}")
            return
        state.fragments.extend(TextFragment(text=text, origin=origin) for text in texts)

    def _visit_nested_archive(
        self,
        path: Path,
        origin: str,
        archive_depth: int,
        state: _WalkState,
    ) -> None:
        if archive_depth + 1 > self._max_archive_depth:
            Log.warning(f"Skipping {origin}: archive nesting exceeds {self._max_archive_depth}")
            return
        state.nested_archives += 1
        target = state.scratch / f"nested-{state.nested_archives}"
        try:
            self._extract(path, target, state)
        except MalformedArchiveError as exc:
            Log.warning(f"Skipping nested archive {origin}: {exc}")
            return
        self._walk_directory(target, f"{origin}!/", 0, archive_depth + 1, state)

    @staticmethod
    def _check_cancelled(state: _WalkState) -> None:
        if state.cancel_event is not None and state.cancel_event.is_set():
            raise ScanCancelledError("scan cancelled")
