import itertools
import os
import shutil
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from privacy_scan.logging.logger import Log
from privacy_scan.processor.exceptions import ScanIOError

_call_ids = itertools.count(1)
_call_id_lock = threading.Lock()


def next_call_id() -> int:
    """Return the next process-wide monotonic scan identifier."""
    with _call_id_lock:
        return next(_call_ids)


class ScratchSpace:
    """Hands out per-call scratch directories under a shared root.

    Each directory is created exclusively (``mkdtemp``) and named after the
    call id, so concurrent scans never share a namespace.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    @contextmanager
    def session(self, call_id: int) -> Iterator[Path]:
        """Yield a fresh directory that is removed on every exit path.

        Raises:
            ScanIOError: if the directory cannot be created, or cannot be
                removed after an otherwise successful scan.
        """
        path = self._create(call_id)
        try:
            yield path
        except BaseException:
            # Never let a cleanup failure mask the error that got us here.
            self._remove(path, strict=False)
            raise
        self._remove(path, strict=True)

    def _create(self, call_id: int) -> Path:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            path = Path(tempfile.mkdtemp(prefix=f"scan-{os.getpid()}-{call_id}-", dir=self._root))
        except OSError as exc:
            raise ScanIOError(f"cannot create scratch directory under {self._root}: {exc}") from exc
        Log.debug(f"Scan {call_id} using scratch directory {path}")
        return path

    def _remove(self, path: Path, strict: bool) -> None:
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return
        except OSError as exc:
            if strict:
                raise ScanIOError(f"cannot remove scratch directory {path}: {exc}") from exc
            Log.warning(f"Failed to remove scratch directory {path}: {exc}")
            return
        Log.debug(f"Removed scratch directory {path}")
