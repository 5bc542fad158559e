"""Shared file handling for the JSON-backed repositories.

Each table is one JSON file.  A read-modify-write of a file holds two
locks for its whole duration: a per-path re-entrant lock for threads of
this process, and an exclusive lock on a ``<name>.lock`` sidecar so
separate processes (one per CLI invocation) serialize the same way.
Writes replace the file atomically so a reader never sees a partial
document.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from filelock import FileLock


class PathLock:
    """Re-entrant lock on one data file, shared by every store of that path."""

    def __init__(self, path: Path) -> None:
        self._thread_lock = threading.RLock()
        self._file_lock = FileLock(str(path.with_name(path.name + ".lock")))

    def __enter__(self) -> PathLock:
        self._thread_lock.acquire()
        try:
            self._file_lock.acquire()
        except BaseException:
            self._thread_lock.release()
            raise
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            self._file_lock.release()
        finally:
            self._thread_lock.release()


_LOCKS: dict[Path, PathLock] = {}
_LOCKS_GUARD = threading.Lock()


def lock_for(path: Path) -> PathLock:
    key = path.resolve()
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = _LOCKS[key] = PathLock(key)
        return lock


class JsonFileStore:

    def __init__(self, file_path: Path, empty: Any = None) -> None:
        self._file_path = Path(file_path)
        self._empty = [] if empty is None else empty
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = lock_for(self._file_path)
        self._ensure_file()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> Any:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, data: Any) -> None:
        payload = json.dumps(data, indent=2) + "\n"
        with self._lock:
            fd, tmp = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp, self._file_path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._persist_raw(self._empty)
