"""A JSON document on disk with atomic, serialised writes.

Writes go to a temporary file in the same directory which then replaces
the original with ``os.replace``.  A crash mid-write leaves the previous
document intact, so readers see either the old state or the new state.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path, threading.RLock())


class JsonFile:

    def __init__(self, file_path: Path, empty: Callable[[], Any] = list) -> None:
        self._file_path = file_path.resolve()
        self._empty = empty
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def read(self) -> Any:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def write(self, document: Any) -> None:
        with self._lock:
            tmp = self._file_path.with_name(self._file_path.name + ".tmp")
            with tmp.open("w", encoding="utf-8") as fh:
                fh.write(json.dumps(document, indent=2, ensure_ascii=False) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, self._file_path)

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold this document's lock so no other thread can write it."""
        with self._lock:
            yield

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """Read, let the caller mutate, then write back as one step.

        If the block raises, nothing is written.
        """
        with self.locked():
            document = self.read()
            yield document
            self.write(document)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.write(self._empty())
