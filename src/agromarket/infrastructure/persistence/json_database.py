"""The JSON document backing every repository.

One file holds all four tables.  Access is serialised by an exclusive
``flock`` on a sibling ``.lock`` file, so units of work never interleave
their read-modify-write cycles, whether they run in separate CLI
processes or in threads of one process.  Threads of one process first
queue on a shared in-process lock and only the winner polls the file lock.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, NoReturn

import structlog

from agromarket.domain.exceptions import StorageUnavailableError, StoreTimeoutError

logger = structlog.get_logger(__name__)

TABLES = ("products", "orders", "delivery_points", "farmers")

_POLL_INTERVAL = 0.05

_registry_lock = threading.Lock()
_file_locks: dict[Path, threading.Lock] = {}


def _lock_for(file_path: Path) -> threading.Lock:
    key = file_path.resolve()
    with _registry_lock:
        if key not in _file_locks:
            _file_locks[key] = threading.Lock()
        return _file_locks[key]


class JsonDatabase:

    def __init__(self, file_path: Path, lock_timeout: float = 5.0) -> None:
        self._file_path = Path(file_path)
        self._lock_path = self._file_path.with_name(self._file_path.name + ".lock")
        self._lock_timeout = lock_timeout
        self._thread_lock = _lock_for(self._file_path)
        self._lock_file: IO[str] | None = None

    @property
    def file_path(self) -> Path:
        return self._file_path

    def acquire(self) -> None:
        """Take the store lock or raise ``StoreTimeoutError``."""
        deadline = time.monotonic() + self._lock_timeout
        if not self._thread_lock.acquire(timeout=self._lock_timeout):
            self._timed_out()
        try:
            self._lock_file = self._lock_across_processes(deadline)
        except BaseException:
            self._thread_lock.release()
            raise

    def release(self) -> None:
        lock_file, self._lock_file = self._lock_file, None
        try:
            if lock_file is not None:
                try:
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)
                finally:
                    lock_file.close()
        finally:
            self._thread_lock.release()

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store lock for the duration of the block."""
        self.acquire()
        try:
            yield
        finally:
            self.release()

    def _lock_across_processes(self, deadline: float) -> IO[str]:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            lock_file = open(self._lock_path, "a", encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailableError(
                f"Could not open lock file {self._lock_path}: {exc}"
            ) from exc

        while True:
            try:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                return lock_file
            except BlockingIOError:
                if time.monotonic() >= deadline:
                    lock_file.close()
                    self._timed_out()
                time.sleep(_POLL_INTERVAL)
            except OSError as exc:
                lock_file.close()
                raise StorageUnavailableError(
                    f"Could not lock store at {self._file_path}: {exc}"
                ) from exc

    def _timed_out(self) -> NoReturn:
        logger.warning(
            "store.timeout",
            path=str(self._file_path),
            timeout=self._lock_timeout,
        )
        raise StoreTimeoutError(
            f"The store did not become available within {self._lock_timeout:g}s"
        )

    # --- File helpers ---------------------------------------------------------

    def load(self) -> dict[str, list[dict]]:
        """Read the whole document.  A missing file is an empty store."""
        if not self._file_path.exists():
            return {table: [] for table in TABLES}
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageUnavailableError(
                f"Could not read store at {self._file_path}: {exc}"
            ) from exc
        if not isinstance(raw, dict):
            raise StorageUnavailableError(
                f"Store at {self._file_path} is not a JSON object"
            )
        return {table: list(raw.get(table, [])) for table in TABLES}

    def persist(self, document: dict[str, list[dict]]) -> None:
        """Replace the document atomically: write a unique sibling file, then rename."""
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
            )
        except OSError as exc:
            raise StorageUnavailableError(
                f"Could not write store at {self._file_path}: {exc}"
            ) from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(document, indent=2) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(temp_name, self._file_path)
        except OSError as exc:
            Path(temp_name).unlink(missing_ok=True)
            raise StorageUnavailableError(
                f"Could not write store at {self._file_path}: {exc}"
            ) from exc
