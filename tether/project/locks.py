"""
Per-Folder Lock Registry.

Maps local folder paths to mutexes so that at most one clone runs per
folder at any time. Locks are created lazily and kept for the lifetime
of the registry.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


class LockRegistry:
    """
    Registry of one lock per folder path.

    One instance is meant to be shared by every download in a run.
    Different folders never contend with each other; the same folder
    is serialized.
    """

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, folder: Path | str) -> threading.Lock:
        key = str(folder)
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    @contextmanager
    def acquire(self, folder: Path | str) -> Iterator[None]:
        """
        Hold the lock for a folder for the duration of the block.

        Args:
            folder: Local folder path

        Example:
            with locks.acquire(project.folder):
                ...
        """
        lock = self._lock_for(folder)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def __contains__(self, folder: object) -> bool:
        with self._guard:
            return str(folder) in self._locks
