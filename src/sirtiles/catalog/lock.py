"""Per-repository locks serialising scan-and-persist."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict


class RepositoryLocks:
    """Hand out one re-entrant lock per resolved repository path."""

    def __init__(self) -> None:
        self._locks: Dict[Path, threading.RLock] = {}
        self._guard = threading.Lock()

    def get(self, repository_dir: Path | str) -> threading.RLock:
        key = Path(repository_dir).resolve()
        lock = self._locks.get(key)
        if lock is not None:
            return lock
        with self._guard:
            return self._locks.setdefault(key, threading.RLock())

    def __len__(self) -> int:
        return len(self._locks)
