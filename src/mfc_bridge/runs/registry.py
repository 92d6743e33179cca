"""In-memory run registry."""

from __future__ import annotations

import threading
from typing import Protocol

from mfc_bridge.runs.models import Run


class RunNotFoundError(KeyError):
    def __init__(self, run_id: str) -> None:
        super().__init__(run_id)
        self.run_id = run_id


class RunRegistry(Protocol):
    def reserve_id(self, base_id: str) -> str: ...

    def save(self, run: Run) -> Run: ...

    def get(self, run_id: str) -> Run | None: ...

    def list(self) -> list[Run]: ...


class InMemoryRunRegistry:
    """Thread-safe, process-lifetime store keyed by run id.

    Route handlers run in a worker thread pool, so every access takes the lock.
    Stored runs are copied on the way in and out.
    """

    def __init__(self) -> None:
        self._runs: dict[str, Run] = {}
        self._reserved: set[str] = set()
        self._lock = threading.Lock()

    def reserve_id(self, base_id: str) -> str:
        """Claim `base_id`, or `base_id-2`, `base_id-3`, ... if it is taken."""
        with self._lock:
            candidate = base_id
            suffix = 2
            while candidate in self._runs or candidate in self._reserved:
                candidate = f"{base_id}-{suffix}"
                suffix += 1
            self._reserved.add(candidate)
            return candidate

    def save(self, run: Run) -> Run:
        stored = run.model_copy(deep=True)
        with self._lock:
            self._reserved.discard(run.run_id)
            self._runs[run.run_id] = stored
        return stored.model_copy(deep=True)

    def get(self, run_id: str) -> Run | None:
        with self._lock:
            run = self._runs.get(run_id)
        return run.model_copy(deep=True) if run else None

    def list(self) -> list[Run]:
        with self._lock:
            runs = list(self._runs.values())
        return [run.model_copy(deep=True) for run in runs]
