from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from typing import Iterable, Iterator

WorkerDayKey = tuple[int, date]


class WorkerDayLocks:
    """In-process mutex map keyed by (worker_id, date).

    A task write holds the locks for every worker/date it touches from the
    moment it reads state for validation until it has persisted, so two
    requests can never both pass the overlap check against the same
    pre-write state. Locks are taken in sorted order to rule out deadlock.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[WorkerDayKey, threading.Lock] = {}
        self._holders: dict[WorkerDayKey, int] = {}

    def _acquire_ref(self, key: WorkerDayKey) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            self._holders[key] = self._holders.get(key, 0) + 1
            return lock

    def _release_ref(self, key: WorkerDayKey) -> None:
        with self._guard:
            remaining = self._holders[key] - 1
            if remaining:
                self._holders[key] = remaining
            else:
                # Nobody holds or waits on it; drop it so the map stays small.
                del self._holders[key]
                del self._locks[key]

    @contextmanager
    def hold(self, keys: Iterable[WorkerDayKey]) -> Iterator[None]:
        ordered = sorted(set((int(w), d) for w, d in keys))
        acquired: list[tuple[WorkerDayKey, threading.Lock]] = []
        try:
            for key in ordered:
                lock = self._acquire_ref(key)
                try:
                    lock.acquire()
                except BaseException:
                    self._release_ref(key)
                    raise
                acquired.append((key, lock))
            yield
        finally:
            for key, lock in reversed(acquired):
                lock.release()
                self._release_ref(key)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


def keys_for(worker_ids: Iterable[int], *dates: date) -> list[WorkerDayKey]:
    return [(int(w), d) for w in worker_ids for d in dates if d is not None]
