"""Thread-safe in-memory store of the latest ranking results."""

from __future__ import annotations

import time
from threading import Lock

from .models import RankedCollection


class RankingCache:
    """Holds the result set of the last complete update cycle.

    Writer: RankingUpdater, once per successful cycle.
    Readers: metadata and rankings endpoints.

    The result set is an immutable tuple replaced as a whole, so a reader
    sees either the previous cycle or the current one, never a mix.
    """

    def __init__(self) -> None:
        self._results: tuple[RankedCollection, ...] = ()
        self._lock = Lock()
        self._version: int = 0  # Bumped on every replace
        self._updated_at: float | None = None

    def replace(self, results: list[RankedCollection], timestamp: float | None = None) -> None:
        """Swap in a new result set, ordered by rank."""
        snapshot = tuple(sorted(results, key=lambda r: r.rank))
        with self._lock:
            self._results = snapshot
            self._updated_at = time.time() if timestamp is None else timestamp
            self._version += 1

    def get(self, rank: int) -> RankedCollection | None:
        """Result for a 1-based rank, or None if out of range or no data yet."""
        results = self.get_all()
        if rank < 1 or rank > len(results):
            return None
        return results[rank - 1]

    def get_all(self) -> tuple[RankedCollection, ...]:
        with self._lock:
            return self._results

    @property
    def version(self) -> int:
        return self._version

    @property
    def updated_at(self) -> float | None:
        """Unix time of the last replace, or None before the first cycle."""
        return self._updated_at

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
