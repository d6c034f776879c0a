"""Abstract interfaces for collection sources and reference-state providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .persistence import StagedWrite


class FetchError(Exception):
    """The upstream could not produce a complete collection list."""


class CollectionSource(ABC):
    """Contract for providers of the ranked collection list.

    Implementations return raw upstream records ordered by 24h volume,
    best first. Parsing into Collection happens in the update cycle so a
    single malformed record can be skipped without losing the page.

    Lifecycle:
        source = create_collection_source(settings)
        records = await source.fetch_top_collections(100)
        # ... every cycle ...
        await source.close()
    """

    @abstractmethod
    async def fetch_top_collections(self, limit: int = 100) -> list[dict[str, Any]]:
        """Return up to `limit` collection records, highest volume first.

        Raises FetchError when the upstream cannot produce a complete list.
        Partial results are never returned.
        """

    async def close(self) -> None:
        """Release any held resources. Safe to call multiple times."""


class ReferenceProvider(ABC):
    """Where the previous rankings for movement comparison come from.

    The last-cycle store compares against the immediately preceding cycle;
    the history store compares against the snapshot closest to 24h ago.
    """

    @abstractmethod
    def reference(self, now: int) -> dict[str, int] | None:
        """Rankings to compare against for a cycle starting at `now`.

        None means no reference point exists (every movement is 'same').
        An empty dict means a reference exists but knows no collections.
        """

    @abstractmethod
    def stage(self, rankings: dict[str, int], now: int) -> StagedWrite:
        """Prepare this cycle's rankings for persisting without replacing the file.

        The caller applies the returned write once every other output of the
        cycle has been staged, or discards it.
        """

    def commit(self, rankings: dict[str, int], now: int) -> None:
        """Persist this cycle's rankings immediately."""
        staged = self.stage(rankings, now)
        try:
            staged.apply()
        except BaseException:
            staged.discard()
            raise
