"""Periodic update cycle: fetch, rank, render, publish."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from .cache import RankingCache
from .interface import CollectionSource, ReferenceProvider
from .models import Collection, RankedCollection
from .movement import MAX_RANK, rank_collections
from .persistence import StagedWrite
from .renderer import ImageRenderer, RenderError
from .store import ColorStore

logger = logging.getLogger(__name__)


def parse_collections(records: list[dict[str, Any]]) -> list[Collection]:
    """Parse upstream records in order, skipping any without an id."""
    collections: list[Collection] = []
    for position, record in enumerate(records):
        try:
            collections.append(Collection.from_record(record))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Skipping collection record at position %d: %s", position + 1, e)
    return collections


class RankingUpdater:
    """Runs update cycles on a fixed interval and publishes their results.

    A cycle either completes and updates images, persisted rankings and the
    cache together, or aborts and leaves all of them as they were.

    Only one cycle runs at a time. A tick that arrives while a cycle is
    still in flight is skipped, and each cycle is bounded by `cycle_timeout`.
    """

    def __init__(
        self,
        source: CollectionSource,
        reference: ReferenceProvider,
        cache: RankingCache,
        renderer: ImageRenderer,
        color_store: ColorStore | None = None,
        interval: float = 300.0,
        cycle_timeout: float = 240.0,
        limit: int = MAX_RANK,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._source = source
        self._reference = reference
        self._cache = cache
        self._renderer = renderer
        self._colors = color_store
        self._interval = interval
        self._cycle_timeout = cycle_timeout
        self._limit = limit
        self._clock = clock
        self._lock = asyncio.Lock()
        self._task: asyncio.Task | None = None
        self._cycle_task: asyncio.Task | None = None

    @property
    def cache(self) -> RankingCache:
        return self._cache

    @property
    def running(self) -> bool:
        """True while a cycle is in flight."""
        return self._lock.locked()

    async def start(self) -> None:
        """Start the scheduler. The first cycle begins immediately."""
        self._task = asyncio.create_task(self._schedule_loop(), name="ranking-updater")
        logger.info(
            "Ranking updater started: %.0fs interval, %.0fs cycle timeout",
            self._interval,
            self._cycle_timeout,
        )

    async def stop(self) -> None:
        """Stop the scheduler and any in-flight cycle. Safe to call multiple times."""
        for task in (self._task, self._cycle_task):
            if task and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._task = None
        self._cycle_task = None
        await self._source.close()
        logger.info("Ranking updater stopped")

    async def tick(self) -> bool:
        """Run one guarded, time-bounded cycle. Returns True if it completed.

        Never raises: failures are logged and the previous results stay live.
        """
        if self._lock.locked():
            logger.warning("Previous update cycle still running; skipping this tick")
            return False
        async with self._lock:
            try:
                return await asyncio.wait_for(self.run_cycle(), timeout=self._cycle_timeout)
            except asyncio.TimeoutError:
                logger.error("Update cycle exceeded %.0fs and was abandoned", self._cycle_timeout)
            except Exception:
                logger.exception("Update cycle failed")
            return False

    async def run_cycle(self) -> bool:
        """Fetch, rank, render and publish once. Returns False if aborted.

        Unguarded: callers other than tests should go through tick().
        """
        started = self._clock()
        now = int(started)

        try:
            records = await self._source.fetch_top_collections(self._limit)
        except Exception as e:
            logger.error("Fetching top collections failed, keeping previous rankings: %s", e)
            return False

        collections = parse_collections(records)[: self._limit]
        if not collections:
            logger.error("No collections fetched, keeping previous rankings")
            return False

        reference = await asyncio.to_thread(self._reference.reference, now)
        previous_colors = await asyncio.to_thread(self._colors.load) if self._colors else None

        ranked = rank_collections(collections, reference, previous_colors, limit=self._limit)
        images = await asyncio.to_thread(self._render_all, ranked)

        # No await below this point, so a timeout cannot interrupt publishing.
        self._publish(ranked, images, now)

        logger.info(
            "Update cycle complete: %d collections, %d images, %.1fs",
            len(ranked),
            len(images),
            self._clock() - started,
        )
        return True

    # --- Internal ---

    async def _schedule_loop(self) -> None:
        """Start a cycle every interval; overlapping ticks are skipped by tick()."""
        while True:
            if self._cycle_task is None or self._cycle_task.done():
                self._cycle_task = asyncio.create_task(self.tick(), name="ranking-cycle")
            else:
                logger.warning("Previous update cycle still running; skipping this tick")
            await asyncio.sleep(self._interval)

    def _render_all(self, ranked: list[RankedCollection]) -> dict[int, bytes]:
        """Render every rank into memory. A failed rank is logged and left out."""
        images: dict[int, bytes] = {}
        for item in ranked:
            try:
                images[item.rank] = self._renderer.render_ranked(item)
            except RenderError as e:
                logger.warning("Skipping image for rank %d: %s", item.rank, e)
        return images

    def _publish(self, ranked: list[RankedCollection], images: dict[int, bytes], now: int) -> None:
        """Persist state, then images, then swap the cache.

        State files are fully written to temp files before any of them
        replaces its target, so a failed write leaves the previous cycle's
        state, images and cache all in place.
        """
        staged: list[StagedWrite] = []
        try:
            staged.append(self._reference.stage({r.collection.id: r.rank for r in ranked}, now))
            if self._colors is not None:
                staged.append(self._colors.stage({r.collection.id: r.color for r in ranked}))
            for write in staged:
                write.apply()
        except BaseException:
            for write in staged:
                write.discard()
            raise

        for rank, png in images.items():
            try:
                self._renderer.write(rank, png)
            except OSError as e:
                logger.warning("Could not write image for rank %d: %s", rank, e)

        self._cache.replace(ranked, timestamp=float(now))
