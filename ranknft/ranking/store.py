"""Last-cycle ranking store and sticky color store."""

from __future__ import annotations

import logging
from pathlib import Path

from .interface import ReferenceProvider
from .persistence import StagedWrite, read_json, stage_json, write_json

logger = logging.getLogger(__name__)


class LastCycleStore(ReferenceProvider):
    """Persists {collection_id: rank} from the most recent complete cycle.

    Every cycle overwrites the whole file. A missing or corrupt file loads as
    an empty mapping, so every collection counts as new (movement 'up').
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, int]:
        data = read_json(self._path)
        if data is None:
            logger.info("No previous rankings found at %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Previous rankings at %s is not a mapping; ignoring", self._path)
            return {}
        rankings: dict[str, int] = {}
        for collection_id, rank in data.items():
            try:
                rankings[str(collection_id)] = int(rank)
            except (TypeError, ValueError):
                logger.warning("Skipping bad rank %r for %s", rank, collection_id)
        return rankings

    def save(self, rankings: dict[str, int]) -> None:
        write_json(self._path, rankings)

    def reference(self, now: int) -> dict[str, int] | None:
        return self.load()

    def stage(self, rankings: dict[str, int], now: int) -> StagedWrite:
        logger.debug("Staging %d rankings for %s", len(rankings), self._path)
        return stage_json(self._path, rankings)


class ColorStore:
    """Persists the sticky display color of each collection."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def load(self) -> dict[str, str]:
        data = read_json(self._path)
        if data is None:
            logger.info("No previous colors found at %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Previous colors at %s is not a mapping; ignoring", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items() if v}

    def save(self, colors: dict[str, str]) -> None:
        write_json(self._path, colors)

    def stage(self, colors: dict[str, str]) -> StagedWrite:
        return stage_json(self._path, colors)
