"""Rolling history of ranking snapshots for 24-hour lookback.

Each cycle appends a snapshot and drops those older than 25 hours. Movement
is measured against the snapshot nearest to 24 hours before the cycle start,
provided it is within one hour of that target.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .interface import ReferenceProvider
from .models import Snapshot
from .persistence import StagedWrite, read_json, stage_json, write_json

logger = logging.getLogger(__name__)

HOUR = 3600
LOOKBACK = 24 * HOUR
TOLERANCE = HOUR
MAX_AGE = 25 * HOUR


def find_reference(
    history: Sequence[Snapshot],
    target_time: int,
    tolerance: int = TOLERANCE,
) -> dict[str, int] | None:
    """Rankings of the snapshot closest to `target_time`, or None.

    Returns None when the history is empty or the closest snapshot is more
    than `tolerance` seconds away. Equidistant snapshots resolve to the newer.
    """
    if not history:
        return None
    closest = min(history, key=lambda s: (abs(s.timestamp - target_time), -s.timestamp))
    if abs(closest.timestamp - target_time) > tolerance:
        return None
    return closest.rankings


def append(history: Sequence[Snapshot], snapshot: Snapshot) -> list[Snapshot]:
    return [*history, snapshot]


def prune(history: Sequence[Snapshot], now: int, max_age: int = MAX_AGE) -> list[Snapshot]:
    """Drop snapshots taken before `now - max_age`."""
    cutoff = now - max_age
    return [s for s in history if s.timestamp >= cutoff]


class HistoryStore(ReferenceProvider):
    """JSON-backed list of snapshots, oldest first."""

    def __init__(
        self,
        path: Path,
        lookback: int = LOOKBACK,
        tolerance: int = TOLERANCE,
        max_age: int = MAX_AGE,
    ) -> None:
        self._path = Path(path)
        self._lookback = lookback
        self._tolerance = tolerance
        self._max_age = max_age

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Snapshot]:
        data = read_json(self._path)
        if data is None:
            logger.info("No rankings history found at %s", self._path)
            return []
        if not isinstance(data, list):
            logger.warning("Rankings history at %s is not a list; ignoring", self._path)
            return []
        history: list[Snapshot] = []
        for entry in data:
            try:
                history.append(Snapshot.from_dict(entry))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Skipping malformed snapshot in %s: %s", self._path, e)
        return history

    def save(self, history: Sequence[Snapshot]) -> None:
        write_json(self._path, [s.to_dict() for s in history])

    def reference(self, now: int) -> dict[str, int] | None:
        rankings = find_reference(self.load(), now - self._lookback, self._tolerance)
        if rankings is None:
            logger.info(
                "No snapshot within %ds of %ds ago; movements default to 'same'",
                self._tolerance,
                self._lookback,
            )
        return rankings

    def stage(self, rankings: dict[str, int], now: int) -> StagedWrite:
        history = append(self.load(), Snapshot(timestamp=now, rankings=dict(rankings)))
        history = prune(history, now, self._max_age)
        logger.debug("Rankings history will hold %d snapshots", len(history))
        return stage_json(self._path, [s.to_dict() for s in history])
