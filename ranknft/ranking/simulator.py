"""Simulated collection source for running without a Reservoir API key."""

from __future__ import annotations

import logging
import math
import random
from typing import Any

import numpy as np

from .interface import CollectionSource
from .seed_collections import (
    FILLER_COUNT,
    FILLER_FLOOR_RANGE,
    FILLER_VOLUME_RANGE,
    SEED_COLLECTIONS,
    VOLUME_MU,
    VOLUME_SIGMA,
)

logger = logging.getLogger(__name__)


class VolumeSimulator:
    """Geometric Brownian Motion over each collection's 24h volume.

    Math:
        V(t+dt) = V(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    dt is one update interval as a fraction of a year, so with the default
    5-minute interval rankings reshuffle slowly near the top and more
    often in the long tail where volumes sit close together.
    """

    SECONDS_PER_YEAR = 365 * 24 * 3600

    def __init__(self, interval: float = 300.0, seed: int | None = None) -> None:
        self._dt = interval / self.SECONDS_PER_YEAR
        self._rng = np.random.default_rng(seed)
        self._random = random.Random(seed)

        self._ids: list[str] = []
        self._names: dict[str, str] = {}
        self._floors: dict[str, float] = {}
        self._volumes = np.empty(0)

        volumes: list[float] = []
        for i, (name, (volume, floor)) in enumerate(SEED_COLLECTIONS.items()):
            volumes.append(volume)
            self._add(f"0xseed{i:04x}", name, floor)
        for i in range(FILLER_COUNT):
            volumes.append(self._random.uniform(*FILLER_VOLUME_RANGE))
            self._add(f"0xfill{i:04x}", f"Collection #{i + 1}", self._random.uniform(*FILLER_FLOOR_RANGE))
        self._volumes = np.array(volumes)

    def step(self) -> None:
        """Advance every volume by one interval."""
        if not self._ids:
            return
        z = self._rng.standard_normal(len(self._ids))
        drift = (VOLUME_MU - 0.5 * VOLUME_SIGMA**2) * self._dt
        diffusion = VOLUME_SIGMA * math.sqrt(self._dt) * z
        self._volumes = self._volumes * np.exp(drift + diffusion)

    def top(self, limit: int) -> list[dict[str, Any]]:
        """Records shaped like Reservoir's, sorted by volume descending."""
        order = np.argsort(-self._volumes)[:limit]
        return [self._record(int(i)) for i in order]

    def _add(self, collection_id: str, name: str, floor: float) -> None:
        self._ids.append(collection_id)
        self._names[collection_id] = name
        self._floors[collection_id] = round(floor, 4)

    def _record(self, index: int) -> dict[str, Any]:
        collection_id = self._ids[index]
        return {
            "id": collection_id,
            "name": self._names[collection_id],
            "floorAsk": {"price": {"amount": {"decimal": self._floors[collection_id]}}},
            "volume": {"1day": round(float(self._volumes[index]), 4)},
        }


class SimulatedCollectionSource(CollectionSource):
    """CollectionSource backed by VolumeSimulator. Each fetch advances one step."""

    def __init__(self, interval: float = 300.0, seed: int | None = None) -> None:
        self._sim = VolumeSimulator(interval=interval, seed=seed)

    async def fetch_top_collections(self, limit: int = 100) -> list[dict[str, Any]]:
        self._sim.step()
        records = self._sim.top(limit)
        logger.debug("Simulator: produced %d collections", len(records))
        return records
