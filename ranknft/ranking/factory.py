"""Factories for collection sources and reference providers."""

from __future__ import annotations

import logging

from ..config import ROLLING_24H, Settings
from .interface import CollectionSource, ReferenceProvider

logger = logging.getLogger(__name__)


def create_collection_source(settings: Settings) -> CollectionSource:
    """Pick the collection source.

    - RESERVOIR_API_KEY set and non-empty → ReservoirCollectionSource
    - Otherwise → SimulatedCollectionSource (offline GBM volumes)
    """
    if settings.reservoir_api_key:
        from .reservoir_client import ReservoirCollectionSource

        logger.info("Collection source: Reservoir API (%s)", settings.reservoir_base_url)
        return ReservoirCollectionSource(
            api_key=settings.reservoir_api_key,
            base_url=settings.reservoir_base_url,
        )
    else:
        from .simulator import SimulatedCollectionSource

        logger.info("Collection source: simulator (no RESERVOIR_API_KEY)")
        return SimulatedCollectionSource(interval=settings.update_interval)


def create_reference_provider(settings: Settings) -> ReferenceProvider:
    """Last-cycle comparison by default; 24h lookback when RANKING_MODE=rolling_24h."""
    if settings.ranking_mode == ROLLING_24H:
        from .history import HistoryStore

        logger.info("Ranking mode: 24h rolling history (%s)", settings.history_file)
        return HistoryStore(settings.history_file)
    else:
        from .store import LastCycleStore

        logger.info("Ranking mode: last cycle (%s)", settings.rankings_file)
        return LastCycleStore(settings.rankings_file)
