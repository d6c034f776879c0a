"""Collection ranking subsystem for ranknft.

Public API:
    Collection          - Parsed upstream collection record
    RankedCollection    - A collection at a rank with its movement and color
    Snapshot            - Timestamped rankings for 24h lookback
    RankingCache        - Thread-safe holder of the latest result set
    CollectionSource    - Abstract interface for collection providers
    ReferenceProvider   - Abstract interface for previous-rank state
    LastCycleStore      - Compare against the previous cycle
    HistoryStore        - Compare against the snapshot nearest 24h ago
    ColorStore          - Sticky display colors
    ImageRenderer       - Rank card images
    RankingUpdater      - Periodic fetch/rank/render/publish cycle
    compute_movement, resolve_color, rank_collections - Movement engine
    create_collection_source, create_reference_provider - Factories
    create_metadata_router - FastAPI router for metadata endpoints
"""

from .cache import RankingCache
from .cycle import RankingUpdater
from .factory import create_collection_source, create_reference_provider
from .history import HistoryStore
from .interface import CollectionSource, FetchError, ReferenceProvider
from .metadata import create_metadata_router
from .models import Collection, RankedCollection, Snapshot
from .movement import compute_movement, rank_collections, resolve_color
from .renderer import ImageRenderer, RenderError
from .store import ColorStore, LastCycleStore

__all__ = [
    "Collection",
    "RankedCollection",
    "Snapshot",
    "RankingCache",
    "CollectionSource",
    "FetchError",
    "ReferenceProvider",
    "LastCycleStore",
    "HistoryStore",
    "ColorStore",
    "ImageRenderer",
    "RenderError",
    "RankingUpdater",
    "compute_movement",
    "resolve_color",
    "rank_collections",
    "create_collection_source",
    "create_reference_provider",
    "create_metadata_router",
]
