"""Fixtures for ranking tests.

StubSource and StubRenderer stand in for the Reservoir API and matplotlib so
update-cycle tests run offline and fast. Tests reach them through the
``make_record``, ``make_source`` and ``make_renderer`` factory fixtures.
"""

from typing import Any

import pytest

from ranknft.ranking.cache import RankingCache
from ranknft.ranking.interface import CollectionSource
from ranknft.ranking.renderer import ImageRenderer, RenderError
from ranknft.ranking.store import ColorStore, LastCycleStore


def _make_record(collection_id: str, name: str | None = None, floor: float = 1.0, volume: float = 10.0) -> dict:
    """A Reservoir-shaped collection record."""
    record: dict[str, Any] = {
        "id": collection_id,
        "floorAsk": {"price": {"amount": {"decimal": floor}}},
        "volume": {"1day": volume},
    }
    if name is not None:
        record["name"] = name
    return record


class StubSource(CollectionSource):
    """Returns canned records, or raises `error` if set."""

    def __init__(self, records: list[dict] | None = None, error: Exception | None = None) -> None:
        self.records = records or []
        self.error = error
        self.calls = 0
        self.closed = False

    async def fetch_top_collections(self, limit: int = 100) -> list[dict]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.records[:limit]

    async def close(self) -> None:
        self.closed = True


class StubRenderer(ImageRenderer):
    """Produces placeholder bytes instead of drawing; can fail chosen ranks."""

    def __init__(self, assets_dir, images_dir, fail_ranks: set[int] | None = None) -> None:
        super().__init__(assets_dir, images_dir)
        self.fail_ranks = fail_ranks or set()
        self.rendered: list[tuple[int, str]] = []

    def render(self, rank, name, floor_price, volume, color) -> bytes:
        if rank in self.fail_ranks:
            raise RenderError(f"boom {rank}")
        self.rendered.append((rank, color))
        return f"png:{rank}:{color}".encode()


@pytest.fixture
def make_record():
    """Factory for Reservoir-shaped records: make_record(id, name=..., floor=..., volume=...)."""
    return _make_record


@pytest.fixture
def make_source(make_record):
    """Factory for StubSource. Plain ids are turned into records."""

    def _make(ids=(), records=None, error=None) -> StubSource:
        if records is None:
            records = [make_record(i) for i in ids]
        return StubSource(records, error=error)

    return _make


@pytest.fixture
def make_renderer(tmp_path):
    """Factory for StubRenderer writing into tmp_path/images."""

    def _make(fail_ranks=None) -> StubRenderer:
        return StubRenderer(tmp_path / "assets", tmp_path / "images", fail_ranks=fail_ranks)

    return _make


@pytest.fixture
def renderer(make_renderer):
    return make_renderer()


@pytest.fixture
def rankings_store(tmp_path):
    return LastCycleStore(tmp_path / "data" / "previous_rankings.json")


@pytest.fixture
def color_store(tmp_path):
    return ColorStore(tmp_path / "data" / "previous_colors.json")


@pytest.fixture
def cache():
    return RankingCache()
