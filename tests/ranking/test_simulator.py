"""Tests for the simulated collection source."""

import pytest

from ranknft.ranking.models import Collection
from ranknft.ranking.seed_collections import FILLER_COUNT, SEED_COLLECTIONS
from ranknft.ranking.simulator import SimulatedCollectionSource, VolumeSimulator


class TestVolumeSimulator:
    """Unit tests for VolumeSimulator."""

    def test_top_sorted_by_volume(self):
        """Test that records come back highest volume first."""
        sim = VolumeSimulator(seed=1)
        volumes = [r["volume"]["1day"] for r in sim.top(100)]
        assert volumes == sorted(volumes, reverse=True)

    def test_top_respects_limit(self):
        sim = VolumeSimulator(seed=1)
        assert len(sim.top(100)) == 100
        assert len(sim.top(5)) == 5

    def test_universe_larger_than_top_100(self):
        """Test that there are collections just outside the top 100 to rotate in."""
        sim = VolumeSimulator(seed=1)
        assert len(sim.top(1000)) == len(SEED_COLLECTIONS) + FILLER_COUNT
        assert len(SEED_COLLECTIONS) + FILLER_COUNT > 100

    def test_records_parse(self):
        """Test that simulated records have the Reservoir shape."""
        sim = VolumeSimulator(seed=1)
        for record in sim.top(100):
            c = Collection.from_record(record)
            assert c.volume_24h > 0

    def test_step_changes_volumes(self):
        sim = VolumeSimulator(seed=1)
        before = [r["volume"]["1day"] for r in sim.top(1000)]
        sim.step()
        after = [r["volume"]["1day"] for r in sim.top(1000)]
        assert before != after

    def test_volumes_stay_positive(self):
        """Test that GBM never produces non-positive volumes."""
        sim = VolumeSimulator(interval=86400.0, seed=2)
        for _ in range(100):
            sim.step()
        assert all(r["volume"]["1day"] > 0 for r in sim.top(1000))

    def test_seeded_runs_are_reproducible(self):
        a = VolumeSimulator(seed=42)
        b = VolumeSimulator(seed=42)
        a.step()
        b.step()
        assert a.top(100) == b.top(100)


@pytest.mark.asyncio
class TestSimulatedCollectionSource:
    """Tests for the CollectionSource wrapper."""

    async def test_fetch_returns_limit(self):
        source = SimulatedCollectionSource(seed=3)
        records = await source.fetch_top_collections(100)
        assert len(records) == 100

    async def test_close_is_noop(self):
        source = SimulatedCollectionSource(seed=3)
        await source.close()
