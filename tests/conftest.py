"""Pytest configuration and fixtures."""

import pytest

from ranknft.ranking.models import Collection


@pytest.fixture
def collections():
    """Three parsed collections a, b, c in fetch order."""
    return [
        Collection(id="a", name="Alpha", floor_price=1.5, volume_24h=300.0),
        Collection(id="b", name="Beta", floor_price=0.5, volume_24h=200.0),
        Collection(id="c", name="Gamma", floor_price=0.1, volume_24h=100.0),
    ]
