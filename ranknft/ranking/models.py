"""Data models for collection rankings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UP = "up"
DOWN = "down"
SAME = "same"

GREEN = "green"
RED = "red"
ORANGE = "orange"

DEFAULT_NAME = "Unknown"


def _as_float(value: Any) -> float:
    """Coerce an upstream numeric field; missing or null becomes 0."""
    if value is None:
        return 0.0
    return float(value)


@dataclass(frozen=True, slots=True)
class Collection:
    """The fields of an upstream collection record that the service consumes."""

    id: str
    name: str = DEFAULT_NAME
    floor_price: float = 0.0
    volume_24h: float = 0.0

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Collection:
        """Build from a Reservoir collection record.

        Raises ValueError when the record has no usable id.
        """
        if not isinstance(record, dict):
            raise ValueError(f"collection record is not an object: {record!r}")
        collection_id = record.get("id")
        if not collection_id:
            raise ValueError("collection record has no id")

        floor_ask = record.get("floorAsk") or {}
        price = (floor_ask.get("price") or {}).get("amount") or {}
        volume = record.get("volume") or {}

        return cls(
            id=str(collection_id),
            name=record.get("name") or DEFAULT_NAME,
            floor_price=_as_float(price.get("decimal")),
            volume_24h=_as_float(volume.get("1day")),
        )


@dataclass(frozen=True, slots=True)
class RankedCollection:
    """A collection placed at a rank in one update cycle."""

    rank: int
    collection: Collection
    movement: str
    color: str
    previous_rank: int | None = None

    @property
    def image_filename(self) -> str:
        return f"token{self.rank}.png"

    def to_metadata(self, base_url: str) -> dict:
        """NFT metadata document for this rank."""
        name = self.collection.name
        return {
            "name": f"Rank #{self.rank}: {name}",
            "description": f"Represents the rank {self.rank} collection on ApeChain",
            "image": f"{base_url.rstrip('/')}/images/{self.image_filename}",
            "attributes": [
                {"trait_type": "Rank", "value": self.rank},
                {"trait_type": "Collection Name", "value": name},
                {"trait_type": "Floor Price", "value": self.collection.floor_price},
                {"trait_type": "24h Volume", "value": self.collection.volume_24h},
                {"trait_type": "Movement", "value": self.movement},
            ],
        }

    def to_dict(self) -> dict:
        """Serialize for the rankings listing."""
        return {
            "rank": self.rank,
            "id": self.collection.id,
            "name": self.collection.name,
            "floor_price": self.collection.floor_price,
            "volume_24h": self.collection.volume_24h,
            "movement": self.movement,
            "color": self.color,
            "previous_rank": self.previous_rank,
        }


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Rankings of one update cycle, stamped with its start time (Unix seconds)."""

    timestamp: int
    rankings: dict[str, int]

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "rankings": dict(self.rankings)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        return cls(
            timestamp=int(data["timestamp"]),
            rankings={str(k): int(v) for k, v in data["rankings"].items()},
        )
