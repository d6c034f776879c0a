"""HTTP endpoints for token metadata and the current rankings."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from .cache import RankingCache

logger = logging.getLogger(__name__)


def create_metadata_router(cache: RankingCache, server_url: str = "") -> APIRouter:
    """Create the metadata router bound to a ranking cache.

    Image URLs use `server_url` when set, otherwise the base URL of the
    incoming request.
    """
    router = APIRouter(tags=["metadata"])

    @router.get("/", response_class=PlainTextResponse)
    async def health() -> str:
        return "NFT Server is running!"

    @router.get("/metadata/{rank}")
    async def token_metadata(rank: int, request: Request) -> dict:
        """NFT metadata for the collection currently at `rank`.

        404 when the rank is outside the current result set or no cycle has
        completed yet.
        """
        ranked = cache.get(rank)
        if ranked is None:
            raise HTTPException(status_code=404, detail="Invalid token ID or no data available")
        base_url = server_url or str(request.base_url)
        return ranked.to_metadata(base_url)

    @router.get("/api/rankings")
    async def rankings() -> dict:
        """All current results, ordered by rank."""
        return {
            "updated_at": cache.updated_at,
            "count": len(cache),
            "rankings": [r.to_dict() for r in cache.get_all()],
        }

    return router
