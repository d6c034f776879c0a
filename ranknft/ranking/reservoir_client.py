"""Reservoir API client for the top collections by 24h volume."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

import requests

from .interface import CollectionSource, FetchError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api-apechain.reservoir.tools"


class ReservoirCollectionSource(CollectionSource):
    """CollectionSource backed by the Reservoir collections v7 endpoint.

    Pages through GET /collections/v7?sortBy=1DayVolume using the
    continuation token until `limit` records are held, the token runs out,
    or a page comes back empty.

    Each page gets `max_attempts` tries with exponential backoff
    (retry_delay, 2*retry_delay, ...). A page that still fails aborts the
    whole fetch; records from earlier pages are discarded.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        page_size: int = 20,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 10.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._timeout = timeout
        self._sleep = sleep
        self._session: requests.Session | None = None

    async def fetch_top_collections(self, limit: int = 100) -> list[dict[str, Any]]:
        # requests is synchronous; run in a thread to keep the event loop free.
        return await asyncio.to_thread(self._fetch_all, limit)

    async def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    # --- Internal ---

    def _fetch_all(self, limit: int) -> list[dict[str, Any]]:
        collections: list[dict[str, Any]] = []
        continuation: str | None = None
        pages = 0

        while len(collections) < limit:
            page = self._fetch_page_with_retry(continuation)
            pages += 1
            records = page.get("collections") or []
            collections.extend(records)
            continuation = page.get("continuation")
            if not continuation:
                break
            if not records:
                # A continuation must make progress
                logger.warning("Reservoir returned an empty page with a continuation; stopping")
                break

        logger.debug("Reservoir: fetched %d collections in %d pages", len(collections), pages)
        return collections[:limit]

    def _fetch_page_with_retry(self, continuation: str | None) -> dict[str, Any]:
        last_error: Exception | None = None
        for attempt in range(self._max_attempts):
            try:
                return self._fetch_page(continuation)
            except (requests.RequestException, ValueError) as e:
                last_error = e
                if attempt + 1 < self._max_attempts:
                    delay = self._retry_delay * (2**attempt)
                    logger.warning(
                        "Reservoir request failed (attempt %d/%d): %s; retrying in %.1fs",
                        attempt + 1,
                        self._max_attempts,
                        e,
                        delay,
                    )
                    self._sleep(delay)
        raise FetchError(
            f"Reservoir request failed after {self._max_attempts} attempts: {last_error}"
        ) from last_error

    def _fetch_page(self, continuation: str | None) -> dict[str, Any]:
        """One GET. Raises on transport errors, non-2xx and malformed bodies."""
        params: dict[str, Any] = {"sortBy": "1DayVolume", "limit": self._page_size}
        if continuation:
            params["continuation"] = continuation

        response = self._get_session().get(
            f"{self._base_url}/collections/v7",
            params=params,
            timeout=self._timeout,
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict) or not isinstance(data.get("collections"), list):
            raise ValueError("malformed collections payload")
        return data

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"x-api-key": self._api_key, "accept": "application/json"})
        return self._session
