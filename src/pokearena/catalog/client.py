"""Async PokeAPI client.

Independent detail requests are issued concurrently with ``asyncio.gather``
and awaited together; nothing is retried.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from pokearena.domain import models as dm

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when the upstream catalog cannot be reached or answers badly."""


class CreatureNotFoundError(CatalogError, LookupError):
    """Raised when the catalog has no creature for the requested key."""

    def __init__(self, key: int | str) -> None:
        super().__init__(f"Creature '{key}' not found")
        self.key = key


def _image_from_sprites(sprites: Mapping[str, Any] | None) -> str | None:
    if not sprites:
        return None
    front = sprites.get("front_default")
    if front:
        return front
    artwork = (sprites.get("other") or {}).get("official-artwork") or {}
    return artwork.get("front_default")


def creature_from_payload(payload: Mapping[str, Any]) -> dm.Creature:
    """Build a :class:`Creature` from a ``/pokemon/{id}`` response body."""

    return dm.Creature(
        id=dm.PokemonID(int(payload["id"])),
        name=payload["name"],
        image=_image_from_sprites(payload.get("sprites")),
        types=[slot["type"]["name"] for slot in payload.get("types", [])],
        stats=[
            dm.StatValue(name=item["stat"]["name"], base_stat=int(item["base_stat"]))
            for item in payload.get("stats", [])
        ],
        height=payload.get("height"),
        weight=payload.get("weight"),
        abilities=[slot["ability"]["name"] for slot in payload.get("abilities", [])],
    )


class PokeApiClient:
    """Read-only access to the creature catalog."""

    def __init__(
        self,
        base_url: str,
        *,
        page_size: int = 10,
        max_pages: int = 60,
        random_pool_max_id: int = 151,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.page_size = page_size
        self.max_pages = max_pages
        self.random_pool_max_id = random_pool_max_id
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.warning("catalog request %s failed: %s", path, exc)
            raise CatalogError(f"Catalog request failed: {exc}") from exc
        if response.status_code == httpx.codes.NOT_FOUND:
            raise CreatureNotFoundError(path.rstrip("/").rsplit("/", 1)[-1])
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("catalog returned %s for %s", response.status_code, path)
            raise CatalogError(f"Catalog returned HTTP {response.status_code}") from exc
        return response.json()

    async def get_creature(self, key: int | str) -> dm.Creature:
        """Fetch a creature by catalog id or name."""

        if isinstance(key, str):
            key = key.strip().lower()
            if not key:
                raise ValueError("creature name must not be empty")
        payload = await self._get_json(f"/pokemon/{key}")
        return creature_from_payload(payload)

    async def get_many(self, keys: Iterable[int | str]) -> list[dm.Creature]:
        """Fetch several creatures concurrently, preserving the input order."""

        return list(await asyncio.gather(*(self.get_creature(key) for key in keys)))

    async def list_page(self, page: int, *, search: str | None = None) -> dm.CatalogPage:
        """Return one catalog page with full creature details."""

        if page < 1 or page > self.max_pages:
            raise ValueError(f"page must be between 1 and {self.max_pages}")

        offset = (page - 1) * self.page_size
        listing = await self._get_json(
            "/pokemon", params={"limit": self.page_size, "offset": offset}
        )
        count = min(int(listing.get("count", 0)), self.max_pages * self.page_size)
        total_pages = min(math.ceil(count / self.page_size), self.max_pages)

        urls = [item["url"] for item in listing.get("results", [])]
        payloads = await asyncio.gather(*(self._get_json(url) for url in urls))
        creatures = [creature_from_payload(payload) for payload in payloads]

        if search:
            term = search.lower()
            creatures = [creature for creature in creatures if term in creature.name.lower()]

        return dm.CatalogPage(
            page=page, total_pages=total_pages, count=count, results=creatures
        )

    async def random_creatures(self, count: int, *, rng: random.Random) -> list[dm.Creature]:
        """Draw ``count`` creatures from ids ``1..random_pool_max_id``; repeats allowed."""

        ids = [rng.randint(1, self.random_pool_max_id) for _ in range(count)]
        return await self.get_many(ids)
