"""Tests for the PokeAPI client."""

from __future__ import annotations

import random

import httpx
import pytest

from pokearena.catalog import (
    CatalogError,
    CreatureNotFoundError,
    PokeApiClient,
    creature_from_payload,
)


def test_creature_from_payload_reads_nested_fields():
    payload = {
        "id": 25,
        "name": "pikachu",
        "height": 4,
        "weight": 60,
        "sprites": {"front_default": "https://img.test/25.png"},
        "types": [{"slot": 1, "type": {"name": "electric"}}],
        "stats": [
            {"base_stat": 35, "stat": {"name": "hp"}},
            {"base_stat": 90, "stat": {"name": "speed"}},
        ],
        "abilities": [{"ability": {"name": "static"}}],
    }

    creature = creature_from_payload(payload)

    assert creature.id == 25
    assert creature.image == "https://img.test/25.png"
    assert creature.types == ["electric"]
    assert creature.stat("speed") == 90
    assert creature.stat("defense") == 0
    assert creature.abilities == ["static"]


def test_creature_from_payload_falls_back_to_artwork():
    payload = {
        "id": 1,
        "name": "bulbasaur",
        "sprites": {
            "front_default": None,
            "other": {"official-artwork": {"front_default": "https://art.test/1.png"}},
        },
    }

    creature = creature_from_payload(payload)

    assert creature.image == "https://art.test/1.png"
    assert creature.stats == []


@pytest.mark.asyncio
async def test_get_creature_by_id_and_name(catalog):
    by_id = await catalog.get_creature(4)
    by_name = await catalog.get_creature("  Charmander ")

    assert by_id == by_name
    assert by_id.name == "charmander"
    assert by_id.types == ["fire"]


@pytest.mark.asyncio
async def test_get_creature_unknown_raises_not_found(catalog):
    with pytest.raises(CreatureNotFoundError) as excinfo:
        await catalog.get_creature("missingno")
    assert excinfo.value.key == "missingno"
    assert isinstance(excinfo.value, LookupError)


@pytest.mark.asyncio
async def test_get_creature_rejects_blank_name(catalog):
    with pytest.raises(ValueError):
        await catalog.get_creature("   ")


@pytest.mark.asyncio
async def test_server_error_raises_catalog_error(catalog, fake_api):
    fake_api.fail_with = 500

    with pytest.raises(CatalogError) as excinfo:
        await catalog.get_creature(1)
    assert not isinstance(excinfo.value, CreatureNotFoundError)


@pytest.mark.asyncio
async def test_transport_error_raises_catalog_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    client = PokeApiClient("https://pokeapi.test/api/v2", transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(CatalogError):
            await client.get_creature(1)
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_list_page_fetches_details_in_listing_order(catalog, fake_api):
    page = await catalog.list_page(1)

    assert page.page == 1
    assert [c.id for c in page.results] == list(range(1, 11))
    assert page.results[0].name == "bulbasaur"
    # Upstream reports 1302 creatures but only 60 pages are exposed.
    assert page.count == 600
    assert page.total_pages == 60

    listing = fake_api.requests[0]
    assert listing.url.params["limit"] == "10"
    assert listing.url.params["offset"] == "0"
    assert len(fake_api.requests) == 11


@pytest.mark.asyncio
async def test_list_page_uses_offset(catalog, fake_api):
    page = await catalog.list_page(3)

    assert fake_api.requests[0].url.params["offset"] == "20"
    assert [c.id for c in page.results] == list(range(21, 31))


@pytest.mark.asyncio
async def test_list_page_small_catalog(fake_api):
    fake_api.count = 25
    client = PokeApiClient("https://pokeapi.test/api/v2", transport=fake_api.transport)
    try:
        last = await client.list_page(3)
    finally:
        await client.aclose()

    assert last.count == 25
    assert last.total_pages == 3
    assert [c.id for c in last.results] == [21, 22, 23, 24, 25]


@pytest.mark.asyncio
async def test_list_page_search_filters_current_page(catalog):
    page = await catalog.list_page(1, search="SAUR")

    assert [c.name for c in page.results] == ["bulbasaur"]
    assert page.total_pages == 60


@pytest.mark.asyncio
@pytest.mark.parametrize("page", [0, 61])
async def test_list_page_out_of_range(catalog, fake_api, page):
    with pytest.raises(ValueError):
        await catalog.list_page(page)
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_random_creatures_draw_from_first_generation(catalog):
    creatures = await catalog.random_creatures(6, rng=random.Random(1234))

    assert len(creatures) == 6
    assert all(1 <= c.id <= 151 for c in creatures)

    again = await catalog.random_creatures(6, rng=random.Random(1234))
    assert [c.id for c in again] == [c.id for c in creatures]


@pytest.mark.asyncio
async def test_get_many_preserves_order(catalog):
    creatures = await catalog.get_many([25, 1, "squirtle"])
    assert [c.name for c in creatures] == ["pikachu", "bulbasaur", "squirtle"]
