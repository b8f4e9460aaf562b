"""Pytest configuration shared by the unit and integration suites.

Adds ``src/`` to ``sys.path`` so tests can import the ``pokearena`` package
without an editable install, and provides an in-process fake of the PokeAPI
served through ``httpx.MockTransport``.
"""

import re
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from pokearena.catalog import PokeApiClient  # noqa: E402
from pokearena.database import create_db_engine, create_session_factory, init_db  # noqa: E402

BASE_URL = "https://pokeapi.test/api/v2"

STAT_ORDER = ("hp", "attack", "defense", "special-attack", "special-defense", "speed")

KNOWN = {
    1: ("bulbasaur", ["grass", "poison"], (45, 49, 49, 65, 65, 45)),
    4: ("charmander", ["fire"], (39, 52, 43, 60, 50, 65)),
    7: ("squirtle", ["water"], (44, 48, 65, 50, 64, 43)),
    25: ("pikachu", ["electric"], (35, 55, 40, 50, 50, 90)),
    133: ("eevee", ["normal"], (55, 55, 50, 45, 65, 55)),
}


def make_payload(pokemon_id: int, name: str, types: list[str], stats: tuple[int, ...]) -> dict:
    return {
        "id": pokemon_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "sprites": {
            "front_default": f"https://img.test/{pokemon_id}.png",
            "other": {"official-artwork": {"front_default": f"https://art.test/{pokemon_id}.png"}},
        },
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "stats": [
            {"base_stat": value, "effort": 0, "stat": {"name": stat}}
            for stat, value in zip(STAT_ORDER, stats, strict=True)
        ],
        "abilities": [{"ability": {"name": "overgrow"}, "is_hidden": False}],
    }


class FakePokeApi:
    """Serves ``/pokemon`` listings and details for ids ``1..count``."""

    def __init__(self, count: int = 1302) -> None:
        self.count = count
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self._by_name = {name: pokemon_id for pokemon_id, (name, _, _) in KNOWN.items()}

    def payload_for(self, pokemon_id: int) -> dict:
        if pokemon_id in KNOWN:
            name, types, stats = KNOWN[pokemon_id]
        else:
            name, types, stats = f"creature-{pokemon_id}", ["normal"], (50,) * 6
        return make_payload(pokemon_id, name, types, stats)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"detail": "boom"})

        path = request.url.path.rstrip("/")
        if path == "/api/v2/pokemon":
            limit = int(request.url.params.get("limit", 20))
            offset = int(request.url.params.get("offset", 0))
            ids = range(offset + 1, min(offset + limit, self.count) + 1)
            return httpx.Response(
                200,
                json={
                    "count": self.count,
                    "results": [
                        {"name": self.payload_for(i)["name"], "url": f"{BASE_URL}/pokemon/{i}/"}
                        for i in ids
                    ],
                },
            )

        match = re.fullmatch(r"/api/v2/pokemon/([^/]+)", path)
        if match is None:
            return httpx.Response(404, text="Not Found")
        key = match.group(1)
        pokemon_id = int(key) if key.isdigit() else self._by_name.get(key)
        if pokemon_id is None or not 1 <= pokemon_id <= self.count:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, json=self.payload_for(pokemon_id))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakePokeApi:
    return FakePokeApi()


@pytest_asyncio.fixture
async def catalog(fake_api):
    client = PokeApiClient(BASE_URL, transport=fake_api.transport)
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def session_factory():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    try:
        yield create_session_factory(engine)
    finally:
        engine.dispose()
