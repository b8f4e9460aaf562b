"""Runtime primitives backing the Pokearena HTTP API."""

from __future__ import annotations

import logging
import random

import httpx

from pokearena.catalog import PokeApiClient
from pokearena.config import Settings, get_settings
from pokearena.database import create_db_engine, create_session_factory, init_db
from pokearena.repository import SqlBattleRepository, SqlRosterRepository
from pokearena.services import BattleService, RosterService

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.engine = create_db_engine(
            self.settings.database_url, echo=self.settings.database_echo
        )
        init_db(self.engine)
        self.session_factory = create_session_factory(self.engine)

        self.catalog = PokeApiClient(
            self.settings.pokeapi_base_url,
            page_size=self.settings.page_size,
            max_pages=self.settings.max_pages,
            random_pool_max_id=self.settings.random_pool_max_id,
            timeout=self.settings.http_timeout_seconds,
            transport=transport,
        )
        self.roster = RosterService(
            SqlRosterRepository(self.session_factory),
            self.catalog,
            max_size=self.settings.roster_max_size,
        )
        self.battles = BattleService(
            self.roster,
            self.catalog,
            SqlBattleRepository(self.session_factory),
            rng=rng,
        )

    async def shutdown(self) -> None:
        await self.catalog.aclose()
        self.engine.dispose()
        logger.info("api state shut down")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
