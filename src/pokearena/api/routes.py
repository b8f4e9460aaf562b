"""HTTP routes for the Pokearena API."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from pokearena import __version__
from pokearena.api.runtime import ApiState
from pokearena.catalog import CatalogError, CreatureNotFoundError
from pokearena.database import check_database_health
from pokearena.domain import models as dm
from pokearena.domain.enums import BattleMode
from pokearena.domain.roster import RosterError
from pokearena.repository import RecordNotFoundError
from pokearena.services import BattleOutcome, Combatant

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]

# Catalog id or a non-blank creature name.
CreatureKey = int | Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class StatPayload(BaseModel):
    name: str
    base_stat: int


class CreatureSummary(BaseModel):
    id: int
    name: str
    image: str | None
    types: list[str]
    stats: list[StatPayload]
    height: int | None = None
    weight: int | None = None
    abilities: list[str] = Field(default_factory=list)


class CatalogPageResponse(BaseModel):
    page: int
    total_pages: int
    count: int
    results: list[CreatureSummary]


class TeamEntryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    pokemon_id: int = Field(alias="pokemonId")
    name: str
    image: str | None
    types: list[str]
    stats: list[StatPayload]
    timestamp: datetime | None = None


class AddTeamRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pokemon_id: CreatureKey = Field(alias="pokemonId")


class BattleSide(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    team_id: int | None = Field(default=None, alias="teamId")
    pokemon_id: CreatureKey | None = Field(default=None, alias="pokemonId")

    @model_validator(mode="after")
    def _exactly_one(self) -> BattleSide:
        if (self.team_id is None) == (self.pokemon_id is None):
            raise ValueError("provide exactly one of teamId or pokemonId")
        return self

    def to_combatant(self) -> Combatant:
        if self.team_id is not None:
            return Combatant(team_id=dm.RosterEntryID(self.team_id))
        return Combatant(pokemon_id=self.pokemon_id)


class BattleRequest(BaseModel):
    first: BattleSide
    second: BattleSide | None = None
    mode: BattleMode = BattleMode.FULL


class RoundPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stat: str
    first_value: int = Field(alias="pokemon1Value")
    second_value: int = Field(alias="pokemon2Value")
    winner: str


class BattleRecordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    first: str = Field(alias="pokemon1")
    second: str = Field(alias="pokemon2")
    winner: str
    timestamp: datetime
    details: list[RoundPayload] | None = Field(default=None, alias="battleDetails")


class BattleResponse(BattleRecordResponse):
    loser: str
    mode: BattleMode
    first_wins: int = Field(alias="roundsWon1")
    second_wins: int = Field(alias="roundsWon2")
    first_total: int = Field(alias="totalStats1")
    second_total: int = Field(alias="totalStats2")
    first_creature: CreatureSummary = Field(alias="pokemon1Detail")
    second_creature: CreatureSummary = Field(alias="pokemon2Detail")


class ClearHistoryResponse(BaseModel):
    deleted: int


def _creature_summary(creature: dm.Creature) -> CreatureSummary:
    return CreatureSummary(
        id=int(creature.id),
        name=creature.name,
        image=creature.image,
        types=creature.types,
        stats=[StatPayload(name=s.name, base_stat=s.base_stat) for s in creature.stats],
        height=creature.height,
        weight=creature.weight,
        abilities=creature.abilities,
    )


def _entry_response(entry: dm.RosterEntry) -> TeamEntryResponse:
    return TeamEntryResponse(
        id=int(entry.id),
        pokemon_id=int(entry.pokemon_id),
        name=entry.name,
        image=entry.image,
        types=entry.types,
        stats=[StatPayload(name=s.name, base_stat=s.base_stat) for s in entry.stats],
        timestamp=entry.added_at,
    )


def _rounds(rounds: list[dm.BattleRound] | None) -> list[RoundPayload] | None:
    if rounds is None:
        return None
    return [
        RoundPayload(
            stat=r.stat, first_value=r.first_value, second_value=r.second_value, winner=r.winner
        )
        for r in rounds
    ]


def _record_response(record: dm.BattleRecord) -> BattleRecordResponse:
    return BattleRecordResponse(
        id=int(record.id),
        first=record.first,
        second=record.second,
        winner=record.winner,
        timestamp=record.timestamp,
        details=_rounds(record.details),
    )


def _battle_response(outcome: BattleOutcome, mode: BattleMode) -> BattleResponse:
    record = outcome.record
    result = outcome.result
    return BattleResponse(
        id=int(record.id),
        first=record.first,
        second=record.second,
        winner=record.winner,
        timestamp=record.timestamp,
        details=_rounds(record.details),
        loser=result.loser,
        mode=mode,
        first_wins=result.first_wins,
        second_wins=result.second_wins,
        first_total=result.first_total,
        second_total=result.second_total,
        first_creature=_creature_summary(outcome.first),
        second_creature=_creature_summary(outcome.second),
    )


def _upstream_failure(exc: CatalogError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    healthy = check_database_health(state.engine)
    return {
        "status": "ok" if healthy else "degraded",
        "database": "connected" if healthy else "unavailable",
        "catalog": state.settings.pokeapi_base_url,
        "version": __version__,
    }


@router.get("/pokemon", response_model=CatalogPageResponse)
async def list_pokemon(
    state: ApiStateDep,
    page: Annotated[int, Query(ge=1)] = 1,
    search: Annotated[str | None, Query(max_length=64)] = None,
) -> CatalogPageResponse:
    try:
        catalog_page = await state.catalog.list_page(page, search=search)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CatalogError as exc:
        raise _upstream_failure(exc) from exc

    return CatalogPageResponse(
        page=catalog_page.page,
        total_pages=catalog_page.total_pages,
        count=catalog_page.count,
        results=[_creature_summary(c) for c in catalog_page.results],
    )


@router.get("/pokemon/random", response_model=list[CreatureSummary])
async def random_team(
    state: ApiStateDep,
    count: Annotated[int | None, Query(ge=1)] = None,
) -> list[CreatureSummary]:
    size = count if count is not None else state.settings.enemy_team_size
    if size > state.settings.enemy_team_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"count must not exceed {state.settings.enemy_team_size}",
        )
    try:
        team = await state.battles.enemy_team(size)
    except CatalogError as exc:
        raise _upstream_failure(exc) from exc
    return [_creature_summary(c) for c in team]


@router.get("/pokemon/{key}", response_model=CreatureSummary)
async def get_pokemon(key: str, state: ApiStateDep) -> CreatureSummary:
    lookup: int | str = int(key) if key.isdigit() else key
    try:
        creature = await state.catalog.get_creature(lookup)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CreatureNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CatalogError as exc:
        raise _upstream_failure(exc) from exc
    return _creature_summary(creature)


@router.get("/team", response_model=list[TeamEntryResponse])
async def list_team(
    state: ApiStateDep,
    refresh: bool = False,
) -> list[TeamEntryResponse]:
    try:
        entries = await state.roster.list_entries(refresh=refresh)
    except CatalogError as exc:
        raise _upstream_failure(exc) from exc
    return [_entry_response(entry) for entry in entries]


@router.post(
    "/team",
    response_model=TeamEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_to_team(request: AddTeamRequest, state: ApiStateDep) -> TeamEntryResponse:
    try:
        entry = await state.roster.add(request.pokemon_id)
    except RosterError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except CreatureNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CatalogError as exc:
        raise _upstream_failure(exc) from exc
    return _entry_response(entry)


@router.get("/team/{entry_id}", response_model=TeamEntryResponse)
async def get_team_entry(entry_id: int, state: ApiStateDep) -> TeamEntryResponse:
    try:
        entry = state.roster.get_entry(dm.RosterEntryID(entry_id))
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _entry_response(entry)


@router.delete("/team/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_team(entry_id: int, state: ApiStateDep) -> Response:
    try:
        state.roster.remove(dm.RosterEntryID(entry_id))
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/battles",
    response_model=BattleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_battle(request: BattleRequest, state: ApiStateDep) -> BattleResponse:
    second = request.second.to_combatant() if request.second is not None else None
    try:
        outcome = await state.battles.battle(
            request.first.to_combatant(), second, mode=request.mode
        )
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CreatureNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CatalogError as exc:
        raise _upstream_failure(exc) from exc
    return _battle_response(outcome, request.mode)


@router.get("/battles", response_model=list[BattleRecordResponse])
async def list_battles(
    state: ApiStateDep,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
) -> list[BattleRecordResponse]:
    records = state.battles.history(limit or state.settings.history_limit)
    return [_record_response(record) for record in records]


@router.delete("/battles", response_model=ClearHistoryResponse)
async def clear_battles(state: ApiStateDep) -> ClearHistoryResponse:
    return ClearHistoryResponse(deleted=state.battles.clear_history())


@router.get("/battles/{record_id}", response_model=BattleRecordResponse)
async def get_battle(record_id: int, state: ApiStateDep) -> BattleRecordResponse:
    try:
        record = state.battles.get_record(dm.BattleRecordID(record_id))
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _record_response(record)


@router.delete("/battles/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_battle(record_id: int, state: ApiStateDep) -> Response:
    try:
        state.battles.delete_record(dm.BattleRecordID(record_id))
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
