"""Player Routes: CRUD and filtered queries under /players.

Invariants:
    - Every route builds boundary objects and delegates to PlayerService
    - Domain errors (InvalidInputError, PlayerNotFoundError) propagate to the
      global handlers; routes never translate them into HTTPException
    - Malformed ids, bodies and enum query values fail FastAPI validation (400)
    - Ids and integer filters are bounded by their column widths, so oversized
      values answer 400 instead of reaching the driver
    - /count is declared before /{player_id} so it is never parsed as an id

Design Decisions:
    - Filter query parameters collected by one dependency shared by list and count
    - DELETE answers 200 with an empty body
"""

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import (
    DEFAULT_PAGE_SIZE, MAX_COLUMN_INT, MAX_PLAYER_ID, MIN_COLUMN_INT,
    PlayerOrder, Profession, Race,
)
from catalog.core.player_filter import PlayerCriteria
from catalog.infrastructure.database import get_db
from catalog.infrastructure.player_repository import SqlPlayerRepository
from catalog.schemas.player import PlayerCreate, PlayerResponse, PlayerUpdate
from catalog.services.player_service import PlayerService

router = APIRouter(prefix="/players", tags=["players"])


def _column_int(alias: str):
    return Query(None, alias=alias, ge=MIN_COLUMN_INT, le=MAX_COLUMN_INT)


def get_player_service(db: AsyncSession = Depends(get_db)) -> PlayerService:
    return PlayerService(SqlPlayerRepository(db))


def player_criteria(
    name: str | None = Query(None),
    title: str | None = Query(None),
    race: Race | None = Query(None),
    profession: Profession | None = Query(None),
    after: int | None = Query(None),
    before: int | None = Query(None),
    banned: bool | None = Query(None),
    min_experience: int | None = _column_int("minExperience"),
    max_experience: int | None = _column_int("maxExperience"),
    min_level: int | None = _column_int("minLevel"),
    max_level: int | None = _column_int("maxLevel"),
) -> PlayerCriteria:
    return PlayerCriteria(
        name=name,
        title=title,
        race=race,
        profession=profession,
        after=after,
        before=before,
        banned=banned,
        min_experience=min_experience,
        max_experience=max_experience,
        min_level=min_level,
        max_level=max_level,
    )


@router.get("", response_model=list[PlayerResponse])
async def list_players(
    criteria: PlayerCriteria = Depends(player_criteria),
    order: PlayerOrder = Query(PlayerOrder.ID),
    page_number: int = Query(0, alias="pageNumber", ge=0, le=MAX_COLUMN_INT),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, le=MAX_COLUMN_INT,
    ),
    service: PlayerService = Depends(get_player_service),
):
    """One page of players matching every supplied filter."""
    records = await service.list(criteria, order, page_number, page_size)
    return [PlayerResponse.from_record(r) for r in records]


@router.get("/count", response_model=int)
async def count_players(
    criteria: PlayerCriteria = Depends(player_criteria),
    service: PlayerService = Depends(get_player_service),
):
    """Number of players matching every supplied filter."""
    return await service.count(criteria)


@router.post("", response_model=PlayerResponse)
async def create_player(
    body: PlayerCreate,
    service: PlayerService = Depends(get_player_service),
):
    record = await service.create(body.to_draft())
    return PlayerResponse.from_record(record)


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    player_id: int = Path(le=MAX_PLAYER_ID),
    service: PlayerService = Depends(get_player_service),
):
    record = await service.fetch(player_id)
    return PlayerResponse.from_record(record)


@router.post("/{player_id}", response_model=PlayerResponse)
async def update_player(
    body: PlayerUpdate,
    player_id: int = Path(le=MAX_PLAYER_ID),
    service: PlayerService = Depends(get_player_service),
):
    """Merge the supplied fields into the stored player."""
    record = await service.update(player_id, body.to_patch())
    return PlayerResponse.from_record(record)


@router.delete("/{player_id}")
async def delete_player(
    player_id: int = Path(le=MAX_PLAYER_ID),
    service: PlayerService = Depends(get_player_service),
):
    await service.delete(player_id)
    return Response(status_code=status.HTTP_200_OK)
