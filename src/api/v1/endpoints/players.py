from fastapi import APIRouter
from loguru import logger

from src.api.deps import AdminDep, SessionDep
from src.core.exceptions import NotFoundError
from src.dao.player_dao import get_all_players, get_player_by_id
from src.models.models import Player
from src.schemas.errors import ErrorResponse
from src.schemas.schemas import MessageResponse, PlayerCreate, PlayerUpdate
from src.services.player_service import add_player, remove_player, rename_player

router = APIRouter()

ADMIN_ERRORS: dict[int | str, dict[str, object]] = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


@router.get("/", response_model=list[Player])
def read_players(
    session: SessionDep, offset: int = 0, limit: int = 100
) -> list[Player]:
    """Retrieve players ordered by name."""
    logger.info(f"Fetching players list (offset={offset}, limit={limit})")
    players = get_all_players(session, offset=offset, limit=limit)
    logger.debug(f"Retrieved {len(players)} players")
    return players


@router.get("/{player_id}", response_model=Player)
def read_player(player_id: int, session: SessionDep) -> Player:
    """Retrieve a specific player by ID."""
    logger.info(f"Fetching player with ID: {player_id}")
    player = get_player_by_id(session, player_id)
    if player is None:
        raise NotFoundError(
            message=f"Player {player_id} not found", details={"player_id": player_id}
        )
    return player


@router.post(
    "/",
    response_model=Player,
    status_code=201,
    dependencies=[AdminDep],
    responses=ADMIN_ERRORS,
)
def create_player(body: PlayerCreate, session: SessionDep) -> Player:
    """Add a new player."""
    return add_player(session, body.name)


@router.patch(
    "/{player_id}",
    response_model=Player,
    dependencies=[AdminDep],
    responses=ADMIN_ERRORS,
)
def update_player(player_id: int, body: PlayerUpdate, session: SessionDep) -> Player:
    """Rename a player."""
    return rename_player(session, player_id, body.name)


@router.delete(
    "/{player_id}",
    response_model=MessageResponse,
    dependencies=[AdminDep],
    responses=ADMIN_ERRORS,
)
def delete_player(player_id: int, session: SessionDep) -> MessageResponse:
    """Delete a player together with all of their game history."""
    name = remove_player(session, player_id)
    return MessageResponse(message=f'Player "{name}" deleted successfully!')
