from fastapi import APIRouter

from src.api.deps import SessionDep
from src.schemas.records import BustClubRow, RecentGameRow
from src.schemas.schemas import LeaderboardResponse
from src.services.leaderboard_service import (
    get_bust_club,
    get_leaderboard,
    get_recent_games,
)

router = APIRouter()


@router.get("/", response_model=LeaderboardResponse)
def read_leaderboard(
    session: SessionDep, include_rebuys: bool = True
) -> LeaderboardResponse:
    """Overall standings with wall of shame, shark of the month and bust club leader."""
    return get_leaderboard(session, include_rebuys=include_rebuys)


@router.get("/recent", response_model=list[RecentGameRow])
def read_recent_games(session: SessionDep) -> list[RecentGameRow]:
    """Per-player results over the recent window."""
    return get_recent_games(session)


@router.get("/bust-club", response_model=list[BustClubRow])
def read_bust_club(session: SessionDep) -> list[BustClubRow]:
    """Players who went bust after rebuying, most busts first."""
    return get_bust_club(session)
