"""Pydantic request/response schemas for API endpoints."""

from datetime import date

from pydantic import BaseModel

from src.schemas.game_entry import GameNightForm
from src.schemas.records import (
    BustClubRow,
    GameNightSummary,
    LeaderboardRow,
    RecentGameRow,
)


class LoginRequest(BaseModel):
    password: str


class LoginResponse(BaseModel):
    authenticated: bool


class PlayerCreate(BaseModel):
    name: str


class PlayerUpdate(BaseModel):
    name: str


class MessageResponse(BaseModel):
    message: str


class LedgerSummary(BaseModel):
    """Running totals shown under the entry form before submission."""

    total_investment: float
    total_cash_out: float
    difference: float
    balanced: bool
    valid: bool
    errors: list[str]


class GameNightResult(BaseModel):
    """Outcome of recording a game night."""

    game_date: date
    players_recorded: int
    rebuys_recorded: int
    message: str
    next_form: GameNightForm


class LeaderboardResponse(BaseModel):
    include_rebuys: bool
    rows: list[LeaderboardRow]
    wall_of_shame: LeaderboardRow | None
    shark_of_the_month: RecentGameRow | None
    bust_club_leader: BustClubRow | None


class GameHistoryResponse(BaseModel):
    include_rebuys: bool
    games: list[GameNightSummary]
