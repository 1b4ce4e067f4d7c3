"""
Games API endpoints.

Recording a game night, checking a night's ledger before submitting it,
and reading the grouped game history.
"""

from fastapi import APIRouter
from loguru import logger

from src.api.deps import AdminDep, SessionDep
from src.core import config
from src.schemas.errors import ErrorResponse
from src.schemas.game_entry import GameNightForm
from src.schemas.schemas import GameHistoryResponse, GameNightResult, LedgerSummary
from src.services.leaderboard_service import get_game_history
from src.services.ledger_service import record_game_night, summarize

router = APIRouter()


@router.get("/form", response_model=GameNightForm)
def blank_form() -> GameNightForm:
    """A fresh entry form: no date and one empty player row."""
    return GameNightForm.blank(buy_in=config.DEFAULT_BUY_IN)


@router.post("/validate", response_model=LedgerSummary)
def validate_game_night(form: GameNightForm) -> LedgerSummary:
    """Totals and every validation error for a form. Never writes."""
    summary = summarize(form)
    logger.debug(
        f"Validated form for {form.game_date or '<no date>'}: "
        + f"valid={summary.valid}, difference={summary.difference:.2f}"
    )
    return summary


@router.post(
    "/",
    response_model=GameNightResult,
    status_code=201,
    dependencies=[AdminDep],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def create_game_night(form: GameNightForm, session: SessionDep) -> GameNightResult:
    """Record a balanced game night with its rebuys."""
    logger.info(
        f"Received game night for {form.game_date} with {len(form.players)} player(s)"
    )
    return record_game_night(session, form)


@router.get("/history", response_model=GameHistoryResponse)
def read_game_history(
    session: SessionDep, include_rebuys: bool = True
) -> GameHistoryResponse:
    """Game nights, most recent first."""
    return get_game_history(session, include_rebuys=include_rebuys)
