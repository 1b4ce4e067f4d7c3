"""Helpers for seeding the test database."""

from datetime import date

from sqlmodel import Session

from src.models.models import GameLog, Player, Rebuy


def add_result(
    session: Session,
    player: Player,
    game_date: date,
    buy_in: float,
    cash_out: float,
    rebuys: list[float] | None = None,
) -> GameLog:
    """Insert a game log (and rebuys) directly, bypassing the ledger checks."""
    game_log = GameLog(
        player_id=player.id,
        game_date=game_date,
        buy_in=buy_in,
        cash_out=cash_out,
        net_result=cash_out - buy_in,
    )
    session.add(game_log)
    session.flush()
    for sequence, amount in enumerate(rebuys or [], start=1):
        session.add(
            Rebuy(
                game_log_id=game_log.id,
                player_id=player.id,
                game_date=game_date,
                rebuy_amount=amount,
                rebuy_sequence=sequence,
            )
        )
    session.commit()
    return game_log
