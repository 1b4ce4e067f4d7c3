"""Data Access Object for game log and rebuy operations."""

from collections.abc import Iterable
from datetime import date

from sqlmodel import Session, col, select

from src.models.models import GameLog, Player, Rebuy


def get_game_logs_on_date(
    session: Session, game_date: date, player_ids: Iterable[int]
) -> list[GameLog]:
    """Get the game logs already recorded on ``game_date`` for the given players."""
    return list(
        session.exec(
            select(GameLog).where(
                GameLog.game_date == game_date,
                col(GameLog.player_id).in_(list(player_ids)),
            )
        ).all()
    )


def create_game_logs(session: Session, game_logs: list[GameLog]) -> list[GameLog]:
    """Insert game logs in one batch and return them with IDs populated."""
    session.add_all(game_logs)
    session.flush()
    return game_logs


def create_rebuys(session: Session, rebuys: list[Rebuy]) -> list[Rebuy]:
    """Insert rebuys in one batch."""
    session.add_all(rebuys)
    session.flush()
    return rebuys


def get_game_logs_with_players(session: Session) -> list[tuple[GameLog, Player]]:
    """Get every game log joined with its player, newest game night first."""
    results = session.exec(
        select(GameLog, Player)
        .join(Player, GameLog.player_id == Player.id)  # type: ignore[arg-type]
        .order_by(col(GameLog.game_date).desc(), col(GameLog.id))
    ).all()
    return list(results)


def get_all_rebuys(session: Session) -> list[Rebuy]:
    """Get every rebuy, newest game night first, then in entry order."""
    return list(
        session.exec(
            select(Rebuy).order_by(
                col(Rebuy.game_date).desc(), col(Rebuy.rebuy_sequence)
            )
        ).all()
    )
