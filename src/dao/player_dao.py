"""Data Access Object for Player operations."""

from collections.abc import Iterable

from sqlmodel import Session, col, select

from src.models.models import Player


def get_player_by_id(session: Session, player_id: int) -> Player | None:
    """Get a player by ID."""
    return session.get(Player, player_id)


def get_player_by_name(session: Session, name: str) -> Player | None:
    """Get a player by exact name."""
    return session.exec(select(Player).where(Player.name == name)).first()


def get_players_by_names(session: Session, names: Iterable[str]) -> list[Player]:
    """Get every player whose name is in ``names``."""
    return list(session.exec(select(Player).where(col(Player.name).in_(list(names)))).all())


def get_all_players(
    session: Session, offset: int = 0, limit: int = 100
) -> list[Player]:
    """Get players ordered by name, with pagination."""
    statement = select(Player).order_by(col(Player.name)).offset(offset).limit(limit)
    return list(session.exec(statement).all())


def create_player(session: Session, player: Player) -> Player:
    """Create a new player and return it with ID populated."""
    session.add(player)
    session.flush()
    return player


def update_player(session: Session, player: Player) -> Player:
    """Update an existing player."""
    session.add(player)
    session.flush()
    return player


def delete_player(session: Session, player: Player) -> None:
    """Delete a player; game logs and rebuys go with it."""
    session.delete(player)
    session.flush()
