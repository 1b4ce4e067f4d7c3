"""Player management: add, rename and delete players."""

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.dao.player_dao import (
    create_player,
    delete_player,
    get_player_by_id,
    get_player_by_name,
    update_player,
)
from src.models.models import Player


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError(
            message="Player name is required", details={"name": name}
        )
    return cleaned


def _get_or_404(session: Session, player_id: int) -> Player:
    player = get_player_by_id(session, player_id)
    if player is None:
        raise NotFoundError(
            message=f"Player {player_id} not found", details={"player_id": player_id}
        )
    return player


def add_player(session: Session, name: str) -> Player:
    """Create a player; names are trimmed and must be unique."""
    cleaned = _clean_name(name)
    if get_player_by_name(session, cleaned) is not None:
        raise ConflictError(
            message=f'Player "{cleaned}" already exists', details={"name": cleaned}
        )
    try:
        player = create_player(session, Player(name=cleaned))
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(
            message=f'Player "{cleaned}" already exists', details={"name": cleaned}
        ) from e
    session.refresh(player)
    logger.success(f'Player "{cleaned}" added successfully')
    return player


def rename_player(session: Session, player_id: int, name: str) -> Player:
    player = _get_or_404(session, player_id)
    cleaned = _clean_name(name)
    existing = get_player_by_name(session, cleaned)
    if existing is not None and existing.id != player_id:
        raise ConflictError(
            message=f'Player "{cleaned}" already exists', details={"name": cleaned}
        )

    old_name = player.name
    player.name = cleaned
    player.updated_at = datetime.now(UTC)
    try:
        update_player(session, player)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(
            message=f'Player "{cleaned}" already exists', details={"name": cleaned}
        ) from e
    session.refresh(player)
    logger.info(f'Renamed player {player_id}: "{old_name}" -> "{cleaned}"')
    return player


def remove_player(session: Session, player_id: int) -> str:
    """Delete a player and, irreversibly, their whole game history.

    Returns the deleted player's name.
    """
    player = _get_or_404(session, player_id)
    name = player.name
    delete_player(session, player)
    session.commit()
    logger.warning(f'Deleted player "{name}" and all their game history')
    return name
