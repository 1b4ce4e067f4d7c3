"""SQLModel data models for the Poker Night application."""

from datetime import UTC, date, datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel  # type: ignore


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Player(SQLModel, table=True):
    """A regular at the table. The name is the human-facing key."""

    __tablename__ = "players"  # pyright: ignore[reportAssignmentType]

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    # Deleting a player removes their whole history
    game_logs: list["GameLog"] = Relationship(  # type: ignore
        back_populates="player", cascade_delete=True
    )
    rebuys: list["Rebuy"] = Relationship(  # type: ignore
        back_populates="player", cascade_delete=True
    )


class GameLog(SQLModel, table=True):
    """One player's result for one game night.

    ``buy_in`` is the initial buy-in only; rebuys live in their own table.
    """

    __tablename__ = "game_logs"  # pyright: ignore[reportAssignmentType]
    __table_args__ = (
        UniqueConstraint("player_id", "game_date", name="uq_game_logs_player_date"),
    )

    id: int | None = Field(default=None, primary_key=True)
    player_id: int = Field(foreign_key="players.id", ondelete="CASCADE", index=True)
    game_date: date = Field(index=True)
    buy_in: float
    cash_out: float
    net_result: float = Field(description="cash_out - buy_in, without rebuys")
    created_at: datetime = Field(default_factory=_utcnow)

    player: Player = Relationship(back_populates="game_logs")  # type: ignore
    rebuys: list["Rebuy"] = Relationship(  # type: ignore
        back_populates="game_log", cascade_delete=True
    )


class Rebuy(SQLModel, table=True):
    """An extra stake a player added during a game night."""

    __tablename__ = "rebuys"  # pyright: ignore[reportAssignmentType]

    id: int | None = Field(default=None, primary_key=True)
    game_log_id: int = Field(foreign_key="game_logs.id", ondelete="CASCADE")
    player_id: int = Field(foreign_key="players.id", ondelete="CASCADE", index=True)
    game_date: date = Field(index=True)
    rebuy_amount: float
    rebuy_sequence: int = Field(description="1-based position in the entered list")
    created_at: datetime = Field(default_factory=_utcnow)

    game_log: GameLog = Relationship(back_populates="rebuys")  # type: ignore
    player: Player = Relationship(back_populates="rebuys")  # type: ignore
