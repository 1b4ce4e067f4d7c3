"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.models.models import Player
from src.schemas.game_entry import GameNightForm, PlayerEntry
from tests.factories import add_result


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(test_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with Session(test_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def sample_player(session) -> Player:
    """Create a sample player for testing."""
    player = Player(name="Alice")
    session.add(player)
    session.commit()
    session.refresh(player)
    return player


@pytest.fixture
def sample_players(session) -> list[Player]:
    """Create the four regulars."""
    players = [Player(name=name) for name in ("Alice", "Bob", "Carol", "Dave")]
    session.add_all(players)
    session.commit()
    for player in players:
        session.refresh(player)
    return players


@pytest.fixture
def played_nights(session, sample_players) -> list[Player]:
    """Two recorded nights.

    2024-01-05 ($30 buy-in): Alice +70, Bob busts after a $20 rebuy (-50),
    Carol -20.
    2024-01-12 ($30 buy-in): Alice -30, Bob +15, Dave +15.
    """
    alice, bob, carol, dave = sample_players
    first = date(2024, 1, 5)
    add_result(session, alice, first, 30, 100)
    add_result(session, bob, first, 30, 0, rebuys=[20])
    add_result(session, carol, first, 30, 10)
    second = date(2024, 1, 12)
    add_result(session, alice, second, 30, 0)
    add_result(session, bob, second, 30, 45)
    add_result(session, dave, second, 30, 45)
    return sample_players


@pytest.fixture
def balanced_form() -> GameNightForm:
    """Four players at $30, no rebuys, cash-outs summing to $120."""
    return GameNightForm(
        game_date="2024-01-05",
        buy_in=30,
        players=(
            PlayerEntry(player_name="Alice", cash_out=40),
            PlayerEntry(player_name="Bob", cash_out=20),
            PlayerEntry(player_name="Carol", cash_out=35),
            PlayerEntry(player_name="Dave", cash_out=25),
        ),
    )


@pytest.fixture
def rebuy_form() -> GameNightForm:
    """Three players at $30; Bob rebuys $20, $0 and $15 and busts."""
    return GameNightForm(
        game_date="2024-02-02",
        buy_in=30,
        players=(
            PlayerEntry(player_name="Alice", cash_out=65),
            PlayerEntry(player_name="Bob", cash_out=0, rebuys=(20, 0, 15)),
            PlayerEntry(player_name="Erin", cash_out=60),
        ),
    )
