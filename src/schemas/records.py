"""Typed rows read back from the store.

The DAO layer hands back ORM objects; the services adapt them into these
records so the standings code never depends on column names.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, computed_field


class RebuyRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    sequence: int


class PlayerResult(BaseModel):
    """One player's result for one night, rebuys included."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    player_name: str
    game_date: date
    initial_buy_in: float
    cash_out: float
    rebuys: tuple[RebuyRecord, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_rebuys(self) -> float:
        return sum(rebuy.amount for rebuy in self.rebuys)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_investment(self) -> float:
        return self.initial_buy_in + self.total_rebuys

    @computed_field  # type: ignore[prop-decorator]
    @property
    def net_result(self) -> float:
        return self.cash_out - self.total_investment

    @computed_field  # type: ignore[prop-decorator]
    @property
    def original_net_result(self) -> float:
        """Net result counting the initial buy-in only."""
        return self.cash_out - self.initial_buy_in


class HistoryPlayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    initial_buy_in: float
    rebuys: tuple[RebuyRecord, ...] = ()
    total_investment: float
    cash_out: float
    net_result: float


class GameNightSummary(BaseModel):
    """A grouped game night as shown in the history view."""

    model_config = ConfigDict(frozen=True)

    game_date: date
    player_count: int
    total_pot: float
    total_cash_out: float
    total_rebuys: float
    rebuy_count: int
    big_winner: HistoryPlayer | None
    big_loser: HistoryPlayer | None
    players: tuple[HistoryPlayer, ...]


class LeaderboardRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: int
    name: str
    games_played: int
    total_initial_buy_ins: float
    total_investment: float
    total_cash_outs: float
    original_net_profit: float
    net_profit_with_rebuys: float
    total_rebuys: float
    total_rebuy_instances: int
    total_bust_count: int
    bust_rate_percentage: float

    def net_profit(self, *, include_rebuys: bool) -> float:
        return self.net_profit_with_rebuys if include_rebuys else self.original_net_profit


class RecentGameRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: int
    name: str
    recent_games: int
    recent_profit_original: float
    recent_profit_with_rebuys: float
    recent_total_rebuys: float
    recent_busts: int

    def recent_profit(self, *, include_rebuys: bool) -> float:
        return (
            self.recent_profit_with_rebuys
            if include_rebuys
            else self.recent_profit_original
        )


class BustClubRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: int
    name: str
    total_bust_count: int
    games_played: int
    bust_rate_percentage: float
    recent_busts: int
