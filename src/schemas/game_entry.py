"""Immutable game-night entry form.

The admin builds up a night one edit at a time. Each edit returns a new form
value instead of mutating the current one, so a controller only ever swaps
one value for the next.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict

from src.core import config


class PlayerEntry(BaseModel):
    """One row of the form: who played, what they left with, what they rebought."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    player_name: str = ""
    cash_out: float | None = None
    rebuys: tuple[float | None, ...] = ()

    @property
    def trimmed_name(self) -> str:
        return self.player_name.strip()


class GameNightForm(BaseModel):
    """A whole night: date, shared buy-in and one entry per player."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    game_date: str = ""
    buy_in: float = config.DEFAULT_BUY_IN
    players: tuple[PlayerEntry, ...] = (PlayerEntry(),)

    @classmethod
    def blank(cls, buy_in: float = config.DEFAULT_BUY_IN) -> "GameNightForm":
        """Empty date and a single empty player row."""
        return cls(buy_in=buy_in)

    def _replace_player(self, index: int, entry: PlayerEntry) -> "GameNightForm":
        players = list(self.players)
        players[index] = entry
        return self.model_copy(update={"players": tuple(players)})

    def with_player_added(self) -> "GameNightForm":
        return self.model_copy(update={"players": (*self.players, PlayerEntry())})

    def with_player_removed(self, index: int) -> "GameNightForm":
        """Drop a row. The last remaining row is never removed."""
        _ = self.players[index]
        if len(self.players) <= 1:
            return self
        players = self.players[:index] + self.players[index + 1 :]
        return self.model_copy(update={"players": players})

    def with_player_updated(self, index: int, **changes: Any) -> "GameNightForm":
        if "rebuys" in changes:
            changes["rebuys"] = tuple(changes["rebuys"])
        return self._replace_player(index, self.players[index].model_copy(update=changes))

    def with_rebuy_added(self, index: int) -> "GameNightForm":
        entry = self.players[index]
        return self._replace_player(
            index, entry.model_copy(update={"rebuys": (*entry.rebuys, 0.0)})
        )

    def with_rebuy_removed(self, index: int, rebuy_index: int) -> "GameNightForm":
        entry = self.players[index]
        _ = entry.rebuys[rebuy_index]
        rebuys = entry.rebuys[:rebuy_index] + entry.rebuys[rebuy_index + 1 :]
        return self._replace_player(index, entry.model_copy(update={"rebuys": rebuys}))

    def with_rebuy_updated(
        self, index: int, rebuy_index: int, amount: float | None
    ) -> "GameNightForm":
        entry = self.players[index]
        rebuys = list(entry.rebuys)
        rebuys[rebuy_index] = amount
        return self._replace_player(
            index, entry.model_copy(update={"rebuys": tuple(rebuys)})
        )

    def selectable_names(self, index: int, available: Iterable[str]) -> list[str]:
        """Names the selector at ``index`` may offer.

        Names already picked in other rows are left out; the row's own pick
        stays available.
        """
        taken = {
            entry.trimmed_name
            for i, entry in enumerate(self.players)
            if i != index and entry.trimmed_name
        }
        return [name for name in available if name not in taken]
