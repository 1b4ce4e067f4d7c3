"""Standings derived from already-aggregated rows: history, picks and busts."""

from collections.abc import Iterable, Sequence
from datetime import date

from src.schemas.records import (
    GameNightSummary,
    HistoryPlayer,
    LeaderboardRow,
    PlayerResult,
    RecentGameRow,
)


def is_bust(cash_out: float, rebuy_amounts: Iterable[float | None]) -> bool:
    """A bust is finishing with nothing after at least one real rebuy.

    Losing only the initial buy-in is not a bust.
    """
    return cash_out == 0 and any(
        amount is not None and amount > 0 for amount in rebuy_amounts
    )


def result_is_bust(result: PlayerResult) -> bool:
    return is_bust(result.cash_out, (rebuy.amount for rebuy in result.rebuys))


def to_history_player(result: PlayerResult, *, include_rebuys: bool) -> HistoryPlayer:
    """Project a result for the history view.

    Without rebuys the row shows the original numbers: the initial buy-in is
    the whole investment.
    """
    if include_rebuys:
        return HistoryPlayer(
            name=result.player_name,
            initial_buy_in=result.initial_buy_in,
            rebuys=result.rebuys,
            total_investment=result.total_investment,
            cash_out=result.cash_out,
            net_result=result.net_result,
        )
    return HistoryPlayer(
        name=result.player_name,
        initial_buy_in=result.initial_buy_in,
        total_investment=result.initial_buy_in,
        cash_out=result.cash_out,
        net_result=result.original_net_result,
    )


def summarize_game_night(
    game_date: date, players: Sequence[HistoryPlayer]
) -> GameNightSummary:
    """Pot, totals and the night's biggest winner and loser.

    Ties go to whoever comes first in ``players``.
    """
    big_winner: HistoryPlayer | None = None
    big_loser: HistoryPlayer | None = None
    for player in players:
        if big_winner is None or player.net_result > big_winner.net_result:
            big_winner = player
        if big_loser is None or player.net_result < big_loser.net_result:
            big_loser = player

    return GameNightSummary(
        game_date=game_date,
        player_count=len(players),
        total_pot=sum(p.total_investment for p in players),
        total_cash_out=sum(p.cash_out for p in players),
        total_rebuys=sum(r.amount for p in players for r in p.rebuys),
        rebuy_count=sum(len(p.rebuys) for p in players),
        big_winner=big_winner,
        big_loser=big_loser,
        # sorted() is stable, so equal results keep their input order
        players=tuple(sorted(players, key=lambda p: p.net_result, reverse=True)),
    )


def group_game_history(
    results: Iterable[PlayerResult], *, include_rebuys: bool = True
) -> list[GameNightSummary]:
    """Group per-player rows into game nights, most recent night first."""
    grouped: dict[date, list[HistoryPlayer]] = {}
    for result in results:
        grouped.setdefault(result.game_date, []).append(
            to_history_player(result, include_rebuys=include_rebuys)
        )

    return [
        summarize_game_night(game_date, grouped[game_date])
        for game_date in sorted(grouped, reverse=True)
    ]


def wall_of_shame(
    rows: Iterable[LeaderboardRow], *, include_rebuys: bool = True
) -> LeaderboardRow | None:
    """The player furthest in the red, or None if nobody is down."""
    losers = [row for row in rows if row.net_profit(include_rebuys=include_rebuys) < 0]
    if not losers:
        return None
    return min(losers, key=lambda row: row.net_profit(include_rebuys=include_rebuys))


def shark_of_the_month(
    rows: Iterable[RecentGameRow], *, include_rebuys: bool = True
) -> RecentGameRow | None:
    """The biggest recent winner, or None if nobody is up recently."""
    winners = [
        row for row in rows if row.recent_profit(include_rebuys=include_rebuys) > 0
    ]
    if not winners:
        return None
    return max(winners, key=lambda row: row.recent_profit(include_rebuys=include_rebuys))
