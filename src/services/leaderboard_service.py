"""Aggregation views over the game logs.

These play the role of the store's pre-built views (leaderboard, recent
games, bust club, game logs joined with rebuys). Everything downstream
consumes the typed rows they return.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from loguru import logger
from sqlmodel import Session

from src.core import config
from src.dao.game_dao import get_all_rebuys, get_game_logs_with_players
from src.models.models import GameLog, Player, Rebuy
from src.schemas.records import (
    BustClubRow,
    GameNightSummary,
    LeaderboardRow,
    PlayerResult,
    RebuyRecord,
    RecentGameRow,
)
from src.schemas.schemas import GameHistoryResponse, LeaderboardResponse
from src.services.standings_service import (
    group_game_history,
    result_is_bust,
    shark_of_the_month,
    wall_of_shame,
)


def to_player_result(
    game_log: GameLog, player: Player, rebuys: Iterable[Rebuy]
) -> PlayerResult:
    """Adapt a joined game log row and its rebuys into a PlayerResult."""
    if player.id is None:
        msg = "Player ID should be populated for fetched player"
        raise ValueError(msg)
    return PlayerResult(
        player_id=player.id,
        player_name=player.name,
        game_date=game_log.game_date,
        initial_buy_in=game_log.buy_in,
        cash_out=game_log.cash_out,
        rebuys=tuple(
            RebuyRecord(amount=rebuy.rebuy_amount, sequence=rebuy.rebuy_sequence)
            for rebuy in sorted(rebuys, key=lambda r: r.rebuy_sequence)
        ),
    )


def load_player_results(session: Session) -> list[PlayerResult]:
    """Every recorded result, newest night first, with its rebuys attached.

    Rebuys are matched to a result by player and game date.
    """
    rebuys_by_key: dict[tuple[int, date], list[Rebuy]] = {}
    for rebuy in get_all_rebuys(session):
        rebuys_by_key.setdefault((rebuy.player_id, rebuy.game_date), []).append(rebuy)

    results = [
        to_player_result(
            game_log, player, rebuys_by_key.get((game_log.player_id, game_log.game_date), [])
        )
        for game_log, player in get_game_logs_with_players(session)
    ]
    logger.debug(f"Loaded {len(results)} player results")
    return results


def _bust_rate(busts: int, games: int) -> float:
    return round(busts / games * 100, 1) if games else 0.0


def leaderboard_rows(
    results: Iterable[PlayerResult], *, include_rebuys: bool = True
) -> list[LeaderboardRow]:
    """Per-player totals, best net profit first (ties by name)."""
    by_player: dict[int, list[PlayerResult]] = {}
    for result in results:
        by_player.setdefault(result.player_id, []).append(result)

    rows: list[LeaderboardRow] = []
    for player_id, player_results in by_player.items():
        busts = sum(1 for r in player_results if result_is_bust(r))
        games = len(player_results)
        rows.append(
            LeaderboardRow(
                player_id=player_id,
                name=player_results[0].player_name,
                games_played=games,
                total_initial_buy_ins=sum(r.initial_buy_in for r in player_results),
                total_investment=sum(r.total_investment for r in player_results),
                total_cash_outs=sum(r.cash_out for r in player_results),
                original_net_profit=sum(r.original_net_result for r in player_results),
                net_profit_with_rebuys=sum(r.net_result for r in player_results),
                total_rebuys=sum(r.total_rebuys for r in player_results),
                total_rebuy_instances=sum(len(r.rebuys) for r in player_results),
                total_bust_count=busts,
                bust_rate_percentage=_bust_rate(busts, games),
            )
        )

    rows.sort(key=lambda row: row.name)
    rows.sort(key=lambda row: row.net_profit(include_rebuys=include_rebuys), reverse=True)
    return rows


def recent_game_rows(
    results: Iterable[PlayerResult], since: date
) -> list[RecentGameRow]:
    """Per-player totals over nights on or after ``since``."""
    by_player: dict[int, list[PlayerResult]] = {}
    for result in results:
        if result.game_date >= since:
            by_player.setdefault(result.player_id, []).append(result)

    rows = [
        RecentGameRow(
            player_id=player_id,
            name=player_results[0].player_name,
            recent_games=len(player_results),
            recent_profit_original=sum(r.original_net_result for r in player_results),
            recent_profit_with_rebuys=sum(r.net_result for r in player_results),
            recent_total_rebuys=sum(r.total_rebuys for r in player_results),
            recent_busts=sum(1 for r in player_results if result_is_bust(r)),
        )
        for player_id, player_results in by_player.items()
    ]
    rows.sort(key=lambda row: row.name)
    rows.sort(key=lambda row: row.recent_profit_with_rebuys, reverse=True)
    return rows


def bust_club_rows(
    results: Iterable[PlayerResult],
    since: date,
    limit: int = config.BUST_CLUB_LIMIT,
) -> list[BustClubRow]:
    """Players with at least one bust, most busts first."""
    results = list(results)
    recent_busts = {
        row.player_id: row.recent_busts for row in recent_game_rows(results, since)
    }
    rows = [
        BustClubRow(
            player_id=row.player_id,
            name=row.name,
            total_bust_count=row.total_bust_count,
            games_played=row.games_played,
            bust_rate_percentage=row.bust_rate_percentage,
            recent_busts=recent_busts.get(row.player_id, 0),
        )
        for row in leaderboard_rows(results)
        if row.total_bust_count > 0
    ]
    rows.sort(key=lambda row: row.name)
    rows.sort(key=lambda row: row.total_bust_count, reverse=True)
    return rows[:limit]


def recent_window_start(today: date | None = None) -> date:
    today = today or date.today()
    return today - timedelta(days=config.RECENT_WINDOW_DAYS)


def get_leaderboard(
    session: Session, *, include_rebuys: bool = True, today: date | None = None
) -> LeaderboardResponse:
    """Leaderboard rows plus wall of shame, shark of the month and bust club leader."""
    results = load_player_results(session)
    since = recent_window_start(today)

    rows = leaderboard_rows(results, include_rebuys=include_rebuys)
    recent = recent_game_rows(results, since)
    bust_club = bust_club_rows(results, since, limit=1)

    logger.info(
        f"Built leaderboard: {len(rows)} players, "
        + f"{len(recent)} active since {since.isoformat()}"
    )
    return LeaderboardResponse(
        include_rebuys=include_rebuys,
        rows=rows,
        wall_of_shame=wall_of_shame(rows, include_rebuys=include_rebuys),
        shark_of_the_month=shark_of_the_month(recent, include_rebuys=include_rebuys),
        bust_club_leader=bust_club[0] if bust_club else None,
    )


def get_recent_games(session: Session, today: date | None = None) -> list[RecentGameRow]:
    return recent_game_rows(load_player_results(session), recent_window_start(today))


def get_bust_club(
    session: Session, today: date | None = None, limit: int = config.BUST_CLUB_LIMIT
) -> list[BustClubRow]:
    return bust_club_rows(
        load_player_results(session), recent_window_start(today), limit=limit
    )


def get_game_history(
    session: Session, *, include_rebuys: bool = True
) -> GameHistoryResponse:
    games: list[GameNightSummary] = group_game_history(
        load_player_results(session), include_rebuys=include_rebuys
    )
    logger.info(f"Built game history: {len(games)} game nights")
    return GameHistoryResponse(include_rebuys=include_rebuys, games=games)
