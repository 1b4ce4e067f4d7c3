"""Game-night ledger: validation, totals and the commit protocol."""

from datetime import date
import math

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from src.core.config import BALANCE_TOLERANCE
from src.core.exceptions import ConflictError, GameNightRejectedError, NotFoundError
from src.dao.game_dao import create_game_logs, create_rebuys, get_game_logs_on_date
from src.dao.player_dao import create_player, get_player_by_name, get_players_by_names
from src.models.models import GameLog, Player, Rebuy
from src.schemas.game_entry import GameNightForm, PlayerEntry
from src.schemas.schemas import GameNightResult, LedgerSummary


def format_currency(amount: float) -> str:
    """Format as US dollars, e.g. ``-$1,234.50``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def parse_game_date(value: str) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` date, returning None if it is not one."""
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def player_total_investment(entry: PlayerEntry, buy_in: float) -> float:
    """Buy-in plus every rebuy slot; empty slots count as zero."""
    return buy_in + sum(rebuy or 0.0 for rebuy in entry.rebuys)


def total_investment(form: GameNightForm) -> float:
    return sum(player_total_investment(entry, form.buy_in) for entry in form.players)


def total_cash_out(form: GameNightForm) -> float:
    return sum(entry.cash_out or 0.0 for entry in form.players)


def is_balanced(form: GameNightForm) -> bool:
    return abs(total_cash_out(form) - total_investment(form)) < BALANCE_TOLERANCE


def is_amount(value: float | None) -> bool:
    """Entered and finite. NaN and infinities never count as an amount."""
    return value is not None and math.isfinite(value)


def validation_errors(form: GameNightForm) -> list[str]:  # noqa: C901
    """Every rule the form breaks, in display order. Empty means valid."""
    errors: list[str] = []

    if not form.game_date.strip():
        errors.append("Game date is required")
    elif parse_game_date(form.game_date) is None:
        errors.append("Game date must be a valid date (YYYY-MM-DD)")

    if not is_amount(form.buy_in) or form.buy_in <= 0:
        errors.append("Buy-in amount must be greater than zero")

    if not form.players:
        errors.append("At least one player is required")

    names = [entry.trimmed_name for entry in form.players]
    if not all(names):
        errors.append("All players must be selected")
    chosen = [name for name in names if name]
    if len(set(chosen)) != len(chosen):
        errors.append("Each player can only appear once per game")

    if not all(is_amount(entry.cash_out) for entry in form.players):
        errors.append("All final amounts must be entered")
    if any(
        is_amount(entry.cash_out) and entry.cash_out < 0  # pyright: ignore[reportOptionalOperand]
        for entry in form.players
    ):
        errors.append("Final amounts cannot be negative")

    if not all(
        is_amount(rebuy) and rebuy >= 0  # pyright: ignore[reportOptionalOperand]
        for entry in form.players
        for rebuy in entry.rebuys
    ):
        errors.append("All rebuy amounts must be valid numbers")

    # Non-finite totals are already reported by the amount rules above
    cash_out = total_cash_out(form)
    investment = total_investment(form)
    if (
        math.isfinite(cash_out)
        and math.isfinite(investment)
        and abs(cash_out - investment) >= BALANCE_TOLERANCE
    ):
        errors.append(
            f"Total cash out ({format_currency(cash_out)}) must equal "
            f"total investment ({format_currency(investment)}), "
            f"difference {format_currency(abs(cash_out - investment))}"
        )

    return errors


def is_form_valid(form: GameNightForm) -> bool:
    return not validation_errors(form)


def summarize(form: GameNightForm) -> LedgerSummary:
    """Totals and errors for the pre-submission display."""
    cash_out = total_cash_out(form)
    investment = total_investment(form)
    errors = validation_errors(form)
    return LedgerSummary(
        total_investment=investment,
        total_cash_out=cash_out,
        difference=cash_out - investment,
        balanced=is_balanced(form),
        valid=not errors,
        errors=errors,
    )


def build_game_logs(
    form: GameNightForm, game_date: date, players_by_name: dict[str, Player]
) -> list[GameLog]:
    """One game log per entry. ``buy_in`` holds the initial buy-in only."""
    game_logs: list[GameLog] = []
    for entry in form.players:
        player = players_by_name.get(entry.trimmed_name)
        if player is None or player.id is None:
            raise NotFoundError(
                message=f"Player {entry.player_name} not found",
                details={"player_name": entry.player_name},
            )
        cash_out = entry.cash_out or 0.0
        game_logs.append(
            GameLog(
                player_id=player.id,
                game_date=game_date,
                buy_in=form.buy_in,
                cash_out=cash_out,
                net_result=cash_out - form.buy_in,
            )
        )
    return game_logs


def build_rebuys(
    form: GameNightForm,
    game_date: date,
    players_by_name: dict[str, Player],
    game_logs_by_player: dict[int, GameLog],
) -> list[Rebuy]:
    """Rebuy rows for every positive amount; zero slots are dropped.

    Game logs are matched by player id, not by insert order.
    """
    rebuys: list[Rebuy] = []
    for entry in form.players:
        player = players_by_name[entry.trimmed_name]
        if player.id is None:
            msg = "Player ID should be populated for fetched player"
            raise ValueError(msg)
        game_log = game_logs_by_player[player.id]
        if game_log.id is None:
            msg = "Game log ID should be populated after flush"
            raise ValueError(msg)
        for sequence, amount in enumerate(entry.rebuys, start=1):
            if amount is not None and amount > 0:
                rebuys.append(
                    Rebuy(
                        game_log_id=game_log.id,
                        player_id=player.id,
                        game_date=game_date,
                        rebuy_amount=amount,
                        rebuy_sequence=sequence,
                    )
                )
    return rebuys


def ensure_players_exist(session: Session, names: list[str]) -> int:
    """Create any player not yet in the store. Returns how many were created."""
    created = 0
    for name in dict.fromkeys(names):
        if get_player_by_name(session, name) is None:
            logger.info(f"Creating new player: {name}")
            create_player(session, Player(name=name))
            created += 1
    return created


def record_game_night(session: Session, form: GameNightForm) -> GameNightResult:
    """Validate and persist a game night in a single transaction.

    Steps: ensure players exist, re-fetch them by name, insert one game log
    per player, then insert the rebuy rows. Nothing is committed unless every
    step succeeds.
    """
    errors = validation_errors(form)
    if errors:
        logger.warning(f"Rejected game night submission: {errors}")
        raise GameNightRejectedError.from_errors(errors)

    game_date = parse_game_date(form.game_date)
    if game_date is None:
        msg = "Game date should be valid after validation"
        raise ValueError(msg)
    names = [entry.trimmed_name for entry in form.players]

    try:
        created = ensure_players_exist(session, names)
        logger.debug(f"Ensured {len(names)} players exist ({created} new)")

        players_by_name = {
            player.name: player for player in get_players_by_names(session, names)
        }
        game_logs = build_game_logs(form, game_date, players_by_name)

        existing = get_game_logs_on_date(
            session, game_date, [game_log.player_id for game_log in game_logs]
        )
        if existing:
            taken = sorted(
                name
                for name, player in players_by_name.items()
                if player.id in {game_log.player_id for game_log in existing}
            )
            raise ConflictError(
                message=f"Results for {game_date.isoformat()} already recorded for: "
                + ", ".join(taken),
                details={"game_date": game_date.isoformat(), "players": taken},
            )

        create_game_logs(session, game_logs)
        game_logs_by_player = {game_log.player_id: game_log for game_log in game_logs}

        rebuys = build_rebuys(form, game_date, players_by_name, game_logs_by_player)
        if rebuys:
            create_rebuys(session, rebuys)

        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.error(f"Integrity error while recording {game_date}: {e!s}")
        raise ConflictError(
            message="Game night conflicts with existing records",
            details={"game_date": game_date.isoformat()},
        ) from e
    except (SQLAlchemyError, NotFoundError, ConflictError):
        session.rollback()
        logger.error(f"Failed to record game night {game_date}, rolled back")
        raise

    message = (
        f"Game recorded successfully for {len(game_logs)} players "
        f"with {len(rebuys)} rebuys!"
    )
    logger.success(message)
    return GameNightResult(
        game_date=game_date,
        players_recorded=len(game_logs),
        rebuys_recorded=len(rebuys),
        message=message,
        next_form=GameNightForm.blank(buy_in=form.buy_in),
    )
