"""Unit tests for the immutable game-night form."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.schemas.game_entry import GameNightForm, PlayerEntry


class TestBlankForm:
    """Tests for GameNightForm.blank."""

    def test_has_one_empty_row(self):
        form = GameNightForm.blank(buy_in=25)

        assert form.game_date == ""
        assert form.buy_in == pytest.approx(25.0)
        assert form.players == (PlayerEntry(),)

    def test_parses_lists_from_json(self):
        form = GameNightForm.model_validate(
            {
                "game_date": "2024-01-05",
                "buy_in": 30,
                "players": [{"player_name": "Alice", "cash_out": 30, "rebuys": [10]}],
            }
        )
        assert form.players[0].rebuys == (10.0,)

    @pytest.mark.parametrize(
        "player",
        [
            {"player_name": "Alice", "cash_out": float("nan")},
            {"player_name": "Alice", "cash_out": 30, "rebuys": [float("inf")]},
        ],
    )
    def test_non_finite_amounts_rejected_on_parse(self, player):
        with pytest.raises(PydanticValidationError):
            GameNightForm.model_validate(
                {"game_date": "2024-01-05", "buy_in": 30, "players": [player]}
            )

    def test_non_finite_buy_in_rejected_on_parse(self):
        with pytest.raises(PydanticValidationError):
            GameNightForm(game_date="2024-01-05", buy_in=float("nan"))


class TestTransitions:
    """Every edit returns a new form and leaves the old one alone."""

    def test_forms_are_frozen(self):
        form = GameNightForm.blank()
        with pytest.raises(PydanticValidationError):
            form.game_date = "2024-01-05"  # type: ignore[misc]

    def test_add_player(self):
        form = GameNightForm.blank()
        updated = form.with_player_added()

        assert len(form.players) == 1
        assert len(updated.players) == 2

    def test_remove_player(self):
        form = (
            GameNightForm.blank()
            .with_player_updated(0, player_name="Alice")
            .with_player_added()
            .with_player_updated(1, player_name="Bob")
        )
        updated = form.with_player_removed(0)

        assert [p.player_name for p in updated.players] == ["Bob"]
        assert [p.player_name for p in form.players] == ["Alice", "Bob"]

    def test_last_row_is_never_removed(self):
        form = GameNightForm.blank()
        assert form.with_player_removed(0) is form

    def test_remove_out_of_range_raises(self):
        with pytest.raises(IndexError):
            GameNightForm.blank().with_player_removed(3)

    def test_update_player(self):
        form = GameNightForm.blank()
        updated = form.with_player_updated(0, player_name="Alice", cash_out=45)

        assert updated.players[0] == PlayerEntry(player_name="Alice", cash_out=45)
        assert form.players[0] == PlayerEntry()

    def test_rebuy_edits(self):
        form = GameNightForm.blank().with_rebuy_added(0).with_rebuy_added(0)
        form = form.with_rebuy_updated(0, 0, 20).with_rebuy_updated(0, 1, 15)
        assert form.players[0].rebuys == (20, 15)

        trimmed = form.with_rebuy_removed(0, 0)
        assert trimmed.players[0].rebuys == (15,)
        assert form.players[0].rebuys == (20, 15)

    def test_new_rebuy_slot_is_zero(self):
        form = GameNightForm.blank().with_rebuy_added(0)
        assert form.players[0].rebuys == (0.0,)


class TestSelectableNames:
    """Tests for GameNightForm.selectable_names."""

    def test_other_rows_picks_are_hidden(self):
        form = (
            GameNightForm.blank()
            .with_player_updated(0, player_name="Alice")
            .with_player_added()
            .with_player_updated(1, player_name="Bob")
            .with_player_added()
        )
        available = ["Alice", "Bob", "Carol"]

        assert form.selectable_names(2, available) == ["Carol"]
        assert form.selectable_names(0, available) == ["Alice", "Carol"]
