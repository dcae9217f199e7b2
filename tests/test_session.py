"""Tests for the single-game play-state manager."""

import copy
import random

import pytest

from backend.game.session import (
    DEFAULT_MODES,
    STATUS_COMPLETED,
    STATUS_IDLE,
    STATUS_PLAYING,
    GameMode,
    SudokuGame,
    parse_cell_value,
)
from backend.solver.backtracking import count_solutions


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _empty_cells(game: SudokuGame) -> list[tuple[int, int]]:
    return [
        (r, c)
        for r in range(game.size)
        for c in range(game.size)
        if game.board[r][c] == 0
    ]


def _clue_cell(game: SudokuGame) -> tuple[int, int]:
    for r in range(game.size):
        for c in range(game.size):
            if game.initial_board[r][c] != 0:
                return r, c
    raise AssertionError("puzzle has no clues")


def _wrong_value(game: SudokuGame, row: int, col: int) -> int:
    return game.solution[row][col] % game.size + 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def game(clock) -> SudokuGame:
    game = SudokuGame(rng=random.Random(17), clock=clock)
    game.start_new_game("easy")
    return game


class TestParseCellValue:
    """Tests for raw edit value parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("", 0),
            (None, None),
            (0, None),
            ("0", None),
            ("  ", 0),
            ("3", 3),
            (" 6 ", 6),
            (4, 4),
            (2.0, 2),
            ("5.0", 5),
            ("7", None),
            (-1, None),
            (1.5, None),
            ("abc", None),
            ("nan", None),
            ("inf", None),
            (True, None),
            ([1], None),
        ],
    )
    def test_values_on_6x6(self, raw, expected):
        assert parse_cell_value(raw, 6) == expected

    def test_nine_allowed_on_9x9(self):
        assert parse_cell_value("9", 9) == 9
        assert parse_cell_value("10", 9) is None


class TestStartNewGame:
    """Tests for starting games."""

    def test_easy_mode(self, game):
        assert game.mode == "easy"
        assert game.size == 6
        assert game.status == STATUS_PLAYING
        assert game.board == game.initial_board
        assert game.board is not game.initial_board
        assert game.errors == set()
        assert game.hint is None
        assert game.elapsed_seconds == 0
        assert game.clue_count >= DEFAULT_MODES["easy"].clues
        assert count_solutions(copy.deepcopy(game.initial_board), 6, limit=2) == 1

    def test_clues_come_from_solution(self, game):
        for r in range(6):
            for c in range(6):
                assert game.initial_board[r][c] in (0, game.solution[r][c])

    def test_custom_mode_table(self):
        modes = {"normal": GameMode(name="normal", size=9, clues=45)}
        game = SudokuGame(modes=modes, rng=random.Random(3))
        game.start_new_game("normal")

        assert game.size == 9
        assert len(game.board) == 9
        assert game.clue_count >= 45
        assert count_solutions(copy.deepcopy(game.initial_board), 9, limit=2) == 1

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            SudokuGame().start_new_game("expert")

    def test_restart_discards_previous_state(self, game, clock):
        row, col = _empty_cells(game)[0]
        game.update_cell(row, col, _wrong_value(game, row, col))
        clock.now += 30

        game.start_new_game("easy")

        assert game.board == game.initial_board
        assert game.elapsed_seconds == 0
        assert game.hint is None


class TestUpdateCell:
    """Tests for player edits."""

    def test_edit_before_start_is_ignored(self):
        game = SudokuGame()
        assert game.status == STATUS_IDLE
        assert game.update_cell(0, 0, "1") is False
        assert game.board == []

    def test_clue_cells_are_immutable(self, game):
        row, col = _clue_cell(game)
        clue = game.initial_board[row][col]

        assert game.update_cell(row, col, "") is False
        assert game.update_cell(row, col, clue % 6 + 1) is False
        assert game.board[row][col] == clue

    def test_invalid_values_are_ignored(self, game):
        row, col = _empty_cells(game)[0]
        before = copy.deepcopy(game.board)

        for raw in ("7", "x", 0.5, -3, True):
            assert game.update_cell(row, col, raw) is False
        assert game.board == before

    def test_places_and_clears(self, game):
        row, col = _empty_cells(game)[0]
        value = game.solution[row][col]

        assert game.update_cell(row, col, str(value)) is True
        assert game.board[row][col] == value
        assert game.initial_board[row][col] == 0

        assert game.update_cell(row, col, "") is True
        assert game.board[row][col] == 0

    def test_zero_and_null_do_not_clear(self, game):
        row, col = _empty_cells(game)[0]
        value = game.solution[row][col]
        game.update_cell(row, col, value)

        for raw in (0, "0", None):
            assert game.update_cell(row, col, raw) is False
            assert game.board[row][col] == value

    def test_conflicts_are_reported(self, game):
        row, col, other = next(
            (r, c, o)
            for r, c in _empty_cells(game)
            for o in range(game.size)
            if game.board[r][o] != 0
        )
        duplicate = game.board[row][other]

        game.update_cell(row, col, duplicate)
        assert {(row, col), (row, other)} <= game.errors

        game.update_cell(row, col, "")
        assert game.errors == set()

    def test_edit_clears_hint(self, game):
        game.hint = (0, 0)
        row, col = _empty_cells(game)[0]
        game.update_cell(row, col, game.solution[row][col])
        assert game.hint is None

    def test_out_of_board_coordinates(self, game):
        with pytest.raises(IndexError):
            game.update_cell(6, 0, "1")
        with pytest.raises(IndexError):
            game.update_cell(0, -1, "1")

    def test_filling_solution_completes_game(self, game, clock):
        empties = _empty_cells(game)
        clock.now += 42

        for row, col in empties[:-1]:
            game.update_cell(row, col, game.solution[row][col])
            assert game.status == STATUS_PLAYING

        row, col = empties[-1]
        game.update_cell(row, col, game.solution[row][col])

        assert game.status == STATUS_COMPLETED
        assert game.board == game.solution
        assert game.errors == set()
        assert game.elapsed_seconds == 42

        clock.now += 100
        assert game.elapsed_seconds == 42
        assert game.update_cell(row, col, "") is False

    def test_full_board_with_conflict_is_not_completed(self, game):
        empties = _empty_cells(game)
        for row, col in empties[:-1]:
            game.update_cell(row, col, game.solution[row][col])

        row, col = empties[-1]
        game.update_cell(row, col, _wrong_value(game, row, col))

        assert all(0 not in r for r in game.board)
        assert game.errors
        assert game.status == STATUS_PLAYING

    def test_clues_survive_any_edit_sequence(self, game):
        rng = random.Random(99)
        for _ in range(200):
            row, col = rng.randrange(6), rng.randrange(6)
            raw = rng.choice(["", "1", "2", "3", "4", "5", "6", "9", "x"])
            game.update_cell(row, col, raw)

        for r in range(6):
            for c in range(6):
                if game.initial_board[r][c] != 0:
                    assert game.board[r][c] == game.initial_board[r][c]


class TestResetAndHint:
    """Tests for reset and hint requests."""

    def test_reset_before_start_is_ignored(self):
        game = SudokuGame()
        game.reset_game()
        assert game.status == STATUS_IDLE

    def test_reset_restores_puzzle(self, game, clock):
        row, col = _empty_cells(game)[0]
        game.update_cell(row, col, _wrong_value(game, row, col))
        game.hint = (1, 1)
        clock.now += 25
        assert game.elapsed_seconds == 25

        game.reset_game()

        assert game.board == game.initial_board
        assert game.errors == set()
        assert game.hint is None
        assert game.status == STATUS_PLAYING
        assert game.elapsed_seconds == 0

    def test_reset_after_completion_resumes_play(self, game):
        for row, col in _empty_cells(game):
            game.update_cell(row, col, game.solution[row][col])
        assert game.status == STATUS_COMPLETED

        game.reset_game()
        assert game.status == STATUS_PLAYING
        assert game.board == game.initial_board

    def test_hint_before_start(self):
        game = SudokuGame()
        assert game.give_hint() is None
        assert game.hint is None

    def test_hint_points_at_single_candidate_cell(self, game):
        cell = game.give_hint()
        if cell is None:
            pytest.skip("no single-candidate cell in this puzzle")

        assert game.hint == cell
        row, col = cell
        assert game.board[row][col] == 0

        game.update_cell(row, col, game.solution[row][col])
        assert game.hint is None
        assert (row, col) not in game.errors

    def test_no_single_candidate_while_playing(self, game):
        game.initial_board = [[0] * 6 for _ in range(6)]
        game.reset_game()
        assert game.status == STATUS_PLAYING

        assert game.give_hint() is None
        assert game.hint is None

    def test_no_hint_leaves_target_unset(self, game):
        for row, col in _empty_cells(game):
            game.update_cell(row, col, game.solution[row][col])
        assert game.give_hint() is None
        assert game.hint is None
