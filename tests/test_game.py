"""Unit tests for the tic-tac-toe game core."""

import pytest

from tictactoe.game import (
    STATUS_ALREADY_OVER,
    STATUS_INVALID,
    STATUS_TIE,
    WINNING_LINES,
    BoardState,
    GameEngine,
    GameState,
    Outcome,
    check_winner,
    format_board,
)


def play(engine, *indices):
    result = None
    for index in indices:
        result = engine.play_turn(index)
    return result


def test_board_copy_is_independent():
    board = BoardState()
    snapshot = board.get_board()
    snapshot[0] = "X"
    assert board.get_board() == [""] * 9
    assert board.make_move(0, "O")


def test_board_rejects_out_of_range_and_occupied():
    board = BoardState()
    assert not board.make_move(-1, "X")
    assert not board.make_move(9, "X")
    assert not board.make_move(True, "X")
    assert board.make_move(4, "X")
    assert not board.make_move(4, "O")
    assert board.get_board()[4] == "X"


def test_board_reset_and_full():
    board = BoardState()
    for i in range(9):
        board.make_move(i, "X")
    assert board.is_full()
    board.reset_board()
    assert board.get_board() == [""] * 9
    assert not board.is_full()


@pytest.mark.parametrize("index", range(9))
def test_each_cell_accepts_one_move(index):
    engine = GameEngine()
    first = engine.play_turn(index)
    assert first.outcome is Outcome.CONTINUE
    assert first.status == "Player O's turn."
    assert engine.get_active_player().mark == "O"

    second = engine.play_turn(index)
    assert second.outcome is Outcome.INVALID
    assert second.status == STATUS_INVALID
    assert second.combo is None
    assert engine.get_active_player().mark == "O"


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_out_of_range_move_leaves_state_alone(index):
    engine = GameEngine()
    result = engine.play_turn(index)
    assert result.outcome is Outcome.INVALID
    assert engine.get_current_board() == [""] * 9
    assert engine.get_active_player().mark == "X"


def test_players_alternate():
    engine = GameEngine()
    marks = []
    for index in (0, 4, 8, 1):
        marks.append(engine.get_active_player().mark)
        engine.play_turn(index)
    assert marks == ["X", "O", "X", "O"]
    assert engine.get_active_player().mark == "X"


def test_row_win_reports_combo_and_ends_game():
    engine = GameEngine()
    result = play(engine, 0, 3, 1, 4, 2)
    assert result.outcome is Outcome.WIN
    assert "Player X" in result.status and "wins" in result.status
    assert result.combo == (0, 1, 2)
    assert engine.state is GameState.OVER
    assert engine.is_over

    board_before = engine.get_current_board()
    after = engine.play_turn(8)
    assert after.status == STATUS_ALREADY_OVER
    assert after.combo is None
    assert engine.get_current_board() == board_before


def test_second_player_can_win_on_diagonal():
    engine = GameEngine()
    result = play(engine, 0, 2, 1, 4, 8, 6)
    assert result.status == "Player O wins!"
    assert result.combo == (2, 4, 6)


def test_tie_on_full_board():
    engine = GameEngine()
    # X O X / X O O / O X X
    result = play(engine, 0, 1, 2, 4, 3, 5, 7, 6, 8)
    assert result.outcome is Outcome.TIE
    assert result.status == STATUS_TIE
    assert result.combo is None
    assert engine.is_over
    assert engine.board.is_full()


def test_win_on_last_cell_is_not_a_tie():
    engine = GameEngine()
    # X O X / O X O / O X X, completed by X in the centre
    result = play(engine, 0, 1, 2, 3, 7, 5, 8, 6, 4)
    assert "" not in engine.get_current_board()
    assert result.outcome is Outcome.WIN
    assert result.combo == (0, 4, 8)


def test_reset_restores_initial_session():
    engine = GameEngine()
    play(engine, 0, 3, 1, 4, 2)
    result = engine.reset_game()
    assert result.outcome is Outcome.RESET
    assert result.status == "Game has been reset. Player X starts."
    assert result.combo is None
    assert engine.get_current_board() == [""] * 9
    assert engine.get_active_player().mark == "X"
    assert engine.state is GameState.IN_PROGRESS

    again = play(engine, 0, 3, 1, 4, 2)
    assert again.combo == (0, 1, 2)


def test_reset_hands_turn_back_to_first_player():
    engine = GameEngine()
    engine.play_turn(0)
    assert engine.get_active_player().mark == "O"

    engine.reset_game()
    assert engine.get_active_player().mark == "X"
    assert engine.play_turn(4).status == "Player O's turn."


def test_reset_keeps_player_identities():
    engine = GameEngine(player_x_name="Ada", player_o_name="Grace")
    players = engine.players
    play(engine, 4, 0)
    engine.reset_game()
    assert engine.players == players
    assert engine.get_active_player().name == "Ada"


def test_mutating_returned_board_does_not_leak():
    engine = GameEngine()
    board = engine.get_current_board()
    board[:] = ["O"] * 9
    result = engine.play_turn(0)
    assert result.outcome is Outcome.CONTINUE
    assert engine.get_current_board()[0] == "X"


def test_engines_are_independent():
    first, second = GameEngine(), GameEngine()
    first.play_turn(0)
    assert second.get_current_board() == [""] * 9
    assert second.get_active_player().mark == "X"


def test_duplicate_marks_rejected():
    with pytest.raises(ValueError):
        GameEngine(player_x_mark="X", player_o_mark="X")


def test_check_winner_only_looks_at_given_mark():
    board = ["O", "O", "O", "", "X", "", "X", "", ""]
    assert check_winner(board, "X") is None
    assert check_winner(board, "O") == (0, 1, 2)
    assert len(WINNING_LINES) == 8


def test_result_to_dict():
    engine = GameEngine()
    result = play(engine, 0, 3, 1, 4, 2)
    assert result.to_dict() == {
        "status": "Player X wins!",
        "combo": [0, 1, 2],
        "outcome": "win",
    }


def test_format_board():
    rendered = format_board(["X", "", "O", "", "X", "", "", "", "O"])
    assert rendered.splitlines() == [
        " X |   | O ",
        "---+---+---",
        "   | X |   ",
        "---+---+---",
        "   |   | O ",
    ]
