"""Core rules for classic 3x3 tic-tac-toe: board storage and the turn engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

Mark = str  # "X" or "O"
Combo = Tuple[int, int, int]

EMPTY = ""
BOARD_CELLS = 9

WINNING_LINES: Tuple[Combo, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

STATUS_ALREADY_OVER = "Game is over. Please start a new game."
STATUS_INVALID = "Invalid move. That cell is already taken or out of bounds."
STATUS_TIE = "It's a tie!"


# ---------- Board ----------


class BoardState:
    """Sole owner of the nine cells; every read and write goes through here."""

    def __init__(self) -> None:
        self._cells: List[Mark] = [EMPTY] * BOARD_CELLS

    def get_board(self) -> List[Mark]:
        return list(self._cells)

    def make_move(self, index: int, mark: Mark) -> bool:
        """Write ``mark`` at ``index`` if it is on the board and empty.

        Returns False (and leaves the board alone) otherwise.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < BOARD_CELLS:
            return False
        if self._cells[index] != EMPTY:
            return False
        self._cells[index] = mark
        return True

    def reset_board(self) -> None:
        self._cells = [EMPTY] * BOARD_CELLS

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self._cells)


def check_winner(board: Sequence[Mark], mark: Mark) -> Optional[Combo]:
    """Return the first winning line fully held by ``mark``, if any."""
    for line in WINNING_LINES:
        a, b, c = line
        if board[a] == mark and board[b] == mark and board[c] == mark:
            return line
    return None


def format_board(board: Sequence[Mark]) -> str:
    """Render a board snapshot as a small text grid for consoles and logs."""
    rows = []
    for start in (0, 3, 6):
        cells = [board[i] or " " for i in range(start, start + 3)]
        rows.append(" " + " | ".join(cells) + " ")
    return "\n---+---+---\n".join(rows)


# ---------- Players & results ----------


@dataclass(frozen=True)
class Player:
    name: str
    mark: Mark

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "mark": self.mark}


class GameState(str, Enum):
    IN_PROGRESS = "in_progress"
    OVER = "over"


class Outcome(str, Enum):
    """What a single engine call did."""

    CONTINUE = "continue"
    WIN = "win"
    TIE = "tie"
    INVALID = "invalid"
    ALREADY_OVER = "already_over"
    RESET = "reset"


@dataclass(frozen=True)
class TurnResult:
    status: str
    outcome: Outcome
    combo: Optional[Combo] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "combo": list(self.combo) if self.combo is not None else None,
            "outcome": self.outcome.value,
        }


# ---------- Game ----------


@dataclass
class GameEngine:
    """One game session: two players, whose turn it is, and whether it ended.

    Callers construct and hold their own engine; nothing here is global.

    Only the mover's mark is checked for a win after each placement. That is
    sufficient because exactly one cell is written per ``play_turn`` and the
    check runs right after it. Anything that places several cells at once or
    replays/undoes moves must check both marks instead.
    """

    player_x_name: str = "Player X"
    player_o_name: str = "Player O"
    player_x_mark: Mark = "X"
    player_o_mark: Mark = "O"

    board: BoardState = field(default_factory=BoardState, init=False, repr=False)
    _players: Tuple[Player, Player] = field(init=False, repr=False)
    _active: Player = field(init=False)
    _state: GameState = field(default=GameState.IN_PROGRESS, init=False)

    def __post_init__(self) -> None:
        if self.player_x_mark == self.player_o_mark:
            raise ValueError("Players must use distinct marks")
        if EMPTY in (self.player_x_mark, self.player_o_mark):
            raise ValueError("A mark cannot be the empty cell value")
        self._players = (
            Player(self.player_x_name, self.player_x_mark),
            Player(self.player_o_name, self.player_o_mark),
        )
        self._active = self._players[0]

    # ---- API used by the UI ----

    @property
    def players(self) -> Tuple[Player, Player]:
        return self._players

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state is GameState.OVER

    def get_active_player(self) -> Player:
        return self._active

    def get_current_board(self) -> List[Mark]:
        return self.board.get_board()

    def play_turn(self, index: int) -> TurnResult:
        """Place the active player's mark at ``index`` and report what happened."""
        if self.is_over:
            return TurnResult(STATUS_ALREADY_OVER, Outcome.ALREADY_OVER)

        mover = self._active
        if not self.board.make_move(index, mover.mark):
            return TurnResult(STATUS_INVALID, Outcome.INVALID)

        snapshot = self.board.get_board()
        combo = check_winner(snapshot, mover.mark)
        if combo is not None:
            self._state = GameState.OVER
            return TurnResult(f"{mover.name} wins!", Outcome.WIN, combo)

        if self.board.is_full():
            self._state = GameState.OVER
            return TurnResult(STATUS_TIE, Outcome.TIE)

        self._switch_player()
        return TurnResult(f"{self._active.name}'s turn.", Outcome.CONTINUE)

    def reset_game(self) -> TurnResult:
        self.board.reset_board()
        self._active = self._players[0]
        self._state = GameState.IN_PROGRESS
        return TurnResult(
            f"Game has been reset. {self._active.name} starts.", Outcome.RESET
        )

    # ---- helpers ----

    def _switch_player(self) -> None:
        first, second = self._players
        self._active = second if self._active is first else first
