"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .game import GameEngine, Outcome, TurnResult

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 32
SESSION_TTL_SECONDS = 60 * 60  # 1 hour idle


@dataclass
class GameSession:
    """Container for one engine plus the result of its latest call."""

    engine: GameEngine
    last_result: TurnResult
    last_active: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
SESSIONS_LOCK = threading.Lock()
app = FastAPI(title="Tic-Tac-Toe", description="Two-player tic-tac-toe in the browser")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    player_x: str = Field(default="Player X", alias="playerX")
    player_o: str = Field(default="Player O", alias="playerO")

    @field_validator("player_x", "player_o")
    @classmethod
    def ensure_reasonable_name(cls, value: str) -> str:
        value = value.strip()
        if not value or len(value) > MAX_NAME_LENGTH:
            raise ValueError(
                f"Player names must be 1-{MAX_NAME_LENGTH} characters long."
            )
        return value


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    index: int


def _cleanup_sessions() -> None:
    """Drop sessions nobody has touched for ``SESSION_TTL_SECONDS``."""

    now = time.time()
    expired = [
        session_id
        for session_id, session in list(SESSIONS.items())
        if now - session.last_active >= SESSION_TTL_SECONDS
    ]
    for session_id in expired:
        SESSIONS.pop(session_id, None)
    if expired:
        logger.info("Expired %d idle game(s)", len(expired))


def _create_session(player_x: str, player_o: str) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    engine = GameEngine(player_x_name=player_x, player_o_name=player_o)
    session = GameSession(engine=engine, last_result=engine.reset_game())
    session_id = uuid.uuid4().hex
    with SESSIONS_LOCK:
        _cleanup_sessions()
        SESSIONS[session_id] = session
    logger.info("Created game %s (%s vs %s)", session_id, player_x, player_o)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    with SESSIONS_LOCK:
        _cleanup_sessions()
        try:
            return SESSIONS[game_id]
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    # Caller holds session.lock.
    engine = session.engine
    return {
        "id": game_id,
        "board": engine.get_current_board(),
        "activePlayer": engine.get_active_player().to_dict(),
        "players": [player.to_dict() for player in engine.players],
        "state": engine.state.value,
        "result": session.last_result.to_dict(),
    }


def _apply_player_move(
    game_id: str, session: GameSession, index: int
) -> Dict[str, object]:
    with session.lock:
        mover = session.engine.get_active_player()
        result = session.engine.play_turn(index)
        session.last_result = result
        session.last_active = time.time()
        state = _serialize_session(game_id, session)
    logger.debug(
        "Game %s: %s played %s -> %s", game_id, mover.mark, index, result.outcome.value
    )
    if result.outcome in (Outcome.WIN, Outcome.TIE):
        logger.info("Game %s finished: %s", game_id, result.status)
    return state


@app.post("/api/game")
def create_game(request: Optional[NewGameRequest] = None) -> Dict[str, object]:
    request = request or NewGameRequest()
    game_id, session = _create_session(request.player_x, request.player_o)
    with session.lock:
        return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.last_active = time.time()
        return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    return _apply_player_move(game_id, session, request.index)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.last_result = session.engine.reset_game()
        session.last_active = time.time()
        state = _serialize_session(game_id, session)
    logger.debug("Game %s reset", game_id)
    return state


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <style>
      body {
        font-family: system-ui, sans-serif;
        display: flex;
        flex-direction: column;
        align-items: center;
        gap: 1rem;
        margin-top: 3rem;
        background: #f5f5f7;
      }
      #board {
        display: grid;
        grid-template-columns: repeat(3, 96px);
        grid-template-rows: repeat(3, 96px);
        gap: 6px;
      }
      .cell {
        display: flex;
        align-items: center;
        justify-content: center;
        font-size: 2.5rem;
        font-weight: 700;
        background: #fff;
        border-radius: 10px;
        cursor: pointer;
        user-select: none;
      }
      .cell.X { color: #2563eb; }
      .cell.O { color: #dc2626; }
      .cell.win { background: #fde68a; }
      #status-message { font-size: 1.2rem; min-height: 1.5rem; }
      button { padding: 0.5rem 1.25rem; font-size: 1rem; cursor: pointer; }
    </style>
  </head>
  <body>
    <h1>Tic-Tac-Toe</h1>
    <div id=\"status-message\"></div>
    <div id=\"board\">
      <div class=\"cell\" data-index=\"0\"></div>
      <div class=\"cell\" data-index=\"1\"></div>
      <div class=\"cell\" data-index=\"2\"></div>
      <div class=\"cell\" data-index=\"3\"></div>
      <div class=\"cell\" data-index=\"4\"></div>
      <div class=\"cell\" data-index=\"5\"></div>
      <div class=\"cell\" data-index=\"6\"></div>
      <div class=\"cell\" data-index=\"7\"></div>
      <div class=\"cell\" data-index=\"8\"></div>
    </div>
    <button id=\"reset-button\">Restart</button>
    <script>
      const cells = document.querySelectorAll('.cell');
      const statusMessage = document.getElementById('status-message');
      let gameId = null;

      function render(state) {
        cells.forEach((cell, index) => {
          const mark = state.board[index];
          cell.textContent = mark;
          cell.classList.remove('X', 'O', 'win');
          if (mark) {
            cell.classList.add(mark);
          }
        });
        const result = state.result;
        statusMessage.textContent = result.status;
        if (result.combo) {
          result.combo.forEach((idx) => cells[idx].classList.add('win'));
        }
      }

      async function post(path, body) {
        const response = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        return response.json();
      }

      async function start() {
        const state = await post('/api/game', {});
        gameId = state.id;
        render(state);
      }

      cells.forEach((cell) => {
        cell.addEventListener('click', async () => {
          if (!gameId) return;
          const index = parseInt(cell.dataset.index, 10);
          render(await post(`/api/game/${gameId}/move`, { index }));
        });
      });

      document.getElementById('reset-button').addEventListener('click', async () => {
        if (!gameId) return;
        render(await post(`/api/game/${gameId}/reset`));
      });

      start();
    </script>
  </body>
</html>
"""
